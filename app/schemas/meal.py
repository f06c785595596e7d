from pydantic import BaseModel, Field, StrictBool, field_validator, model_validator
from typing import List, Optional
from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def coerce_epoch_millis(value):
    """Число в поле date всегда epoch в миллисекундах; строки разбирает pydantic."""
    if isinstance(value, bool):
        raise ValueError("date must be a timestamp, not a boolean")
    if isinstance(value, (int, float)):
        try:
            return EPOCH + timedelta(milliseconds=value)
        except OverflowError:
            raise ValueError("date is out of range")
    return value


class MealCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    is_on_diet: StrictBool = Field(alias="isOnDiet")
    # ISO-строка или epoch в миллисекундах
    date: datetime

    class Config:
        populate_by_name = True

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value):
        return coerce_epoch_millis(value)


class MealUpdate(BaseModel):
    """Все поля необязательны: пропущенное поле сохраняет прежнее значение, null не допускается."""
    name: Optional[str] = None
    description: Optional[str] = None
    is_on_diet: Optional[StrictBool] = Field(default=None, alias="isOnDiet")
    date: Optional[datetime] = None

    class Config:
        populate_by_name = True

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value):
        return coerce_epoch_millis(value)

    @model_validator(mode="after")
    def reject_explicit_null(self):
        nulls = sorted(f for f in self.model_fields_set if getattr(self, f) is None)
        if nulls:
            raise ValueError(f"null is not allowed for: {', '.join(nulls)}")
        return self


class MealRead(BaseModel):
    id: str
    user_id: str
    name: str
    description: str
    is_on_diet: bool
    date: int

    class Config:
        from_attributes = True


class MealListResponse(BaseModel):
    meals: List[MealRead]


class MealResponse(BaseModel):
    meal: MealRead


class MealMetrics(BaseModel):
    total_meals: int = Field(alias="totalMeals")
    total_meals_on_diet: int = Field(alias="totalMealsOnDiet")
    total_meals_off_diet: int = Field(alias="totalMealsOffDiet")
    best_on_diet_sequence: int = Field(alias="bestOnDietSequence")

    class Config:
        populate_by_name = True
