from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from app.models.meal import Meal


class MealRepository:
    """Доступ к таблице meals. Каждый метод — один запрос, без общих транзакций."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, meal_id: str) -> Optional[Meal]:
        result = await self.db.execute(select(Meal).where(Meal.id == meal_id))
        return result.scalar_one_or_none()

    async def list_by_user(self, user_id: str) -> List[Meal]:
        """Приемы пищи пользователя, от самых свежих к самым старым."""
        result = await self.db.execute(
            select(Meal)
            .where(Meal.user_id == user_id)
            .order_by(Meal.date.desc())
        )
        return list(result.scalars().all())

    async def count_by_diet(self, user_id: str, is_on_diet: bool) -> int:
        result = await self.db.execute(
            select(func.count(Meal.id)).where(
                Meal.user_id == user_id,
                Meal.is_on_diet == is_on_diet,
            )
        )
        return result.scalar_one()

    async def create(self, meal: Meal) -> Meal:
        self.db.add(meal)
        await self.db.commit()
        await self.db.refresh(meal)
        return meal

    async def update(self, meal: Meal, values: dict) -> Meal:
        for field, value in values.items():
            setattr(meal, field, value)
        await self.db.commit()
        await self.db.refresh(meal)
        return meal

    async def delete(self, meal: Meal) -> None:
        await self.db.delete(meal)
        await self.db.commit()
