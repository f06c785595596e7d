import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Iterable, List

from app.core.exceptions import MealNotFoundError
from app.models.meal import Meal
from app.models.user import User
from app.repositories.meal_repository import MealRepository
from app.schemas.meal import EPOCH, MealCreate, MealUpdate, MealMetrics

logger = logging.getLogger(__name__)


def to_epoch_ms(value: datetime) -> int:
    """datetime -> epoch в миллисекундах. Наивное время считается UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // timedelta(milliseconds=1)


def best_on_diet_sequence(meals: Iterable[Meal]) -> int:
    """
    Самая длинная серия подряд идущих приемов пищи "в диете".

    Порядок обхода — как в переданной последовательности
    (для метрик это сортировка по date по убыванию).
    """
    best = 0
    current = 0
    for meal in meals:
        if meal.is_on_diet:
            current += 1
        else:
            current = 0
        if current > best:
            best = current
    return best


class MealService:
    def __init__(self, repo: MealRepository):
        self.repo = repo

    async def create_meal(self, data: MealCreate, current_user: User) -> Meal:
        meal = Meal(
            id=str(uuid.uuid4()),
            user_id=current_user.id,
            name=data.name,
            description=data.description,
            is_on_diet=data.is_on_diet,
            date=to_epoch_ms(data.date),
        )
        meal = await self.repo.create(meal)
        logger.info(f"Пользователь {current_user.id} добавил прием пищи {meal.id}")
        return meal

    async def update_meal(self, meal_id: uuid.UUID, data: MealUpdate, current_user: User) -> Meal:
        # Поиск только по id, без проверки владельца
        meal = await self.repo.get_by_id(str(meal_id))
        if not meal:
            raise MealNotFoundError(meal_id)

        values = {
            "name": data.name if data.name is not None else meal.name,
            "description": data.description if data.description is not None else meal.description,
            "is_on_diet": data.is_on_diet if data.is_on_diet is not None else meal.is_on_diet,
            # Сохраняется только день месяца из новой даты
            "date": data.date.day if data.date is not None else meal.date,
        }
        meal = await self.repo.update(meal, values)
        logger.info(f"Пользователь {current_user.id} обновил прием пищи {meal.id}")
        return meal

    async def list_meals(self, current_user: User) -> List[Meal]:
        return await self.repo.list_by_user(current_user.id)

    async def get_meal(self, meal_id: uuid.UUID) -> Meal:
        meal = await self.repo.get_by_id(str(meal_id))
        if not meal:
            raise MealNotFoundError(meal_id)
        return meal

    async def delete_meal(self, meal_id: uuid.UUID) -> None:
        meal = await self.repo.get_by_id(str(meal_id))
        if not meal:
            raise MealNotFoundError(meal_id)
        await self.repo.delete(meal)
        logger.info(f"Прием пищи {meal_id} удален")

    async def get_metrics(self, current_user: User) -> MealMetrics:
        meals = await self.repo.list_by_user(current_user.id)
        on_diet = await self.repo.count_by_diet(current_user.id, True)
        off_diet = await self.repo.count_by_diet(current_user.id, False)

        return MealMetrics(
            total_meals=len(meals),
            total_meals_on_diet=on_diet,
            total_meals_off_diet=off_diet,
            best_on_diet_sequence=best_on_diet_sequence(meals),
        )
