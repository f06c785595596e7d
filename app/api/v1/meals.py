from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from app.core.dependencies import get_current_user, get_meal_service
from app.core.exceptions import MealNotFoundError
from app.models.user import User
from app.schemas.meal import (
    MealCreate,
    MealUpdate,
    MealRead,
    MealListResponse,
    MealResponse,
    MealMetrics,
)
from app.services.meal_service import MealService

router = APIRouter(prefix="/meals", tags=["meals"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_meal(
    meal_data: MealCreate,
    current_user: User = Depends(get_current_user),
    service: MealService = Depends(get_meal_service),
):
    """Добавить прием пищи текущему пользователю"""
    await service.create_meal(meal_data, current_user)
    return Response(status_code=status.HTTP_201_CREATED)


@router.put("/{meal_id}", status_code=status.HTTP_201_CREATED)
async def update_meal(
    meal_id: UUID,
    meal_data: MealUpdate,
    current_user: User = Depends(get_current_user),
    service: MealService = Depends(get_meal_service),
):
    """Частичное обновление приема пищи"""
    try:
        await service.update_meal(meal_id, meal_data, current_user)
    except MealNotFoundError as e:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": e.message})

    return Response(status_code=status.HTTP_201_CREATED)


@router.get("", response_model=MealListResponse)
async def list_meals(
    current_user: User = Depends(get_current_user),
    service: MealService = Depends(get_meal_service),
):
    """Все приемы пищи пользователя, новые сверху"""
    meals = await service.list_meals(current_user)
    return MealListResponse(meals=[MealRead.model_validate(m) for m in meals])


# /metrics объявлен до /{meal_id}, иначе "metrics" уйдет в валидацию UUID
@router.get("/metrics", response_model=MealMetrics)
async def get_metrics(
    current_user: User = Depends(get_current_user),
    service: MealService = Depends(get_meal_service),
):
    """Статистика: всего, в диете, вне диеты, лучшая серия в диете"""
    return await service.get_metrics(current_user)


@router.get("/{meal_id}", response_model=MealResponse)
async def get_meal(
    meal_id: UUID,
    current_user: User = Depends(get_current_user),
    service: MealService = Depends(get_meal_service),
):
    try:
        meal = await service.get_meal(meal_id)
    except MealNotFoundError as e:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": e.message})

    return MealResponse(meal=MealRead.model_validate(meal))


@router.delete("/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(
    meal_id: UUID,
    current_user: User = Depends(get_current_user),
    service: MealService = Depends(get_meal_service),
):
    try:
        await service.delete_meal(meal_id)
    except MealNotFoundError as e:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": e.message})

    return Response(status_code=status.HTTP_204_NO_CONTENT)
