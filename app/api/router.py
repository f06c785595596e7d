from fastapi import APIRouter
from app.api.v1.users import router as users_router
from app.api.v1.meals import router as meals_router

api_router = APIRouter()

api_router.include_router(users_router)
api_router.include_router(meals_router)
