"""
Общие фикстуры для всех тестов Daily Diet backend.

Стратегия:
- Тестовое FastAPI-приложение создаётся без startup-событий (нет подключения к БД).
- UserRepository и MealRepository заменяются на AsyncMock (mock_repo / mock_meal_repo).
- Для авторизованных клиентов get_current_user заменяется на лямбду с нужным пользователем.
- JWT-токены создаются через auth_service.create_access_token() для проверки зависимости get_current_user.
"""

import uuid
import pytest
from unittest.mock import AsyncMock, MagicMock
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from datetime import datetime
from typing import AsyncGenerator

from app.api.handlers import register_exception_handlers
from app.api.router import api_router
from app.models.meal import Meal
from app.models.user import User
from app.services.auth_service import auth_service
from app.repositories.meal_repository import MealRepository
from app.repositories.user_repository import UserRepository
from app.core.dependencies import get_current_user, get_user_repository, get_meal_repository


# ---------------------------------------------------------------------------
# Вспомогательные функции
# ---------------------------------------------------------------------------

def create_test_app() -> FastAPI:
    """Тестовое FastAPI-приложение без startup-событий."""
    test_app = FastAPI(title="Daily Diet Test App")
    register_exception_handlers(test_app)
    test_app.include_router(api_router)
    return test_app


def make_auth_headers(user: User) -> dict:
    """Создать заголовки авторизации с валидным JWT для указанного пользователя."""
    access_token = auth_service.create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {access_token}"}


def make_meal(user_id: str, is_on_diet: bool = True, date: int = 1_700_000_000_000, **kwargs) -> Meal:
    return Meal(
        id=kwargs.pop("id", str(uuid.uuid4())),
        user_id=user_id,
        name=kwargs.pop("name", "Овсянка"),
        description=kwargs.pop("description", "Овсяная каша с бананом"),
        is_on_diet=is_on_diet,
        date=date,
    )


# ---------------------------------------------------------------------------
# Фикстуры пользователей
# ---------------------------------------------------------------------------

@pytest.fixture
def user_fixture() -> User:
    return User(
        id="0b6d4c1e-6a8f-4f7e-9a53-2f0f6f7c1a01",
        name="Tester",
        email="test@example.com",
        password=auth_service.hash_password("password123"),
        created_at=datetime.utcnow(),
    )


@pytest.fixture
def other_user_fixture() -> User:
    return User(
        id="5f1b7a2c-3d4e-4b6a-8c9d-0e1f2a3b4c5d",
        name="Other",
        email="other@example.com",
        password=auth_service.hash_password("password456"),
        created_at=datetime.utcnow(),
    )


# ---------------------------------------------------------------------------
# Фикстуры для зависимостей
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_repo() -> AsyncMock:
    """Мокированный UserRepository."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def mock_meal_repo() -> AsyncMock:
    """Мокированный MealRepository: по умолчанию приемов пищи нет."""
    repo = AsyncMock(spec=MealRepository)
    repo.get_by_id.return_value = None
    repo.list_by_user.return_value = []
    repo.count_by_diet.return_value = 0
    return repo


@pytest.fixture
def mock_db() -> MagicMock:
    """
    Мокированная сессия БД для тестов репозиториев.
    execute() возвращает MagicMock с предустановленными методами.
    """
    session = AsyncMock()
    session.add = MagicMock()
    default_result = MagicMock()
    default_result.scalar_one_or_none.return_value = None
    default_result.scalar_one.return_value = 0
    default_result.scalars.return_value.all.return_value = []
    session.execute.return_value = default_result
    return session


# ---------------------------------------------------------------------------
# HTTP-клиенты
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(mock_repo, mock_meal_repo) -> AsyncGenerator[AsyncClient, None]:
    """
    Базовый клиент без подмены get_current_user.
    Используется для /users/* и проверки отказа без токена.
    """
    app = create_test_app()
    app.dependency_overrides[get_user_repository] = lambda: mock_repo
    app.dependency_overrides[get_meal_repository] = lambda: mock_meal_repo
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def user_client(user_fixture, mock_repo, mock_meal_repo) -> AsyncGenerator[AsyncClient, None]:
    """
    Клиент, аутентифицированный как обычный пользователь.
    get_current_user → user_fixture, get_meal_repository → mock_meal_repo.
    """
    app = create_test_app()
    app.dependency_overrides[get_user_repository] = lambda: mock_repo
    app.dependency_overrides[get_meal_repository] = lambda: mock_meal_repo
    app.dependency_overrides[get_current_user] = lambda: user_fixture
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
