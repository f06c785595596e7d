"""
Асинхронный движок и фабрика сессий. Одна сессия на запрос, без общих транзакций:
каждая операция репозитория коммитит сама.
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from app.core.config import settings

DATABASE_URL = settings.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")

engine = create_async_engine(
    DATABASE_URL,
    echo=settings.SQL_ECHO,
    future=True,
    pool_pre_ping=True
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False
)

async def get_db():
    """Зависимость FastAPI: сессия живет ровно один запрос."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
