from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.config import settings
from src.database.base import Base


def create_db_engine(connection_string: str) -> AsyncEngine:
    """Создаёт асинхронный движок SQLAlchemy."""
    return create_async_engine(
        connection_string,
        pool_timeout=settings.database.POOL_TIMEOUT,
        pool_recycle=settings.database.POOL_RECYCLE,
        pool_size=settings.database.POOL_SIZE,
        max_overflow=settings.database.MAX_OVERFLOW,
        pool_pre_ping=settings.database.POOL_PING,
        echo=settings.database.ECHO_SQL,
    )


async def create_tables(db_engine: AsyncEngine) -> None:
    """Создаёт таблицы всех моделей, если их ещё нет."""
    # Регистрирует модели в Base.metadata
    import src.images.models  # noqa: F401

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


engine = create_db_engine(settings.database.URL)
