"""Базовый сервисный слой для работы с БД."""

from typing import Any, Generic, Sequence, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import and_, delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.base import Base

ModelType = TypeVar('ModelType', bound=Base)
CreateSchemaType = TypeVar('CreateSchemaType', bound=BaseModel)


class DatabaseService(Generic[ModelType, CreateSchemaType]):
    """Базовый сервис для операций с БД.

    Предоставляет стандартные CRUD операции для моделей
    с целочисленным первичным ключом ``id``.

    Args:
        model: SQLAlchemy модель для выполнения операций

    Example:
        class CRUDImage(DatabaseService[Image, ImageCreate]):
            pass

        image_crud = CRUDImage(Image)

    """

    def __init__(self, model: Type[ModelType]) -> None:
        """Инициализирует сервис с указанной моделью."""
        self.model = model

    async def get(
        self,
        session: AsyncSession,
        *,
        id: int,
    ) -> ModelType | None:
        """Получает объект по ID.

        Args:
            session: Асинхронная сессия БД
            id: Идентификатор объекта

        Returns:
            Объект модели или None если не найден

        """
        result = await session.execute(
            select(self.model).where(self.model.id == id),
        )
        return result.scalars().first()

    async def get_multi(
        self,
        session: AsyncSession,
    ) -> Sequence[ModelType]:
        """Получает все объекты, упорядоченные по возрастанию ID.

        Args:
            session: Асинхронная сессия БД

        Returns:
            Последовательность объектов модели

        """
        result = await session.execute(
            select(self.model).order_by(self.model.id),
        )
        return result.scalars().all()

    async def create(
        self,
        session: AsyncSession,
        *,
        obj_in: CreateSchemaType,
    ) -> ModelType:
        """Создает новый объект без фиксации транзакции.

        ID присваивается при flush. Commit выполняет вызывающий,
        объект после него из БД не перечитывается.

        Args:
            session: Асинхронная сессия БД
            obj_in: Схема с данными для создания

        Returns:
            Созданный объект модели

        """
        db_obj = self.model(**obj_in.model_dump())
        session.add(db_obj)
        await session.flush()
        return db_obj

    async def delete(
        self,
        session: AsyncSession,
        *,
        id: int,
    ) -> bool:
        """Удаляет объект по ID и фиксирует транзакцию.

        Args:
            session: Асинхронная сессия БД
            id: Идентификатор объекта для удаления

        Returns:
            True если строка была удалена, иначе False

        """
        result = await session.execute(
            delete(self.model).where(self.model.id == id),
        )
        await session.commit()
        return bool(result.rowcount)

    async def exists(
        self,
        session: AsyncSession,
        **filters: Any,
    ) -> bool:
        """Проверяет существование записи по фильтрам.

        Args:
            session: Асинхронная сессия БД
            **filters: Фильтры для поиска (поле=значение)

        Returns:
            True если запись существует, иначе False

        """
        conditions = [
            getattr(self.model, field) == value
            for field, value in filters.items()
        ]
        result = await session.execute(
            select(exists().where(and_(*conditions))),
        )
        return bool(result.scalar())
