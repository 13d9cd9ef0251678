from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.common.exceptions import MetadataStoreError
from src.database.service import DatabaseService
from src.images.models import Image
from src.images.schemas import ImageCreate, ImageRecord

# OSError приходит от asyncpg, когда сервер БД недоступен
STORE_ERRORS = (SQLAlchemyError, OSError)


class CRUDImage(DatabaseService[Image, ImageCreate]):
    """CRUD для метаданных изображений."""


image_crud = CRUDImage(Image)


class SqlMetadataStore:
    """Хранилище метаданных в реляционной таблице images."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _rollback(self) -> None:
        if self.session.in_transaction():
            await self.session.rollback()

    async def insert(
        self,
        *,
        filename: str,
        size: int,
        object_key: str,
        content_type: str | None,
        created_at: datetime,
    ) -> ImageRecord:
        """Создаёт запись и возвращает её с присвоенным ID."""
        obj_in = ImageCreate(
            filename=filename,
            size=size,
            object_key=object_key,
            content_type=content_type,
            created_at=created_at,
        )
        try:
            # flush присваивает ID, запись читается до commit:
            # после фиксации к БД больше нет обращений
            image = await image_crud.create(self.session, obj_in=obj_in)
            record = ImageRecord.model_validate(image)
            await self.session.commit()
        except STORE_ERRORS as e:
            await self._rollback()
            raise MetadataStoreError(
                f'Не удалось сохранить запись для {object_key}',
            ) from e
        return record

    async def get(self, image_id: int) -> ImageRecord | None:
        """Возвращает запись по ID или None, если не найдена."""
        try:
            image = await image_crud.get(self.session, id=image_id)
        except STORE_ERRORS as e:
            await self._rollback()
            raise MetadataStoreError(
                f'Не удалось прочитать запись {image_id}',
            ) from e
        return ImageRecord.model_validate(image) if image else None

    async def list_all(self) -> list[ImageRecord]:
        """Возвращает все записи по возрастанию ID."""
        try:
            images = await image_crud.get_multi(self.session)
        except STORE_ERRORS as e:
            await self._rollback()
            raise MetadataStoreError('Не удалось получить список') from e
        return [ImageRecord.model_validate(image) for image in images]

    async def delete(self, image_id: int) -> bool:
        """Удаляет запись. Возвращает False, если её уже нет."""
        try:
            return await image_crud.delete(self.session, id=image_id)
        except STORE_ERRORS as e:
            await self._rollback()
            raise MetadataStoreError(
                f'Не удалось удалить запись {image_id}',
            ) from e

    async def has_object_key(self, object_key: str) -> bool:
        """Проверяет, ссылается ли хоть одна запись на объект."""
        try:
            return await image_crud.exists(
                self.session,
                object_key=object_key,
            )
        except STORE_ERRORS as e:
            await self._rollback()
            raise MetadataStoreError(
                f'Не удалось проверить ссылки на {object_key}',
            ) from e
