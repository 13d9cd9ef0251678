# services.py
"""Координация записи изображений в объектное хранилище и таблицу.

Хранилища не связаны общей транзакцией, поэтому порядок шагов
фиксирован:
- создание: сначала объект, затем строка метаданных. Если строка не
  записалась и на объект не ссылается ни одна запись, объект удаляется
  компенсирующим вызовом;
- удаление: сначала объект, затем строка. Если объект не удалился,
  строка остаётся, и операцию можно повторить.
"""

import asyncio
from dataclasses import dataclass
import logging
from typing import Awaitable, NoReturn, TypeVar

from src.common.exceptions import (
    BlobNotFoundError,
    BlobStoreError,
    InvalidInputException,
    MetadataStoreError,
    MetadataWriteFailedException,
    NotFoundException,
    StorageReadFailedException,
    StorageWriteFailedException,
    StoreError,
)
from src.common.logging import log_action
from src.config import DEFAULT_CONTENT_TYPE, settings
from src.database.base import now_utc
from src.images.ports import MetadataStore
from src.images.schemas import DownloadedImage, ImageRecord
from src.storage.keys import KeyPolicy, derive_object_key
from src.storage.ports import BlobStore


logger = logging.getLogger('app')

T = TypeVar('T')


@dataclass
class ImageCatalogService:
    """Операции каталога изображений поверх двух хранилищ.

    Вызовы хранилищ выполняются строго последовательно, каждый
    ограничен timeout секундами. Истечение времени считается сбоем
    соответствующего хранилища.
    """

    metadata: MetadataStore
    blobs: BlobStore
    key_policy: KeyPolicy = 'unique'
    timeout: float = settings.catalog.OPERATION_TIMEOUT

    async def _call(
        self,
        awaitable: Awaitable[T],
        error_cls: type[StoreError],
        operation: str,
    ) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise error_cls(
                f'{operation}: превышено время ожидания {self.timeout}с',
            ) from e

    async def _lookup(self, image_id: int) -> ImageRecord:
        try:
            record = await self._call(
                self.metadata.get(image_id),
                MetadataStoreError,
                'чтение метаданных',
            )
        except Exception as e:
            raise StorageReadFailedException(
                'Не удалось прочитать метаданные изображения.',
            ) from e

        if record is None:
            logger.warning(
                'Изображение %s не найдено',
                image_id,
                extra={'component': 'catalog'},
            )
            raise NotFoundException('Изображение не найдено.')
        return record

    async def _is_referenced(
        self,
        object_key: str,
        insert_outcome_known: bool,
    ) -> bool:
        """Есть ли запись, ссылающаяся на объект.

        Если проверить не удалось, результат зависит от того, известно
        ли, что вставка не дошла до фиксации.
        """
        try:
            return await self._call(
                self.metadata.has_object_key(object_key),
                MetadataStoreError,
                'проверка ссылок на объект',
            )
        except Exception:
            logger.warning(
                'Не удалось проверить ссылки на объект %s',
                object_key,
                extra={'component': 'database', 'object_key': object_key},
                exc_info=True,
            )
            return not insert_outcome_known

    async def _discard_orphan(
        self,
        object_key: str,
        insert_outcome_known: bool,
    ) -> None:
        """Удаляет объект, для которого не записались метаданные.

        Объект остаётся, если на него ссылается запись: строка могла
        зафиксироваться до истечения таймаута, а при политике
        'filename' тот же ключ мог записать предыдущий запрос.
        Сбой компенсации только логируется: вызывающий в любом случае
        получает исходную ошибку записи метаданных.
        """
        if await self._is_referenced(object_key, insert_outcome_known):
            logger.critical(
                'Объект %s оставлен: на него может ссылаться запись',
                object_key,
                extra={'component': 'storage', 'object_key': object_key},
            )
            return

        try:
            await self._call(
                self.blobs.delete(object_key),
                BlobStoreError,
                'компенсирующее удаление',
            )
        except Exception:
            logger.error(
                'Не удалось удалить осиротевший объект %s',
                object_key,
                extra={'component': 'storage', 'object_key': object_key},
                exc_info=True,
            )
        else:
            logger.warning(
                'Осиротевший объект %s удалён',
                object_key,
                extra={'component': 'storage', 'object_key': object_key},
            )

    async def _abort_create(
        self,
        object_key: str,
        error: Exception,
        insert_outcome_known: bool,
    ) -> NoReturn:
        logger.critical(
            'Метаданные для объекта %s не записаны: %r',
            object_key,
            error,
            extra={'component': 'database', 'object_key': object_key},
        )
        await self._discard_orphan(object_key, insert_outcome_known)
        raise MetadataWriteFailedException(
            'Не удалось сохранить метаданные изображения.',
        ) from error

    @log_action('Загрузка изображения')
    async def create(
        self,
        payload: bytes,
        filename: str,
        content_type: str | None = None,
    ) -> ImageRecord:
        """Сохраняет объект, затем записывает его метаданные."""
        if not payload:
            raise InvalidInputException('Файл пуст.')
        if not filename:
            raise InvalidInputException('Не указано имя файла.')

        object_key = derive_object_key(filename, self.key_policy)

        try:
            await self._call(
                self.blobs.put(object_key, payload, content_type or ''),
                BlobStoreError,
                'запись объекта',
            )
        except BlobStoreError as e:
            logger.error(
                'Ошибка записи объекта %s: %s',
                object_key,
                e,
                extra={'component': 'storage', 'object_key': object_key},
            )
            raise StorageWriteFailedException(
                'Не удалось сохранить файл в хранилище.',
            ) from e

        insert = self.metadata.insert(
            filename=filename,
            size=len(payload),
            object_key=object_key,
            content_type=content_type,
            created_at=now_utc(),
        )
        try:
            return await asyncio.wait_for(insert, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            # отмена могла прийти уже после фиксации строки
            await self._abort_create(object_key, e, insert_outcome_known=False)
        except Exception as e:
            await self._abort_create(object_key, e, insert_outcome_known=True)

    @log_action('Получение списка изображений', only_errors=True)
    async def list(self) -> list[ImageRecord]:
        """Возвращает все записи по возрастанию ID."""
        try:
            return await self._call(
                self.metadata.list_all(),
                MetadataStoreError,
                'чтение списка',
            )
        except Exception as e:
            raise StorageReadFailedException(
                'Не удалось получить список изображений.',
            ) from e

    @log_action('Скачивание изображения', only_errors=True)
    async def download(self, image_id: int) -> DownloadedImage:
        """Возвращает содержимое объекта и его тип."""
        record = await self._lookup(image_id)

        try:
            data = await self._call(
                self.blobs.get(record.object_key),
                BlobStoreError,
                'чтение объекта',
            )
        except BlobNotFoundError as e:
            logger.error(
                'Запись %s ссылается на отсутствующий объект %s',
                image_id,
                record.object_key,
                extra={
                    'component': 'storage',
                    'object_key': record.object_key,
                },
            )
            raise StorageReadFailedException(
                'Файл изображения отсутствует в хранилище.',
            ) from e
        except BlobStoreError as e:
            raise StorageReadFailedException(
                'Не удалось получить файл из хранилища.',
            ) from e

        return DownloadedImage(
            data=data,
            content_type=record.content_type or DEFAULT_CONTENT_TYPE,
            object_key=record.object_key,
        )

    @log_action('Удаление изображения')
    async def delete(self, image_id: int) -> None:
        """Удаляет объект, затем строку метаданных."""
        record = await self._lookup(image_id)

        try:
            await self._call(
                self.blobs.delete(record.object_key),
                BlobStoreError,
                'удаление объекта',
            )
        except BlobStoreError as e:
            raise StorageWriteFailedException(
                'Не удалось удалить файл из хранилища.',
            ) from e

        try:
            deleted = await self._call(
                self.metadata.delete(image_id),
                MetadataStoreError,
                'удаление метаданных',
            )
        except Exception as e:
            logger.critical(
                'Объект %s удалён, но запись %s осталась: %r',
                record.object_key,
                image_id,
                e,
                extra={
                    'component': 'database',
                    'object_key': record.object_key,
                },
            )
            raise MetadataWriteFailedException(
                'Файл удалён, но не удалось удалить метаданные.',
            ) from e

        if not deleted:
            logger.warning(
                'Запись %s уже удалена параллельным запросом',
                image_id,
                extra={'component': 'database'},
            )
