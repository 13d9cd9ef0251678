from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.database import get_async_session
from src.images.crud import SqlMetadataStore
from src.images.memory import InMemoryMetadataStore
from src.images.ports import MetadataStore
from src.images.services import ImageCatalogService
from src.images.validators import validate_image_id
from src.storage.ports import BlobStore


def get_metadata_store(
    request: Request,
    session: AsyncSession = Depends(get_async_session),
) -> MetadataStore:
    """Хранилище метаданных для текущего запроса.

    Для бэкенда 'memory' используется общий на процесс экземпляр
    из состояния приложения, для 'sql' - сессия на запрос. Сессия
    не открывает соединение, пока к ней не обратились.
    """
    store = getattr(request.app.state, 'metadata_store', None)
    if store is not None:
        return store
    return SqlMetadataStore(session)


def get_blob_store(request: Request) -> BlobStore:
    """Хранилище объектов, созданное при старте приложения."""
    return request.app.state.blob_store


def get_catalog_service(
    metadata: MetadataStore = Depends(get_metadata_store),
    blobs: BlobStore = Depends(get_blob_store),
) -> ImageCatalogService:
    """Собирает сервис каталога для запроса."""
    return ImageCatalogService(
        metadata=metadata,
        blobs=blobs,
        key_policy=settings.storage.KEY_POLICY,
        timeout=settings.catalog.OPERATION_TIMEOUT,
    )


def get_image_id(image_id: str) -> int:
    """ID изображения из пути запроса."""
    return validate_image_id(image_id)


def create_default_metadata_store() -> MetadataStore | None:
    """Общее хранилище метаданных для бэкенда 'memory'."""
    if settings.catalog.METADATA_BACKEND == 'memory':
        return InMemoryMetadataStore()
    return None
