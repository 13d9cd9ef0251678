from datetime import datetime
from typing import Protocol

from src.images.schemas import ImageRecord


class MetadataStore(Protocol):
    """Хранилище метаданных изображений.

    Реализации оборачивают ошибки драйвера в MetadataStoreError.
    """

    async def insert(
        self,
        *,
        filename: str,
        size: int,
        object_key: str,
        content_type: str | None,
        created_at: datetime,
    ) -> ImageRecord:
        ...

    async def get(self, image_id: int) -> ImageRecord | None:
        ...

    async def list_all(self) -> list[ImageRecord]:
        ...

    async def delete(self, image_id: int) -> bool:
        ...

    async def has_object_key(self, object_key: str) -> bool:
        ...
