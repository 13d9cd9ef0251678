import asyncio
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.common.exceptions import (
    BlobNotFoundError,
    BlobStoreError,
    MetadataStoreError,
)
from src.images.memory import InMemoryMetadataStore
from src.images.schemas import ImageRecord
from src.images.services import ImageCatalogService
from src.main import create_app


class FakeBlobStore:
    """Хранилище объектов в словаре с записью вызовов и сбоями."""

    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.put_calls: list[str] = []
        self.get_calls: list[str] = []
        self.delete_calls: list[str] = []
        self.fail_put = False
        self.fail_get = False
        self.fail_delete = False
        self.delay = 0.0

    async def _pause(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)

    async def put(self, key: str, data: bytes, content_type: str) -> None:
        self.put_calls.append(key)
        await self._pause()
        if self.fail_put:
            raise BlobStoreError(f'put {key} failed')
        self.objects[key] = (data, content_type)

    async def get(self, key: str) -> bytes:
        self.get_calls.append(key)
        await self._pause()
        if self.fail_get:
            raise BlobStoreError(f'get {key} failed')
        if key not in self.objects:
            raise BlobNotFoundError(key)
        return self.objects[key][0]

    async def delete(self, key: str) -> None:
        self.delete_calls.append(key)
        await self._pause()
        if self.fail_delete:
            raise BlobStoreError(f'delete {key} failed')
        self.objects.pop(key, None)

    async def ensure_bucket(self) -> None:
        return None


class FlakyMetadataStore(InMemoryMetadataStore):
    """Хранилище метаданных в памяти с управляемыми сбоями.

    error - тип исключения для сбоев, insert_delay - пауза после
    того, как вставка уже выполнена.
    """

    def __init__(self) -> None:
        super().__init__()
        self.fail_insert = False
        self.fail_get = False
        self.fail_list = False
        self.fail_delete = False
        self.error: type[Exception] = MetadataStoreError
        self.insert_delay = 0.0
        self.insert_calls = 0
        self.delete_calls = 0

    async def insert(self, **kwargs) -> ImageRecord:  # noqa
        self.insert_calls += 1
        if self.fail_insert:
            raise self.error('insert failed')
        record = await super().insert(**kwargs)
        if self.insert_delay:
            await asyncio.sleep(self.insert_delay)
        return record

    async def get(self, image_id: int) -> ImageRecord | None:
        if self.fail_get:
            raise self.error('get failed')
        return await super().get(image_id)

    async def has_object_key(self, object_key: str) -> bool:
        if self.fail_get:
            raise self.error('lookup failed')
        return await super().has_object_key(object_key)

    async def list_all(self) -> list[ImageRecord]:
        if self.fail_list:
            raise self.error('list failed')
        return await super().list_all()

    async def delete(self, image_id: int) -> bool:
        self.delete_calls += 1
        if self.fail_delete:
            raise self.error('delete failed')
        return await super().delete(image_id)


@pytest.fixture
def blobs() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def metadata() -> FlakyMetadataStore:
    return FlakyMetadataStore()


@pytest.fixture
def service(
    metadata: FlakyMetadataStore,
    blobs: FakeBlobStore,
) -> ImageCatalogService:
    return ImageCatalogService(
        metadata=metadata,
        blobs=blobs,
        key_policy='filename',
        timeout=1.0,
    )


@pytest.fixture
def unique_service(
    metadata: FlakyMetadataStore,
    blobs: FakeBlobStore,
) -> ImageCatalogService:
    return ImageCatalogService(
        metadata=metadata,
        blobs=blobs,
        key_policy='unique',
        timeout=1.0,
    )


@pytest_asyncio.fixture
async def client(
    metadata: FlakyMetadataStore,
    blobs: FakeBlobStore,
    monkeypatch: pytest.MonkeyPatch,
) -> AsyncGenerator[AsyncClient, None]:
    from src.config import settings

    monkeypatch.setattr(settings.storage, 'KEY_POLICY', 'filename')

    app = create_app()
    app.state.metadata_store = metadata
    app.state.blob_store = blobs

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac
