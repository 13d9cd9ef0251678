from typing import Protocol


class BlobStore(Protocol):
    """Объектное хранилище: бакет + ключ.

    Реализации оборачивают ошибки клиента в BlobStoreError,
    отсутствие объекта при чтении - в BlobNotFoundError.
    Удаление отсутствующего ключа считается успешным.
    """

    async def put(self, key: str, data: bytes, content_type: str) -> None:
        ...

    async def get(self, key: str) -> bytes:
        ...

    async def delete(self, key: str) -> None:
        ...

    async def ensure_bucket(self) -> None:
        ...
