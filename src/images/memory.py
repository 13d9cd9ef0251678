"""Хранилище метаданных в памяти процесса.

Подходит для тестов и демонстрации на одном узле. Доступ к списку
записей разделяется блокировкой чтения-записи: чтения идут
параллельно, запись выполняется монопольно.
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

from src.images.schemas import ImageRecord


class ReadWriteLock:
    """Асинхронная блокировка: много читателей или один писатель.

    Ожидающий писатель не пропускает новых читателей вперёд,
    поэтому поток чтений не может заблокировать запись навсегда.
    """

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def writer(self) -> bool:
        return self._writer

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer and not self._waiting_writers,
            )
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            self._waiting_writers += 1
            try:
                await self._cond.wait_for(
                    lambda: not self._writer and not self._readers,
                )
            finally:
                self._waiting_writers -= 1
                # читатели ждут, пока очередь писателей не опустеет
                self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            async with self._cond:
                self._writer = False
                self._cond.notify_all()


class InMemoryMetadataStore:
    """Хранилище метаданных в списке, общем для всего процесса.

    ID выдаются счётчиком и не переиспользуются после удаления.
    """

    def __init__(self) -> None:
        self._records: list[ImageRecord] = []
        self._next_id = 1
        self.lock = ReadWriteLock()

    async def insert(
        self,
        *,
        filename: str,
        size: int,
        object_key: str,
        content_type: str | None,
        created_at: datetime,
    ) -> ImageRecord:
        async with self.lock.write():
            record = ImageRecord(
                id=self._next_id,
                filename=filename,
                size=size,
                object_key=object_key,
                content_type=content_type,
                created_at=created_at,
            )
            self._next_id += 1
            self._records.append(record)
        return record

    async def get(self, image_id: int) -> ImageRecord | None:
        async with self.lock.read():
            for record in self._records:
                if record.id == image_id:
                    return record
        return None

    async def list_all(self) -> list[ImageRecord]:
        async with self.lock.read():
            return list(self._records)

    async def delete(self, image_id: int) -> bool:
        async with self.lock.write():
            for index, record in enumerate(self._records):
                if record.id == image_id:
                    del self._records[index]
                    return True
        return False

    async def has_object_key(self, object_key: str) -> bool:
        async with self.lock.read():
            return any(
                record.object_key == object_key for record in self._records
            )
