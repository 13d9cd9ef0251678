from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ImageCreate(BaseModel):
    """Схема создания записи изображения."""

    filename: str = Field(min_length=1)
    size: int = Field(ge=0)
    object_key: str = Field(min_length=1)
    content_type: str | None = None
    created_at: datetime


class ImageRecord(BaseModel):
    """Метаданные сохранённого изображения."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    filename: str
    size: int
    object_key: str
    content_type: str | None = None
    created_at: datetime


@dataclass(frozen=True)
class DownloadedImage:
    """Содержимое изображения для отдачи клиенту."""

    data: bytes
    content_type: str
    object_key: str
