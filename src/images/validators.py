from fastapi import UploadFile

from src.common.exceptions import (
    InvalidInputException,
    PayloadTooLargeException,
)
from src.config import (
    MAX_FILE_SIZE,
    MAX_FILE_SIZE_MB,
    MAX_IMAGE_ID,
    MIN_IMAGE_ID,
)


async def validate_image_upload(file: UploadFile | None) -> bytes:
    """Валидация загружаемого изображения."""
    if file is None or not file.filename:
        raise InvalidInputException('Ошибка получения файла.')

    # Читаем на байт больше лимита, чтобы не грузить в память весь файл
    content = await file.read(MAX_FILE_SIZE + 1)
    size = len(content)

    if size == 0:
        raise InvalidInputException('Файл пуст.')

    if size > MAX_FILE_SIZE:
        raise PayloadTooLargeException(
            f'Файл слишком большой. Максимум {MAX_FILE_SIZE_MB} МБ.',
        )
    return content


def validate_image_id(raw_id: str) -> int:
    """Проверяет, что ID изображения - целое число в диапазоне колонки."""
    raw_id = raw_id.strip()
    if not raw_id:
        raise InvalidInputException('Не указан ID изображения.')
    try:
        image_id = int(raw_id)
    except ValueError as e:
        raise InvalidInputException('Некорректный ID изображения.') from e

    if not MIN_IMAGE_ID <= image_id <= MAX_IMAGE_ID:
        raise InvalidInputException(
            f'ID изображения должен быть от {MIN_IMAGE_ID} до {MAX_IMAGE_ID}.',
        )
    return image_id
