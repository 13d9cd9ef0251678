# src/common/exceptions.py
"""Кастомные исключения для проекта."""
from dataclasses import dataclass
from http import HTTPStatus


@dataclass
class AppException(Exception):
    """Базовое исключение приложения."""

    status_code: int
    code: int
    message: str


class InvalidInputException(AppException):
    """Ошибка в параметрах запроса."""

    def __init__(self, message: str = 'Ошибка в параметрах запроса') -> None:
        """Инициализирует ошибку запроса (HTTP 400)."""
        super().__init__(
            status_code=HTTPStatus.BAD_REQUEST,
            code=HTTPStatus.BAD_REQUEST,
            message=message,
        )


class PayloadTooLargeException(AppException):
    """Загружаемый файл превышает допустимый размер."""

    def __init__(self, message: str = 'Файл слишком большой') -> None:
        """Инициализирует ошибку размера файла (HTTP 413)."""
        super().__init__(
            status_code=HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
            code=HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
            message=message,
        )


class NotFoundException(AppException):
    """Ошибка данных не найдены."""

    def __init__(self, message: str = 'Данные не найдены') -> None:
        """Инициализирует ошибку данных не найдены."""
        super().__init__(
            status_code=HTTPStatus.NOT_FOUND,
            code=HTTPStatus.NOT_FOUND,
            message=message)


class StorageWriteFailedException(AppException):
    """Ошибка записи в хранилище."""

    def __init__(self, message: str = 'Ошибка записи в хранилище') -> None:
        """Инициализирует ошибку записи (HTTP 500)."""
        super().__init__(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            code=HTTPStatus.INTERNAL_SERVER_ERROR,
            message=message)


class StorageReadFailedException(AppException):
    """Ошибка чтения из хранилища."""

    def __init__(self, message: str = 'Ошибка чтения из хранилища') -> None:
        """Инициализирует ошибку чтения (HTTP 500)."""
        super().__init__(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            code=HTTPStatus.INTERNAL_SERVER_ERROR,
            message=message)


class MetadataWriteFailedException(AppException):
    """Ошибка записи метаданных после успешной операции с объектом.

    Означает обнаруженное нарушение согласованности между
    объектным хранилищем и таблицей метаданных.
    """

    def __init__(
            self,
            message: str = 'Ошибка записи метаданных изображения',
    ) -> None:
        """Инициализирует ошибку записи метаданных (HTTP 500)."""
        super().__init__(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            code=HTTPStatus.INTERNAL_SERVER_ERROR,
            message=message)


class StoreError(Exception):
    """Сбой внешнего хранилища, независимый от клиентской библиотеки."""


class BlobStoreError(StoreError):
    """Сбой объектного хранилища."""


class BlobNotFoundError(BlobStoreError):
    """Объект отсутствует в хранилище."""


class MetadataStoreError(StoreError):
    """Сбой хранилища метаданных."""
