"""Стандартные ответы API.

Содержит предопределенные ответы для различных HTTP статус кодов,
используемые в эндпоинтах API для обеспечения консистентности.
"""

from http import HTTPStatus
from typing import Any, Dict

from src.common.schemas import CustomErrorResponse


def create_error_response(
    status_code: HTTPStatus,
    description: str,
) -> Dict[int | str, Dict[str, Any]]:
    """Создает шаблон ответа об ошибке с заданным статусом и описанием."""
    return {
        status_code.value: {
            'description': description,
            'content': {
                'application/json': {
                    'schema': CustomErrorResponse.model_json_schema(),
                },
            },
        },
    }


OK_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    HTTPStatus.OK.value: {'description': 'Успешно'},
}

NO_CONTENT_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    HTTPStatus.NO_CONTENT.value: {'description': 'Удалено'},
}

BINARY_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    HTTPStatus.OK.value: {
        'description': 'Содержимое файла',
        'content': {
            'application/octet-stream': {
                'schema': {'type': 'string', 'format': 'binary'},
            },
        },
    },
}

# --- Базовые ошибки ---
ERROR_400_RESPONSE = create_error_response(
    HTTPStatus.BAD_REQUEST,
    'Ошибка в параметрах запроса',
)

ERROR_404_RESPONSE = create_error_response(
    HTTPStatus.NOT_FOUND,
    'Данные не найдены',
)

ERROR_413_RESPONSE = create_error_response(
    HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
    'Файл слишком большой',
)

ERROR_500_RESPONSE = create_error_response(
    HTTPStatus.INTERNAL_SERVER_ERROR,
    'Ошибка хранилища',
)
