import functools
import inspect
from typing import Any, Callable

from src.common.logging.config import logger


EXCLUDE_KEYS = frozenset({'self', 'session'})


def _extract_params(
    func: Callable,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> dict[str, Any]:
    """Собирает параметры вызова для лога.

    Бинарные данные заменяются их размером, служебные аргументы
    исключаются.

    Args:
        func: Оборачиваемая функция
        args: Позиционные аргументы вызова
        kwargs: Именованные аргументы вызова

    Returns:
        Отфильтрованные параметры

    """
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except TypeError:
        return {}

    params = {}
    for k, v in bound.arguments.items():
        if k in EXCLUDE_KEYS:
            continue
        if isinstance(v, (bytes, bytearray, memoryview)):
            params[k] = f'<{len(v)} bytes>'
        else:
            params[k] = v
    return params


def _log_start(action: str, params: dict[str, Any]) -> None:
    """Логирует запуск процесса."""
    msg = f'Запуск 🚀 {action}' + (f' | параметры: {params}' if params else '')
    logger.info(msg, extra={'component': 'catalog'})


def _log_success(action: str) -> None:
    """Логирует успешное завершение процесса."""
    logger.info(f'Успешно ✅ {action}', extra={'component': 'catalog'})


def _log_error(action: str, error: Exception) -> None:
    """Логирует неуспешное завершение процесса."""
    logger.error(
        f'Неудача ❌ {action} | {error}',
        extra={'component': 'catalog'},
    )


def log_action(action: str, only_errors: bool = False) -> Callable:
    """Декоратор для логирования процессов.

    Используется для логирования асинхронных операций в service layer.

    Args:
        action: Описание действия для лога
        only_errors: Логировать только ошибки, без старта и успеха

    Returns:
        Декоратор функции

    Example:
        @log_action('Загрузка изображения')
        async def create(self, payload: bytes, filename: str) -> ImageRecord:
            ...

    """

    def wrapper(func: Callable) -> Callable:
        @functools.wraps(func)
        async def inner(*args: Any, **kwargs: Any) -> Any:
            if not only_errors:
                _log_start(action, _extract_params(func, args, kwargs))

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _log_error(action, e)
                raise
            if not only_errors:
                _log_success(action)
            return result

        return inner

    return wrapper
