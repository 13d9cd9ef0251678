import logging
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from src.common.logging.formatters import SystemJsonFormatter
from src.config import COUNT_FILES, LOGS_DIR, MAX_BYTES


system_logs_dir = LOGS_DIR / 'system'
system_logs_dir.mkdir(parents=True, exist_ok=True)

system_logger = logging.getLogger('catalog_system')
system_logger.setLevel(logging.INFO)
system_logger.propagate = False

# Хендлер для файла с ротацией
system_file_handler = RotatingFileHandler(
    system_logs_dir / 'system_events.log',
    maxBytes=MAX_BYTES,
    backupCount=COUNT_FILES,
    encoding='utf-8',
)
system_file_handler.setFormatter(SystemJsonFormatter())

# Хендлер для консоли (используем простой формат)
system_console_handler = logging.StreamHandler()
system_console_formatter = logging.Formatter(
    fmt=(
        '%(asctime)s | SYSTEM | %(levelname)-8s | '
        '%(component)-12s | %(message)s'
    ),
    datefmt='%d-%m-%Y %H:%M:%S',
)
system_console_handler.setFormatter(system_console_formatter)

system_logger.addHandler(system_file_handler)
system_logger.addHandler(system_console_handler)


def log_system_api_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration_ms: float,
) -> None:
    """Логирует системные API запросы.

    Автоматически определяет уровень по статус-коду.
    """
    if status_code >= 500:
        level = logging.ERROR
    elif status_code >= 400:
        level = logging.WARNING
    else:
        level = logging.INFO

    message = f'{method} {endpoint} → {status_code} ({duration_ms:.0f}ms)'

    system_logger.log(
        level,
        message,
        extra={
            'component': 'api',
            'method': method,
            'endpoint': endpoint,
            'status_code': status_code,
            'response_time_ms': duration_ms,
        },
    )


def log_system_error(context: str, error: Exception) -> None:
    """Логирует системные ошибки."""
    system_logger.error(
        f'System error: {context}: {error}',
        extra={'component': 'error', 'operation': context},
        exc_info=error,
    )


def log_system_event(
    description: str,
    level: str = 'INFO',
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """Универсальная функция для логирования системных событий.

    Запись содержит дату и время события, уровень (INFO, ERROR,
    WARNING и др.) и описание события с параметрами.
    """
    full_message = description
    if details:
        details_str = ', '.join(f'{k}={v}' for k, v in details.items())
        full_message += f' с параметрами: {details_str}'

    extra_data: Dict[str, Any] = {'component': 'system'}
    if details:
        extra_data['details'] = details

    log_levels = {
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL,
    }
    log_level = log_levels.get(level.upper(), logging.INFO)

    system_logger.log(log_level, full_message, extra=extra_data)


def setup_uvicorn_system_logging() -> None:
    """Настраивает Uvicorn для логирования системных событий.

    Дополняет существующую конфигурацию, не заменяет её.
    """
    for name in ('uvicorn', 'uvicorn.access', 'uvicorn.error'):
        logging.getLogger(name).addHandler(system_file_handler)


def initialize_system_logging() -> None:
    """Инициализирует системное логирование при запуске приложения."""
    log_system_event('Системное логирование инициализировано')
