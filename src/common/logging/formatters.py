from datetime import datetime, timezone
import json
import logging
from typing import Any, Dict

from colorama import Fore, Style


class ColoredFormatter(logging.Formatter):
    """Форматтер с цветами ANSI для консольного вывода.

    Добавляет цвета к уровням логирования для улучшения читаемости.
    """

    LEVEL_COLORS = {
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.MAGENTA,
    }

    def format(self, record: Any) -> str:
        """Форматирует запись лога с цветами.

        Args:
            record: Запись лога

        Returns:
            Отформатированная строка лога

        """
        level_color = self.LEVEL_COLORS.get(record.levelno, Fore.WHITE)
        original = record.levelname
        record.levelname = f'{level_color}{original}{Style.RESET_ALL}'
        try:
            return super().format(record)
        finally:
            # Запись разделяется с файловым хендлером
            record.levelname = original


class SystemJsonFormatter(logging.Formatter):
    """JSON форматтер для структурированных системных логов."""

    SYSTEM_FIELDS = (
        'operation',
        'object_id',
        'object_key',
        'method',
        'endpoint',
        'status_code',
        'response_time_ms',
        'details',
    )

    def format(self, record: logging.LogRecord) -> str:
        """Преобразует запись лога в JSON объект.

        Содержит:
        - дата и время наступления события (UTC)
        - уровень события
        - компонент системы
        - описание события с параметрами
        """
        log_entry: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'component': getattr(record, 'component', 'system'),
            'message': record.getMessage(),
        }

        for field in self.SYSTEM_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)
