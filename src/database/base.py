"""Модуль базовой конфигурации SQLAlchemy ORM.

Содержит базовый класс для всех моделей и общие вспомогательные
функции для временных меток.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def now_utc() -> datetime:
    """Возвращает текущую дату и время в UTC.

    Returns:
        datetime: Текущая дата и время с часовым поясом UTC.

    """
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Базовый класс для всех SQLAlchemy моделей."""

    def __repr__(self) -> str:
        return f'<{type(self).__name__}(id={getattr(self, "id", None)})>'
