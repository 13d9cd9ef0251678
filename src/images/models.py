from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base


class Image(Base):
    """Модель для хранения метаданных изображения.

    Содержимое файла хранится в объектном хранилище под ключом
    object_key, в таблице только описание.
    """

    __tablename__ = 'images'
    # SQLite без AUTOINCREMENT переиспользует ID удалённой последней строки
    __table_args__ = {'sqlite_autoincrement': True}

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    filename: Mapped[str] = mapped_column(Text, nullable=False)
    size: Mapped[int] = mapped_column(BigInteger)
    object_key: Mapped[str] = mapped_column(Text, nullable=False)
    content_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f'<Image(id={self.id}, object_key={self.object_key})>'
