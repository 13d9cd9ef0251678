"""Модуль генерации ключей объектов в хранилище.

Поддерживаются две политики:
- 'filename': ключ совпадает с именем файла клиента. Повторная загрузка
  файла с тем же именем перезаписывает объект.
- 'unique': к имени файла добавляется случайный префикс, поэтому
  каждая загрузка получает собственный объект.

Примеры:
    photo.png
    3f2c0a9e8b7d4c1e9a6b5d4c3b2a1f0e_photo.png
"""

from pathlib import PurePosixPath
from typing import Literal
import uuid


KeyPolicy = Literal['unique', 'filename']

FALLBACK_NAME = 'upload'


def _base_name(filename: str) -> str:
    """Возвращает имя файла без клиентского пути."""
    name = PurePosixPath(filename.replace('\\', '/')).name
    return name or FALLBACK_NAME


def derive_object_key(filename: str, policy: KeyPolicy = 'unique') -> str:
    """Строит ключ объекта для загружаемого файла.

    Args:
        filename: Имя файла, переданное клиентом
        policy: Политика построения ключа

    Returns:
        str: Ключ объекта в бакете

    """
    if policy == 'filename':
        return filename
    return f'{uuid.uuid4().hex}_{_base_name(filename)}'
