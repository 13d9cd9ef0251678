from src.database.base import Base
from src.database.engine import create_tables, engine
from src.database.service import DatabaseService
from src.database.sessions import get_async_session

__all__ = [
    'engine',
    'create_tables',
    'get_async_session',
    'Base',
    'DatabaseService',
]
