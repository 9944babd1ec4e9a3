from .user import PostgresUser
from .task import PostgresTask

__all__ = [
    "PostgresUser",
    "PostgresTask",
]
