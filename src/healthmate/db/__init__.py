"""Database layer for healthmate."""

from .engine import get_db_path, init_db
from .repositories import HealthLogRepository, UserProfileRepository

__all__ = [
    "get_db_path",
    "HealthLogRepository",
    "init_db",
    "UserProfileRepository",
]
