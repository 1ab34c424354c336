"""Database module for local SQLite storage."""

from .models import PlanRecord, Setting, ThemeMode
from .sqlite import Database, get_db, reset_db

__all__ = [
    "PlanRecord",
    "Setting",
    "ThemeMode",
    "Database",
    "get_db",
    "reset_db",
]
