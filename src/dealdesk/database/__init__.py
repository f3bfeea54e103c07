"""Database layer for dealdesk application."""

from dealdesk.database.base import Database
from dealdesk.database.factories import create_sqlite_database, create_memory_database

__all__ = ["Database", "create_sqlite_database", "create_memory_database"]
