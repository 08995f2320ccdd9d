"""Database layer for schedulec application."""

from schedulec.database.base import Database
from schedulec.database.factories import create_sqlite_database, create_database_for_mode

__all__ = ["Database", "create_sqlite_database", "create_database_for_mode"]
