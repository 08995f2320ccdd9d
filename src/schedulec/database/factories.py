"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from schedulec.database.sqlalchemy_db import SQLAlchemyDatabase
from schedulec.domain.entities import DataMode
from schedulec.settings import AppConfig


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks SCHEDULEC_DB_PATH
            environment variable, then defaults to ~/.schedulec/schedulec.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("SCHEDULEC_DB_PATH")

    if database_path is None:
        # Default to ~/.schedulec/schedulec.db
        home = Path.home()
        db_dir = home / ".schedulec"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "schedulec.db")

    database = SQLAlchemyDatabase(f"sqlite:///{database_path}")
    database.database_path = database_path
    return database


def create_database_for_mode(mode: DataMode, config: AppConfig) -> SQLAlchemyDatabase:
    """Create the store that backs a data mode.

    Standalone (and unset) use the local SQLite file; shared uses the
    configured shared URL, whose synchronization is provided by whatever
    service hosts it.
    """
    if DataMode(mode) is DataMode.SHARED:
        return SQLAlchemyDatabase(config.shared_database_url)
    return create_sqlite_database(str(config.local_database_path))
