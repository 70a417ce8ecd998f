"""Database layer for huvudbok."""

from huvudbok.database.base import Database
from huvudbok.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
