"""Database layer for tradejournal application."""

from tradejournal.database.base import Database
from tradejournal.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
