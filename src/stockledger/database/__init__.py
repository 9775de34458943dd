"""Database layer for stockledger application."""

from stockledger.database.base import Database
from stockledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
