"""fluentql database layer: quoting contract and drivers."""
from fluentql.database.base import Database
from fluentql.database.registry import DriverFactory
from fluentql.database.sqlite import SQLiteDatabase

__all__ = [
    "Database",
    "DriverFactory",
    "SQLiteDatabase",
]
