"""fluentql – fluent SQL query building for application code.

Build statements with chained calls and compile them against a database that
supplies the quoting rules::

    import fluentql
    from fluentql import SQLiteDatabase

    db = SQLiteDatabase("default", {"connection": {"database": ":memory:"}})

    q = (
        fluentql.select("id", "name")
        .from_("users")
        .where("status", "=", ":status")
        .param(":status", "active")
        .order_by("name", "asc")
        .limit(10)
    )
    q.compile(db)
    # SELECT "id", "name" FROM "users" WHERE "status" = 'active'
    #     ORDER BY "name" ASC LIMIT 10
    rows = q.execute(db).as_array()

Public API
----------
``query``, ``select``, ``select_array``, ``insert``, ``update``, ``delete``
    Statement factories.
``expr``
    Raw SQL fragment that bypasses value quoting.

Extensibility
-------------
Drivers are looked up by ``DatabaseConfig.driver``; register new ones with
:class:`~fluentql.database.registry.DriverFactory`.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from fluentql.cache import ResultCache
from fluentql.config import ConnectionConfig, DatabaseConfig
from fluentql.database.base import Database
from fluentql.database.registry import DriverFactory
from fluentql.database.sqlite import SQLiteDatabase
from fluentql.errors import (
    CompilationError,
    ConfigurationError,
    DatabaseError,
    FluentQLError,
    IncompatibleJoinConditionsError,
    IncompatibleValueSourceError,
    InvalidSortDirectionError,
    NonSelectSubqueryError,
    NotSupportedError,
    TableAliasNotAllowedError,
    UnionArgumentError,
)
from fluentql.expression import Expression
from fluentql.params import Ref
from fluentql.query.base import Query, QueryType
from fluentql.query.delete import Delete
from fluentql.query.insert import Insert
from fluentql.query.join import Join
from fluentql.query.select import Select
from fluentql.query.update import Update
from fluentql.result import Result

# ---------------------------------------------------------------------------
# Register built-in drivers with DriverFactory
# ---------------------------------------------------------------------------

DriverFactory.register_class("sqlite", SQLiteDatabase)

__all__ = [
    # Factories
    "query",
    "select",
    "select_array",
    "insert",
    "update",
    "delete",
    "expr",
    # Statements
    "Query",
    "QueryType",
    "Select",
    "Insert",
    "Update",
    "Delete",
    "Join",
    "Expression",
    "Ref",
    "Result",
    # Databases
    "Database",
    "DriverFactory",
    "SQLiteDatabase",
    "DatabaseConfig",
    "ConnectionConfig",
    "ResultCache",
    # Errors
    "FluentQLError",
    "ConfigurationError",
    "CompilationError",
    "InvalidSortDirectionError",
    "IncompatibleJoinConditionsError",
    "TableAliasNotAllowedError",
    "IncompatibleValueSourceError",
    "NonSelectSubqueryError",
    "UnionArgumentError",
    "DatabaseError",
    "NotSupportedError",
]


def query(type: QueryType | int, sql: str) -> Query:
    """Create a raw query of the given type::

        query(QueryType.SELECT, "SELECT * FROM users WHERE id = :id").param(":id", 5)
    """
    return Query(type, sql)


def select(*columns: Any) -> Select:
    """Create a SELECT builder; with no columns it selects ``*``."""
    return Select(*columns)


def select_array(columns: Iterable[Any] | None = None) -> Select:
    """Create a SELECT builder from a list of columns."""
    return Select(*(columns or ()))


def insert(table: str | None = None, columns: Iterable[Any] | None = None) -> Insert:
    return Insert(table, columns)


def update(table: Any = None) -> Update:
    return Update(table)


def delete(table: Any = None) -> Delete:
    return Delete(table)


def expr(value: str, parameters: Mapping[str, Any] | None = None) -> Expression:
    """Create a raw SQL expression, e.g. ``expr("COUNT(*)")``."""
    return Expression(value, parameters)
