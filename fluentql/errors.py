"""Custom exception hierarchy for fluentql.

All public errors inherit from FluentQLError so callers can catch the base
class for any fluentql-specific failure.
"""
from __future__ import annotations

from typing import Any


class FluentQLError(Exception):
    """Base exception for all fluentql errors."""


class ConfigurationError(FluentQLError):
    """Raised when a database configuration is invalid or names an unknown driver.

    Args:
        message: Human-readable description.
        details: Extra context (e.g. the offending field or driver name).
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}


class CompilationError(FluentQLError):
    """Raised when a statement cannot be assembled into SQL.

    Args:
        message: Human-readable description.
        clause: The clause being built when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class InvalidSortDirectionError(CompilationError):
    """Raised when an ORDER BY direction is neither ASC nor DESC."""

    def __init__(self, direction: str) -> None:
        super().__init__(
            f"Invalid sorting direction: {direction!r}.", clause="ORDER BY"
        )
        self.direction = direction


class IncompatibleJoinConditionsError(CompilationError):
    """Raised when ON and USING are both used on the same JOIN."""

    def __init__(self) -> None:
        super().__init__(
            "JOIN ... ON ... cannot be combined with JOIN ... USING ...",
            clause="JOIN",
        )


class TableAliasNotAllowedError(CompilationError):
    """Raised when an INSERT target table is given with an alias."""

    def __init__(self, table: Any) -> None:
        super().__init__(
            "INSERT INTO syntax does not allow table aliasing.", clause="INSERT"
        )
        self.table = table


class IncompatibleValueSourceError(CompilationError):
    """Raised when an INSERT mixes literal VALUES rows with a SELECT sub-query."""

    def __init__(self) -> None:
        super().__init__(
            "INSERT INTO ... SELECT statements cannot be combined with "
            "INSERT INTO ... VALUES",
            clause="INSERT",
        )


class NonSelectSubqueryError(CompilationError):
    """Raised when INSERT ... SELECT is given a query that is not a SELECT."""

    def __init__(self, query_type: Any) -> None:
        super().__init__(
            "Only SELECT queries can be combined with INSERT queries.",
            clause="INSERT",
        )
        self.query_type = query_type


class UnionArgumentError(CompilationError):
    """Raised when ``union()`` receives neither a table name nor a Select."""

    def __init__(self, argument: Any) -> None:
        super().__init__(
            "First argument must be a table name or a Select instance, "
            f"got {type(argument).__name__}.",
            clause="UNION",
        )
        self.argument = argument


class DatabaseError(FluentQLError):
    """Raised when the backend fails to connect or to execute a statement.

    The backend message is kept as-is; this layer does not classify it.

    Args:
        message: Backend error message.
        code: Backend error code, when the driver exposes one.
        sql: The statement that failed, when applicable.
    """

    def __init__(
        self,
        message: str,
        code: int | str | None = None,
        sql: str | None = None,
    ) -> None:
        super().__init__(f"{message} [ {sql} ]" if sql else message)
        self.code = code
        self.sql = sql


class NotSupportedError(DatabaseError):
    """Raised when a driver does not implement a capability of the contract."""

    def __init__(self, method: str, driver: str) -> None:
        super().__init__(f"Database method {method} is not supported by {driver}")
        self.method = method
        self.driver = driver
