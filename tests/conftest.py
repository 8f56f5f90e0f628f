"""Shared pytest fixtures for fluentql unit and integration tests."""
from __future__ import annotations

from typing import Any, Sequence

import pytest

from fluentql.database.base import Database
from fluentql.database.sqlite import SQLiteDatabase
from fluentql.query.base import QueryType
from fluentql.result import Result


class RecordingDatabase(Database):
    """In-memory driver that records every executed statement."""

    def __init__(self, rows: list[dict[str, Any]] | None = None) -> None:
        super().__init__("recording")
        self.rows = rows or []
        self.calls: list[tuple[QueryType, str]] = []
        self.transactions: list[str] = []

    def connect(self) -> None:
        pass

    def set_charset(self, charset: str) -> None:
        pass

    def query(
        self,
        type: QueryType,
        sql: str,
        as_object: Any = False,
        params: Sequence[Any] | None = None,
    ) -> Any:
        self.calls.append((type, sql))
        self.last_query = sql
        if type == QueryType.SELECT:
            return Result(self.rows, sql, as_object, params)
        if type == QueryType.INSERT:
            return len(self.rows) + 1, 1
        return 1

    def begin(self, mode: str | None = None) -> bool:
        self.transactions.append("begin")
        return True

    def commit(self) -> bool:
        self.transactions.append("commit")
        return True

    def rollback(self) -> bool:
        self.transactions.append("rollback")
        return True

    def escape(self, value: str) -> str:
        return "'" + value.replace("'", "''") + "'"


@pytest.fixture()
def db() -> SQLiteDatabase:
    """Unconnected SQLite database; compiling never opens a connection."""
    return SQLiteDatabase("default", {"connection": {"database": ":memory:"}})


@pytest.fixture()
def prefixed_db() -> SQLiteDatabase:
    return SQLiteDatabase("prefixed", {"table_prefix": "app_"})


@pytest.fixture()
def recording_db() -> RecordingDatabase:
    return RecordingDatabase(rows=[{"id": 1, "name": "ann"}, {"id": 2, "name": "bob"}])
