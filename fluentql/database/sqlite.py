"""SQLite driver built on the standard library ``sqlite3`` module.

The connection is opened lazily on first use.  ``connection.database`` (or
``connection.dsn``) is the file path, ``":memory:"`` by default::

    db = SQLiteDatabase("default", {"connection": {"database": "app.db"}})
    select().from_("users").execute(db)
"""
from __future__ import annotations

import logging
import sqlite3
import time
from typing import Any, Sequence

from fluentql.database.base import Database
from fluentql.errors import DatabaseError
from fluentql.query.base import QueryType
from fluentql.result import Result

logger = logging.getLogger(__name__)


def _error_code(exc: sqlite3.Error) -> int | str | None:
    return getattr(exc, "sqlite_errorcode", None) or getattr(exc, "sqlite_errorname", None)


class SQLiteDatabase(Database):
    """Driver for SQLite databases."""

    identifier = '"'

    def __init__(self, name: str = "default", config: Any = None) -> None:
        super().__init__(name, config)
        self._connection: sqlite3.Connection | None = None

    # ------------------------------------------------------------------
    # Connection handling
    # ------------------------------------------------------------------

    def connect(self) -> None:
        if self._connection is not None:
            return
        conn_cfg = self._config.connection
        path = conn_cfg.dsn or conn_cfg.database or ":memory:"
        try:
            # Autocommit mode; transactions are driven by begin/commit/rollback.
            self._connection = sqlite3.connect(path, isolation_level=None)
        except sqlite3.Error as exc:
            logger.error("Unable to open SQLite database %s: %s", path, exc)
            raise DatabaseError(str(exc), code=_error_code(exc)) from exc
        self._connection.row_factory = sqlite3.Row
        logger.debug("Connected %s to %s", self, path)

        if self._config.charset:
            self.set_charset(self._config.charset)

    def disconnect(self) -> bool:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        return super().disconnect()

    def set_charset(self, charset: str) -> None:
        self._execute(f"PRAGMA encoding = {self.quote(charset)}")

    def _execute(self, sql: str) -> sqlite3.Cursor:
        if self._connection is None:
            self.connect()
        assert self._connection is not None
        started = time.perf_counter()
        try:
            cursor = self._connection.execute(sql)
        except sqlite3.Error as exc:
            logger.error("Query failed on %s: %s [ %s ]", self, exc, sql)
            raise DatabaseError(str(exc), code=_error_code(exc), sql=sql) from exc
        logger.debug(
            "Database (%s) %.2f ms: %s", self, (time.perf_counter() - started) * 1000, sql
        )
        return cursor

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def query(
        self,
        type: QueryType,
        sql: str,
        as_object: Any = False,
        params: Sequence[Any] | None = None,
    ) -> Any:
        cursor = self._execute(sql)
        self.last_query = sql

        if type == QueryType.SELECT:
            rows = [dict(row) for row in cursor.fetchall()]
            return Result(rows, sql, as_object, params)

        if type == QueryType.INSERT:
            return cursor.lastrowid, cursor.rowcount

        return cursor.rowcount

    def begin(self, mode: str | None = None) -> bool:
        self._execute(f"BEGIN {mode}" if mode else "BEGIN")
        return True

    def commit(self) -> bool:
        self._execute("COMMIT")
        return True

    def rollback(self) -> bool:
        self._execute("ROLLBACK")
        return True

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def list_tables(self, like: str | None = None) -> list[str]:
        sql = "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%'"
        if like is not None:
            sql += f" AND name LIKE {self.quote(like)}"
        sql += " ORDER BY name"
        return [row["name"] for row in self._execute(sql).fetchall()]

    def list_columns(
        self, table: str, like: str | None = None, add_prefix: bool = True
    ) -> dict[str, dict[str, Any]]:
        name = self.quote_table(table) if add_prefix else self.quote_identifier(table)
        columns: dict[str, dict[str, Any]] = {}
        for row in self._execute(f"PRAGMA table_info({name})").fetchall():
            if like is not None and not self._matches(row["name"], like):
                continue
            data_type, length = self._parse_type(row["type"].lower())
            column = self.datatype(data_type)
            column.update(
                column_name=row["name"],
                column_default=row["dflt_value"],
                data_type=data_type,
                is_nullable=not row["notnull"],
                ordinal_position=row["cid"] + 1,
                key="PRI" if row["pk"] else "",
            )
            if length is not None:
                column["character_maximum_length"] = length
            columns[row["name"]] = column
        return columns

    def _matches(self, value: str, like: str) -> bool:
        sql = f"SELECT {self.quote(value)} LIKE {self.quote(like)} AS matched"
        return bool(self._execute(sql).fetchone()["matched"])

    def escape(self, value: str) -> str:
        return "'" + str(value).replace("'", "''") + "'"

    def escape_binary(self, value: bytes) -> str:
        return "X'" + value.hex().upper() + "'"
