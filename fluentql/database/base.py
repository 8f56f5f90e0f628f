"""Database abstraction: the quoting contract and the driver contract.

Every compiler call receives a :class:`Database` and uses only its quoting
methods (``quote``, ``quote_column``, ``quote_table``, ``quote_identifier``,
``escape`` and ``table_prefix``).  Backends differ in the identifier quote
character and in :meth:`Database.escape`.

Execution goes through :meth:`Database.query`; drivers implement it together
with connection and transaction handling.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from fluentql.cache import ResultCache
from fluentql.config import DatabaseConfig, load_config
from fluentql.errors import NotSupportedError
from fluentql.expression import Expression
from fluentql.params import is_collection
from fluentql.query.base import Query, QueryType

#: SQL-92, SQL:1999, SQL:2003 and SQL:2008 type descriptions used by
#: :meth:`Database.datatype`.
_SQL_TYPES: dict[str, dict[str, Any]] = {
    # SQL-92
    "bit": {"type": "string", "exact": True},
    "bit varying": {"type": "string"},
    "char": {"type": "string", "exact": True},
    "char varying": {"type": "string"},
    "character": {"type": "string", "exact": True},
    "character varying": {"type": "string"},
    "date": {"type": "string"},
    "dec": {"type": "float", "exact": True},
    "decimal": {"type": "float", "exact": True},
    "double precision": {"type": "float"},
    "float": {"type": "float"},
    "int": {"type": "int", "min": "-2147483648", "max": "2147483647"},
    "integer": {"type": "int", "min": "-2147483648", "max": "2147483647"},
    "interval": {"type": "string"},
    "national char": {"type": "string", "exact": True},
    "national char varying": {"type": "string"},
    "national character": {"type": "string", "exact": True},
    "national character varying": {"type": "string"},
    "nchar": {"type": "string", "exact": True},
    "nchar varying": {"type": "string"},
    "numeric": {"type": "float", "exact": True},
    "real": {"type": "float"},
    "smallint": {"type": "int", "min": "-32768", "max": "32767"},
    "time": {"type": "string"},
    "time with time zone": {"type": "string"},
    "timestamp": {"type": "string"},
    "timestamp with time zone": {"type": "string"},
    "varchar": {"type": "string"},
    # SQL:1999
    "binary large object": {"type": "string", "binary": True},
    "blob": {"type": "string", "binary": True},
    "boolean": {"type": "bool"},
    "char large object": {"type": "string"},
    "character large object": {"type": "string"},
    "clob": {"type": "string"},
    "national character large object": {"type": "string"},
    "nchar large object": {"type": "string"},
    "nclob": {"type": "string"},
    "time without time zone": {"type": "string"},
    "timestamp without time zone": {"type": "string"},
    # SQL:2003
    "bigint": {
        "type": "int",
        "min": "-9223372036854775808",
        "max": "9223372036854775807",
    },
    # SQL:2008
    "binary": {"type": "string", "binary": True, "exact": True},
    "binary varying": {"type": "string", "binary": True},
    "varbinary": {"type": "string", "binary": True},
}


class Database(ABC):
    """Abstract base for database drivers.

    Args:
        name: Instance name; used in cache keys and in ``str(db)``.
        config: A :class:`~fluentql.config.DatabaseConfig` or a mapping
            validated into one.
    """

    #: Identifier quote character; drivers may override it, and
    #: ``DatabaseConfig.identifier`` overrides it per instance.
    identifier: str = '"'

    def __init__(self, name: str = "default", config: DatabaseConfig | dict[str, Any] | None = None) -> None:
        self._instance = name
        self._config = load_config(config)
        if self._config.identifier is not None:
            self.identifier = self._config.identifier
        self.cache = ResultCache()
        self.last_query: str | None = None

    def __str__(self) -> str:
        return self._instance

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._instance!r})"

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    @property
    def table_prefix(self) -> str:
        return self._config.table_prefix

    # ------------------------------------------------------------------
    # Driver contract
    # ------------------------------------------------------------------

    @abstractmethod
    def connect(self) -> None:
        """Open the connection if it is not open yet."""

    def disconnect(self) -> bool:
        """Close the connection."""
        return True

    @abstractmethod
    def set_charset(self, charset: str) -> None:
        """Set the connection character set."""

    @abstractmethod
    def query(
        self,
        type: QueryType,
        sql: str,
        as_object: Any = False,
        params: Sequence[Any] | None = None,
    ) -> Any:
        """Execute ``sql``.

        Returns:
            A :class:`~fluentql.result.Result` for SELECT, an
            ``(insert_id, affected_rows)`` tuple for INSERT, and the number of
            affected rows otherwise.

        Raises:
            DatabaseError: If the backend rejects the statement.
        """

    @abstractmethod
    def begin(self, mode: str | None = None) -> bool:
        """Start a transaction."""

    @abstractmethod
    def commit(self) -> bool:
        """Commit the current transaction."""

    @abstractmethod
    def rollback(self) -> bool:
        """Roll back the current transaction."""

    def list_tables(self, like: str | None = None) -> list[str]:
        """Return table names, optionally filtered by a LIKE pattern."""
        raise NotSupportedError("list_tables", type(self).__name__)

    def list_columns(
        self, table: str, like: str | None = None, add_prefix: bool = True
    ) -> dict[str, dict[str, Any]]:
        """Return column descriptions for ``table`` keyed by column name."""
        raise NotSupportedError("list_columns", type(self).__name__)

    @abstractmethod
    def escape(self, value: str) -> str:
        """Return ``value`` as a quoted, escaped string literal."""

    def escape_binary(self, value: bytes) -> str:
        """Return ``value`` as a binary literal.

        Raises:
            NotSupportedError: If the driver has no binary literal syntax.
        """
        raise NotSupportedError("escape_binary", type(self).__name__)

    @contextmanager
    def transaction(self, mode: str | None = None) -> Iterator[Database]:
        """Run a block in a transaction, rolling back if it raises."""
        self.begin(mode)
        try:
            yield self
        except BaseException:
            self.rollback()
            raise
        self.commit()

    def count_records(self, table: Any) -> int:
        """Return the number of rows in ``table``."""
        sql = f"SELECT COUNT(*) AS total_row_count FROM {self.quote_table(table)}"
        return int(self.query(QueryType.SELECT, sql).get("total_row_count"))

    def datatype(self, type_name: str) -> dict[str, Any]:
        """Return the SQL-standard description of ``type_name`` (may be empty)."""
        return dict(_SQL_TYPES.get(type_name, {}))

    @staticmethod
    def _parse_type(type_name: str) -> tuple[str, str | None]:
        """Split ``"varchar(255)"`` into ``("varchar", "255")``."""
        open_pos = type_name.find("(")
        if open_pos == -1:
            return type_name, None
        close_pos = type_name.rfind(")", open_pos)
        if close_pos == -1:
            return type_name, None
        length = type_name[open_pos + 1 : close_pos]
        return type_name[:open_pos] + type_name[close_pos + 1 :], length

    # ------------------------------------------------------------------
    # Quoting contract
    # ------------------------------------------------------------------

    def quote(self, value: Any) -> str:
        """Quote a value for use in a SQL statement.

        Queries become parenthesised sub-queries, expressions are compiled
        in place, lists, tuples and sets become parenthesised value lists and
        bytes are rendered by :meth:`escape_binary`.
        """
        if value is None:
            return "NULL"
        if value is True:
            return "'1'"
        if value is False:
            return "'0'"
        if isinstance(value, Query):
            return f"({value.compile(self)})"
        if isinstance(value, Expression):
            return value.compile(self)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return self.escape_binary(bytes(value))
        if is_collection(value):
            return "(" + ", ".join(self.quote(v) for v in value) + ")"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return "%F" % value
        return self.escape(str(value))

    def _escape_identifier(self, name: str) -> str:
        if not self.identifier:
            return name
        return name.replace(self.identifier, self.identifier * 2)

    def _wrap(self, name: str) -> str:
        return f"{self.identifier}{name}{self.identifier}"

    @staticmethod
    def _split_alias(ref: Any) -> tuple[Any, str | None]:
        if isinstance(ref, (list, tuple)):
            name, alias = ref
            return name, str(alias)
        return ref, None

    def _compile_reference(self, ref: Any) -> str | None:
        if isinstance(ref, Query):
            return f"({ref.compile(self)})"
        if isinstance(ref, Expression):
            return ref.compile(self)
        return None

    def quote_column(self, column: Any) -> str:
        """Quote a column name, honouring ``table.column`` and ``(column, alias)``.

        The table prefix is applied to the table part of a qualified name.
        """
        column, alias = self._split_alias(column)

        compiled = self._compile_reference(column)
        if compiled is not None:
            sql = compiled
        else:
            sql = self._escape_identifier(str(column))
            if sql == "*":
                return sql
            if "." in sql:
                parts = sql.split(".")
                if self.table_prefix:
                    parts[-2] = self.table_prefix + parts[-2]
                sql = ".".join(p if p == "*" else self._wrap(p) for p in parts)
            else:
                sql = self._wrap(sql)

        if alias is not None:
            sql += " AS " + self._wrap(self._escape_identifier(alias))
        return sql

    def quote_table(self, table: Any) -> str:
        """Quote a table name, applying the table prefix to it and its alias."""
        table, alias = self._split_alias(table)

        compiled = self._compile_reference(table)
        if compiled is not None:
            sql = compiled
        else:
            sql = self._escape_identifier(str(table))
            if "." in sql:
                parts = sql.split(".")
                if self.table_prefix:
                    parts[-1] = self.table_prefix + parts[-1]
                sql = ".".join(self._wrap(p) for p in parts)
            else:
                sql = self._wrap(self.table_prefix + sql)

        if alias is not None:
            sql += " AS " + self._wrap(self.table_prefix + self._escape_identifier(alias))
        return sql

    def quote_identifier(self, value: Any) -> str:
        """Quote an identifier without applying the table prefix."""
        value, alias = self._split_alias(value)

        compiled = self._compile_reference(value)
        if compiled is not None:
            sql = compiled
        else:
            sql = ".".join(
                self._wrap(p) for p in self._escape_identifier(str(value)).split(".")
            )

        if alias is not None:
            sql += " AS " + self._wrap(self._escape_identifier(alias))
        return sql
