"""INSERT statement builder."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Sequence

from fluentql.errors import (
    IncompatibleValueSourceError,
    NonSelectSubqueryError,
    TableAliasNotAllowedError,
)
from fluentql.query.base import Query, QueryType
from fluentql.query.builder import Builder

if TYPE_CHECKING:
    from fluentql.database.base import Database


class Insert(Builder):
    """Builds ``INSERT INTO table (cols) VALUES (...), (...)`` or
    ``INSERT INTO table (cols) SELECT ...``.

    Literal rows and a SELECT source are exclusive.

    Args:
        table: Target table name; aliases are not allowed.
        columns: Column list.
    """

    def __init__(self, table: str | None = None, columns: Iterable[Any] | None = None) -> None:
        super().__init__(QueryType.INSERT, "")
        self._table: str | None = None
        self._columns: list[Any] = []
        self._values: list[Sequence[Any]] = []
        self._subquery: Query | None = None
        if table:
            self.table(table)
        if columns:
            self._columns = list(columns)

    def table(self, table: str) -> Insert:
        """Set the target table.

        Raises:
            TableAliasNotAllowedError: If ``table`` is not a plain name.
        """
        if not isinstance(table, str):
            raise TableAliasNotAllowedError(table)
        self._table = table
        return self

    def columns(self, columns: Iterable[Any]) -> Insert:
        self._columns = list(columns)
        return self

    def values(self, *rows: Sequence[Any]) -> Insert:
        """Add one or more value rows, each in column order.

        Raises:
            IncompatibleValueSourceError: If :meth:`select` was already used.
        """
        if self._subquery is not None:
            raise IncompatibleValueSourceError()
        self._values.extend(rows)
        return self

    def select(self, query: Query) -> Insert:
        """Use a SELECT query as the row source.

        Raises:
            NonSelectSubqueryError: If ``query`` is not a SELECT.
            IncompatibleValueSourceError: If :meth:`values` was already used.
        """
        if query.type is not QueryType.SELECT:
            raise NonSelectSubqueryError(query.type)
        if self._values:
            raise IncompatibleValueSourceError()
        self._subquery = query
        return self

    def build(self, db: Database) -> str:
        ctx = self._context(db)

        query = "INSERT INTO " + db.quote_table(self._table)
        query += " (" + ", ".join(db.quote_column(c) for c in self._columns) + ") "

        if self._subquery is not None:
            query += self._subquery.compile(db)
        else:
            groups = [
                "(" + ", ".join(ctx.quote_value(v) for v in row) + ")"
                for row in self._values
            ]
            query += "VALUES " + ", ".join(groups)

        return query

    def reset(self) -> Insert:
        self._table = None
        self._columns = []
        self._values = []
        self._subquery = None
        self._reset_query()
        return self
