"""UPDATE statement builder."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from fluentql.query.base import QueryType
from fluentql.query.builder import Builder
from fluentql.query.compilers import ConditionCompiler, OrderByCompiler, SetCompiler
from fluentql.query.conditions import WhereMixin

if TYPE_CHECKING:
    from fluentql.database.base import Database


class Update(WhereMixin, Builder):
    """Builds ``UPDATE table SET ... [WHERE ...] [ORDER BY ...] [LIMIT n]``."""

    def __init__(self, table: Any = None) -> None:
        super().__init__(QueryType.UPDATE, "")
        self._reset_where()
        self._table = table
        self._set: list[tuple[Any, Any]] = []

    def table(self, table: Any) -> Update:
        self._table = table
        return self

    def set(self, pairs: Mapping[Any, Any]) -> Update:
        """Add ``column = value`` assignments from a mapping."""
        self._set.extend(pairs.items())
        return self

    def value(self, column: Any, value: Any) -> Update:
        """Add a single ``column = value`` assignment."""
        self._set.append((column, value))
        return self

    def build(self, db: Database) -> str:
        ctx = self._context(db)

        query = "UPDATE " + db.quote_table(self._table)
        query += " SET " + SetCompiler(ctx).build(self._set)

        if self._where:
            query += " WHERE " + ConditionCompiler(ctx).build(self._where)

        if self._order_by:
            query += " " + OrderByCompiler(ctx).build(self._order_by)

        if self._limit is not None:
            query += f" LIMIT {self._limit}"

        return query

    def reset(self) -> Update:
        self._table = None
        self._set = []
        self._reset_where()
        self._reset_query()
        return self
