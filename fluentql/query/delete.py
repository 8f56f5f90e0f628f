"""DELETE statement builder."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fluentql.query.base import QueryType
from fluentql.query.builder import Builder
from fluentql.query.compilers import ConditionCompiler, OrderByCompiler
from fluentql.query.conditions import WhereMixin

if TYPE_CHECKING:
    from fluentql.database.base import Database


class Delete(WhereMixin, Builder):
    """Builds ``DELETE FROM table [WHERE ...] [ORDER BY ...] [LIMIT n]``."""

    def __init__(self, table: Any = None) -> None:
        super().__init__(QueryType.DELETE, "")
        self._reset_where()
        self._table = table

    def table(self, table: Any) -> Delete:
        self._table = table
        return self

    def build(self, db: Database) -> str:
        ctx = self._context(db)

        query = "DELETE FROM " + db.quote_table(self._table)

        if self._where:
            query += " WHERE " + ConditionCompiler(ctx).build(self._where)

        if self._order_by:
            query += " " + OrderByCompiler(ctx).build(self._order_by)

        if self._limit is not None:
            query += f" LIMIT {self._limit}"

        return query

    def reset(self) -> Delete:
        self._table = None
        self._reset_where()
        self._reset_query()
        return self
