"""SELECT statement builder."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable

from fluentql.errors import CompilationError, UnionArgumentError
from fluentql.query.base import QueryType
from fluentql.query.builder import Builder
from fluentql.query.compilers import (
    ConditionCompiler,
    GroupByCompiler,
    JoinListCompiler,
    OrderByCompiler,
)
from fluentql.query.conditions import ConditionGroup, WhereMixin
from fluentql.query.join import Join

if TYPE_CHECKING:
    from fluentql.database.base import Database


@dataclass(frozen=True)
class UnionBranch:
    select: Select
    all: bool = True


class Select(WhereMixin, Builder):
    """Builds ``SELECT`` statements.

    Clauses are emitted in a fixed order, each only when set::

        SELECT [DISTINCT] cols FROM tables JOIN ... WHERE ... GROUP BY ...
        HAVING ... ORDER BY ... LIMIT n OFFSET n

    With union branches the whole statement is parenthesised and each branch
    appended as ``UNION [ALL] (...)``.

    Args:
        *columns: Initial select list; empty selects ``*``.
    """

    def __init__(self, *columns: Any) -> None:
        super().__init__(QueryType.SELECT, "")
        self._init_state()
        self._select.extend(columns)

    def _init_state(self) -> None:
        self._reset_where()
        self._select: list[Any] = []
        self._distinct = False
        self._from: list[Any] = []
        self._join: list[Join] = []
        self._last_join: int | None = None
        self._group_by: list[Any] = []
        self._having = ConditionGroup()
        self._offset: int | None = None
        self._union: list[UnionBranch] = []

    # ------------------------------------------------------------------
    # Columns and tables
    # ------------------------------------------------------------------

    def distinct(self, value: bool = True) -> Select:
        self._distinct = value
        return self

    def select(self, *columns: Any) -> Select:
        """Add columns: names, ``(column, alias)`` pairs, queries or expressions."""
        self._select.extend(columns)
        return self

    def select_array(self, columns: Iterable[Any]) -> Select:
        self._select.extend(columns)
        return self

    def from_(self, *tables: Any) -> Select:
        """Add tables to select ``FROM``."""
        self._from.extend(tables)
        return self

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def join(self, table: Any, type: str | None = None) -> Select:
        """Add a JOIN; subsequent :meth:`on` / :meth:`using` calls target it."""
        self._join.append(Join(table, type))
        self._last_join = len(self._join) - 1
        return self

    def _current_join(self) -> Join:
        if self._last_join is None:
            raise CompilationError("No JOIN to add conditions to; call join() first.", clause="JOIN")
        return self._join[self._last_join]

    def on(self, c1: Any, op: str, c2: Any) -> Select:
        self._current_join().on(c1, op, c2)
        return self

    def using(self, *columns: Any) -> Select:
        self._current_join().using(*columns)
        return self

    # ------------------------------------------------------------------
    # Grouping
    # ------------------------------------------------------------------

    def group_by(self, *columns: Any) -> Select:
        self._group_by.extend(columns)
        return self

    def having(self, column: Any, op: str, value: Any = None) -> Select:
        """Alias of :meth:`and_having`."""
        return self.and_having(column, op, value)

    def and_having(self, column: Any, op: str, value: Any = None) -> Select:
        self._having.add("AND", column, op, value)
        return self

    def or_having(self, column: Any, op: str, value: Any = None) -> Select:
        self._having.add("OR", column, op, value)
        return self

    def having_open(self) -> Select:
        return self.and_having_open()

    def and_having_open(self) -> Select:
        self._having.open("AND")
        return self

    def or_having_open(self) -> Select:
        self._having.open("OR")
        return self

    def having_close(self) -> Select:
        return self.and_having_close()

    def and_having_close(self) -> Select:
        self._having.close("AND")
        return self

    def or_having_close(self) -> Select:
        self._having.close("OR")
        return self

    def having_close_empty(self) -> Select:
        """Close the open HAVING group, or remove it if it is still empty."""
        self._having.close_empty()
        return self

    # ------------------------------------------------------------------
    # Unions and paging
    # ------------------------------------------------------------------

    def union(self, select: Select | str, all: bool = True) -> Select:
        """Append a ``UNION [ALL]`` branch.

        Args:
            select: Another :class:`Select`, or a table name meaning
                ``SELECT * FROM table``.
            all: Emit ``UNION ALL`` rather than ``UNION``.

        Raises:
            UnionArgumentError: If ``select`` is neither a str nor a Select.
        """
        if isinstance(select, str):
            select = Select().from_(select)
        if not isinstance(select, Select):
            raise UnionArgumentError(select)
        self._union.append(UnionBranch(select, all))
        return self

    def offset(self, number: int | None) -> Select:
        self._offset = number
        return self

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def build(self, db: Database) -> str:
        ctx = self._context(db)

        query = "SELECT "
        if self._distinct:
            query += "DISTINCT "

        if self._select:
            columns = dict.fromkeys(db.quote_column(c) for c in self._select)
            query += ", ".join(columns)
        else:
            query += "*"

        if self._from:
            tables = dict.fromkeys(db.quote_table(t) for t in self._from)
            query += " FROM " + ", ".join(tables)

        if self._join:
            query += " " + JoinListCompiler(ctx).build(self._join)

        if self._where:
            query += " WHERE " + ConditionCompiler(ctx).build(self._where)

        if self._group_by:
            query += " " + GroupByCompiler(ctx).build(self._group_by)

        if self._having:
            query += " HAVING " + ConditionCompiler(ctx, clause="HAVING").build(self._having)

        if self._order_by:
            query += " " + OrderByCompiler(ctx).build(self._order_by)

        if self._limit is not None:
            query += f" LIMIT {self._limit}"

        if self._offset is not None:
            query += f" OFFSET {self._offset}"

        if self._union:
            query = f"({query})"
            for branch in self._union:
                query += " UNION "
                if branch.all:
                    query += "ALL "
                query += f"({branch.select.compile(db)})"

        return query

    def reset(self) -> Select:
        self._init_state()
        self._reset_query()
        return self
