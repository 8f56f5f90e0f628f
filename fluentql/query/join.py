"""JOIN clause builder."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fluentql.errors import IncompatibleJoinConditionsError

if TYPE_CHECKING:
    from fluentql.database.base import Database


class Join:
    """A single ``[TYPE] JOIN table ON (...)`` or ``... USING (...)`` clause.

    ON and USING are exclusive: once one has been used on an instance, the
    other raises :class:`~fluentql.errors.IncompatibleJoinConditionsError`.

    Args:
        table: Table name, ``(table, alias)`` pair, or a sub-query.
        type: Join type (LEFT, RIGHT, INNER ...); ``None`` emits a bare JOIN.
    """

    def __init__(self, table: Any, type: str | None = None) -> None:
        self._table = table
        self._type = type
        self._on: list[tuple[Any, str, Any]] = []
        self._using: list[Any] = []

    def on(self, c1: Any, op: str, c2: Any) -> Join:
        """Add a ``c1 op c2`` join condition; conditions are ANDed."""
        if self._using:
            raise IncompatibleJoinConditionsError()
        self._on.append((c1, op, c2))
        return self

    def using(self, *columns: Any) -> Join:
        """Join on identically named columns."""
        if self._on:
            raise IncompatibleJoinConditionsError()
        self._using.extend(columns)
        return self

    def compile(self, db: Database) -> str:
        sql = f"{self._type.upper()} JOIN" if self._type else "JOIN"
        sql += " " + db.quote_table(self._table)

        if self._using:
            sql += " USING (" + ", ".join(db.quote_column(c) for c in self._using) + ")"
        else:
            conditions = []
            for c1, op, c2 in self._on:
                op_sql = f" {op.upper()}" if op else ""
                conditions.append(f"{db.quote_column(c1)}{op_sql} {db.quote_column(c2)}")
            sql += " ON (" + " AND ".join(conditions) + ")"

        return sql

    def reset(self) -> Join:
        self._type = None
        self._table = None
        self._on = []
        self._using = []
        return self
