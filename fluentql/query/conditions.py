"""Condition groups for WHERE and HAVING clauses.

A :class:`ConditionGroup` is an ordered list of entries, each tagged with the
logical connector that joins it to what precedes it.  An entry's payload is
``"("``, ``")"`` or a :class:`Condition`.  Nesting of the markers is not
checked; unbalanced groups compile to unbalanced SQL.

:class:`WhereMixin` adds the fluent WHERE / ORDER BY / LIMIT API shared by
SELECT, UPDATE and DELETE.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Literal, Union

Logic = Literal["AND", "OR"]

OPEN = "("
CLOSE = ")"


@dataclass(frozen=True)
class Condition:
    """A single ``column op value`` predicate."""

    column: Any
    op: str
    value: Any = None


@dataclass(frozen=True)
class ConditionEntry:
    logic: Logic
    payload: Union[Condition, str]


@dataclass
class ConditionGroup:
    """Ordered WHERE / HAVING entries."""

    entries: list[ConditionEntry] = field(default_factory=list)

    def __iter__(self) -> Iterator[ConditionEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def add(self, logic: Logic, column: Any, op: str, value: Any) -> None:
        self.entries.append(ConditionEntry(logic, Condition(column, op, value)))

    def open(self, logic: Logic) -> None:
        self.entries.append(ConditionEntry(logic, OPEN))

    def close(self, logic: Logic) -> None:
        self.entries.append(ConditionEntry(logic, CLOSE))

    def close_empty(self) -> None:
        """Close the current group, or drop it if nothing was added since it opened."""
        if self.entries and self.entries[-1].payload == OPEN:
            self.entries.pop()
        else:
            self.close("AND")

    def clear(self) -> None:
        self.entries.clear()


class WhereMixin:
    """WHERE, ORDER BY and LIMIT state for statement builders."""

    _where: ConditionGroup
    _order_by: list[tuple[Any, str | None]]
    _limit: int | None

    def _reset_where(self) -> None:
        self._where = ConditionGroup()
        self._order_by = []
        self._limit = None

    def where(self, column: Any, op: str, value: Any = None):
        """Alias of :meth:`and_where`."""
        return self.and_where(column, op, value)

    def and_where(self, column: Any, op: str, value: Any = None):
        """Add an ``AND column op value`` condition.

        Args:
            column: Column name, ``(column, alias)`` pair, or a query/expression.
            op: Comparison operator (``=``, ``IN``, ``BETWEEN``, ``LIKE`` ...).
            value: Compared value; ``None`` turns ``=`` into ``IS`` and
                ``!=``/``<>`` into ``IS NOT``.
        """
        self._where.add("AND", column, op, value)
        return self

    def or_where(self, column: Any, op: str, value: Any = None):
        """Add an ``OR column op value`` condition."""
        self._where.add("OR", column, op, value)
        return self

    def where_open(self):
        """Alias of :meth:`and_where_open`."""
        return self.and_where_open()

    def and_where_open(self):
        self._where.open("AND")
        return self

    def or_where_open(self):
        self._where.open("OR")
        return self

    def where_close(self):
        """Alias of :meth:`and_where_close`."""
        return self.and_where_close()

    def and_where_close(self):
        self._where.close("AND")
        return self

    def or_where_close(self):
        self._where.close("OR")
        return self

    def where_close_empty(self):
        """Close the open group, or remove it if it is still empty."""
        self._where.close_empty()
        return self

    def order_by(self, column: Any, direction: str | None = None):
        """Sort by ``column``; ``direction`` must be ASC or DESC (any case)."""
        self._order_by.append((column, direction))
        return self

    def limit(self, number: int | None):
        """Return at most ``number`` rows; ``None`` removes the limit."""
        self._limit = number
        return self
