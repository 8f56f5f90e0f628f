"""Clause-level SQL compilers.

Each class renders exactly one clause from builder state.  They share no
state between calls: every instance is created with the
:class:`~fluentql.query.context.CompilationContext` of one ``compile()`` run.

Classes
-------
ConditionCompiler  WHERE / HAVING condition groups
SetCompiler         UPDATE ``SET`` assignments
GroupByCompiler     ``GROUP BY ...``
OrderByCompiler     ``ORDER BY ...``
JoinListCompiler    consecutive ``JOIN`` clauses
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Sequence

from fluentql.errors import CompilationError, InvalidSortDirectionError
from fluentql.params import is_collection
from fluentql.query.conditions import CLOSE, OPEN, Condition, ConditionGroup
from fluentql.query.context import CompilationContext

if TYPE_CHECKING:
    from fluentql.query.join import Join

_SORT_DIRECTIONS = frozenset({"ASC", "DESC"})


class ConditionCompiler:
    """Builds a WHERE or HAVING body from a :class:`ConditionGroup`.

    Args:
        ctx: Context of the current compile call.
        clause: Clause name reported in errors.
    """

    def __init__(self, ctx: CompilationContext, clause: str = "WHERE") -> None:
        self._ctx = ctx
        self._clause = clause

    def build(self, conditions: ConditionGroup) -> str:
        sql = ""
        last_payload: Any = None

        for entry in conditions:
            payload = entry.payload
            if payload == OPEN:
                if sql and last_payload != OPEN:
                    sql += f" {entry.logic} "
                sql += OPEN
            elif payload == CLOSE:
                sql += CLOSE
            else:
                if sql and last_payload != OPEN:
                    sql += f" {entry.logic} "
                sql += self._build_condition(payload)
            last_payload = payload

        return sql

    def _build_condition(self, condition: Condition) -> str:
        column, op, value = condition.column, condition.op, condition.value

        if value is None:
            if op == "=":
                op = "IS"
            elif op in ("!=", "<>"):
                op = "IS NOT"

        op = op.upper()

        if op == "BETWEEN" and isinstance(value, (list, tuple)):
            # Extra items past the two bounds are ignored.
            if len(value) < 2:
                raise CompilationError(
                    f"BETWEEN needs a (low, high) pair, got {value!r}.", clause=self._clause
                )
            low, high = value[0], value[1]
            value_sql = f"{self._ctx.quote_value(low)} AND {self._ctx.quote_value(high)}"
        elif op == "IN" and is_collection(value) and not value:
            value_sql = "(NULL)"
        else:
            value_sql = self._ctx.quote_value(value)

        column_sql = ""
        if column:
            if isinstance(column, (list, tuple)):
                column_sql = self._ctx.db.quote_identifier(column[0])
            else:
                column_sql = self._ctx.db.quote_column(column)

        return f"{column_sql} {op} {value_sql}".strip()


class SetCompiler:
    """Builds the assignment list of an UPDATE.

    Assignments are keyed by quoted column: a later assignment to the same
    column replaces the earlier one in place.
    """

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, pairs: Iterable[tuple[Any, Any]]) -> str:
        assignments: dict[str, str] = {}
        for column, value in pairs:
            column_sql = self._ctx.db.quote_column(column)
            assignments[column_sql] = f"{column_sql} = {self._ctx.quote_value(value)}"
        return ", ".join(assignments.values())


class GroupByCompiler:
    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, columns: Sequence[Any]) -> str:
        group = [self._ctx.quote_alias_or_column(c) for c in columns]
        return "GROUP BY " + ", ".join(group)


class OrderByCompiler:
    """Builds ``ORDER BY``; directions are restricted to ASC / DESC."""

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, items: Sequence[tuple[Any, Any]]) -> str:
        sort: list[str] = []
        for column, direction in items:
            column_sql = self._ctx.quote_alias_or_column(column)
            if direction:
                direction = str(direction).upper()
                if direction not in _SORT_DIRECTIONS:
                    raise InvalidSortDirectionError(direction)
                column_sql += f" {direction}"
            sort.append(column_sql)
        return "ORDER BY " + ", ".join(sort)


class JoinListCompiler:
    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, joins: Sequence[Join]) -> str:
        return " ".join(join.compile(self._ctx.db) for join in joins)
