"""Compilation context value object.

Packages the ``(db, parameters)`` pair every clause compiler needs into a
single object created once per ``compile()`` call.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from fluentql.database.base import Database


@dataclass(frozen=True)
class CompilationContext:
    """Immutable context for a single compilation run.

    Attributes:
        db: Database providing the quoting contract.
        parameters: The statement's registered placeholders.  Values equal to
            one of these keys are emitted verbatim and substituted later.
    """

    db: Database
    parameters: Mapping[str, Any]

    def is_parameter(self, value: Any) -> bool:
        return isinstance(value, str) and value in self.parameters

    def quote_value(self, value: Any) -> str:
        """Quote ``value`` unless it is a registered placeholder."""
        if self.is_parameter(value):
            return value
        return self.db.quote(value)

    def quote_alias_or_column(self, column: Any) -> str:
        """Quote a GROUP BY / ORDER BY target; ``(column, alias)`` uses the alias."""
        if isinstance(column, (list, tuple)):
            return self.db.quote_identifier(column[-1])
        return self.db.quote_column(column)
