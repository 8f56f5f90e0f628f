"""Raw SQL fragments.

An :class:`Expression` is passed through the quoting contract untouched, so it
can stand in any column, table or value position of a builder::

    select("username", (expr("COUNT(*)"), "total")).from_("users")
    update("users").set({"logins": expr('"logins" + :n', {":n": 1})})
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from fluentql.params import Parameterized

if TYPE_CHECKING:
    from fluentql.database.base import Database


class Expression(Parameterized):
    """An unescaped SQL fragment with optional named placeholders.

    Args:
        value: The raw SQL text.
        parameters: Initial placeholder → value mapping.
    """

    def __init__(self, value: str, parameters: Mapping[str, Any] | None = None) -> None:
        self._value = value
        self._parameters = dict(parameters or {})

    def value(self) -> str:
        """Return the fragment without parameter substitution."""
        return str(self._value)

    def __str__(self) -> str:
        return self.value()

    def __repr__(self) -> str:
        return f"Expression({self._value!r})"

    def compile(self, db: Database) -> str:
        """Return the fragment with every placeholder replaced by its quoted value."""
        return self._substitute_parameters(db, self.value())
