"""Named placeholder parameters shared by queries and expressions.

Placeholders are plain tokens inside SQL text (by convention ``:name``).  At
compile time every token is replaced by its quoted value in a single pass;
where two keys could match at the same position the longer one wins, and
substituted text is never scanned again.

``bind()`` registers a :class:`Ref` rather than a value.  The value that ends
up in the SQL is whatever the ``Ref`` holds when ``compile()`` runs::

    ref = Ref(1)
    q = query(QueryType.SELECT, "SELECT * FROM t WHERE id = :id").bind(":id", ref)
    ref.value = 2
    q.compile(db)   # ... WHERE id = 2
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from fluentql.database.base import Database


@dataclass
class Ref:
    """Mutable cell for bind-by-reference parameters."""

    value: Any = None


def resolve(value: Any) -> Any:
    """Return the current value behind ``value`` if it is a :class:`Ref`."""
    return value.value if isinstance(value, Ref) else value


def is_collection(value: Any) -> bool:
    """Whether ``value`` is quoted as a parenthesised value list."""
    return isinstance(value, (list, tuple, set, frozenset))


def substitute(text: str, replacements: Mapping[str, str]) -> str:
    """Replace every occurrence of each key in ``text`` with its replacement.

    Longest keys are tried first at each position and replaced text is not
    rescanned.
    """
    keys = [k for k in replacements if k]
    if not keys:
        return text
    keys.sort(key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(k) for k in keys))
    return pattern.sub(lambda m: replacements[m.group(0)], text)


class Parameterized:
    """Mixin holding a placeholder → value mapping."""

    _parameters: dict[str, Any]

    def param(self, param: str, value: Any):
        """Add or overwrite a parameter value."""
        self._parameters[param] = value
        return self

    def bind(self, param: str, ref: Ref):
        """Bind a parameter to a :class:`Ref`, read at compile time."""
        self._parameters[param] = ref
        return self

    def parameters(self, params: Mapping[str, Any]):
        """Merge ``params`` in, overwriting keys that are already registered."""
        self._parameters = {**self._parameters, **params}
        return self

    def is_parameter(self, value: Any) -> bool:
        """Whether ``value`` is a placeholder token registered on this object."""
        return isinstance(value, str) and value in self._parameters

    def _substitute_parameters(self, db: Database, text: str) -> str:
        if not self._parameters:
            return text
        quoted = {
            name: db.quote(resolve(value)) for name, value in self._parameters.items()
        }
        return substitute(text, quoted)
