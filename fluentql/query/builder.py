"""Base class for statement builders.

Subclasses implement :meth:`Builder.build`, which assembles the statement
from builder state with placeholders still in place; :meth:`Builder.compile`
caches that text and then runs placeholder substitution.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from fluentql.query.base import Query
from fluentql.query.context import CompilationContext

if TYPE_CHECKING:
    from fluentql.database.base import Database


class Builder(Query, ABC):
    """A :class:`Query` whose SQL is generated from mutable clause state."""

    def _context(self, db: Database) -> CompilationContext:
        return CompilationContext(db=db, parameters=self._parameters)

    @abstractmethod
    def build(self, db: Database) -> str:
        """Return the statement SQL before placeholder substitution."""

    def compile(self, db: Database) -> str:
        self._sql = self.build(db)
        return super().compile(db)

    @abstractmethod
    def reset(self) -> Builder:
        """Clear all clause state, parameters and the cached SQL."""

    def _reset_query(self) -> None:
        self._parameters = {}
        self._sql = None
