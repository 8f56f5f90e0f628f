"""Raw SQL queries: parameters, compilation and execution.

:class:`Query` is also the base of every statement builder, which only
override :meth:`Query.compile` to produce their SQL before placeholder
substitution runs.
"""
from __future__ import annotations

import logging
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Sequence

from fluentql.params import Parameterized
from fluentql.result import Result

if TYPE_CHECKING:
    from fluentql.database.base import Database

logger = logging.getLogger(__name__)


class QueryType(IntEnum):
    """Statement kinds understood by drivers."""

    SELECT = 1
    INSERT = 2
    UPDATE = 3
    DELETE = 4


class Query(Parameterized):
    """A SQL statement with named placeholders.

    Args:
        type: The statement kind; it decides the shape of :meth:`execute`'s
            return value.
        sql: Statement text.  Builders pass an empty string and generate
            it on :meth:`compile`.
    """

    def __init__(self, type: QueryType | int, sql: str = "") -> None:
        self._type = QueryType(type)
        self._sql: str | None = sql
        self._parameters: dict[str, Any] = {}
        self._as_object: Any = False
        self._object_params: Sequence[Any] | None = None
        self._lifetime: int | None = None
        self._force_execute = False

    @property
    def type(self) -> QueryType:
        return self._type

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self._type.name}, sql={self._sql!r})"

    # ------------------------------------------------------------------
    # Execution options
    # ------------------------------------------------------------------

    def cached(self, lifetime: int, force: bool = False) -> Query:
        """Cache SELECT results for ``lifetime`` seconds.

        Args:
            lifetime: Seconds a cached result stays valid.  ``0`` or less
                evicts any cached copy on the next execution.
            force: Always run the query, refreshing the cached copy.
        """
        self._lifetime = lifetime
        self._force_execute = force
        return self

    def as_assoc(self) -> Query:
        """Return rows as dicts."""
        self._as_object = False
        self._object_params = None
        return self

    def as_object(self, cls: Any = True, params: Sequence[Any] | None = None) -> Query:
        """Return rows as objects.

        Args:
            cls: ``True`` for :class:`~types.SimpleNamespace` rows, or a class
                instantiated with each row's columns as keyword arguments.
            params: Extra positional constructor arguments for ``cls``.
        """
        self._as_object = cls
        if params:
            self._object_params = params
        return self

    # ------------------------------------------------------------------
    # Compilation / execution
    # ------------------------------------------------------------------

    def compile(self, db: Database) -> str:
        """Return the SQL with every placeholder replaced by its quoted value."""
        return self._substitute_parameters(db, self._sql or "")

    def execute(
        self,
        db: Database,
        as_object: Any = None,
        object_params: Sequence[Any] | None = None,
    ) -> Any:
        """Compile the statement and run it on ``db``.

        Returns:
            A :class:`~fluentql.result.Result` for SELECT, an
            ``(insert_id, affected_rows)`` tuple for INSERT, and the number of
            affected rows for UPDATE and DELETE.

        Raises:
            DatabaseError: If the driver fails.
        """
        if as_object is None:
            as_object = self._as_object
        if object_params is None:
            object_params = self._object_params

        sql = self.compile(db)

        cache_key = None
        if self._lifetime is not None and self._type is QueryType.SELECT:
            cache_key = f'Database.query("{db}", "{sql}")'
            if not self._force_execute:
                rows = db.cache.get(cache_key, self._lifetime)
                if rows is not None:
                    logger.debug("Returning cached result for %s", cache_key)
                    return Result(rows, sql, as_object, object_params)

        result = db.query(self._type, sql, as_object, object_params)

        if cache_key is not None and self._lifetime > 0:
            db.cache.set(cache_key, result.rows())

        return result
