"""Materialised SELECT results."""
from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Iterator, Sequence


def shape_row(row: dict[str, Any], as_object: Any = False, object_params: Sequence[Any] | None = None) -> Any:
    """Convert a column → value mapping to the requested row shape.

    ``False`` keeps the dict, ``True`` gives a :class:`~types.SimpleNamespace`
    and a class is instantiated as ``cls(*object_params, **row)``.
    """
    if as_object is False or as_object is None:
        return dict(row)
    if as_object is True:
        return SimpleNamespace(**row)
    return as_object(*(object_params or ()), **row)


def _field(row: Any, name: str, default: Any = None) -> Any:
    if isinstance(row, dict):
        return row.get(name, default)
    return getattr(row, name, default)


class Result:
    """A fully fetched result set with a movable cursor.

    Args:
        rows: Column → value mappings, in backend order.
        sql: The statement that produced the rows.
        as_object: Row shape, see :func:`shape_row`.
        object_params: Positional constructor arguments for class rows.
    """

    def __init__(
        self,
        rows: Sequence[dict[str, Any]],
        sql: str,
        as_object: Any = False,
        object_params: Sequence[Any] | None = None,
    ) -> None:
        self._raw = [dict(r) for r in rows]
        self._rows = [shape_row(r, as_object, object_params) for r in self._raw]
        self.sql = sql
        self.as_object = as_object
        self.object_params = object_params
        self._current_row = 0

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._rows)

    def __getitem__(self, offset: int) -> Any:
        return self._rows[offset]

    def count(self) -> int:
        return len(self._rows)

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    def seek(self, offset: int) -> bool:
        """Move the cursor to ``offset``; returns ``False`` if out of range."""
        if 0 <= offset < len(self._rows):
            self._current_row = offset
            return True
        return False

    def current(self) -> Any | None:
        if 0 <= self._current_row < len(self._rows):
            return self._rows[self._current_row]
        return None

    def get(self, name: str, default: Any = None) -> Any:
        """Return column ``name`` of the current row."""
        row = self.current()
        if row is None:
            return default
        return _field(row, name, default)

    def cached(self) -> Result:
        return self

    def rows(self) -> list[dict[str, Any]]:
        """Return the unshaped rows, suitable for caching."""
        return [dict(r) for r in self._raw]

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def as_array(self, key: str | None = None, value: str | None = None) -> Any:
        """Return the rows as a list or mapping.

        * no arguments: list of all rows
        * ``key`` only: dict of rows keyed by the ``key`` column
        * ``value`` only: list of the ``value`` column
        * both: dict mapping the ``key`` column to the ``value`` column
        """
        if key is None and value is None:
            return list(self._rows)
        if key is None:
            return [_field(row, value) for row in self._rows]
        if value is None:
            return {_field(row, key): row for row in self._rows}
        return {_field(row, key): _field(row, value) for row in self._rows}

    def __repr__(self) -> str:
        return f"Result(rows={len(self._rows)}, sql={self.sql!r})"
