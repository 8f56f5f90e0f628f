"""In-process store for cached SELECT results.

Entries are keyed by the instance name and compiled SQL and expire by age:
a lookup passes the caller's lifetime and anything older is evicted.
"""
from __future__ import annotations

import logging
import time
from typing import Any

logger = logging.getLogger(__name__)


class ResultCache:
    """Maps cache keys to ``(stored_at, rows)`` pairs."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str, lifetime: int) -> Any | None:
        """Return the rows stored under ``key`` if younger than ``lifetime`` seconds.

        An expired entry, or any entry looked up with ``lifetime <= 0``, is
        removed and ``None`` is returned.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, rows = entry
        if lifetime <= 0 or time.monotonic() - stored_at >= lifetime:
            logger.debug("Evicting cached result %s", key)
            del self._entries[key]
            return None
        return rows

    def set(self, key: str, rows: Any) -> None:
        self._entries[key] = (time.monotonic(), rows)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
