"""Single-slot TTL cache for the latest currency-rate payload.

Backed by ``cachetools.TTLCache(maxsize=1)`` with an injectable timer, so
tests can drive expiry with a fake clock instead of the wall clock.

Concurrent refreshes are a benign race: two callers may both miss, both
fetch, and both store equivalent data; the last write wins.  No lock.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from cachetools import TTLCache

DEFAULT_TTL_SECONDS = 3600.0

_SLOT = "rates"


class RateCache:
    """One cached payload plus the time it was stored."""

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._slot: TTLCache = TTLCache(maxsize=1, ttl=ttl_seconds, timer=clock)

    def get(self) -> tuple[dict[str, Any], float] | None:
        """Return ``(payload, age_seconds)`` while fresh, else ``None``."""
        entry = self._slot.get(_SLOT)
        if entry is None:
            return None
        payload, stored_at = entry
        return payload, self._clock() - stored_at

    def put(self, payload: dict[str, Any]) -> None:
        self._slot[_SLOT] = (payload, self._clock())

    def clear(self) -> None:
        self._slot.clear()
