"""In-memory freshness cache for a single upstream payload.

The cache holds one immutable :class:`CachedPayload`. Every operation swaps or
reads that one reference under a lock, so concurrent requests always see
either the previous payload or the new one, never a mix of the two.
Staleness only tells the caller to try a refresh; a stale payload stays
readable until a successful fetch replaces it.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

DEFAULT_FRESHNESS_SECONDS = 300.0


@dataclass(frozen=True)
class CachedPayload:
    body: bytes
    fetched_at: float

    def age(self, now: float) -> float:
        return max(now - self.fetched_at, 0.0)


class FreshnessCache:
    def __init__(
        self,
        freshness_seconds: float = DEFAULT_FRESHNESS_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._window = float(freshness_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._current: Optional[CachedPayload] = None

    def now(self) -> float:
        return self._clock()

    def is_fresh(self) -> bool:
        with self._lock:
            current = self._current
        if current is None:
            return False
        return self._clock() < current.fetched_at + self._window

    def read(self) -> Optional[CachedPayload]:
        with self._lock:
            return self._current

    def read_fresh(self) -> Optional[CachedPayload]:
        """Return the payload only if it is still inside the freshness window."""
        current = self.read()
        if current is None or self._clock() >= current.fetched_at + self._window:
            return None
        return current

    def store(self, body: bytes, at: Optional[float] = None) -> CachedPayload:
        payload = CachedPayload(body=bytes(body), fetched_at=self._clock() if at is None else at)
        with self._lock:
            self._current = payload
        return payload

    def clear(self) -> None:
        with self._lock:
            self._current = None
