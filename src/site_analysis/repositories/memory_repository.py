"""In-process implementation of CacheStore.

Entries live in a dict alongside their expiry deadline on a monotonic
clock. Expired entries are dropped lazily on read. Not shared between
processes, so only suitable for development, a single worker, or tests.
"""

import threading
import time
from collections.abc import Callable


class MemoryCacheRepository:
    """Dict-backed key-value cache with per-key TTL."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(cls) -> "MemoryCacheRepository":
        return cls()

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: str, ttl: int) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl)

    def health_check(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entries)
