"""In-memory freshness cache for GitHub payloads. No Redis needed.

Unlike a plain TTL cache, expired entries are kept: the routes serve them as
a stale fallback when GitHub is unreachable. Each kind has its own refresh
timestamp, so refreshing repos does not make profile stats look fresh.

Note: Each uvicorn worker has its own cache instance. All access happens on
the event loop between awaits, so there is no lock.
"""

import time
from enum import Enum
from typing import Any, Callable

from config import settings


class CacheKind(str, Enum):
    PROFILE = "profile"
    REPOS = "repos"
    ACTIVITY = "activity"


class FreshnessCache:
    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._store: dict[CacheKind, tuple[float, Any]] = {}

    def get(self, kind: CacheKind) -> Any | None:
        """Last stored payload for `kind`, fresh or not."""
        entry = self._store.get(kind)
        return entry[1] if entry else None

    def put(self, kind: CacheKind, value: Any) -> None:
        self._store[kind] = (self._clock(), value)

    def updated_at(self, kind: CacheKind) -> float | None:
        entry = self._store.get(kind)
        return entry[0] if entry else None

    def age(self, kind: CacheKind) -> float | None:
        """Seconds since `kind` was last stored, or None if never stored."""
        stamped = self.updated_at(kind)
        return None if stamped is None else self._clock() - stamped

    def is_fresh(self, kind: CacheKind) -> bool:
        age = self.age(kind)
        return age is not None and age < self.ttl_seconds

    def clear(self) -> None:
        self._store.clear()


cache = FreshnessCache(ttl_seconds=settings.cache_ttl)


def get_cache() -> FreshnessCache:
    """Dependency returning the process-wide cache."""
    return cache
