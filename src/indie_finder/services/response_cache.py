"""Time-bounded cache of decoded upstream responses."""

import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any

import structlog

from ..models import CacheEntry

log = structlog.stdlib.get_logger()

DEFAULT_TTL_SECONDS = 600.0


class ResponseCache:
    """Cache of upstream payloads keyed by the fully resolved request URL.

    - Entries are fresh for ``ttl_seconds`` after capture; a stale entry is
      treated as a miss but stays in place until a successful fetch
      overwrites it
    - Least recently used entries are evicted once ``max_entries`` is
      exceeded (``None`` keeps every entry for the lifetime of the cache)
    - No locking: concurrent writers of one key are last-write-wins
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int | None = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the response cache.

        Args:
            ttl_seconds: Freshness window of an entry in seconds
            max_entries: Maximum number of entries kept, None for unbounded
            clock: Monotonic time source (injectable for tests)
        """
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry for ``key`` if it is still fresh."""
        entry = self._entries.get(key)
        if entry is None or not entry.is_fresh(self._clock(), self.ttl_seconds):
            self._misses += 1
            return None

        self._entries.move_to_end(key)
        self._hits += 1
        return entry

    def put(self, key: str, payload: Any) -> CacheEntry:
        """Store ``payload`` under ``key``, replacing any previous entry."""
        entry = CacheEntry(payload=payload, captured_at=self._clock())
        self._entries[key] = entry
        self._entries.move_to_end(key)

        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
                self._evictions += 1

        return entry

    def clear(self) -> int:
        """Drop every entry. Returns how many were removed."""
        count = len(self._entries)
        self._entries.clear()
        if count:
            log.info("Response cache cleared", entries=count)
        return count

    def stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        now = self._clock()
        fresh_entries = sum(
            1 for entry in self._entries.values()
            if entry.is_fresh(now, self.ttl_seconds)
        )
        return {
            "total_entries": len(self._entries),
            "fresh_entries": fresh_entries,
            "max_entries": self.max_entries,
            "ttl_seconds": self.ttl_seconds,
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
