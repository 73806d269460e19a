"""In-memory cache backend implementation."""

from __future__ import annotations

import asyncio
import copy
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sportsdb_metadata.cache.base import CacheBackend
from sportsdb_metadata.cache.file import SECONDS_PER_DAY


@dataclass
class CacheEntry:
    """A single cache entry and the time it was written."""

    value: Any
    stored_at: float


class MemoryCache(CacheBackend):
    """In-memory LRU cache with a day-based TTL.

    Same expiry rule as the file cache: an entry older than the TTL is
    dropped when it is next accessed. Nothing survives the process.
    Values are deep-copied on the way in and out, so callers never share
    a stored object.

    Args:
        max_size: Maximum number of entries to store (default: 10000)
        ttl_days: Entry lifetime in days (default: 7)
        clock: Callable returning the current time as epoch seconds

    Example:
        cache = MemoryCache(max_size=1000, ttl_days=1)
        await cache.set("key", {"leagues": []})
        result = await cache.get("key")
    """

    def __init__(
        self,
        max_size: int = 10000,
        ttl_days: float = 7,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._cache: OrderedDict[str, CacheEntry] = OrderedDict()
        self._max_size = max_size
        self._ttl = ttl_days * SECONDS_PER_DAY
        self._clock = clock
        self._lock = asyncio.Lock()

    def _is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.stored_at > self._ttl

    def _evict_if_needed(self) -> None:
        """Evict oldest entries if cache is at capacity."""
        while len(self._cache) >= self._max_size:
            self._cache.popitem(last=False)

    async def get(self, key: str) -> Any | None:
        async with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None

            if self._is_expired(entry):
                del self._cache[key]
                return None

            # Move to end (most recently used)
            self._cache.move_to_end(key)
            return copy.deepcopy(entry.value)

    async def set(self, key: str, value: Any) -> None:
        async with self._lock:
            if key in self._cache:
                del self._cache[key]
            else:
                self._evict_if_needed()

            self._cache[key] = CacheEntry(value=copy.deepcopy(value), stored_at=self._clock())

    async def delete(self, key: str) -> bool:
        async with self._lock:
            if key in self._cache:
                del self._cache[key]
                return True
            return False

    async def exists(self, key: str) -> bool:
        async with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return False

            if self._is_expired(entry):
                del self._cache[key]
                return False

            return True

    async def clear(self) -> None:
        """Clear all entries from the cache."""
        async with self._lock:
            self._cache.clear()

    async def close(self) -> None:
        await self.clear()

    @property
    def size(self) -> int:
        """Get the current number of entries in the cache."""
        return len(self._cache)

    async def get_stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        async with self._lock:
            expired_count = sum(1 for e in self._cache.values() if self._is_expired(e))
            return {
                "size": len(self._cache),
                "max_size": self._max_size,
                "expired_count": expired_count,
                "ttl_days": self._ttl / SECONDS_PER_DAY,
            }
