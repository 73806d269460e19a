"""File-based cache backend implementation."""

from __future__ import annotations

import contextlib
import hashlib
import json
import logging
import os
import re
import tempfile
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, Final

from sportsdb_metadata.cache.base import CacheBackend

logger = logging.getLogger(__name__)

SECONDS_PER_DAY: Final = 86400
_DIGEST_PATTERN: Final = re.compile(r"[0-9a-f]{64}")


class FileCache(CacheBackend):
    """Directory of JSON files, one per cache key, with a day-based TTL.

    An entry's age is measured from the modification time of its file, so
    every write resets it. Expired entries are removed when they are read.
    Writes go to a temporary file that is then renamed over the entry, so
    readers never observe a half-written file.

    Storage problems (missing directory, permission errors, corrupt JSON)
    are logged and treated as a cache miss; the cache never raises.

    Args:
        directory: Directory holding the cache files (created on demand)
        ttl_days: Entry lifetime in days (default: 7)
        clock: Callable returning the current time as epoch seconds

    Example:
        cache = FileCache(Path("~/.cache/sportsdb-metadata").expanduser())
        await cache.set(key, {"events": []})
        payload = await cache.get(key)
    """

    def __init__(
        self,
        directory: str | Path,
        ttl_days: float = 7,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._directory = Path(directory)
        self._ttl = ttl_days * SECONDS_PER_DAY
        self._clock = clock

    @property
    def directory(self) -> Path:
        """Directory holding the cache files."""
        return self._directory

    def _path_for(self, key: str) -> Path:
        if not _DIGEST_PATTERN.fullmatch(key):
            key = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self._directory / f"{key}.json"

    def _is_expired(self, path: Path) -> bool:
        return self._clock() - path.stat().st_mtime > self._ttl

    async def get(self, key: str) -> Any | None:
        """Retrieve a value from the cache.

        Args:
            key: The cache key

        Returns:
            The cached value, or None if not found, expired or unreadable
        """
        path = self._path_for(key)
        try:
            if self._is_expired(path):
                logger.debug("Cache entry expired: %s", path.name)
                path.unlink(missing_ok=True)
                return None
            with path.open(encoding="utf-8") as f:
                value = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Cache read failed for %s: %s", path.name, e)
            return None

        logger.debug("Cache hit: %s", path.name)
        return value

    async def set(self, key: str, value: Any) -> None:
        """Store a value in the cache.

        Args:
            key: The cache key
            value: The JSON-serialisable value to cache
        """
        path = self._path_for(key)
        tmp_name: str | None = None
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory, prefix=f".{path.stem[:16]}-", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f)
            os.replace(tmp_name, path)
            tmp_name = None
            now = self._clock()
            os.utime(path, (now, now))
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Cache write failed for %s: %s", path.name, e)
        finally:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)

    async def delete(self, key: str) -> bool:
        """Delete a value from the cache.

        Args:
            key: The cache key

        Returns:
            True if the key was deleted, False if it didn't exist
        """
        path = self._path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning("Cache delete failed for %s: %s", path.name, e)
            return False
        return True

    async def exists(self, key: str) -> bool:
        """Check if a key exists in the cache.

        Args:
            key: The cache key

        Returns:
            True if the key exists and hasn't expired
        """
        path = self._path_for(key)
        try:
            return not self._is_expired(path)
        except OSError:
            return False

    async def clear(self) -> None:
        """Remove every cache entry."""
        if not self._directory.is_dir():
            return

        removed = 0
        for pattern in ("*.json", ".*.tmp"):
            for path in self._directory.glob(pattern):
                try:
                    path.unlink()
                    removed += 1
                except OSError as e:
                    logger.warning("Cache clear could not remove %s: %s", path.name, e)
        logger.info("Cleared %d cache entries from %s", removed, self._directory)

    async def get_stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        entries = list(self._directory.glob("*.json")) if self._directory.is_dir() else []
        expired_count = 0
        total_bytes = 0
        for path in entries:
            with contextlib.suppress(OSError):
                total_bytes += path.stat().st_size
                if self._is_expired(path):
                    expired_count += 1
        return {
            "directory": str(self._directory),
            "size": len(entries),
            "expired_count": expired_count,
            "total_bytes": total_bytes,
            "ttl_days": self._ttl / SECONDS_PER_DAY,
        }
