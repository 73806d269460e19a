"""Abstract base class for cache backends."""

from __future__ import annotations

import abc
import hashlib
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode


def make_cache_key(url: str, params: Mapping[str, Any] | None = None) -> str:
    """Build the cache key for a request.

    The key is the SHA-256 hex digest of the full request signature: the
    URL (which carries the API key) followed by the query parameters in
    sorted order, so the same request always maps to the same key.

    Args:
        url: Absolute request URL without query string
        params: Query parameters

    Returns:
        64 character hex digest
    """
    signature = url
    if params:
        signature += "?" + urlencode(sorted((k, str(v)) for k, v in params.items()))
    return hashlib.sha256(signature.encode("utf-8")).hexdigest()


class CacheBackend(abc.ABC):
    """Abstract base class for cache backends.

    Backends store decoded JSON payloads under request keys and expire them
    after a backend-wide time-to-live. A backend never raises on storage
    failures; an entry that cannot be read is reported as absent.
    """

    @abc.abstractmethod
    async def get(self, key: str) -> Any | None:
        """Retrieve a value from the cache.

        Args:
            key: The cache key

        Returns:
            The cached value, or None if not found or expired
        """

    @abc.abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store a value in the cache, resetting its age.

        Args:
            key: The cache key
            value: The JSON-serialisable value to cache
        """

    @abc.abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a value from the cache.

        Args:
            key: The cache key

        Returns:
            True if the key was deleted, False if it didn't exist
        """

    @abc.abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if a key exists in the cache.

        Args:
            key: The cache key

        Returns:
            True if the key exists and hasn't expired
        """

    @abc.abstractmethod
    async def clear(self) -> None:
        """Clear all entries from the cache."""

    async def close(self) -> None:
        """Release resources held by the backend.

        Default implementation does nothing.
        """


class NullCache(CacheBackend):
    """A cache backend that doesn't cache anything.

    Useful for testing or disabling caching.
    """

    async def get(self, key: str) -> Any | None:
        return None

    async def set(self, key: str, value: Any) -> None:
        pass

    async def delete(self, key: str) -> bool:
        return False

    async def exists(self, key: str) -> bool:
        return False

    async def clear(self) -> None:
        pass
