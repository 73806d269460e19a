"""Cache backends for API responses."""

from sportsdb_metadata.cache.base import CacheBackend, NullCache, make_cache_key
from sportsdb_metadata.cache.file import FileCache
from sportsdb_metadata.cache.memory import MemoryCache

__all__ = [
    "CacheBackend",
    "FileCache",
    "MemoryCache",
    "NullCache",
    "make_cache_key",
]
