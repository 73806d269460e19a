"""Configuration classes for the sportsdb-metadata library."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Final

from sportsdb_metadata.core.exceptions import InvalidConfigurationError

API_BASE_URL: Final = "https://www.thesportsdb.com/api/v1/json"

# Public test key of the free tier
DEFAULT_API_KEY: Final = "3"

CACHE_BACKENDS: Final = frozenset({"file", "memory", "none"})
MIN_TTL_DAYS: Final = 1
MAX_TTL_DAYS: Final = 365


def _get_default_cache_dir() -> Path:
    """Get the default request cache directory."""
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        cache_dir = Path(xdg_cache) / "sportsdb-metadata"
    elif os.name == "nt":
        cache_dir = Path(os.environ.get("LOCALAPPDATA", "~")) / "sportsdb-metadata"
    else:
        cache_dir = Path.home() / ".cache" / "sportsdb-metadata"
    return cache_dir.expanduser()


@dataclass
class CacheConfig:
    """Configuration for the request cache.

    Attributes:
        backend: Cache backend type ("file", "memory", "none")
        directory: Directory for the file cache. None uses the default
            (~/.cache/sportsdb-metadata)
        ttl_days: Age in days after which a cached response is discarded
        max_size: Maximum number of entries for the memory cache
    """

    backend: str = "file"
    directory: Path | None = None
    ttl_days: int = 7
    max_size: int = 10000

    def __post_init__(self) -> None:
        if self.backend not in CACHE_BACKENDS:
            raise InvalidConfigurationError(
                f"unknown cache backend '{self.backend}' "
                f"(expected one of {', '.join(sorted(CACHE_BACKENDS))})"
            )
        if not MIN_TTL_DAYS <= self.ttl_days <= MAX_TTL_DAYS:
            raise InvalidConfigurationError(
                f"ttl_days must be between {MIN_TTL_DAYS} and {MAX_TTL_DAYS}, "
                f"got {self.ttl_days}"
            )
        if self.directory is not None:
            self.directory = Path(self.directory)

    def get_directory(self) -> Path:
        """Get the resolved cache directory path."""
        if self.directory is not None:
            return self.directory
        return _get_default_cache_dir()


@dataclass
class SportsDBConfig:
    """Main configuration for the SportsMetadataClient.

    Attributes:
        api_key: TheSportsDB API key; it becomes part of every request path
        enabled: When False, every lookup returns an empty result without
            touching the network
        max_requests_per_minute: Admission cap of the sliding 60 second window
        timeout: Request timeout in seconds
        user_agent: User agent string for HTTP requests
        base_url: API root, without the key segment
        cache: Cache configuration
    """

    api_key: str = DEFAULT_API_KEY
    enabled: bool = True
    max_requests_per_minute: int = 30
    timeout: int = 30
    user_agent: str = "sportsdb-metadata/1.0"
    base_url: str = API_BASE_URL
    cache: CacheConfig = field(default_factory=CacheConfig)

    def __post_init__(self) -> None:
        if not self.api_key:
            raise InvalidConfigurationError("api_key must not be empty")
        if self.max_requests_per_minute < 1:
            raise InvalidConfigurationError(
                f"max_requests_per_minute must be at least 1, got {self.max_requests_per_minute}"
            )
        if self.timeout <= 0:
            raise InvalidConfigurationError(f"timeout must be positive, got {self.timeout}")
        self.base_url = self.base_url.rstrip("/")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SportsDBConfig:
        """Create a SportsDBConfig from a dictionary."""
        kwargs: dict[str, Any] = {}

        if "cache" in data:
            kwargs["cache"] = CacheConfig(**data["cache"])

        for key in [
            "api_key",
            "enabled",
            "max_requests_per_minute",
            "timeout",
            "user_agent",
            "base_url",
        ]:
            if key in data:
                kwargs[key] = data[key]

        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a dictionary."""
        return asdict(self)
