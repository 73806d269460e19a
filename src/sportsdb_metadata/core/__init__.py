"""Core functionality for sportsdb-metadata."""

from sportsdb_metadata.core.config import CacheConfig, SportsDBConfig
from sportsdb_metadata.core.exceptions import (
    InvalidConfigurationError,
    MetadataError,
    ProviderConnectionError,
    ProviderRateLimitError,
    ProviderResponseError,
    ResponseParseError,
)
from sportsdb_metadata.core.normalization import (
    extract_event_name,
    extract_round_number,
    extract_season_year,
    normalize_name,
)
from sportsdb_metadata.core.ratelimit import SlidingWindowRateLimiter
from sportsdb_metadata.core.retry import RequestState, RetryPolicy

__all__ = [
    "CacheConfig",
    "SportsDBConfig",
    "InvalidConfigurationError",
    "MetadataError",
    "ProviderConnectionError",
    "ProviderRateLimitError",
    "ProviderResponseError",
    "ResponseParseError",
    "extract_event_name",
    "extract_round_number",
    "extract_season_year",
    "normalize_name",
    "SlidingWindowRateLimiter",
    "RequestState",
    "RetryPolicy",
]
