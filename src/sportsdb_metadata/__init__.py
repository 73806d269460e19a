"""
sportsdb-metadata: Sports event metadata from TheSportsDB.

This library resolves local sports recordings to TheSportsDB leagues,
seasons and events (mapped onto a show / season / episode hierarchy),
with a rate-limited, retrying API client and a TTL file cache.

Example usage:
    from sportsdb_metadata import ItemDescriptor, ItemKind, SportsDBConfig, SportsMetadataClient

    config = SportsDBConfig(api_key="3", max_requests_per_minute=30)

    async with SportsMetadataClient(config) as client:
        result = await client.get_metadata(
            ItemKind.EVENT,
            ItemDescriptor(name="Round 1", parent_index_number=2024, series_provider_id="4370"),
        )
        print(result.name, result.premiere_date)
"""

from sportsdb_metadata.core.client import SportsMetadataClient
from sportsdb_metadata.core.config import CacheConfig, SportsDBConfig
from sportsdb_metadata.core.exceptions import (
    InvalidConfigurationError,
    MetadataError,
    ProviderConnectionError,
    ProviderRateLimitError,
    ProviderResponseError,
    ResponseParseError,
)
from sportsdb_metadata.core.resolver import EntityResolver
from sportsdb_metadata.providers.thesportsdb import TheSportsDBClient
from sportsdb_metadata.types.common import (
    Driver,
    Event,
    ImageType,
    ItemDescriptor,
    ItemKind,
    League,
    MetadataResult,
    RemoteImage,
    SearchResult,
    Season,
    Team,
)

__version__ = "1.0.0"

__all__ = [
    # Core
    "CacheConfig",
    "EntityResolver",
    "SportsDBConfig",
    "SportsMetadataClient",
    "TheSportsDBClient",
    # Exceptions
    "InvalidConfigurationError",
    "MetadataError",
    "ProviderConnectionError",
    "ProviderRateLimitError",
    "ProviderResponseError",
    "ResponseParseError",
    # Types
    "Driver",
    "Event",
    "ImageType",
    "ItemDescriptor",
    "ItemKind",
    "League",
    "MetadataResult",
    "RemoteImage",
    "SearchResult",
    "Season",
    "Team",
]
