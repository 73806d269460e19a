"""SportsMetadataClient - Main entry point for the sportsdb-metadata library."""

from __future__ import annotations

import logging

import httpx

from sportsdb_metadata.cache.base import CacheBackend, NullCache
from sportsdb_metadata.cache.file import FileCache
from sportsdb_metadata.cache.memory import MemoryCache
from sportsdb_metadata.core.config import SportsDBConfig
from sportsdb_metadata.core.resolver import EntityResolver
from sportsdb_metadata.providers.thesportsdb import TheSportsDBClient
from sportsdb_metadata.types.common import (
    ItemDescriptor,
    ItemKind,
    MetadataResult,
    RemoteImage,
    SearchResult,
)

logger = logging.getLogger(__name__)


class SportsMetadataClient:
    """Unified interface for fetching sports metadata from TheSportsDB.

    Items are described with an ``ItemDescriptor`` and tagged with an
    ``ItemKind`` (league, season or event). When the configuration is
    disabled every call returns an empty result without touching the
    network or the cache.

    Errors raised while talking to the API (see ``core.exceptions``)
    propagate to the caller, which is expected to log them and carry on
    with the next item.

    Example:
        from sportsdb_metadata import ItemDescriptor, ItemKind, SportsDBConfig, SportsMetadataClient

        config = SportsDBConfig(api_key="3")

        async with SportsMetadataClient(config) as client:
            race = ItemDescriptor(
                name="Round 1 - Bahrain Grand Prix",
                parent_index_number=2024,
                series_provider_id="4370",
            )
            result = await client.get_metadata(ItemKind.EVENT, race)
            images = await client.get_images(ItemKind.EVENT, race)
    """

    def __init__(
        self,
        config: SportsDBConfig,
        cache: CacheBackend | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the SportsMetadataClient.

        Args:
            config: Library configuration
            cache: Cache backend (built from ``config.cache`` by default)
            http_client: Shared httpx client; the library creates its own if omitted
        """
        self.config = config
        self._cache = cache
        self._http_client = http_client
        self._api: TheSportsDBClient | None = None
        self._resolver: EntityResolver | None = None

    async def __aenter__(self) -> SportsMetadataClient:
        """Async context manager entry."""
        self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    def _build_cache(self) -> CacheBackend:
        cache_config = self.config.cache
        if cache_config.backend == "file":
            return FileCache(cache_config.get_directory(), ttl_days=cache_config.ttl_days)
        if cache_config.backend == "memory":
            return MemoryCache(max_size=cache_config.max_size, ttl_days=cache_config.ttl_days)
        return NullCache()

    def _initialize(self) -> EntityResolver:
        """Create the cache, API client and resolver on first use."""
        if self._resolver is None:
            if self._cache is None:
                self._cache = self._build_cache()
            self._api = TheSportsDBClient(self.config, self._cache, self._http_client)
            self._resolver = EntityResolver(self._api)
            logger.debug(
                "Initialized TheSportsDB client: cache=%s, max_requests_per_minute=%d",
                type(self._cache).__name__,
                self.config.max_requests_per_minute,
            )
        return self._resolver

    @property
    def api(self) -> TheSportsDBClient:
        """The underlying API client, for direct endpoint access."""
        return self._initialize().api

    async def get_metadata(self, kind: ItemKind, item: ItemDescriptor) -> MetadataResult:
        """Resolve metadata for a league, season or event.

        Args:
            kind: Which kind of item ``item`` describes
            item: The local item

        Returns:
            Populated result, or an empty result when disabled or unmatched

        Raises:
            MetadataError: The API could not be reached or answered with an error
        """
        kind = ItemKind(kind)
        if not self.config.enabled:
            return MetadataResult.empty(kind)

        logger.debug("Metadata: kind=%s, name='%s'", kind, item.name)
        return await self._initialize().resolve(kind, item)

    async def get_images(self, kind: ItemKind, item: ItemDescriptor) -> list[RemoteImage]:
        """List remote images for a league, season or event.

        Args:
            kind: Which kind of item ``item`` describes
            item: The local item

        Returns:
            Images of the matched entity; empty when disabled or unmatched
        """
        if not self.config.enabled:
            return []

        logger.debug("Images: kind=%s, name='%s'", kind, item.name)
        return await self._initialize().images(ItemKind(kind), item)

    async def search(self, kind: ItemKind, item: ItemDescriptor) -> list[SearchResult]:
        """List candidates for manual identification, in API order.

        Args:
            kind: Which kind of item ``item`` describes
            item: The local item

        Returns:
            Candidates; empty when disabled or nothing matched
        """
        if not self.config.enabled:
            return []

        logger.debug("Search: kind=%s, name='%s'", kind, item.name)
        return await self._initialize().search(ItemKind(kind), item)

    async def clear_cache(self) -> None:
        """Drop every cached API response."""
        await self._initialize().api.clear_cache()

    async def close(self) -> None:
        """Close the API client and the cache."""
        if self._api is not None:
            await self._api.close()
        if self._cache is not None:
            await self._cache.close()
        self._api = None
        self._resolver = None
