"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from sportsdb_metadata import CacheConfig, SportsDBConfig, TheSportsDBClient
from sportsdb_metadata.cache import MemoryCache
from sportsdb_metadata.core.ratelimit import SlidingWindowRateLimiter
from tests.helpers import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    """A fake clock shared by the cache, the rate limiter and the client sleeps."""
    return FakeClock()


@pytest.fixture
def mock_config() -> SportsDBConfig:
    """Create a configuration for testing that never touches the disk."""
    return SportsDBConfig(
        api_key="3",
        max_requests_per_minute=30,
        cache=CacheConfig(backend="none"),
    )


@pytest.fixture
def disabled_config() -> SportsDBConfig:
    """Create a configuration with the provider switched off."""
    return SportsDBConfig(enabled=False, cache=CacheConfig(backend="none"))


@pytest.fixture
def memory_cache(clock: FakeClock) -> MemoryCache:
    return MemoryCache(max_size=100, ttl_days=7, clock=clock)


@pytest.fixture
async def api(mock_config: SportsDBConfig, clock: FakeClock):
    """An API client whose waits advance the fake clock instead of sleeping."""
    limiter = SlidingWindowRateLimiter(
        mock_config.max_requests_per_minute, clock=clock, sleep=clock.sleep
    )
    client = TheSportsDBClient(mock_config, rate_limiter=limiter, sleep=clock.sleep)
    yield client
    await client.close()
