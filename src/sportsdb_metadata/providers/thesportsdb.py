"""TheSportsDB API client implementation."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

import httpx

from sportsdb_metadata.cache.base import CacheBackend, NullCache, make_cache_key
from sportsdb_metadata.core.exceptions import (
    MetadataError,
    ProviderConnectionError,
    ProviderRateLimitError,
    ProviderResponseError,
    ResponseParseError,
)
from sportsdb_metadata.core.normalization import mask_api_key
from sportsdb_metadata.core.ratelimit import SlidingWindowRateLimiter
from sportsdb_metadata.core.retry import RequestState, RetryPolicy, StateCallback
from sportsdb_metadata.types.common import Driver, Event, League, Season, Team

if TYPE_CHECKING:
    from sportsdb_metadata.core.config import SportsDBConfig

logger = logging.getLogger(__name__)


class TheSportsDBClient:
    """Rate-limited, retrying client for the TheSportsDB v1 JSON API.

    Every request first consults the cache. On a miss, each HTTP attempt
    (retries included) is admitted by the sliding-window rate limiter.
    HTTP 429 responses trigger a fixed cooldown that does not count as an
    attempt; transport failures are retried with a linear backoff until
    the attempt budget is spent. Other error statuses and undecodable
    bodies fail immediately. Only successful payloads are cached.

    Waiting is done with ``await`` throughout, so cancelling the calling
    task aborts a request at any point.

    Example:
        config = SportsDBConfig(api_key="3")
        async with TheSportsDBClient(config, cache=FileCache(path)) as api:
            events = await api.get_events_for_season("4370", "2024")
    """

    name = "thesportsdb"

    def __init__(
        self,
        config: SportsDBConfig,
        cache: CacheBackend | None = None,
        http_client: httpx.AsyncClient | None = None,
        rate_limiter: SlidingWindowRateLimiter | None = None,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        on_state_change: StateCallback | None = None,
    ) -> None:
        self.config = config
        self._cache = cache if cache is not None else NullCache()
        self._client = http_client
        self._owns_client = http_client is None
        self._rate_limiter = rate_limiter or SlidingWindowRateLimiter(
            config.max_requests_per_minute
        )
        self._retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep
        self._on_state_change = on_state_change

    async def __aenter__(self) -> TheSportsDBClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def cache(self) -> CacheBackend:
        return self._cache

    @property
    def rate_limiter(self) -> SlidingWindowRateLimiter:
        return self._rate_limiter

    def build_url(self, endpoint: str) -> str:
        """Absolute URL of an endpoint, including the API key segment."""
        return f"{self.config.base_url}/{self.config.api_key}/{endpoint.lstrip('/')}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": self.config.user_agent},
                timeout=self.config.timeout,
            )
            self._owns_client = True
        return self._client

    def _transition(self, state: RequestState, attempt: int, url: str) -> None:
        logger.debug("TheSportsDB API: %s (attempt %d) %s", state, attempt, url)
        if self._on_state_change is not None:
            self._on_state_change(state, attempt)

    async def request(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Fetch an endpoint, serving it from the cache when possible.

        Args:
            endpoint: Endpoint file name, e.g. "eventsseason.php"
            params: Query parameters

        Returns:
            Decoded JSON object

        Raises:
            ProviderConnectionError: Transport failures exhausted every attempt
            ProviderResponseError: The API answered with a non-retryable status
            ResponseParseError: The response body is not a JSON object
            MetadataError: Any other request failure, such as a redirect loop
        """
        query = {k: str(v) for k, v in (params or {}).items()}
        url = self.build_url(endpoint)
        key = make_cache_key(url, query)

        cached = await self._cache.get(key)
        if isinstance(cached, dict):
            logger.debug("TheSportsDB cache hit: %s %s", endpoint, query)
            return cached

        data = await self._request_with_retry(url, query)
        await self._cache.set(key, data)
        return data

    async def _request_with_retry(self, url: str, params: dict[str, str]) -> dict[str, Any]:
        """Drive one logical request through admission, retries and cooldowns."""
        log_url = mask_api_key(url, self.config.api_key)
        policy = self._retry_policy
        state = RequestState.ADMITTING
        attempt = 0
        data: dict[str, Any] = {}
        failure = MetadataError(f"request to {log_url} failed", self.name)

        while True:
            self._transition(state, attempt, log_url)

            if state is RequestState.ADMITTING:
                await self._rate_limiter.acquire()
                state = RequestState.REQUESTING

            elif state is RequestState.REQUESTING:
                attempt += 1
                try:
                    data = await self._send(url, log_url, params)
                except ProviderRateLimitError:
                    # Throttling is not the request's fault, so it keeps its attempt
                    attempt -= 1
                    state = RequestState.COOLING_DOWN
                except httpx.TransportError as e:
                    logger.warning(
                        "TheSportsDB API: attempt %d/%d for %s failed: %s",
                        attempt,
                        policy.max_attempts,
                        log_url,
                        e,
                    )
                    if policy.can_retry(attempt):
                        state = RequestState.BACKING_OFF
                    else:
                        failure = ProviderConnectionError(self.name, str(e), attempts=attempt)
                        failure.__cause__ = e
                        state = RequestState.FAILED
                except httpx.DecodingError as e:
                    failure = ResponseParseError(self.name, f"undecodable body from {log_url}")
                    failure.__cause__ = e
                    state = RequestState.FAILED
                except httpx.RequestError as e:
                    # Redirect loops and other request errors are permanent
                    failure = MetadataError(f"request to {log_url} failed: {e}", self.name)
                    failure.__cause__ = e
                    state = RequestState.FAILED
                except MetadataError as e:
                    failure = e
                    state = RequestState.FAILED
                else:
                    state = RequestState.DONE

            elif state is RequestState.BACKING_OFF:
                delay = policy.backoff_delay(attempt)
                logger.warning("TheSportsDB API: retrying %s in %.0fs", log_url, delay)
                await self._sleep(delay)
                state = RequestState.ADMITTING

            elif state is RequestState.COOLING_DOWN:
                logger.warning(
                    "TheSportsDB API: rate limited (429), cooling down for %.0fs",
                    policy.throttle_cooldown,
                )
                await self._sleep(policy.throttle_cooldown)
                state = RequestState.ADMITTING

            elif state is RequestState.DONE:
                return data

            else:
                logger.debug("TheSportsDB API: giving up on %s: %s", log_url, failure)
                raise failure

    async def _send(self, url: str, log_url: str, params: dict[str, str]) -> dict[str, Any]:
        """Perform a single HTTP attempt and decode its body."""
        client = await self._get_client()
        logger.debug("TheSportsDB API: GET %s", log_url)
        logger.debug("TheSportsDB API params: %s", params)

        response = await client.get(url, params=params)

        if response.status_code == 429:
            raise ProviderRateLimitError(
                self.name, retry_after=int(self._retry_policy.throttle_cooldown)
            )
        if not response.is_success:
            raise ProviderResponseError(self.name, response.status_code, log_url)

        if not response.content.strip():
            return {}
        try:
            data = response.json()
        except ValueError as e:
            raise ResponseParseError(self.name, f"invalid JSON from {log_url}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ResponseParseError(
                self.name, f"expected a JSON object from {log_url}, got {type(data).__name__}"
            )

        # Log full response body only when debug logging is enabled
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("TheSportsDB API response:\n%s", json.dumps(data, indent=2, ensure_ascii=False))

        return data

    def _extract_list(self, data: Mapping[str, Any], *keys: str) -> list[Any]:
        """Pull the result list out of a response envelope.

        The first key present wins; a missing key or null value means no
        results.
        """
        items: Any = None
        for key in keys:
            if data.get(key) is not None:
                items = data[key]
                break
        if items is None:
            return []
        if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
            raise ResponseParseError(self.name, f"'{keys[0]}' is not a list of objects")
        return items

    async def _get_list(
        self, endpoint: str, params: Mapping[str, Any] | None, *keys: str
    ) -> list[Any]:
        data = await self.request(endpoint, params)
        return self._extract_list(data, *keys)

    # Events

    async def get_events_for_season(self, league_id: str, season: str) -> list[Event]:
        """Get every event of a league season.

        Args:
            league_id: TheSportsDB league id
            season: Season name, e.g. "2024" or "2023-2024"

        Returns:
            Events in API order
        """
        items = await self._get_list("eventsseason.php", {"id": league_id, "s": season}, "events")
        return [Event.from_api(item) for item in items]

    async def get_event(self, event_id: str) -> Event | None:
        """Get an event by id."""
        items = await self._get_list("lookupevent.php", {"id": event_id}, "events")
        return Event.from_api(items[0]) if items else None

    async def search_events(self, name: str) -> list[Event]:
        """Search events by free text."""
        items = await self._get_list("searchevents.php", {"e": name}, "event", "events")
        return [Event.from_api(item) for item in items]

    # Leagues and seasons

    async def get_all_leagues(self) -> list[League]:
        """Get every league known to the API."""
        items = await self._get_list("all_leagues.php", None, "leagues")
        return [League.from_api(item) for item in items]

    async def get_league(self, league_id: str) -> League | None:
        """Get a league by id."""
        items = await self._get_list("lookupleague.php", {"id": league_id}, "leagues")
        return League.from_api(items[0]) if items else None

    async def get_league_seasons(self, league_id: str) -> list[Season]:
        """Get every season of a league."""
        items = await self._get_list("search_all_seasons.php", {"id": league_id}, "seasons")
        return [Season.from_api(item) for item in items]

    # Teams and drivers

    async def get_teams(self, league_name: str) -> list[Team]:
        """Get the teams of a league, looked up by league name."""
        items = await self._get_list("search_all_teams.php", {"l": league_name}, "teams")
        return [Team.from_api(item) for item in items]

    async def get_team(self, team_id: str) -> Team | None:
        items = await self._get_list("lookupteam.php", {"id": team_id}, "teams")
        return Team.from_api(items[0]) if items else None

    async def get_team_drivers(self, team_id: str) -> list[Driver]:
        items = await self._get_list("lookup_all_players.php", {"id": team_id}, "player", "players")
        return [Driver.from_api(item) for item in items]

    async def get_driver(self, driver_id: str) -> Driver | None:
        items = await self._get_list("lookupplayer.php", {"id": driver_id}, "players", "player")
        return Driver.from_api(items[0]) if items else None

    async def search_drivers(self, name: str) -> list[Driver]:
        items = await self._get_list("searchplayers.php", {"p": name}, "player", "players")
        return [Driver.from_api(item) for item in items]

    async def clear_cache(self) -> None:
        """Drop every cached response."""
        await self._cache.clear()

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
