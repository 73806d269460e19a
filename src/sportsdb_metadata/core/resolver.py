"""Resolution of local items to TheSportsDB leagues, seasons and events."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from sportsdb_metadata.core.matching import (
    find_event_by_name,
    find_event_by_round,
    find_league,
    jaro_winkler_similarity,
    match_leagues,
)
from sportsdb_metadata.core.normalization import (
    extract_event_name,
    extract_round_number,
    extract_season_year,
)
from sportsdb_metadata.types.common import (
    Event,
    ItemDescriptor,
    ItemKind,
    League,
    MetadataResult,
    RemoteImage,
    SearchResult,
    Season,
)

if TYPE_CHECKING:
    from sportsdb_metadata.providers.thesportsdb import TheSportsDBClient

logger = logging.getLogger(__name__)


def event_result(event: Event) -> MetadataResult:
    """Map an event onto episode-style metadata."""
    return MetadataResult(
        kind=ItemKind.EVENT,
        has_metadata=True,
        name=event.name,
        overview=event.overview,
        premiere_date=event.premiere_date,
        index_number=event.round_number,
        parent_index_number=event.season_year,
        provider_id=event.id or None,
    )


def league_result(league: League) -> MetadataResult:
    """Map a league onto show-style metadata."""
    return MetadataResult(
        kind=ItemKind.LEAGUE,
        has_metadata=True,
        name=league.name,
        overview=league.description,
        provider_id=league.id or None,
        genres=league.genres,
    )


def season_result(season: Season) -> MetadataResult:
    """Map a season onto season metadata; the season name doubles as its id."""
    return MetadataResult(
        kind=ItemKind.SEASON,
        has_metadata=True,
        name=season.name,
        overview=f"Season {season.name}",
        index_number=season.year,
        provider_id=season.name or None,
    )


class EntityResolver:
    """Find the remote league, season or event behind a local item.

    Event resolution tries, in order, a remembered event id, the round
    within a known league season, a name fragment within that season and
    finally a free-text search; the first tier that yields an event wins.
    Not finding anything is a normal outcome (None or an empty result).
    Errors raised by the API client are passed through unchanged.

    Args:
        api: The API client used for every lookup
    """

    def __init__(self, api: TheSportsDBClient) -> None:
        self.api = api
        self._metadata: dict[ItemKind, Callable[[ItemDescriptor], Awaitable[MetadataResult]]] = {
            ItemKind.LEAGUE: self._league_metadata,
            ItemKind.SEASON: self._season_metadata,
            ItemKind.EVENT: self._event_metadata,
        }
        self._searches: dict[ItemKind, Callable[[ItemDescriptor], Awaitable[list[SearchResult]]]] = {
            ItemKind.LEAGUE: self.search_leagues,
            ItemKind.SEASON: self._search_seasons,
            ItemKind.EVENT: self.search_events,
        }

    # Events

    @staticmethod
    def _event_context(item: ItemDescriptor) -> tuple[str | None, int | None]:
        season = extract_season_year(item.parent_index_number, item.season_provider_id)
        return item.series_provider_id or None, season

    async def find_event(self, item: ItemDescriptor) -> Event | None:
        """Resolve an event item.

        Args:
            item: Event descriptor; ``series_provider_id`` and the season
                (``parent_index_number`` or ``season_provider_id``) give the
                league season context

        Returns:
            The matching event, or None
        """
        if item.provider_id:
            logger.debug("Event lookup by id: %s", item.provider_id)
            event = await self.api.get_event(item.provider_id)
            if event is not None:
                return event
            logger.warning("Remembered event id %s no longer resolves", item.provider_id)

        league_id, season = self._event_context(item)

        if league_id and season is not None:
            events: list[Event] | None = None

            round_number = item.index_number
            if round_number is None:
                round_number = extract_round_number(item.name)
            if round_number is not None:
                events = await self.api.get_events_for_season(league_id, str(season))
                event = find_event_by_round(events, round_number)
                if event is not None:
                    logger.info(
                        "Matched '%s' to event %s by round %d", item.name, event.id, round_number
                    )
                    return event

            if item.name:
                fragment = extract_event_name(item.name)
                if events is None:
                    events = await self.api.get_events_for_season(league_id, str(season))
                event = find_event_by_name(events, fragment)
                if event is not None:
                    logger.info("Matched '%s' to event %s by name", item.name, event.id)
                    return event

            logger.warning(
                "No event found for '%s' in league %s season %s", item.name, league_id, season
            )
            return None

        if item.name:
            logger.debug("Event free-text search: '%s'", item.name)
            for event in await self.api.search_events(item.name):
                if event.season:
                    logger.info("Matched '%s' to event %s by search", item.name, event.id)
                    return event

        logger.warning("No event found for '%s'", item.name)
        return None

    async def search_events(self, item: ItemDescriptor) -> list[SearchResult]:
        """List candidate events for manual identification."""
        league_id, season = self._event_context(item)
        if league_id and season is not None:
            events = await self.api.get_events_for_season(league_id, str(season))
        elif item.name:
            events = [e for e in await self.api.search_events(item.name) if e.season]
        else:
            return []

        return [
            SearchResult(
                name=event.name,
                provider_id=event.id,
                overview=event.overview,
                image_url=event.poster or event.thumb,
                premiere_date=event.premiere_date,
                index_number=event.round_number,
                match_score=jaro_winkler_similarity(item.name, event.name) if item.name else 0.0,
            )
            for event in events
            if event.id
        ]

    # Leagues

    async def find_league(self, item: ItemDescriptor) -> League | None:
        """Resolve a league item by remembered id, otherwise by name."""
        if item.provider_id:
            logger.debug("League lookup by id: %s", item.provider_id)
            league = await self.api.get_league(item.provider_id)
            if league is not None:
                return league
            logger.warning("Remembered league id %s no longer resolves", item.provider_id)

        if not item.name:
            return None

        league = find_league(item.name, await self.api.get_all_leagues())
        if league is None:
            logger.warning("No league found for '%s'", item.name)
        else:
            logger.info("Matched '%s' to league %s (%s)", item.name, league.id, league.name)
        return league

    async def search_leagues(self, item: ItemDescriptor) -> list[SearchResult]:
        """List every league matching the item's name."""
        if not item.name:
            return []
        leagues = match_leagues(item.name, await self.api.get_all_leagues())
        return [
            SearchResult(
                name=league.name,
                provider_id=league.id,
                overview=league.description,
                image_url=league.badge or league.poster,
                match_score=jaro_winkler_similarity(item.name, league.name),
            )
            for league in leagues
            if league.id
        ]

    # Seasons

    async def find_season(self, item: ItemDescriptor) -> Season | None:
        """Resolve a season item from its league and year.

        Args:
            item: Season descriptor; ``series_provider_id`` is the league,
                the year comes from ``index_number``, a remembered
                ``provider_id`` or the name

        Returns:
            The season, or None when the year or the season is unknown
        """
        league_id = item.series_provider_id
        year = extract_season_year(item.index_number, item.provider_id, item.name)
        if not league_id or year is None:
            logger.debug("Season '%s' lacks a league or year", item.name)
            return None

        seasons = await self.api.get_league_seasons(league_id)
        wanted = str(year)
        season = next((s for s in seasons if s.name == wanted), None)
        if season is None:
            # Split-year seasons such as "2023-2024" start with the year
            prefix = f"{wanted}-"
            season = next((s for s in seasons if s.name.startswith(prefix)), None)
        if season is None:
            logger.warning("No season %s found in league %s", wanted, league_id)
        return season

    async def _search_seasons(self, item: ItemDescriptor) -> list[SearchResult]:
        return []

    # Dispatch

    async def _event_metadata(self, item: ItemDescriptor) -> MetadataResult:
        event = await self.find_event(item)
        return event_result(event) if event else MetadataResult.empty(ItemKind.EVENT)

    async def _league_metadata(self, item: ItemDescriptor) -> MetadataResult:
        league = await self.find_league(item)
        return league_result(league) if league else MetadataResult.empty(ItemKind.LEAGUE)

    async def _season_metadata(self, item: ItemDescriptor) -> MetadataResult:
        season = await self.find_season(item)
        return season_result(season) if season else MetadataResult.empty(ItemKind.SEASON)

    async def resolve(self, kind: ItemKind, item: ItemDescriptor) -> MetadataResult:
        """Resolve an item of the given kind into a metadata result.

        Returns:
            Populated result, or ``MetadataResult.empty(kind)`` when nothing matched
        """
        return await self._metadata[ItemKind(kind)](item)

    async def images(self, kind: ItemKind, item: ItemDescriptor) -> list[RemoteImage]:
        """Resolve an item and list the images of the matched entity."""
        kind = ItemKind(kind)
        entity: Event | League | Season | None
        if kind is ItemKind.EVENT:
            entity = await self.find_event(item)
        elif kind is ItemKind.LEAGUE:
            entity = await self.find_league(item)
        else:
            entity = await self.find_season(item)
        return entity.images() if entity is not None else []

    async def search(self, kind: ItemKind, item: ItemDescriptor) -> list[SearchResult]:
        """List candidates for an item of the given kind, in API order."""
        return await self._searches[ItemKind(kind)](item)
