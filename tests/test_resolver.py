"""Tests for entity resolution using recorded TheSportsDB responses."""

from datetime import date

import httpx
import pytest
import respx

from sportsdb_metadata import (
    EntityResolver,
    ImageType,
    ItemDescriptor,
    ItemKind,
    ProviderResponseError,
)
from tests.helpers import API_BASE_URL, load_fixture

EVENTS_URL = f"{API_BASE_URL}/eventsseason.php"
LOOKUP_EVENT_URL = f"{API_BASE_URL}/lookupevent.php"
SEARCH_EVENTS_URL = f"{API_BASE_URL}/searchevents.php"
ALL_LEAGUES_URL = f"{API_BASE_URL}/all_leagues.php"
LOOKUP_LEAGUE_URL = f"{API_BASE_URL}/lookupleague.php"
SEASONS_URL = f"{API_BASE_URL}/search_all_seasons.php"


def ok(filename: str) -> httpx.Response:
    return httpx.Response(200, json=load_fixture(filename))


@pytest.fixture
def resolver(api) -> EntityResolver:
    return EntityResolver(api)


def race(**kwargs) -> ItemDescriptor:
    """An event descriptor inside the 2024 Formula 1 season."""
    kwargs.setdefault("series_provider_id", "4370")
    kwargs.setdefault("parent_index_number", 2024)
    return ItemDescriptor(**kwargs)


class TestEventResolution:
    """Tier by tier event resolution."""

    @respx.mock
    async def test_structured_lookup_by_round(self, resolver):
        route = respx.get(EVENTS_URL).mock(return_value=ok("eventsseason_4370_2024.json"))

        result = await resolver.resolve(ItemKind.EVENT, race(name="Round 1", index_number=1))

        assert result.has_metadata
        assert result.name == "Bahrain Grand Prix"
        assert result.premiere_date == date(2024, 3, 2)
        assert result.index_number == 1
        assert result.parent_index_number == 2024
        assert result.provider_id == "1976000"
        assert result.overview == "The season opener under the lights in Sakhir."
        assert dict(route.calls.last.request.url.params) == {"id": "4370", "s": "2024"}

    @respx.mock
    async def test_round_taken_from_name(self, resolver):
        respx.get(EVENTS_URL).mock(return_value=ok("eventsseason_4370_2024.json"))

        event = await resolver.find_event(race(name="Round 24 - Abu Dhabi Grand Prix"))

        assert event is not None
        assert event.id == "1976030"

    @respx.mock
    async def test_unknown_round_is_empty_result(self, resolver):
        route = respx.get(EVENTS_URL).mock(return_value=ok("eventsseason_4370_2024.json"))

        result = await resolver.resolve(ItemKind.EVENT, race(name="Round 99", index_number=99))

        assert not result.has_metadata
        assert result.kind is ItemKind.EVENT
        # The season list is fetched once and reused by the name tier
        assert route.call_count == 1

    @respx.mock
    async def test_fuzzy_name_match(self, resolver):
        respx.get(EVENTS_URL).mock(return_value=ok("eventsseason_4370_2024.json"))

        result = await resolver.resolve(ItemKind.EVENT, race(name="saudi arabian"))

        assert result.provider_id == "1976001"
        # No description, so the result text stands in
        assert result.overview == "Verstappen wins in Jeddah"

    @respx.mock
    async def test_round_miss_falls_back_to_name(self, resolver):
        respx.get(EVENTS_URL).mock(return_value=ok("eventsseason_4370_2024.json"))

        event = await resolver.find_event(race(name="Round 30 - Abu Dhabi"))

        assert event is not None
        assert event.id == "1976030"

    @respx.mock
    async def test_first_fuzzy_match_wins(self, resolver):
        """Known limitation: the sprint listed first is picked over the main race."""
        respx.get(EVENTS_URL).mock(return_value=ok("eventsseason_4370_2024.json"))

        event = await resolver.find_event(race(name="Chinese Grand Prix"))

        assert event is not None
        assert event.name == "Chinese Grand Prix Sprint"

    @respx.mock
    async def test_remembered_id_skips_heuristics(self, resolver):
        lookup = respx.get(LOOKUP_EVENT_URL).mock(return_value=ok("lookupevent_1976000.json"))
        season = respx.get(EVENTS_URL).mock(return_value=ok("eventsseason_4370_2024.json"))

        event = await resolver.find_event(race(name="Round 24", provider_id="1976000"))

        assert event is not None
        assert event.id == "1976000"
        assert lookup.calls.last.request.url.params["id"] == "1976000"
        assert not season.called

    @respx.mock
    async def test_stale_remembered_id_falls_through(self, resolver):
        respx.get(LOOKUP_EVENT_URL).mock(return_value=httpx.Response(200, json={"events": None}))
        respx.get(EVENTS_URL).mock(return_value=ok("eventsseason_4370_2024.json"))

        event = await resolver.find_event(race(name="Round 2", provider_id="404"))

        assert event is not None
        assert event.id == "1976001"

    @respx.mock
    async def test_season_from_remembered_season_id(self, resolver):
        route = respx.get(EVENTS_URL).mock(return_value=ok("eventsseason_4370_2024.json"))

        item = ItemDescriptor(
            name="Round 1", series_provider_id="4370", season_provider_id="2024"
        )
        event = await resolver.find_event(item)

        assert event is not None
        assert route.calls.last.request.url.params["s"] == "2024"

    @respx.mock
    async def test_free_text_search_without_context(self, resolver):
        route = respx.get(SEARCH_EVENTS_URL).mock(return_value=ok("searchevents_monaco.json"))

        result = await resolver.resolve(ItemKind.EVENT, ItemDescriptor(name="Monaco Grand Prix"))

        assert route.calls.last.request.url.params["e"] == "Monaco Grand Prix"
        # The first hit has no season and is skipped
        assert result.provider_id == "1976008"
        assert result.index_number == 8
        assert result.parent_index_number == 2024

    @respx.mock
    async def test_free_text_search_without_hits(self, resolver):
        respx.get(SEARCH_EVENTS_URL).mock(return_value=httpx.Response(200, json={"event": None}))

        result = await resolver.resolve(ItemKind.EVENT, ItemDescriptor(name="Unknown Cup"))

        assert not result.has_metadata

    async def test_nothing_to_go_on(self, resolver):
        assert await resolver.find_event(ItemDescriptor()) is None

    @respx.mock
    async def test_client_errors_propagate(self, resolver):
        respx.get(EVENTS_URL).mock(return_value=httpx.Response(500))

        with pytest.raises(ProviderResponseError):
            await resolver.resolve(ItemKind.EVENT, race(name="Round 1", index_number=1))


class TestLeagueResolution:
    """League lookup by id and by name."""

    @respx.mock
    async def test_by_remembered_id(self, resolver):
        respx.get(LOOKUP_LEAGUE_URL).mock(return_value=ok("lookupleague_4370.json"))

        result = await resolver.resolve(ItemKind.LEAGUE, ItemDescriptor(provider_id="4370"))

        assert result.name == "Formula 1"
        assert result.genres == ["Motorsport", "Sports"]
        assert result.overview.startswith("The highest class")

    @respx.mock
    async def test_by_alternate_name(self, resolver):
        respx.get(ALL_LEAGUES_URL).mock(return_value=ok("all_leagues.json"))

        result = await resolver.resolve(ItemKind.LEAGUE, ItemDescriptor(name="F1"))

        assert result.has_metadata
        assert result.provider_id == "4370"

    @respx.mock
    async def test_no_match(self, resolver):
        respx.get(ALL_LEAGUES_URL).mock(return_value=ok("all_leagues.json"))

        result = await resolver.resolve(ItemKind.LEAGUE, ItemDescriptor(name="NASCAR"))

        assert not result.has_metadata
        assert result.kind is ItemKind.LEAGUE


class TestSeasonResolution:
    """Season lookup within a league."""

    @respx.mock
    async def test_exact_year(self, resolver):
        respx.get(SEASONS_URL).mock(return_value=ok("search_all_seasons_4370.json"))

        result = await resolver.resolve(
            ItemKind.SEASON, ItemDescriptor(name="Season 2024", series_provider_id="4370")
        )

        assert result.name == "2024"
        assert result.index_number == 2024
        assert result.overview == "Season 2024"
        assert result.provider_id == "2024"

    @respx.mock
    async def test_split_year_season(self, resolver):
        respx.get(SEASONS_URL).mock(return_value=ok("search_all_seasons_4328.json"))

        season = await resolver.find_season(
            ItemDescriptor(index_number=2023, series_provider_id="4328")
        )

        assert season is not None
        assert season.name == "2023-2024"

    @respx.mock
    async def test_split_year_needs_the_year_prefix(self, resolver):
        respx.get(SEASONS_URL).mock(
            return_value=httpx.Response(
                200,
                json={"seasons": [{"strSeason": "2024 Playoffs"}, {"strSeason": "2024-2025"}]},
            )
        )

        season = await resolver.find_season(
            ItemDescriptor(index_number=2024, series_provider_id="4328")
        )

        assert season is not None
        assert season.name == "2024-2025"

    @respx.mock
    async def test_unknown_year_skips_network(self, resolver):
        route = respx.get(SEASONS_URL).mock(return_value=ok("search_all_seasons_4370.json"))

        result = await resolver.resolve(
            ItemKind.SEASON, ItemDescriptor(name="Specials", series_provider_id="4370")
        )

        assert not result.has_metadata
        assert not route.called


class TestImagesAndSearch:
    """Image listing and manual search."""

    @respx.mock
    async def test_event_images(self, resolver):
        respx.get(EVENTS_URL).mock(return_value=ok("eventsseason_4370_2024.json"))

        images = await resolver.images(ItemKind.EVENT, race(index_number=1))

        assert [i.image_type for i in images] == [
            ImageType.PRIMARY,
            ImageType.THUMB,
            ImageType.BANNER,
            ImageType.BACKDROP,
        ]
        assert all(i.provider_name == "TheSportsDB" for i in images)

    @respx.mock
    async def test_league_images(self, resolver):
        respx.get(LOOKUP_LEAGUE_URL).mock(return_value=ok("lookupleague_4370.json"))

        images = await resolver.images(ItemKind.LEAGUE, ItemDescriptor(provider_id="4370"))

        assert [i.image_type for i in images] == [
            ImageType.PRIMARY,
            ImageType.LOGO,
            ImageType.BANNER,
            ImageType.PRIMARY,
            ImageType.BACKDROP,
            ImageType.BACKDROP,
        ]

    @respx.mock
    async def test_season_images(self, resolver):
        respx.get(SEASONS_URL).mock(return_value=ok("search_all_seasons_4370.json"))

        images = await resolver.images(
            ItemKind.SEASON, ItemDescriptor(index_number=2023, series_provider_id="4370")
        )

        assert [i.url for i in images] == [
            "https://r2.thesportsdb.com/images/media/league/poster/f1-2023.jpg"
        ]

    @respx.mock
    async def test_unmatched_item_has_no_images(self, resolver):
        respx.get(ALL_LEAGUES_URL).mock(return_value=ok("all_leagues.json"))
        assert await resolver.images(ItemKind.LEAGUE, ItemDescriptor(name="NASCAR")) == []

    @respx.mock
    async def test_search_events_in_season(self, resolver):
        respx.get(EVENTS_URL).mock(return_value=ok("eventsseason_4370_2024.json"))

        results = await resolver.search(ItemKind.EVENT, race(name="Chinese Grand Prix"))

        assert [r.provider_id for r in results] == [
            "1976000",
            "1976001",
            "1976010",
            "1976011",
            "1976030",
        ]
        scores = {r.provider_id: r.match_score for r in results}
        assert scores["1976011"] == 1.0
        assert results[0].image_url.endswith("poster/bahrain.jpg")
        assert results[1].image_url.endswith("thumb/jeddah.jpg")

    @respx.mock
    async def test_search_events_free_text(self, resolver):
        respx.get(SEARCH_EVENTS_URL).mock(return_value=ok("searchevents_monaco.json"))

        results = await resolver.search(ItemKind.EVENT, ItemDescriptor(name="Monaco"))

        assert [r.provider_id for r in results] == ["1976008"]
        assert results[0].premiere_date == date(2024, 5, 26)

    @respx.mock
    async def test_search_leagues(self, resolver):
        respx.get(ALL_LEAGUES_URL).mock(return_value=ok("all_leagues.json"))

        results = await resolver.search(ItemKind.LEAGUE, ItemDescriptor(name="formula"))

        assert [r.name for r in results] == ["Formula 1"]

    async def test_search_seasons_is_empty(self, resolver):
        assert await resolver.search(ItemKind.SEASON, ItemDescriptor(name="2024")) == []
