"""TheSportsDB-specific type definitions.

Wire shapes of the v1 JSON API: https://www.thesportsdb.com/documentation

Every field may be missing or null, and numeric values arrive as strings.
"""

from __future__ import annotations

from typing import TypedDict


class TSDBLeague(TypedDict, total=False):
    """A league as returned by all_leagues.php and lookupleague.php."""

    idLeague: str | None
    strLeague: str | None
    strLeagueAlternate: str | None
    strSport: str | None
    strDescriptionEN: str | None
    strBadge: str | None
    strLogo: str | None
    strBanner: str | None
    strPoster: str | None
    strFanart1: str | None
    strFanart2: str | None
    strFanart3: str | None
    strFanart4: str | None


class TSDBSeason(TypedDict, total=False):
    """A season as returned by search_all_seasons.php."""

    idSeason: str | None
    strSeason: str | None
    idLeague: str | None
    strPoster: str | None


class TSDBEvent(TypedDict, total=False):
    """An event as returned by eventsseason.php, lookupevent.php and searchevents.php."""

    idEvent: str | None
    strEvent: str | None
    idLeague: str | None
    strLeague: str | None
    strSeason: str | None
    intRound: str | None
    dateEvent: str | None
    strTime: str | None
    strTimeLocal: str | None
    strVenue: str | None
    strCountry: str | None
    strCity: str | None
    strDescriptionEN: str | None
    strResult: str | None
    strStatus: str | None
    strPoster: str | None
    strThumb: str | None
    strBanner: str | None
    strFanart: str | None
    strSquare: str | None
    strVideo: str | None


class TSDBTeam(TypedDict, total=False):
    """A team (constructor) as returned by search_all_teams.php and lookupteam.php."""

    idTeam: str | None
    strTeam: str | None
    strTeamAlternate: str | None
    intFormedYear: str | None
    strLocation: str | None
    strCountry: str | None
    strDescriptionEN: str | None
    strBadge: str | None
    strLogo: str | None
    strBanner: str | None
    strFanart1: str | None
    strFanart2: str | None
    strFanart3: str | None
    strFanart4: str | None
    strWebsite: str | None


class TSDBPlayer(TypedDict, total=False):
    """A player (driver) as returned by the player endpoints."""

    idPlayer: str | None
    strPlayer: str | None
    idTeam: str | None
    strTeam: str | None
    strNationality: str | None
    strBirthLocation: str | None
    dateBorn: str | None
    strNumber: str | None
    strPosition: str | None
    strDescriptionEN: str | None
    strThumb: str | None
    strCutout: str | None
    strRender: str | None
    strPoster: str | None
    strBanner: str | None
    strFanart1: str | None
    strFanart2: str | None
    strFanart3: str | None
    strFanart4: str | None
