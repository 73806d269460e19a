"""Common type definitions used across the sportsdb-metadata library.

Parsed entities are built from the raw API mappings with ``from_api``;
every field of the wire format is optional, so every attribute here has a
default. Item descriptors and results form the boundary with the host
media library.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any, Final

from sportsdb_metadata.core.normalization import parse_int, parse_year, split_alternate_names

if TYPE_CHECKING:
    from sportsdb_metadata.types.thesportsdb import (
        TSDBEvent,
        TSDBLeague,
        TSDBPlayer,
        TSDBSeason,
        TSDBTeam,
    )

PROVIDER_NAME: Final = "TheSportsDB"


def _text(data: Mapping[str, object], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _fanart(data: Mapping[str, object]) -> list[str]:
    return [url for url in (_text(data, f"strFanart{i}") for i in range(1, 5)) if url]


@enum.unique
class ItemKind(enum.StrEnum):
    """Kind of local item being resolved."""

    LEAGUE = "league"
    SEASON = "season"
    EVENT = "event"


@enum.unique
class ImageType(enum.StrEnum):
    """Image roles understood by the host."""

    PRIMARY = "primary"
    THUMB = "thumb"
    BANNER = "banner"
    BACKDROP = "backdrop"
    LOGO = "logo"


@dataclass
class RemoteImage:
    """An image URL offered for an item.

    Attributes:
        url: Absolute image URL
        image_type: Role of the image
        provider_name: Source of the image
    """

    url: str
    image_type: ImageType
    provider_name: str = PROVIDER_NAME


def _images(*pairs: tuple[str, ImageType]) -> list[RemoteImage]:
    return [RemoteImage(url=url, image_type=kind) for url, kind in pairs if url]


@dataclass
class League:
    """A league (competition), mapped to a show.

    Attributes:
        id: TheSportsDB league id
        name: League name
        alternate: Raw comma-delimited alternate names
        sport: Sport name (e.g. "Motorsport")
        description: English description
        badge: Badge image URL
        logo: Logo image URL
        banner: Banner image URL
        poster: Poster image URL
        fanart: Up to four fanart image URLs
    """

    id: str = ""
    name: str = ""
    alternate: str = ""
    sport: str = ""
    description: str = ""
    badge: str = ""
    logo: str = ""
    banner: str = ""
    poster: str = ""
    fanart: list[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: TSDBLeague) -> League:
        return cls(
            id=_text(data, "idLeague"),
            name=_text(data, "strLeague"),
            alternate=_text(data, "strLeagueAlternate"),
            sport=_text(data, "strSport"),
            description=_text(data, "strDescriptionEN"),
            badge=_text(data, "strBadge"),
            logo=_text(data, "strLogo"),
            banner=_text(data, "strBanner"),
            poster=_text(data, "strPoster"),
            fanart=_fanart(data),
        )

    @property
    def alternate_names(self) -> list[str]:
        return split_alternate_names(self.alternate)

    @property
    def genres(self) -> list[str]:
        if self.sport:
            return [self.sport, "Sports"]
        return ["Sports"]

    def images(self) -> list[RemoteImage]:
        return _images(
            (self.badge, ImageType.PRIMARY),
            (self.logo, ImageType.LOGO),
            (self.banner, ImageType.BANNER),
            (self.poster, ImageType.PRIMARY),
            *((url, ImageType.BACKDROP) for url in self.fanart),
        )


@dataclass
class Season:
    """A season of a league.

    Attributes:
        id: TheSportsDB season id (often absent)
        name: Season name, either "2024" or "2023-2024"
        league_id: Owning league id
        poster: Poster image URL
    """

    id: str = ""
    name: str = ""
    league_id: str = ""
    poster: str = ""

    @classmethod
    def from_api(cls, data: TSDBSeason) -> Season:
        return cls(
            id=_text(data, "idSeason"),
            name=_text(data, "strSeason"),
            league_id=_text(data, "idLeague"),
            poster=_text(data, "strPoster"),
        )

    @property
    def year(self) -> int | None:
        """Leading year of the season name."""
        return parse_year(self.name)

    def images(self) -> list[RemoteImage]:
        return _images((self.poster, ImageType.PRIMARY))


@dataclass
class Event:
    """A single event (race, match), mapped to an episode.

    Attributes:
        id: TheSportsDB event id
        name: Event name
        league_id: Owning league id
        league_name: Owning league name
        season: Season name
        round: Raw round value (numeric string)
        event_date: Event date (YYYY-MM-DD)
        event_time: Start time (UTC)
        event_time_local: Start time (local)
        venue: Venue name
        country: Country of the venue
        city: City of the venue
        description: English description
        result: Result text
        status: Event status
        poster: Poster image URL
        thumb: Thumbnail image URL
        banner: Banner image URL
        fanart: Fanart image URL
        square: Square image URL
        video: Highlights video URL
    """

    id: str = ""
    name: str = ""
    league_id: str = ""
    league_name: str = ""
    season: str = ""
    round: str = ""
    event_date: str = ""
    event_time: str = ""
    event_time_local: str = ""
    venue: str = ""
    country: str = ""
    city: str = ""
    description: str = ""
    result: str = ""
    status: str = ""
    poster: str = ""
    thumb: str = ""
    banner: str = ""
    fanart: str = ""
    square: str = ""
    video: str = ""

    @classmethod
    def from_api(cls, data: TSDBEvent) -> Event:
        return cls(
            id=_text(data, "idEvent"),
            name=_text(data, "strEvent"),
            league_id=_text(data, "idLeague"),
            league_name=_text(data, "strLeague"),
            season=_text(data, "strSeason"),
            round=_text(data, "intRound"),
            event_date=_text(data, "dateEvent"),
            event_time=_text(data, "strTime"),
            event_time_local=_text(data, "strTimeLocal"),
            venue=_text(data, "strVenue"),
            country=_text(data, "strCountry"),
            city=_text(data, "strCity"),
            description=_text(data, "strDescriptionEN"),
            result=_text(data, "strResult"),
            status=_text(data, "strStatus"),
            poster=_text(data, "strPoster"),
            thumb=_text(data, "strThumb"),
            banner=_text(data, "strBanner"),
            fanart=_text(data, "strFanart"),
            square=_text(data, "strSquare"),
            video=_text(data, "strVideo"),
        )

    @property
    def round_number(self) -> int | None:
        return parse_int(self.round)

    @property
    def season_year(self) -> int | None:
        return parse_year(self.season)

    @property
    def premiere_date(self) -> date | None:
        if not self.event_date:
            return None
        try:
            return date.fromisoformat(self.event_date)
        except ValueError:
            return None

    @property
    def overview(self) -> str:
        return self.description or self.result

    def images(self) -> list[RemoteImage]:
        return _images(
            (self.poster, ImageType.PRIMARY),
            (self.thumb, ImageType.THUMB),
            (self.banner, ImageType.BANNER),
            (self.fanart, ImageType.BACKDROP),
        )


@dataclass
class Team:
    """A team (constructor) taking part in a league."""

    id: str = ""
    name: str = ""
    alternate: str = ""
    formed_year: int | None = None
    location: str = ""
    country: str = ""
    description: str = ""
    badge: str = ""
    logo: str = ""
    banner: str = ""
    fanart: list[str] = field(default_factory=list)
    website: str = ""

    @classmethod
    def from_api(cls, data: TSDBTeam) -> Team:
        return cls(
            id=_text(data, "idTeam"),
            name=_text(data, "strTeam"),
            alternate=_text(data, "strTeamAlternate"),
            formed_year=parse_int(data.get("intFormedYear")),
            location=_text(data, "strLocation"),
            country=_text(data, "strCountry"),
            description=_text(data, "strDescriptionEN"),
            badge=_text(data, "strBadge"),
            logo=_text(data, "strLogo"),
            banner=_text(data, "strBanner"),
            fanart=_fanart(data),
            website=_text(data, "strWebsite"),
        )

    def images(self) -> list[RemoteImage]:
        return _images(
            (self.badge, ImageType.PRIMARY),
            (self.logo, ImageType.LOGO),
            (self.banner, ImageType.BANNER),
            *((url, ImageType.BACKDROP) for url in self.fanart),
        )


@dataclass
class Driver:
    """A driver (player) belonging to a team."""

    id: str = ""
    name: str = ""
    team_id: str = ""
    team_name: str = ""
    nationality: str = ""
    birth_location: str = ""
    date_born: str = ""
    number: str = ""
    position: str = ""
    description: str = ""
    thumb: str = ""
    cutout: str = ""
    render: str = ""
    poster: str = ""
    banner: str = ""
    fanart: list[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: TSDBPlayer) -> Driver:
        return cls(
            id=_text(data, "idPlayer"),
            name=_text(data, "strPlayer"),
            team_id=_text(data, "idTeam"),
            team_name=_text(data, "strTeam"),
            nationality=_text(data, "strNationality"),
            birth_location=_text(data, "strBirthLocation"),
            date_born=_text(data, "dateBorn"),
            number=_text(data, "strNumber"),
            position=_text(data, "strPosition"),
            description=_text(data, "strDescriptionEN"),
            thumb=_text(data, "strThumb"),
            cutout=_text(data, "strCutout"),
            render=_text(data, "strRender"),
            poster=_text(data, "strPoster"),
            banner=_text(data, "strBanner"),
            fanart=_fanart(data),
        )

    def images(self) -> list[RemoteImage]:
        return _images(
            (self.thumb, ImageType.PRIMARY),
            (self.cutout, ImageType.THUMB),
            (self.banner, ImageType.BANNER),
            *((url, ImageType.BACKDROP) for url in self.fanart),
        )


@dataclass
class ItemDescriptor:
    """A local library item as described by the host.

    Attributes:
        name: Display name (may embed a round token or a year)
        index_number: Round number for events, year for seasons
        parent_index_number: Season year for events
        provider_id: Previously remembered TheSportsDB id of this item
        series_provider_id: Remembered league id of the owning league
        season_provider_id: Remembered id of the owning season
        path: Filesystem path of the item
    """

    name: str = ""
    index_number: int | None = None
    parent_index_number: int | None = None
    provider_id: str | None = None
    series_provider_id: str | None = None
    season_provider_id: str | None = None
    path: str | None = None


@dataclass
class MetadataResult:
    """Structured metadata handed back to the host.

    Attributes:
        kind: Kind of item the result describes
        has_metadata: False for the "nothing found" result
        name: Display name
        overview: Long description
        premiere_date: Air date (events)
        index_number: Round (events) or year (seasons)
        parent_index_number: Season year (events)
        provider_id: TheSportsDB id to remember for later lookups
        genres: Genre names (leagues)
    """

    kind: ItemKind
    has_metadata: bool = False
    name: str = ""
    overview: str = ""
    premiere_date: date | None = None
    index_number: int | None = None
    parent_index_number: int | None = None
    provider_id: str | None = None
    genres: list[str] = field(default_factory=list)

    @classmethod
    def empty(cls, kind: ItemKind) -> MetadataResult:
        return cls(kind=kind)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class SearchResult:
    """A candidate offered to the user when identifying an item manually.

    Attributes:
        name: Candidate name
        provider_id: TheSportsDB id
        overview: Short description
        image_url: Preview image URL
        premiere_date: Air date (events)
        index_number: Round (events)
        match_score: Jaro-Winkler similarity to the query (informational only)
    """

    name: str
    provider_id: str
    overview: str = ""
    image_url: str = ""
    premiere_date: date | None = None
    index_number: int | None = None
    match_score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
