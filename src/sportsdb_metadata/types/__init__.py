"""Type definitions for the sportsdb-metadata library."""

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

__all__ = [
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
