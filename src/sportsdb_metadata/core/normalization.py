"""Text normalization utilities for sports item names.

This module provides the parsing rules used to turn loosely named local
items ("Round 05 - Monaco Grand Prix", "Formula 1 2024") into the round
numbers, name fragments and season years the API understands.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Final

# Pre-compiled regex patterns for performance
ROUND_PATTERN: Final = re.compile(
    r"(?<![a-z0-9])(?:round|r|episode|ep\.?)\s*(\d+)(?!\d)", re.IGNORECASE
)
LEADING_ROUND_PATTERN: Final = re.compile(
    r"^\s*(?:round|r|episode|ep\.?)\s*\d+(?!\d)", re.IGNORECASE
)
TOKEN_SPLIT_PATTERN: Final = re.compile(r"[\s\-_]+")
MULTIPLE_SPACE_PATTERN: Final = re.compile(r"\s+")

# Separators trimmed around a stripped round token
NAME_SEPARATORS: Final = " -_"

MIN_SEASON_YEAR: Final = 1900
MAX_SEASON_YEAR: Final = 2100


@lru_cache(maxsize=1024)
def normalize_name(name: str) -> str:
    """Case-fold, trim and collapse whitespace for comparisons.

    Args:
        name: The name to normalize

    Returns:
        Normalized name
    """
    return MULTIPLE_SPACE_PATTERN.sub(" ", name.strip()).casefold()


def split_alternate_names(value: str | None) -> list[str]:
    """Split a comma-delimited alternate-name field.

    Example:
        split_alternate_names("F1, Formula One")  # ["F1", "Formula One"]
    """
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_int(value: object) -> int | None:
    """Parse an API integer field, which may be a string, an int or null."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def is_plausible_year(value: int | None) -> bool:
    """Check whether a number can be a season year."""
    return value is not None and MIN_SEASON_YEAR <= value <= MAX_SEASON_YEAR


def parse_year(value: str | None) -> int | None:
    """Return the first whitespace, hyphen or underscore delimited token that is a year.

    Example:
        parse_year("Formula 1 2023")  # 2023 ("1" is skipped, out of range)
        parse_year("2023-2024")       # 2023
    """
    if not value:
        return None
    for token in TOKEN_SPLIT_PATTERN.split(value):
        year = parse_int(token)
        if is_plausible_year(year):
            return year
    return None


def extract_season_year(
    index: int | None = None,
    provider_season_id: str | None = None,
    name: str | None = None,
) -> int | None:
    """Work out which season a local item belongs to.

    Sources are tried in order: the item's numeric index, a previously
    remembered season id, then the first year-like token of the name.
    Only values between 1900 and 2100 count.

    Args:
        index: Numeric index of the season (or parent index of an event)
        provider_season_id: Season id remembered from an earlier lookup
        name: Display name of the season

    Returns:
        The season year, or None when no source yields one
    """
    if is_plausible_year(index):
        return index

    year = parse_year(provider_season_id)
    if year is not None:
        return year

    return parse_year(name)


def extract_round_number(name: str | None) -> int | None:
    """Extract a round number from an event name.

    Recognises "Round N", "R N", "Episode N" and "Ep N" / "Ep. N" anywhere
    in the name, case-insensitively.

    Example:
        extract_round_number("Round 22 - Abu Dhabi Grand Prix")  # 22
        extract_round_number("Bahrain Grand Prix")               # None
    """
    if not name:
        return None
    match = ROUND_PATTERN.search(name)
    if match is None:
        return None
    return int(match.group(1))


def extract_event_name(name: str) -> str:
    """Strip a leading round token to get the searchable part of an event name.

    Separators around the removed token are trimmed. If nothing would be
    left, the original name is returned unchanged.

    Example:
        extract_event_name("Round 22 - Abu Dhabi Grand Prix")  # "Abu Dhabi Grand Prix"
        extract_event_name("Round 5")                          # "Round 5"
    """
    stripped = LEADING_ROUND_PATTERN.sub("", name, count=1).strip(NAME_SEPARATORS)
    return stripped or name


def mask_api_key(text: str, api_key: str) -> str:
    """Mask an API key embedded in a URL for safe logging.

    Keeps the first 2 and last 2 characters of keys longer than 4
    characters; shorter keys are fully masked.
    """
    if not api_key:
        return text
    masked = f"{api_key[:2]}***{api_key[-2:]}" if len(api_key) > 4 else "***"
    return text.replace(f"/{api_key}/", f"/{masked}/")
