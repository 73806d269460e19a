"""Matching rules for leagues and events.

All rules are first-match-wins in API order; nothing here ranks
candidates. Jaro-Winkler similarity is only used to annotate search
results with a score for display.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Final

from strsimpy.jaro_winkler import JaroWinkler

from sportsdb_metadata.core.normalization import normalize_name

if TYPE_CHECKING:
    from sportsdb_metadata.types.common import Event, League

# Create a single instance for reuse
_jarowinkler: Final = JaroWinkler()


def jaro_winkler_similarity(s1: str, s2: str) -> float:
    """Calculate the Jaro-Winkler similarity of two names after normalization.

    Args:
        s1: First string to compare
        s2: Second string to compare

    Returns:
        Similarity score between 0 and 1
    """
    return _jarowinkler.similarity(normalize_name(s1), normalize_name(s2))


def is_league_match(query: str, league: League) -> bool:
    """Check whether a league answers to the given name.

    Both sides are case-folded and trimmed, then compared by exact name,
    by any comma-delimited alternate name, and finally by substring
    containment in either direction.

    Example:
        f1 = League(name="Formula 1", alternate="F1, Formula One")
        is_league_match("F1", f1)      # True
        is_league_match("NASCAR", f1)  # False
    """
    wanted = normalize_name(query)
    if not wanted:
        return False

    name = normalize_name(league.name)
    if wanted == name:
        return True

    if any(wanted == normalize_name(alt) for alt in league.alternate_names):
        return True

    if not name:
        return False
    return wanted in name or name in wanted


def match_leagues(query: str, leagues: Iterable[League]) -> list[League]:
    """Return every league matching ``query``, in their original order."""
    return [league for league in leagues if is_league_match(query, league)]


def find_league(query: str, leagues: Iterable[League]) -> League | None:
    """Return the first league matching ``query``."""
    return next((league for league in leagues if is_league_match(query, league)), None)


def find_event_by_round(events: Iterable[Event], round_number: int) -> Event | None:
    """Return the first event whose round equals ``round_number``.

    Events without a numeric round never match.
    """
    return next((e for e in events if e.round_number == round_number), None)


def find_event_by_name(events: Iterable[Event], fragment: str) -> Event | None:
    """Return the first event whose name contains ``fragment``, ignoring case.

    When several events share the fragment (a sprint and the main race
    of the same weekend, for instance) the first one in API order wins.
    """
    wanted = normalize_name(fragment)
    if not wanted:
        return None
    return next((e for e in events if wanted in normalize_name(e.name)), None)
