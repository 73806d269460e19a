"""Fixture loader and fake time sources for the test suite."""

from __future__ import annotations

import asyncio
import json
from functools import lru_cache
from pathlib import Path
from typing import Any

API_BASE_URL = "https://www.thesportsdb.com/api/v1/json/3"

# Root directory for recorded API responses
FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@lru_cache(maxsize=None)
def _read_fixture(provider: str, filename: str) -> str:
    file_path = FIXTURES_DIR / provider / filename
    if not file_path.exists():
        raise FileNotFoundError(f"Fixture file not found: {file_path}")
    return file_path.read_text(encoding="utf-8")


def load_fixture(filename: str, provider: str = "thesportsdb") -> dict[str, Any]:
    """Load a recorded API response.

    A fresh object is returned on every call, so tests may mutate it.

    Example:
        payload = load_fixture("all_leagues.json")
    """
    return json.loads(_read_fixture(provider, filename))


class FakeClock:
    """A controllable clock with a matching async sleep.

    ``sleep`` advances the clock instead of waiting and records every
    requested delay, so rate-limit and backoff timing can be asserted
    without real waiting.
    """

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        # Still yield to the event loop like a real sleep would
        await asyncio.sleep(0)
