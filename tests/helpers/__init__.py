"""Test helpers for loading recorded responses and faking time."""

from .fixtures import API_BASE_URL, FakeClock, load_fixture

__all__ = ["API_BASE_URL", "FakeClock", "load_fixture"]
