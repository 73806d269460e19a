"""API clients for sportsdb-metadata."""

from sportsdb_metadata.providers.thesportsdb import TheSportsDBClient

__all__ = ["TheSportsDBClient"]
