#!/usr/bin/env python3
"""Example: Using the File Cache

This example lists the leagues matching a name twice. The second lookup
is answered from the on-disk cache without touching the API or the rate
limiter.

To run:
    python main.py "Formula 1"
"""

from __future__ import annotations

import asyncio
import sys
import tempfile
import time
from pathlib import Path

from sportsdb_metadata import (
    EntityResolver,
    ItemDescriptor,
    ItemKind,
    SportsDBConfig,
    TheSportsDBClient,
)
from sportsdb_metadata.cache import FileCache


async def main() -> None:
    query = sys.argv[1] if len(sys.argv) > 1 else "Formula 1"

    # Create a file cache
    # Options:
    # - directory: Where cache files are written (one JSON file per request)
    # - ttl_days: How long responses stay valid (default: 7)
    cache_dir = Path(tempfile.gettempdir()) / "sportsdb-metadata-example"
    file_cache = FileCache(cache_dir, ttl_days=1)

    config = SportsDBConfig(max_requests_per_minute=30)

    async with TheSportsDBClient(config, cache=file_cache) as api:
        resolver = EntityResolver(api)
        item = ItemDescriptor(name=query)

        # First search - will hit the API unless an earlier run cached it
        print("First search...")
        start = time.time()
        results1 = await resolver.search(ItemKind.LEAGUE, item)
        elapsed1 = time.time() - start
        print(f"Found {len(results1)} results in {elapsed1:.3f}s\n")

        # Second search - should be cached
        print("Second search (should be cached)...")
        start = time.time()
        results2 = await resolver.search(ItemKind.LEAGUE, item)
        elapsed2 = time.time() - start
        print(f"Found {len(results2)} results in {elapsed2:.3f}s\n")

        stats = await file_cache.get_stats()
        print("Cache Stats:")
        print(f"  Directory: {stats['directory']}")
        print(f"  Entries:   {stats['size']} ({stats['total_bytes']} bytes)")
        print(f"  Expired:   {stats['expired_count']}")

        print(f"\nLeagues matching '{query}':")
        for i, result in enumerate(results1, 1):
            print(f"{i}. {result.name} (id {result.provider_id}, score {result.match_score:.2f})")


if __name__ == "__main__":
    asyncio.run(main())
