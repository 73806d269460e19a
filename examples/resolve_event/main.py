#!/usr/bin/env python3
"""Example: Resolving a Recorded Race

This example resolves a local recording to its TheSportsDB event and
prints the metadata and artwork the library finds for it.

To run:
    export THESPORTSDB_API_KEY="your_api_key"  # optional, defaults to the free key
    python main.py "Round 1 - Bahrain Grand Prix" 2024
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys

from sportsdb_metadata import (
    ItemDescriptor,
    ItemKind,
    MetadataError,
    SportsDBConfig,
    SportsMetadataClient,
)

FORMULA_1_LEAGUE_ID = "4370"


async def main() -> None:
    if len(sys.argv) < 3:
        print(f"Usage: {sys.argv[0]} <event name> <season year>")
        sys.exit(1)

    name, year = sys.argv[1], int(sys.argv[2])
    config = SportsDBConfig(api_key=os.getenv("THESPORTSDB_API_KEY", "3"))

    item = ItemDescriptor(
        name=name,
        parent_index_number=year,
        series_provider_id=FORMULA_1_LEAGUE_ID,
    )

    async with SportsMetadataClient(config) as client:
        try:
            result = await client.get_metadata(ItemKind.EVENT, item)
            images = await client.get_images(ItemKind.EVENT, item)
        except MetadataError as e:
            print(f"Lookup failed: {e}")
            sys.exit(1)

    if not result.has_metadata:
        print(f"No event found for '{name}' in {year}")
        return

    print(f"Event:    {result.name} (id {result.provider_id})")
    print(f"Round:    {result.index_number}")
    print(f"Season:   {result.parent_index_number}")
    print(f"Date:     {result.premiere_date}")
    if result.overview:
        print(f"Overview: {result.overview[:200]}")

    print(f"\nImages ({len(images)}):")
    for image in images:
        print(f"  {image.image_type:<9} {image.url}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
