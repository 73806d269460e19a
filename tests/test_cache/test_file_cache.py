"""Tests for the file cache backend."""

import os

import pytest

from sportsdb_metadata.cache import FileCache, make_cache_key
from tests.helpers import FakeClock

DAY = 86400

URL = "https://www.thesportsdb.com/api/v1/json/3/eventsseason.php"


@pytest.fixture
def cache(tmp_path, clock):
    """Create a file cache in a temporary directory."""
    return FileCache(tmp_path / "cache", ttl_days=7, clock=clock)


class TestCacheKey:
    """Tests for make_cache_key."""

    def test_key_is_sha256_hex(self):
        key = make_cache_key(URL, {"id": "4370", "s": "2024"})
        assert len(key) == 64
        assert all(c in "0123456789abcdef" for c in key)

    def test_parameter_order_does_not_matter(self):
        assert make_cache_key(URL, {"id": "4370", "s": "2024"}) == make_cache_key(
            URL, {"s": "2024", "id": "4370"}
        )

    def test_every_part_of_the_signature_counts(self):
        base = make_cache_key(URL, {"id": "4370", "s": "2024"})
        assert make_cache_key(URL, {"id": "4370", "s": "2023"}) != base
        assert make_cache_key(URL.replace("/3/", "/123456/"), {"id": "4370", "s": "2024"}) != base
        assert make_cache_key(URL.replace("eventsseason", "lookupevent"), {"id": "4370"}) != base


class TestFileCache:
    """Tests for FileCache."""

    async def test_set_then_get_returns_payload(self, cache):
        """A fresh entry is returned intact."""
        key = make_cache_key(URL, {"id": "4370"})
        payload = {"events": [{"idEvent": "1", "strEvent": "Bahrain Grand Prix"}]}
        await cache.set(key, payload)
        assert await cache.get(key) == payload
        assert (cache.directory / f"{key}.json").exists()

    async def test_get_missing_directory_is_a_miss(self, cache):
        """Nothing cached yet, not even the directory."""
        assert await cache.get(make_cache_key(URL)) is None

    async def test_entry_expires_after_ttl(self, cache, clock: FakeClock):
        """An entry one second past the TTL is absent and removed from disk."""
        key = make_cache_key(URL)
        await cache.set(key, {"events": None})

        clock.advance(7 * DAY)
        assert await cache.get(key) == {"events": None}

        clock.advance(1)
        assert await cache.get(key) is None
        assert not (cache.directory / f"{key}.json").exists()

    async def test_rewrite_resets_age(self, cache, clock: FakeClock):
        """Overwriting an entry restarts its lifetime."""
        key = make_cache_key(URL)
        await cache.set(key, {"version": 1})
        clock.advance(6 * DAY)
        await cache.set(key, {"version": 2})
        clock.advance(6 * DAY)
        assert await cache.get(key) == {"version": 2}

    async def test_corrupt_entry_is_a_miss(self, cache, caplog):
        """Unparseable JSON is reported as absent, not raised."""
        key = make_cache_key(URL)
        await cache.set(key, {"ok": True})
        (cache.directory / f"{key}.json").write_text("{not json", encoding="utf-8")

        assert await cache.get(key) is None
        assert "Cache read failed" in caplog.text

        await cache.set(key, {"ok": True})
        assert await cache.get(key) == {"ok": True}

    async def test_unwritable_directory_is_ignored(self, tmp_path, clock):
        """A cache directory that cannot be created never raises."""
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        cache = FileCache(blocker / "cache", clock=clock)

        await cache.set("key", {"ok": True})
        assert await cache.get("key") is None

    async def test_writes_leave_no_temporary_files(self, cache):
        for i in range(3):
            await cache.set(make_cache_key(URL, {"id": str(i)}), {"i": i})
        names = sorted(os.listdir(cache.directory))
        assert len(names) == 3
        assert all(name.endswith(".json") for name in names)

    async def test_non_digest_keys_are_hashed(self, cache):
        await cache.set("events:4370:2024", [1, 2, 3])
        assert await cache.get("events:4370:2024") == [1, 2, 3]
        assert not (cache.directory / "events:4370:2024.json").exists()

    async def test_clear_removes_everything(self, cache):
        keys = [make_cache_key(URL, {"id": str(i)}) for i in range(3)]
        for key in keys:
            await cache.set(key, {"id": key})

        await cache.clear()

        for key in keys:
            assert await cache.get(key) is None
        assert list(cache.directory.glob("*.json")) == []

    async def test_delete_and_exists(self, cache, clock: FakeClock):
        key = make_cache_key(URL)
        assert not await cache.exists(key)
        await cache.set(key, {})
        assert await cache.exists(key)
        assert await cache.delete(key)
        assert not await cache.delete(key)
        assert not await cache.exists(key)

    async def test_get_stats(self, cache, clock: FakeClock):
        await cache.set(make_cache_key(URL, {"id": "1"}), {})
        clock.advance(8 * DAY)
        await cache.set(make_cache_key(URL, {"id": "2"}), {})

        stats = await cache.get_stats()
        assert stats["size"] == 2
        assert stats["expired_count"] == 1
        assert stats["ttl_days"] == 7
