"""Tests for utils/cache.py: per-render reference cache."""
import asyncio

from utils.cache import ReferenceCache


class TestReferenceCache:
    def test_basic_set_get(self):
        cache = ReferenceCache()
        cache.set("key", "value")
        assert cache.get("key") == "value"

    def test_miss_returns_default(self):
        cache = ReferenceCache()
        assert cache.get("nonexistent") is None
        assert cache.get("nonexistent", "") == ""

    def test_empty_string_is_a_cached_value(self):
        cache = ReferenceCache()
        cache.set("k", "")
        assert "k" in cache
        assert cache.get("k", "fallback") == ""

    def test_stats_tracks_hits_misses(self):
        cache = ReferenceCache()
        cache.set("k", "v")
        cache.get("k")    # hit
        cache.get("nope") # miss
        assert cache.stats() == {"hits": 1, "misses": 1, "size": 1}

    def test_overwrite_existing(self):
        cache = ReferenceCache()
        cache.set("k", "old")
        cache.set("k", "new")
        assert cache.get("k") == "new"
        assert len(cache) == 1

    def test_get_or_populate_loads_once_sequentially(self):
        cache = ReferenceCache()
        calls = []

        async def loader(key):
            calls.append(key)
            return key.upper()

        async def run():
            first = await cache.get_or_populate("tx", loader)
            second = await cache.get_or_populate("tx", loader)
            return first, second

        assert asyncio.run(run()) == ("TX", "TX")
        assert calls == ["tx"]

    def test_concurrent_misses_may_duplicate_but_store_one_value(self):
        cache = ReferenceCache()
        calls = []

        async def loader(key):
            calls.append(key)
            await asyncio.sleep(0)
            return "TX"

        async def run():
            return await asyncio.gather(
                cache.get_or_populate("tx", loader),
                cache.get_or_populate("tx", loader),
            )

        assert asyncio.run(run()) == ["TX", "TX"]
        assert 1 <= len(calls) <= 2
        assert len(cache) == 1
        assert cache.get("tx") == "TX"
