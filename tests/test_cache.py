"""Tests for the TTL cache and the parsed-template cache."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta

import pytest

from streamfmt.errors import TemplateParseError
from streamfmt.templates import Context, TemplateCache, parse, parse_cached, render
from streamfmt.utilities import cache as cache_module
from streamfmt.utilities.cache import TTLCache, content_key, make_cache_key


class FakeClock:
    """Stands in for datetime in the cache module; only now() is used there."""

    def __init__(self):
        self.current = datetime(2024, 1, 1, 12, 0, 0)

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: int) -> None:
        self.current += timedelta(seconds=seconds)


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr(cache_module, "datetime", fake)
    return fake


# =============================================================================
# TTL CACHE
# =============================================================================


class TestTTLCache:
    """Get/set, LRU eviction and stats of the in-memory cache."""

    def test_get_and_set(self):
        cache = TTLCache()
        assert cache.get("k") is None
        cache.set("k", "v")
        assert cache.get("k") == "v"
        assert "k" in cache

    def test_delete(self):
        cache = TTLCache()
        cache.set("k", "v")
        cache.delete("k")
        assert cache.get("k") is None
        cache.delete("missing")

    def test_clear_resets_stats(self):
        cache = TTLCache()
        cache.set("k", "v")
        cache.get("k")
        cache.clear()
        assert cache.size == 0
        assert cache.stats()["hits"] == 0

    def test_no_ttl_never_expires(self):
        cache = TTLCache(default_ttl_seconds=0)
        cache.set("k", "v")
        assert cache.stats()["expired_entries"] == 0
        assert cache.get("k") == "v"

    def test_lru_eviction(self):
        cache = TTLCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")  # b is now least recently used
        cache.set("c", 3)
        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache

    def test_overwrite_does_not_evict(self):
        cache = TTLCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 10)
        assert cache.size == 2
        assert cache.get("a") == 10
        assert cache.get("b") == 2

    def test_unlimited_size(self):
        cache = TTLCache(max_size=0)
        for i in range(50):
            cache.set(str(i), i)
        assert cache.size == 50

    def test_stats(self):
        cache = TTLCache(max_size=10)
        cache.set("a", 1)
        cache.get("a")
        cache.get("missing")
        stats = cache.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 0.5
        assert stats["max_size"] == 10

    def test_keys(self):
        assert make_cache_key("template", "abc") == "template:abc"
        assert content_key("x") == content_key("x")
        assert content_key("x") != content_key("y")
        assert len(content_key("")) == 64


class TestTTLExpiry:
    """Time-based expiry, driven by a fake clock."""

    def test_entry_expires_after_default_ttl(self, clock):
        cache = TTLCache(default_ttl_seconds=60)
        cache.set("k", "v")
        clock.advance(60)
        assert cache.get("k") == "v"
        clock.advance(1)
        assert cache.get("k") is None
        assert "k" not in cache

    def test_expired_get_counts_as_miss_and_drops_entry(self, clock):
        cache = TTLCache(default_ttl_seconds=10)
        cache.set("k", "v")
        clock.advance(11)
        assert cache.stats()["expired_entries"] == 1
        assert cache.get("k") is None
        stats = cache.stats()
        assert stats["misses"] == 1
        assert stats["hits"] == 0
        assert stats["total_entries"] == 0

    def test_per_entry_ttl_overrides_default(self, clock):
        cache = TTLCache(default_ttl_seconds=0)
        cache.set("short", 1, ttl_seconds=5)
        cache.set("forever", 2)
        clock.advance(3600)
        assert cache.get("short") is None
        assert cache.get("forever") == 2

    def test_eviction_purges_expired_entries_first(self, clock):
        cache = TTLCache(default_ttl_seconds=0, max_size=2)
        cache.set("old", 1, ttl_seconds=10)
        cache.set("keep", 2)
        cache.get("old")  # most recently used, but about to expire
        clock.advance(20)
        cache.set("new", 3)
        assert cache.size == 2
        assert "keep" in cache
        assert "new" in cache

    def test_template_cache_reparses_after_expiry(self, clock):
        cache = TemplateCache(ttl_seconds=30)
        first = cache.get_or_parse("{stream.title}")
        clock.advance(10)
        assert cache.get_or_parse("{stream.title}") is first
        clock.advance(31)
        assert "{stream.title}" not in cache
        second = cache.get_or_parse("{stream.title}")
        assert second is not first
        assert second == first


# =============================================================================
# TEMPLATE CACHE
# =============================================================================


class TestTemplateCache:
    """Parsed templates are shared by source text."""

    def test_same_source_returns_same_tree(self):
        cache = TemplateCache()
        first = cache.get_or_parse("{stream.title}")
        assert cache.get_or_parse("{stream.title}") is first
        assert cache.size == 1
        assert cache.stats()["hits"] == 1

    def test_cached_tree_equals_fresh_parse(self):
        source = '{stream.season::>0["S{stream.season}"||""]}'
        assert TemplateCache().get_or_parse(source) == parse(source)

    def test_contains_and_invalidate(self):
        cache = TemplateCache()
        cache.get_or_parse("{stream.title}")
        assert "{stream.title}" in cache
        cache.invalidate("{stream.title}")
        assert "{stream.title}" not in cache

    def test_failed_parse_is_not_cached(self):
        cache = TemplateCache()
        for _ in range(2):
            with pytest.raises(TemplateParseError):
                cache.get_or_parse("{stream.title")
        assert cache.size == 0

    def test_bounded(self):
        cache = TemplateCache(max_size=2)
        for source in ("a", "b", "c"):
            cache.get_or_parse(source)
        assert cache.size == 2
        assert "a" not in cache
        assert "c" in cache

    def test_key_is_content_addressed(self):
        assert TemplateCache.key_for("x") == TemplateCache.key_for("x")
        assert TemplateCache.key_for("x") != TemplateCache.key_for("x ")

    def test_clear(self):
        cache = TemplateCache()
        cache.get_or_parse("a")
        cache.clear()
        assert cache.size == 0

    def test_parse_cached_uses_default_cache(self):
        assert parse_cached("{addon.name}") is parse_cached("{addon.name}")


class TestConcurrentRendering:
    """One cached tree rendered from many threads."""

    def test_shared_template_renders_identically(self):
        template = parse_cached('{stream.title} {stream.season::>0["S{stream.season}"||""]}')

        def work(i: int) -> str:
            return render(template, Context(stream={"title": f"T{i}", "season": i % 3}))

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(work, range(200)))

        expected = [f"T{i} S{i % 3}" if i % 3 else f"T{i} " for i in range(200)]
        assert results == expected

    def test_concurrent_parse_of_same_source(self):
        cache = TemplateCache()
        source = "{stream.title} {stream.size::size}"

        with ThreadPoolExecutor(max_workers=8) as pool:
            trees = list(pool.map(lambda _: cache.get_or_parse(source), range(50)))

        assert all(tree == trees[0] for tree in trees)
        assert cache.size == 1
