"""
Test cache provider implementations.

This module tests the framework-independent cache provider interface
and its implementations.
"""

import pytest

from gacha_admin.application.cache_provider import (
    CacheProvider,
    InMemoryCacheProvider,
    NoCacheProvider
)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestInMemoryCacheProvider:
    """Test in-memory cache provider."""

    def test_set_and_get(self):
        cache = InMemoryCacheProvider()

        cache.set("key1", "value1")
        assert cache.get("key1") == "value1"
        assert cache.get("nonexistent") is None

    def test_delete_key(self):
        cache = InMemoryCacheProvider()

        cache.set("key1", "value1")
        cache.delete("key1")
        cache.delete("never-set")

        assert not cache.has("key1")

    def test_entry_expires_after_ttl(self):
        """Entries disappear once the clock passes their TTL."""
        clock = FakeClock()
        cache = InMemoryCacheProvider(clock=clock)
        cache.set("menus", "tree", ttl=300)

        clock.now += 299
        assert cache.get("menus") == "tree"

        clock.now += 1
        assert cache.get("menus") is None
        assert cache.keys() == []

    def test_no_ttl_never_expires(self):
        clock = FakeClock()
        cache = InMemoryCacheProvider(clock=clock)
        cache.set("key1", "value1")

        clock.now += 10 ** 6

        assert cache.has("key1")

    def test_delete_prefix(self):
        cache = InMemoryCacheProvider()
        cache.set("menu:u-1:own-menus", 1)
        cache.set("menu:u-1:granted-menus", 2)
        cache.set("menu:u-10:own-menus", 3)

        removed = cache.delete_prefix("menu:u-1:")

        assert removed == 2
        assert cache.keys() == ["menu:u-10:own-menus"]

    def test_clear_all(self):
        cache = InMemoryCacheProvider()
        cache.set("key1", "value1")
        cache.set("key2", "value2")

        cache.clear()

        assert cache.keys() == []


class TestNoCacheProvider:
    """Test no-op cache provider."""

    def test_never_stores(self):
        cache = NoCacheProvider()

        cache.set("key1", "value1", ttl=60)

        assert cache.get("key1") is None
        assert not cache.has("key1")
        assert cache.delete_prefix("key") == 0


def test_cache_provider_is_abstract():
    with pytest.raises(TypeError):
        CacheProvider()
