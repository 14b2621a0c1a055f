"""Test the session_state-backed cache provider."""

from unittest.mock import MagicMock, patch

import pytest

from gacha_admin.adapters.streamlit_cache import StreamlitCacheProvider
from gacha_admin.application.menu_cache import CacheKey, MenuCache, ResourceKind


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def session_state():
    state = {'current_page': '/'}
    mock_st = MagicMock()
    mock_st.session_state = state
    with patch('gacha_admin.adapters.streamlit_cache.st', mock_st):
        yield state


class TestStreamlitCacheProvider:

    def test_values_live_under_prefix(self, session_state):
        cache = StreamlitCacheProvider()

        cache.set("menu:u-1:own-menus", "tree", ttl=60)

        assert session_state["cache_menu:u-1:own-menus"][0] == "tree"
        assert cache.get("menu:u-1:own-menus") == "tree"
        assert cache.keys() == ["menu:u-1:own-menus"]

    def test_expired_value_is_removed(self, session_state):
        clock = FakeClock()
        cache = StreamlitCacheProvider(clock=clock)
        cache.set("key1", "value1", ttl=10)

        clock.now = 10

        assert cache.get("key1") is None
        assert "cache_key1" not in session_state

    def test_clear_leaves_other_session_keys(self, session_state):
        cache = StreamlitCacheProvider()
        cache.set("key1", "value1")
        cache.set("key2", "value2")

        cache.clear()

        assert session_state == {'current_page': '/'}

    def test_menu_cache_on_session_state(self, session_state, full_tree):
        menu_cache = MenuCache(StreamlitCacheProvider())
        menu_cache.set(CacheKey('u-1', ResourceKind.OWN_MENUS), full_tree)
        menu_cache.set(CacheKey('u-2', ResourceKind.OWN_MENUS), full_tree)

        menu_cache.invalidate_identity('u-1')

        assert menu_cache.get(CacheKey('u-1', ResourceKind.OWN_MENUS)) is None
        assert menu_cache.get(CacheKey('u-2', ResourceKind.OWN_MENUS)) is full_tree
