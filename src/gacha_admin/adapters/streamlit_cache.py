"""
Streamlit Cache Provider - Streamlit-specific cache implementation.

This adapter keeps the menu cache in the browser session's ``st.session_state``
so each signed-in console session owns its own cache, without the permission
core depending on Streamlit.
"""

import time
from typing import Any, Callable, List, Optional

import streamlit as st

from ..application.cache_provider import CacheProvider

CACHE_PREFIX = "cache_"


class StreamlitCacheProvider(CacheProvider):
    """
    Streamlit-specific cache implementation.

    Values are stored in session_state as ``(value, expires_at)`` pairs,
    since session_state has no TTL of its own.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock

    def _expired(self, expires_at: Optional[float]) -> bool:
        return expires_at is not None and self._clock() >= expires_at

    def get(self, key: str) -> Optional[Any]:
        """Get value from Streamlit session state."""
        cache_key = f"{CACHE_PREFIX}{key}"
        item = st.session_state.get(cache_key)
        if item is None:
            return None
        value, expires_at = item
        if self._expired(expires_at):
            del st.session_state[cache_key]
            return None
        return value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Set value in Streamlit session state."""
        expires_at = self._clock() + ttl if ttl is not None else None
        st.session_state[f"{CACHE_PREFIX}{key}"] = (value, expires_at)

    def delete(self, key: str) -> None:
        """Delete value from Streamlit session state."""
        cache_key = f"{CACHE_PREFIX}{key}"
        if cache_key in st.session_state:
            del st.session_state[cache_key]

    def keys(self) -> List[str]:
        return [
            key[len(CACHE_PREFIX):] for key in list(st.session_state.keys())
            if key.startswith(CACHE_PREFIX) and not self._expired(st.session_state[key][1])
        ]

    def clear(self) -> None:
        """Clear all cache entries from session state."""
        keys_to_delete = [k for k in st.session_state.keys() if k.startswith(CACHE_PREFIX)]
        for key in keys_to_delete:
            del st.session_state[key]
