"""
Cache provider abstraction for menu data.

The permission core stores menu trees through ``CacheProvider`` only, so the
same code runs against process memory in tests and ``st.session_state`` in
the console (see ``adapters.streamlit_cache``).
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple


class CacheProvider(ABC):
    """Key/value store with optional per-entry expiry."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the live value for ``key``, or None if missing or expired."""

    @abstractmethod
    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """
        Store ``value``.

        Args:
            key: Cache key
            value: Value to store
            ttl: Seconds until expiry (None: until deleted)
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; unknown keys are ignored."""

    @abstractmethod
    def keys(self) -> List[str]:
        """Live (unexpired) keys."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry owned by this provider."""

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def delete_prefix(self, prefix: str) -> int:
        """
        Remove every key starting with ``prefix``.

        Returns:
            Number of removed keys
        """
        matched = [key for key in self.keys() if key.startswith(prefix)]
        for key in matched:
            self.delete(key)
        return len(matched)


class InMemoryCacheProvider(CacheProvider):
    """
    Process-local cache.

    ``clock`` is injectable so expiry can be tested without sleeping.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._cache: Dict[str, Tuple[Any, Optional[float]]] = {}
        self._clock = clock

    def _is_expired(self, expires_at: Optional[float]) -> bool:
        return expires_at is not None and self._clock() >= expires_at

    def get(self, key: str) -> Optional[Any]:
        item = self._cache.get(key)
        if item is None:
            return None
        value, expires_at = item
        if self._is_expired(expires_at):
            del self._cache[key]
            return None
        return value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        expires_at = self._clock() + ttl if ttl is not None else None
        self._cache[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        self._cache.pop(key, None)

    def keys(self) -> List[str]:
        return [key for key, (_, expires_at) in list(self._cache.items()) if not self._is_expired(expires_at)]

    def clear(self) -> None:
        self._cache.clear()


class NoCacheProvider(CacheProvider):
    """Provider that stores nothing; every read is a miss."""

    def get(self, key: str) -> Optional[Any]:
        return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        pass

    def delete(self, key: str) -> None:
        pass

    def keys(self) -> List[str]:
        return []

    def clear(self) -> None:
        pass
