"""
Application layer - framework-independent services.

Cache providers and the typed menu cache used by the permission core.
"""

from gacha_admin.application.cache_provider import CacheProvider, InMemoryCacheProvider, NoCacheProvider
from gacha_admin.application.menu_cache import CacheKey, MenuCache, ResourceKind

__all__ = [
    'CacheProvider',
    'InMemoryCacheProvider',
    'NoCacheProvider',
    'CacheKey',
    'MenuCache',
    'ResourceKind',
]
