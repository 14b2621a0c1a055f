"""
Menu Cache - typed cache for menu trees.

Keys are ``(identity id, resource kind)`` pairs instead of free-form strings,
so invalidation after a permission write or on sign-out is explicit:

* ``invalidate(key)`` drops one entry,
* ``invalidate_identity(identity_id)`` drops everything cached for one admin,
* ``clear()`` drops everything (sign-in / sign-out).
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

from gacha_admin.application.cache_provider import CacheProvider, InMemoryCacheProvider
from gacha_admin.log.logger import get_logger
if TYPE_CHECKING:
    from gacha_admin.menu.tree import MenuTree

logger = get_logger(__name__)

DEFAULT_MENU_CACHE_TTL = 5 * 60
ALL_IDENTITIES = "*"


class ResourceKind(Enum):
    """Cached resource types."""
    OWN_MENUS = "own-menus"          # the signed-in admin's accessible menus
    GRANTED_MENUS = "granted-menus"  # one admin's grants, read by a super-admin
    ALL_MENUS = "all-menus"          # full tree, not tied to one admin


@dataclass(frozen=True)
class CacheKey:
    identity_id: str
    kind: ResourceKind

    @classmethod
    def all_menus(cls) -> 'CacheKey':
        return cls(ALL_IDENTITIES, ResourceKind.ALL_MENUS)

    def to_string(self) -> str:
        return f"menu:{self.identity_id}:{self.kind.value}"


def _identity_prefix(identity_id: str) -> str:
    return f"menu:{identity_id}:"


class MenuCache:
    """
    Short-lived cache of menu trees keyed by identity and resource kind.
    """

    def __init__(self, provider: Optional[CacheProvider] = None, ttl: int = DEFAULT_MENU_CACHE_TTL):
        self.provider = provider or InMemoryCacheProvider()
        self.ttl = ttl

    def get(self, key: CacheKey) -> Optional["MenuTree"]:
        return self.provider.get(key.to_string())

    def set(self, key: CacheKey, tree: "MenuTree") -> None:
        if self.ttl <= 0:
            return
        self.provider.set(key.to_string(), tree, ttl=self.ttl)

    async def get_or_load(
        self, key: CacheKey, loader: Callable[[], Awaitable["MenuTree"]], force: bool = False
    ) -> "MenuTree":
        """
        Return the cached tree or await ``loader`` and cache its result.

        Loader errors propagate and nothing is cached.
        """
        if not force:
            cached = self.get(key)
            if cached is not None:
                logger.debug(f"Menu cache hit: {key.to_string()}")
                return cached

        tree = await loader()
        self.set(key, tree)
        return tree

    def invalidate(self, key: CacheKey) -> None:
        self.provider.delete(key.to_string())
        logger.debug(f"Menu cache invalidated: {key.to_string()}")

    def invalidate_identity(self, identity_id: str) -> int:
        removed = self.provider.delete_prefix(_identity_prefix(identity_id))
        logger.debug(f"Menu cache invalidated for {identity_id}: {removed} entries")
        return removed

    def clear(self, *_: Any) -> None:
        """Drop every menu entry. Accepts and ignores session-listener arguments."""
        self.provider.delete_prefix("menu:")
        logger.debug("Menu cache cleared")
