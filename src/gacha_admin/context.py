"""
Factory for wiring the console's services together.
"""
from dataclasses import dataclass
from typing import Optional

import httpx

from gacha_admin.api.client import EdgeFunctionClient
from gacha_admin.application.cache_provider import CacheProvider
from gacha_admin.application.menu_cache import MenuCache
from gacha_admin.auth.repository import AdminUserRepository
from gacha_admin.auth.service import AuthService
from gacha_admin.auth.session import SessionStore
from gacha_admin.config import Config
from gacha_admin.menu.repository import MenuRepository
from gacha_admin.menu.service import MenuAdminService
from gacha_admin.permissions.editor import PermissionEditor
from gacha_admin.permissions.guard import RouteGuard
from gacha_admin.permissions.resolver import PermissionResolver


@dataclass
class AppContext:
    """Services shared by one console session."""
    config: Config
    session_store: SessionStore
    client: EdgeFunctionClient
    menu_cache: MenuCache
    menu_repo: MenuRepository
    admin_user_repo: AdminUserRepository
    auth_service: AuthService
    menu_admin_service: MenuAdminService
    resolver: PermissionResolver
    guard: RouteGuard

    def new_permission_editor(self) -> PermissionEditor:
        return PermissionEditor(self.menu_repo, self.menu_cache)


def build_context(
    config: Config,
    cache_provider: Optional[CacheProvider] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> AppContext:
    """
    Create every service with its dependencies.

    The menu cache is cleared on sign-in and sign-out, and the permission
    resolver follows the signed-in identity.

    Args:
        config: 애플리케이션 설정
        cache_provider: 캐시 구현 (선택, 기본은 메모리)
        transport: httpx transport (선택, 테스트용)

    Returns:
        AppContext
    """
    session_store = SessionStore()
    client = EdgeFunctionClient(config, session_store=session_store, transport=transport)
    menu_cache = MenuCache(cache_provider, ttl=config.menu_cache_ttl_seconds)
    menu_repo = MenuRepository(client)

    resolver = PermissionResolver(menu_repo, menu_cache)
    guard = RouteGuard(resolver, not_found_path=config.not_found_path)

    session_store.on_sign_in(menu_cache.clear)
    session_store.on_sign_out(menu_cache.clear)
    session_store.on_sign_in(lambda session: resolver.set_identity(session.identity))
    session_store.on_sign_out(lambda _: resolver.set_identity(None))
    session_store.on_sign_out(lambda _: guard.reset())

    return AppContext(
        config=config,
        session_store=session_store,
        client=client,
        menu_cache=menu_cache,
        menu_repo=menu_repo,
        admin_user_repo=AdminUserRepository(client),
        auth_service=AuthService(client, session_store),
        menu_admin_service=MenuAdminService(menu_repo, menu_cache),
        resolver=resolver,
        guard=guard,
    )
