"""Shared fixtures: sample menu payloads, identities and an in-memory menu repository."""

import asyncio
import dataclasses
from typing import Dict, List, Optional, Set

import httpx
import pytest

from gacha_admin.api.client import EdgeFunctionClient
from gacha_admin.auth.models import AdminIdentity, AdminRole, AuthSession
from gacha_admin.auth.session import SessionStore
from gacha_admin.config import Config
from gacha_admin.exceptions import ApiError
from gacha_admin.menu.models import AdminMenuPermission
from gacha_admin.menu.tree import MenuTree


def menu_node(menu_id, code, name, path=None, order=0, children=None, **extra) -> dict:
    node = {
        'id': menu_id,
        'code': code,
        'name': name,
        'description': None,
        'parent_id': None,
        'path': path,
        'icon': None,
        'display_order': order,
        'is_active': True,
        'metadata': {},
    }
    node.update(extra)
    if children is not None:
        for child in children:
            child['parent_id'] = menu_id
        node['children'] = children
    return node


def gacha_menus() -> List[dict]:
    """
    Gacha Shop (/shops)
      ├─ Shop Mgmt (/shops/list)
      ├─ Tag Mgmt (/shops/tags)
      └─ Reviews (/shops/reviews)
    Admin (no path)
      └─ Menus (/menus)
    """
    return [
        menu_node('m-gacha', 'gacha_shop', 'Gacha Shop', path='/shops', order=1, children=[
            menu_node('m-shop', 'shop_management', 'Shop Mgmt', path='/shops/list', order=1),
            menu_node('m-tag', 'tag_management', 'Tag Mgmt', path='/shops/tags', order=2),
            menu_node('m-review', 'review_management', 'Reviews', path='/shops/reviews', order=3),
        ]),
        menu_node('m-admin', 'admin', 'Admin', order=2, children=[
            menu_node('m-menus', 'menu_management', 'Menus', path='/menus', order=1),
        ]),
    ]


@pytest.fixture
def menus_payload() -> List[dict]:
    return gacha_menus()


@pytest.fixture
def full_tree() -> MenuTree:
    return MenuTree.from_nested(gacha_menus())


@pytest.fixture
def super_admin() -> AdminIdentity:
    return AdminIdentity(id='u-super', email='super@example.com', role=AdminRole.SUPER_ADMIN)


@pytest.fixture
def admin() -> AdminIdentity:
    return AdminIdentity(id='u-admin', email='admin@example.com', role=AdminRole.ADMIN, full_name='Kim')


@pytest.fixture
def config() -> Config:
    return Config(supabase_url='https://example.supabase.co', supabase_anon_key='anon-key')


class FakeMenuRepository:
    """
    In-memory stand-in for MenuRepository.

    ``gates`` lets a test hold a read open until it sets the event.
    """

    def __init__(self, menus: Optional[List[dict]] = None, grants: Optional[Dict[str, Set[str]]] = None,
                 current_admin_id: Optional[str] = None):
        self.full_tree = MenuTree.from_nested(menus if menus is not None else gacha_menus())
        self.grants: Dict[str, Set[str]] = {k: set(v) for k, v in (grants or {}).items()}
        self.current_admin_id = current_admin_id
        self.calls: List[tuple] = []
        self.fail: Set[str] = set()
        self.gates: Dict[str, asyncio.Event] = {}

    async def _enter(self, name: str):
        self.calls.append((name,))
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        if name in self.fail:
            raise ApiError(f"{name} failed", status_code=500)

    def granted_tree(self, admin_id: str) -> MenuTree:
        granted = self.grants.get(admin_id, set())
        entries = []
        for entry in self.full_tree.flatten():
            if entry.id not in granted:
                continue
            parent_id = entry.parent_id
            while parent_id is not None and parent_id not in granted:
                parent = self.full_tree.get(parent_id)
                parent_id = parent.parent_id if parent else None
            entries.append(dataclasses.replace(entry, parent_id=parent_id))
        return MenuTree.from_entries(entries)

    async def get_admin_menus(self, admin_id: Optional[str] = None) -> MenuTree:
        await self._enter('get_admin_menus')
        return self.granted_tree(admin_id or self.current_admin_id)

    async def get_all_menus(self) -> MenuTree:
        await self._enter('get_all_menus')
        return self.full_tree

    async def update_admin_menu_permissions(self, admin_id: str, menu_ids: List[str]):
        await self._enter('update_admin_menu_permissions')
        self.calls.append(('update', admin_id, list(menu_ids)))
        self.grants[admin_id] = set(menu_ids)
        return [AdminMenuPermission(id=f'p-{i}', admin_id=admin_id, menu_id=m) for i, m in enumerate(menu_ids)]


@pytest.fixture
def fake_repo_factory():
    return FakeMenuRepository


@pytest.fixture
def session_store(admin) -> SessionStore:
    store = SessionStore()
    store.sign_in(AuthSession(access_token='user-token', identity=admin))
    return store


@pytest.fixture
def edge_client(config, session_store):
    """
    Build an EdgeFunctionClient whose requests go to ``handler``.

    Every request is appended to the returned list for assertions.
    """
    def factory(handler, store=session_store):
        requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = EdgeFunctionClient(config, store, transport=httpx.MockTransport(recording_handler))
        return client, requests
    return factory


def ok(data) -> httpx.Response:
    return httpx.Response(200, json={'success': True, 'data': data})
