"""Tests for AdminUserRepository."""

import json

import pytest

from conftest import ok

from gacha_admin.auth.models import AdminRole
from gacha_admin.auth.repository import AdminUserFilters, AdminUserRepository
from gacha_admin.exceptions import ApiError


@pytest.mark.asyncio
async def test_list_admin_users_sends_filters(edge_client):
    client, requests = edge_client(lambda request: ok([
        {'id': 'u-1', 'email': 'a@example.com', 'role': 'super_admin'},
        {'id': 'u-2', 'email': 'b@example.com', 'role': 'admin'},
    ]))

    users = await AdminUserRepository(client).list_admin_users(AdminUserFilters(role='admin', search='b'))

    assert json.loads(requests[0].content) == {'filters': {'role': 'admin', 'search': 'b'}}
    assert [user.role for user in users] == [AdminRole.SUPER_ADMIN, AdminRole.ADMIN]


@pytest.mark.asyncio
async def test_list_admin_users_without_filters(edge_client):
    client, requests = edge_client(lambda request: ok(None))

    assert await AdminUserRepository(client).list_admin_users() == []
    assert json.loads(requests[0].content) == {'filters': {}}


@pytest.mark.asyncio
async def test_list_admin_users_malformed_data(edge_client):
    client, _ = edge_client(lambda request: ok([{'email': 'no-id@example.com'}]))

    with pytest.raises(ApiError, match="잘못된 응답 형식입니다."):
        await AdminUserRepository(client).list_admin_users()
