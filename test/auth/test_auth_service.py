"""Tests for AuthService sign-in/sign-out."""

import httpx
import pytest

from conftest import ok

from gacha_admin.auth.service import AuthService
from gacha_admin.auth.session import SessionStore


def signin_payload(status='active', token='session-token'):
    return {
        'user': {'id': 'u-1', 'email': 'admin@example.com', 'role': 'admin', 'status': status},
        'session': {'access_token': token, 'refresh_token': 'refresh'},
    }


@pytest.fixture
def store():
    return SessionStore()


@pytest.mark.asyncio
async def test_900_sign_in_stores_session(edge_client, store):
    """TEST-900: 로그인 성공 시 세션 저장, anon key로 호출"""
    client, requests = edge_client(lambda request: ok(signin_payload()), store=store)
    service = AuthService(client, store)

    success, message, identity = await service.sign_in('admin@example.com', 'pw')

    assert success
    assert identity.id == 'u-1'
    assert store.access_token == 'session-token'
    assert store.session.refresh_token == 'refresh'
    assert requests[0].headers['Authorization'] == 'Bearer anon-key'


@pytest.mark.asyncio
async def test_901_blank_credentials_skip_request(edge_client, store):
    client, requests = edge_client(lambda request: ok(signin_payload()), store=store)

    success, message, identity = await AuthService(client, store).sign_in('', 'pw')

    assert not success
    assert identity is None
    assert requests == []


@pytest.mark.asyncio
async def test_902_rejected_credentials(edge_client, store):
    client, _ = edge_client(
        lambda request: httpx.Response(401, json={'success': False, 'error': 'Invalid login credentials'}),
        store=store
    )

    success, message, identity = await AuthService(client, store).sign_in('admin@example.com', 'wrong')

    assert not success
    assert message == 'Invalid login credentials'
    assert not store.is_authenticated()


@pytest.mark.asyncio
async def test_903_inactive_account_is_not_signed_in(edge_client, store):
    client, _ = edge_client(lambda request: ok(signin_payload(status='suspended')), store=store)

    success, message, identity = await AuthService(client, store).sign_in('admin@example.com', 'pw')

    assert not success
    assert "비활성화" in message
    assert not store.is_authenticated()


@pytest.mark.asyncio
async def test_904_missing_session_in_response(edge_client, store):
    client, _ = edge_client(lambda request: ok(signin_payload(token=None)), store=store)

    success, message, _ = await AuthService(client, store).sign_in('admin@example.com', 'pw')

    assert not success
    assert message == "세션 설정에 실패했습니다."


@pytest.mark.asyncio
async def test_905_sign_out(edge_client, store):
    client, _ = edge_client(lambda request: ok(signin_payload()), store=store)
    service = AuthService(client, store)
    await service.sign_in('admin@example.com', 'pw')

    assert service.sign_out() == (True, "로그아웃되었습니다.")
    assert not store.is_authenticated()


@pytest.mark.asyncio
@pytest.mark.parametrize('data', [
    {'user': {'email': 'no-id@example.com'}, 'session': {'access_token': 't'}},
    {'user': {'id': 'u-1', 'role': 'root'}, 'session': {'access_token': 't'}},
    {'user': {'id': 'u-1'}, 'session': 'token-string'},
    ['user'],
])
async def test_906_malformed_sign_in_response(edge_client, store, data):
    """TEST-906: 형식이 틀린 로그인 응답은 예외 없이 실패로 처리"""
    client, _ = edge_client(lambda request: ok(data), store=store)

    success, message, identity = await AuthService(client, store).sign_in('admin@example.com', 'pw')

    assert not success
    assert message == "세션 설정에 실패했습니다."
    assert identity is None
    assert not store.is_authenticated()
