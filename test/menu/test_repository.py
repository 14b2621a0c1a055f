"""Tests for MenuRepository request/response mapping."""

import json

import pytest

from conftest import menu_node, ok

from gacha_admin.application.menu_cache import MenuCache
from gacha_admin.exceptions import ApiError
from gacha_admin.menu.models import MenuInput
from gacha_admin.menu.repository import MenuRepository
from gacha_admin.permissions.editor import PermissionEditor
from gacha_admin.permissions.resolver import PermissionResolver


def body(request):
    return json.loads(request.content) if request.content else None


@pytest.mark.asyncio
async def test_700_own_menus_use_get(edge_client, menus_payload):
    """TEST-700: 본인 메뉴는 GET, 응답의 menus로 트리 생성"""
    client, requests = edge_client(lambda request: ok({'menus': menus_payload}))

    tree = await MenuRepository(client).get_admin_menus()

    assert requests[0].method == 'GET'
    assert requests[0].url.path.endswith('/admin-menus-get')
    assert len(tree) == 6
    assert [entry.id for entry in tree.roots] == ['m-gacha', 'm-admin']


@pytest.mark.asyncio
async def test_701_other_admin_menus_use_post(edge_client):
    client, requests = edge_client(lambda request: ok({'menus': [menu_node('m-1', 'a', 'A', path='/a')]}))

    tree = await MenuRepository(client).get_admin_menus('u-target')

    assert requests[0].method == 'POST'
    assert body(requests[0]) == {'admin_id': 'u-target'}
    assert '/a' in {entry.path for entry in tree.flatten()}


@pytest.mark.asyncio
async def test_702_missing_menus_key_gives_empty_tree(edge_client):
    client, _ = edge_client(lambda request: ok({}))

    tree = await MenuRepository(client).get_all_menus()

    assert len(tree) == 0


@pytest.mark.asyncio
async def test_703_permission_update_sends_full_list(edge_client):
    """TEST-703: 권한 저장은 전체 ID 목록을 admin_user_id와 함께 전송"""
    client, requests = edge_client(lambda request: ok({'permissions': [
        {'id': 'p-1', 'admin_id': 'u-target', 'menu_id': 'm-1'},
        {'id': 'p-2', 'admin_id': 'u-target', 'menu_id': 'm-2'},
    ]}))

    permissions = await MenuRepository(client).update_admin_menu_permissions('u-target', ['m-1', 'm-2'])

    assert requests[0].url.path.endswith('/admin-menu-permissions-update')
    assert body(requests[0]) == {'admin_user_id': 'u-target', 'menu_ids': ['m-1', 'm-2']}
    assert [p.menu_id for p in permissions] == ['m-1', 'm-2']


@pytest.mark.asyncio
async def test_704_create_and_update_menu(edge_client):
    created = menu_node('m-new', 'event_banner', 'Banner', path='/banners')

    def handler(request):
        return ok({'menu': created})

    client, requests = edge_client(handler)
    repo = MenuRepository(client)

    entry = await repo.create_menu(MenuInput(code='event_banner', name='Banner', path='/banners'))
    await repo.update_menu('m-new', MenuInput(name='Banner'))

    assert entry.id == 'm-new'
    assert body(requests[0]) == {'code': 'event_banner', 'name': 'Banner', 'path': '/banners'}
    assert requests[1].method == 'PUT'
    assert requests[1].url.path.endswith('/admin-menus-update/m-new')
    assert body(requests[1]) == {'name': 'Banner'}


@pytest.mark.asyncio
@pytest.mark.parametrize('hard_delete, flag', [(True, 'true'), (False, 'false')])
async def test_705_delete_menu_query_flag(edge_client, hard_delete, flag):
    client, requests = edge_client(lambda request: ok({'success': True}))

    assert await MenuRepository(client).delete_menu('m-1', hard_delete=hard_delete) is True

    assert requests[0].method == 'DELETE'
    assert requests[0].url.params['hard_delete'] == flag


@pytest.mark.asyncio
async def test_706_errors_propagate(edge_client):
    import httpx

    client, _ = edge_client(lambda request: httpx.Response(403, json={'success': False, 'error': 'Forbidden'}))

    with pytest.raises(ApiError):
        await MenuRepository(client).get_all_menus()


@pytest.mark.asyncio
@pytest.mark.parametrize('data', [
    {'menus': [{'name': 'no id'}]},
    {'menus': [{'id': 'm-1', 'children': [None]}]},
    {'menus': 'not-a-list-of-nodes'},
    [{'id': 'm-1'}],
])
async def test_707_malformed_menu_data_raises_api_error(edge_client, data):
    """TEST-707: 성공 응답이라도 메뉴 데이터 형식이 틀리면 ApiError"""
    client, _ = edge_client(lambda request: ok(data))
    repo = MenuRepository(client)

    with pytest.raises(ApiError, match="잘못된 응답 형식입니다."):
        await repo.get_admin_menus()
    with pytest.raises(ApiError, match="잘못된 응답 형식입니다."):
        await repo.get_all_menus()


@pytest.mark.asyncio
@pytest.mark.parametrize('data', [None, {}, {'menu': {'code': 'no_id'}}, ['m-1']])
async def test_708_malformed_menu_write_response(edge_client, data):
    client, _ = edge_client(lambda request: ok(data))
    repo = MenuRepository(client)

    with pytest.raises(ApiError):
        await repo.create_menu(MenuInput(code='a', name='A'))
    with pytest.raises(ApiError):
        await repo.update_menu('m-1', MenuInput(name='A'))


@pytest.mark.asyncio
async def test_709_malformed_permission_and_delete_response(edge_client):
    client, _ = edge_client(lambda request: ok({'permissions': [{'menu_id': 'm-1'}]}))
    with pytest.raises(ApiError):
        await MenuRepository(client).update_admin_menu_permissions('u-1', ['m-1'])

    client, _ = edge_client(lambda request: ok(['deleted']))
    with pytest.raises(ApiError):
        await MenuRepository(client).delete_menu('m-1')


@pytest.mark.asyncio
async def test_710_resolver_and_editor_survive_malformed_data(edge_client, admin):
    """TEST-710: 형식이 틀린 응답은 예외 없이 빈 트리와 오류 메시지로 처리"""
    client, _ = edge_client(lambda request: ok({'menus': [{'name': 'x'}]}))
    repo = MenuRepository(client)

    resolver = PermissionResolver(repo, MenuCache(), identity=admin)
    await resolver.load()

    assert not resolver.is_loading
    assert len(resolver.tree) == 0
    assert resolver.error == "잘못된 응답 형식입니다."
    assert resolver.has_access_to_path('/shops') is False

    editor = PermissionEditor(repo, MenuCache())
    await editor.open('u-target')

    assert not editor.is_loading
    assert len(editor.tree) == 0
    assert editor.selected_ids == set()
    assert "잘못된 응답 형식입니다." in editor.error
