"""
메뉴 저장소

Edge Function을 통해 메뉴와 관리자별 메뉴 권한을 조회/변경하는 레포지토리입니다.
"""

from typing import List, Optional

from gacha_admin.api.client import EdgeFunctionClient, parsing_response
from gacha_admin.log.logger import get_logger
from gacha_admin.menu.models import AdminMenuPermission, MenuEntry, MenuInput
from gacha_admin.menu.tree import MenuTree


class MenuRepository:
    """
    메뉴 저장소

    메뉴 데이터의 원본은 외부 서비스에 있으며, 이 클래스는 요청을 만들고 응답을 해석합니다.
    """

    def __init__(self, client: EdgeFunctionClient):
        """
        Args:
            client: Edge Function 클라이언트
        """
        self.logger = get_logger('MenuRepository')
        self.client = client

    async def get_admin_menus(self, admin_id: Optional[str] = None) -> MenuTree:
        """
        관리자가 접근 가능한 메뉴 트리 조회

        Args:
            admin_id: 조회 대상 관리자 ID (없으면 로그인한 관리자 본인)

        Returns:
            권한이 부여된 메뉴만 포함한 MenuTree
        """
        if admin_id:
            data = await self.client.request("/admin-menus-get", method="POST", json={'admin_id': admin_id})
        else:
            data = await self.client.request("/admin-menus-get", method="GET")

        with parsing_response("/admin-menus-get"):
            tree = MenuTree.from_nested((data or {}).get('menus'))
        self.logger.debug(f"Loaded {len(tree)} granted menus for {admin_id or 'current admin'}")
        return tree

    async def get_all_menus(self) -> MenuTree:
        """
        전체 메뉴 트리 조회 (super_admin 전용, 비활성 메뉴 포함)

        Returns:
            전체 MenuTree
        """
        data = await self.client.request("/admin-menus-get-all", method="GET")
        with parsing_response("/admin-menus-get-all"):
            tree = MenuTree.from_nested((data or {}).get('menus'))
        self.logger.debug(f"Loaded {len(tree)} menus")
        return tree

    async def update_admin_menu_permissions(
        self, admin_id: str, menu_ids: List[str]
    ) -> List[AdminMenuPermission]:
        """
        관리자의 메뉴 권한 전체 교체

        Args:
            admin_id: 대상 관리자 ID
            menu_ids: 부여할 메뉴 ID 전체 목록 (차분이 아님)

        Returns:
            갱신된 권한 레코드 목록
        """
        data = await self.client.request(
            "/admin-menu-permissions-update",
            method="POST",
            json={'admin_user_id': admin_id, 'menu_ids': list(menu_ids)}
        )
        with parsing_response("/admin-menu-permissions-update"):
            permissions = [AdminMenuPermission.from_dict(item) for item in (data or {}).get('permissions') or []]
        self.logger.info(f"Replaced menu permissions for {admin_id}: {len(menu_ids)} menus")
        return permissions

    async def create_menu(self, menu: MenuInput) -> MenuEntry:
        """메뉴 생성 (super_admin 전용)"""
        data = await self.client.request("/admin-menus-create", method="POST", json=menu.to_payload())
        with parsing_response("/admin-menus-create"):
            created = MenuEntry.from_dict(data['menu'])
        self.logger.info(f"Created menu: {created.code} ({created.id})")
        return created

    async def update_menu(self, menu_id: str, menu: MenuInput) -> MenuEntry:
        """메뉴 수정 (super_admin 전용)"""
        data = await self.client.request(f"/admin-menus-update/{menu_id}", method="PUT", json=menu.to_payload())
        with parsing_response("/admin-menus-update"):
            updated = MenuEntry.from_dict(data['menu'])
        self.logger.info(f"Updated menu: {updated.code} ({updated.id})")
        return updated

    async def delete_menu(self, menu_id: str, hard_delete: bool = False) -> bool:
        """
        메뉴 삭제 (super_admin 전용)

        Args:
            menu_id: 메뉴 ID
            hard_delete: True면 영구 삭제, False면 비활성화

        Returns:
            성공 여부
        """
        data = await self.client.request(
            f"/admin-menus-delete/{menu_id}",
            method="DELETE",
            params={'hard_delete': 'true' if hard_delete else 'false'}
        )
        with parsing_response("/admin-menus-delete"):
            success = bool((data or {}).get('success', True))
        self.logger.info(f"Deleted menu {menu_id} (hard_delete={hard_delete}): {success}")
        return success
