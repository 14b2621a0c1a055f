"""
메뉴 서비스

메뉴 생성/수정/삭제 요청을 검증하고 메뉴 캐시를 관리합니다.
"""

import re
from typing import Optional, Tuple

from gacha_admin.application.menu_cache import CacheKey, MenuCache
from gacha_admin.exceptions import ApiError
from gacha_admin.log.logger import get_logger
from gacha_admin.menu.models import MenuEntry, MenuInput
from gacha_admin.menu.repository import MenuRepository
from gacha_admin.menu.tree import MenuTree

MENU_CODE_PATTERN = re.compile(r'^[a-z0-9_]+$')


def validate_menu_input(menu: MenuInput, menu_id: Optional[str] = None, partial: bool = False) -> Optional[str]:
    """
    메뉴 입력 검증

    Args:
        menu: 입력값
        menu_id: 수정 대상 메뉴 ID (생성이면 None)
        partial: True면 누락된 필수 필드를 허용 (수정 요청)

    Returns:
        오류 메시지 (문제가 없으면 None)
    """
    if not partial:
        if not menu.code:
            return "메뉴 코드를 입력하세요."
        if not menu.name:
            return "메뉴 이름을 입력하세요."

    if menu.code is not None and not MENU_CODE_PATTERN.match(menu.code):
        return "메뉴 코드는 영문 소문자, 숫자, 밑줄(_)만 사용할 수 있습니다."

    if menu.name is not None and not menu.name.strip():
        return "메뉴 이름을 입력하세요."

    if menu.path and not menu.path.startswith('/'):
        return "경로는 '/'로 시작해야 합니다."

    if menu.display_order is not None and menu.display_order < 0:
        return "정렬 순서는 0 이상이어야 합니다."

    if menu_id is not None and menu.parent_id == menu_id:
        return "자기 자신을 상위 메뉴로 지정할 수 없습니다."

    return None


class MenuAdminService:
    """
    메뉴 관리 서비스 (super_admin 전용 화면에서 사용)
    """

    def __init__(self, menu_repo: MenuRepository, menu_cache: Optional[MenuCache] = None):
        """
        Args:
            menu_repo: 메뉴 저장소
            menu_cache: 메뉴 캐시 (변경 시 무효화)
        """
        self.logger = get_logger('MenuAdminService')
        self.menu_repo = menu_repo
        self.menu_cache = menu_cache or MenuCache()

    async def get_all_menus(self, force: bool = False) -> MenuTree:
        """전체 메뉴 트리 조회 (캐시 사용)"""
        return await self.menu_cache.get_or_load(CacheKey.all_menus(), self.menu_repo.get_all_menus, force=force)

    def _invalidate(self) -> None:
        # 메뉴 구조가 바뀌면 모든 관리자의 메뉴 트리가 달라질 수 있음
        self.menu_cache.clear()

    async def create_menu(self, menu: MenuInput) -> Tuple[bool, str, Optional[MenuEntry]]:
        """
        메뉴 생성

        Args:
            menu: 생성할 메뉴 입력값

        Returns:
            (성공 여부, 메시지, 생성된 MenuEntry 또는 None)
        """
        error = validate_menu_input(menu)
        if error:
            return False, error, None

        try:
            created = await self.menu_repo.create_menu(menu)
        except ApiError as e:
            self.logger.error(f"Failed to create menu {menu.code}: {e.message}")
            return False, f"메뉴 생성 실패: {e.message}", None

        self._invalidate()
        return True, "메뉴가 생성되었습니다.", created

    async def update_menu(self, menu_id: str, menu: MenuInput) -> Tuple[bool, str, Optional[MenuEntry]]:
        """
        메뉴 수정

        Args:
            menu_id: 메뉴 ID
            menu: 변경할 필드만 채운 입력값

        Returns:
            (성공 여부, 메시지, 수정된 MenuEntry 또는 None)
        """
        error = validate_menu_input(menu, menu_id=menu_id, partial=True)
        if error:
            return False, error, None

        try:
            updated = await self.menu_repo.update_menu(menu_id, menu)
        except ApiError as e:
            self.logger.error(f"Failed to update menu {menu_id}: {e.message}")
            return False, f"메뉴 수정 실패: {e.message}", None

        self._invalidate()
        return True, "메뉴가 수정되었습니다.", updated

    async def delete_menu(self, menu_id: str, hard_delete: bool = False) -> Tuple[bool, str]:
        """
        메뉴 삭제

        Args:
            menu_id: 메뉴 ID
            hard_delete: 영구 삭제 여부

        Returns:
            (성공 여부, 메시지)
        """
        try:
            success = await self.menu_repo.delete_menu(menu_id, hard_delete=hard_delete)
        except ApiError as e:
            self.logger.error(f"Failed to delete menu {menu_id}: {e.message}")
            return False, f"메뉴 삭제 실패: {e.message}"

        if not success:
            return False, "메뉴 삭제 실패"

        self._invalidate()
        return True, "메뉴가 삭제되었습니다." if hard_delete else "메뉴가 비활성화되었습니다."
