"""
메뉴 권한 편집기

super_admin이 한 관리자의 메뉴 권한 전체를 조회하고 교체하는 화면의 상태를 관리합니다.
표시는 ui.pages.admin_users에서 담당합니다.
"""

import asyncio
from typing import FrozenSet, Optional, Set

from gacha_admin.application.menu_cache import CacheKey, MenuCache
from gacha_admin.exceptions import GachaAdminError, SaveInProgressError
from gacha_admin.log.logger import get_logger
from gacha_admin.menu.repository import MenuRepository
from gacha_admin.menu.tree import MenuTree, extract_ids


class PermissionEditor:
    """
    메뉴 권한 편집기

    open() 한 번이 하나의 편집 세션입니다. 세션마다 번호를 매겨,
    닫히거나 다른 대상으로 다시 열린 뒤 도착한 응답은 버립니다.
    """

    def __init__(self, menu_repo: MenuRepository, menu_cache: Optional[MenuCache] = None):
        """
        Args:
            menu_repo: 메뉴 저장소
            menu_cache: 메뉴 캐시 (저장 성공 시 대상 관리자 항목 무효화)
        """
        self.logger = get_logger('PermissionEditor')
        self.menu_repo = menu_repo
        self.menu_cache = menu_cache or MenuCache()
        self._generation = 0
        self.is_open = False
        self._reset()

    def _reset(self) -> None:
        self.target_admin_id: Optional[str] = None
        self.tree = MenuTree.empty()
        self.error: Optional[str] = None
        self._selection: Set[str] = set()
        self._tree_loaded = False
        self._grants_loaded = False
        self._saving = False

    @property
    def is_loading(self) -> bool:
        return self.is_open and not (self._tree_loaded and self._grants_loaded)

    @property
    def is_ready(self) -> bool:
        return self.is_open and self._tree_loaded and self._grants_loaded

    @property
    def is_saving(self) -> bool:
        return self._saving

    @property
    def selected_ids(self) -> FrozenSet[str]:
        return frozenset(self._selection)

    def is_checked(self, menu_id: str) -> bool:
        return menu_id in self._selection

    def _is_current(self, generation: int) -> bool:
        return self.is_open and generation == self._generation

    async def open(self, target_admin_id: str) -> None:
        """
        편집 세션 시작

        전체 메뉴 트리와 대상 관리자의 권한을 동시에 조회합니다.
        선택 상태는 권한 조회가 끝난 뒤에만 채워집니다.

        Args:
            target_admin_id: 권한을 편집할 관리자 ID
        """
        self._generation += 1
        generation = self._generation
        self._reset()
        self.is_open = True
        self.target_admin_id = target_admin_id

        await asyncio.gather(
            self._load_tree(generation),
            self._load_grants(generation, target_admin_id)
        )

    async def _load_tree(self, generation: int) -> None:
        try:
            tree = await self.menu_cache.get_or_load(CacheKey.all_menus(), self.menu_repo.get_all_menus)
        except GachaAdminError as e:
            if self._is_current(generation):
                self.logger.error(f"Failed to load menu tree: {e}")
                self.tree = MenuTree.empty()
                self.error = f"메뉴 조회 실패: {e}"
                self._tree_loaded = True
            return

        if not self._is_current(generation):
            self.logger.debug("Discarding stale menu tree response")
            return
        self.tree = tree
        self._tree_loaded = True

    async def _load_grants(self, generation: int, target_admin_id: str) -> None:
        try:
            # 저장 직후의 변경이 보이도록 항상 새로 조회
            granted = await self.menu_repo.get_admin_menus(target_admin_id)
        except GachaAdminError as e:
            if self._is_current(generation):
                self.logger.error(f"Failed to load menu permissions for {target_admin_id}: {e}")
                self.error = f"권한 조회 실패: {e}"
                self._selection = set()
                self._grants_loaded = True
            return

        if not self._is_current(generation):
            self.logger.debug(f"Discarding stale permission response for {target_admin_id}")
            return
        self._selection = extract_ids(granted)
        self._grants_loaded = True

    def toggle(self, menu_id: str, checked: bool) -> None:
        """메뉴 하나의 선택 상태 변경"""
        if checked:
            self._selection.add(menu_id)
        else:
            self._selection.discard(menu_id)

    def toggle_with_descendants(self, menu_id: str, checked: bool) -> None:
        """
        메뉴와 모든 하위 메뉴의 선택 상태를 함께 변경

        Args:
            menu_id: 상위 메뉴 ID
            checked: 선택 여부
        """
        menu_ids = self.tree.descendants(menu_id) or [menu_id]
        for descendant_id in menu_ids:
            self.toggle(descendant_id, checked)

    async def save(self) -> bool:
        """
        현재 선택을 대상 관리자의 전체 권한으로 저장

        실패하면 선택 상태를 그대로 두고 error에 메시지를 남깁니다.

        Returns:
            저장 성공 여부

        Raises:
            SaveInProgressError: 저장 요청이 이미 진행 중인 경우
        """
        if self._saving:
            raise SaveInProgressError("권한 저장이 이미 진행 중입니다.")

        if not self.is_ready or self.target_admin_id is None:
            self.error = "메뉴 권한을 불러온 뒤에 저장할 수 있습니다."
            return False

        generation = self._generation
        target_admin_id = self.target_admin_id
        menu_ids = sorted(self._selection)

        self._saving = True
        try:
            await self.menu_repo.update_admin_menu_permissions(target_admin_id, menu_ids)
        except GachaAdminError as e:
            self.logger.error(f"Failed to save menu permissions for {target_admin_id}: {e}")
            if generation == self._generation:
                self.error = f"권한 저장 실패: {e}"
            return False
        finally:
            if generation == self._generation:
                self._saving = False

        # 저장된 관리자의 권한/메뉴 캐시 무효화
        self.menu_cache.invalidate_identity(target_admin_id)
        if generation == self._generation:
            self.error = None
        self.logger.info(f"Saved {len(menu_ids)} menu permissions for {target_admin_id}")
        return True

    def close(self) -> None:
        """편집 세션 종료 (저장하지 않은 선택은 버림)"""
        self._generation += 1
        self.is_open = False
        self._reset()
