"""
권한 판별기

현재 관리자의 메뉴 권한으로 경로/메뉴 코드 접근 여부를 판단합니다.
어떤 메뉴가 보이는지는 서비스가 결정하고, 여기서는 포함 여부만 확인합니다.
"""

import time
from enum import Enum
from typing import Callable, Optional

from gacha_admin.application.menu_cache import CacheKey, MenuCache, ResourceKind
from gacha_admin.auth.models import AdminIdentity, is_unrestricted
from gacha_admin.exceptions import GachaAdminError
from gacha_admin.log.logger import get_logger
from gacha_admin.menu.repository import MenuRepository
from gacha_admin.menu.tree import MenuTree, find_codes, find_paths


class AccessStatus(Enum):
    """접근 판별 결과 (로딩 중은 허용도 거부도 아님)"""
    LOADING = "loading"
    ALLOWED = "allowed"
    DENIED = "denied"


class PermissionResolver:
    """
    메뉴 권한 판별기

    첫 로딩이 끝나기 전에는 is_loading이 True이며, 호출자는 이를 "알 수 없음"으로 취급해야 합니다.
    로딩이 실패하면 빈 트리로 간주합니다 (fail closed).
    """

    def __init__(
        self,
        menu_repo: MenuRepository,
        menu_cache: Optional[MenuCache] = None,
        identity: Optional[AdminIdentity] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Args:
            menu_repo: 메뉴 저장소
            menu_cache: 메뉴 캐시
            identity: 현재 관리자
            clock: 마지막 로딩 시각 기준 시계 (테스트에서 교체)
        """
        self.logger = get_logger('PermissionResolver')
        self.menu_repo = menu_repo
        self.menu_cache = menu_cache or MenuCache()
        self._identity = identity
        self._tree: Optional[MenuTree] = None
        self._loading = True
        self._generation = 0
        self._clock = clock
        self._loaded_at: Optional[float] = None
        self.error: Optional[str] = None

    @property
    def identity(self) -> Optional[AdminIdentity]:
        return self._identity

    @property
    def tree(self) -> MenuTree:
        return self._tree if self._tree is not None else MenuTree.empty()

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def is_stale(self) -> bool:
        """
        다시 로딩해야 하는지 여부

        로딩 전이거나, 마지막 로딩 후 메뉴 캐시 유효 시간이 지났으면 True입니다.
        화면은 매 실행마다 이 값을 확인해 권한 변경을 캐시 유효 시간 안에 반영합니다.
        """
        if self._loading or self._loaded_at is None:
            return True
        return self._clock() - self._loaded_at >= self.menu_cache.ttl

    def set_identity(self, identity: Optional[AdminIdentity]) -> None:
        """
        현재 관리자 변경

        다른 관리자로 바뀌면 트리를 버리고 다시 로딩 상태가 됩니다.
        """
        if identity == self._identity:
            return
        self._identity = identity
        self._tree = None
        self._loading = True
        self._loaded_at = None
        self._generation += 1
        self.error = None

    async def load(self, force: bool = False) -> None:
        """
        현재 관리자의 접근 가능 메뉴 로딩

        오류는 error에 기록하고 예외를 던지지 않습니다.

        Args:
            force: 캐시를 무시하고 다시 조회
        """
        identity = self._identity
        generation = self._generation

        if identity is None:
            self._tree = MenuTree.empty()
            self._loading = False
            self._loaded_at = self._clock()
            return

        error = None
        try:
            tree = await self.menu_cache.get_or_load(
                CacheKey(identity.id, ResourceKind.OWN_MENUS),
                self.menu_repo.get_admin_menus,
                force=force
            )
        except GachaAdminError as e:
            self.logger.error(f"Failed to load menus for {identity.email}: {e}")
            tree = MenuTree.empty()
            error = str(e)

        if generation != self._generation:
            self.logger.debug(f"Discarding stale menu load for {identity.email}")
            return

        self._tree = tree
        self.error = error
        self._loading = False
        self._loaded_at = self._clock()

    def has_access_to_path(self, path: str) -> bool:
        """
        경로 접근 권한 확인 (정확히 일치하는 경로만 허용)

        Args:
            path: 라우트 경로

        Returns:
            접근 가능 여부
        """
        if is_unrestricted(self._identity):
            return True
        if self._identity is None or self._tree is None:
            return False
        return path in find_paths(self._tree)

    def has_access_to_code(self, code: str) -> bool:
        """
        메뉴 코드 접근 권한 확인

        Args:
            code: 메뉴 코드

        Returns:
            접근 가능 여부
        """
        if is_unrestricted(self._identity):
            return True
        if self._identity is None or self._tree is None:
            return False
        return code in find_codes(self._tree)

    def status_for(self, path: str) -> AccessStatus:
        """로딩 상태를 포함한 경로 접근 판별"""
        if self._loading:
            return AccessStatus.LOADING
        return AccessStatus.ALLOWED if self.has_access_to_path(path) else AccessStatus.DENIED
