"""
라우트 가드

화면 이동마다 권한 판별기를 확인해 페이지를 그릴지, not-found로 보낼지 결정합니다.
UI 프레임워크와 무관한 상태 기계이며, Streamlit 연결은 ui.router에서 합니다.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gacha_admin.auth.models import is_unrestricted
from gacha_admin.log.logger import get_logger
from gacha_admin.permissions.resolver import PermissionResolver

logger = get_logger(__name__)

DEFAULT_NOT_FOUND_PATH = "/404"


class GuardState(Enum):
    """가드 상태"""
    LOADING = "loading"
    ALLOWED = "allowed"
    DENIED = "denied"


@dataclass(frozen=True)
class GuardDecision:
    """
    가드 판단 결과

    Attributes:
        state: 가드 상태
        path: 판단한 경로
        redirect_to: 이동할 경로 (거부된 경우 한 번만 설정)
        replace: 현재 기록을 대체해야 하는지 여부
    """
    state: GuardState
    path: str
    redirect_to: Optional[str] = None
    replace: bool = False

    @property
    def should_render(self) -> bool:
        return self.state == GuardState.ALLOWED

    @property
    def should_redirect(self) -> bool:
        return self.redirect_to is not None


class RouteGuard:
    """
    경로별 접근 상태 기계

    LOADING에서 시작해 ALLOWED 또는 DENIED로 끝납니다.
    경로가 바뀌면 LOADING부터 다시 판단합니다.
    """

    def __init__(self, resolver: PermissionResolver, not_found_path: str = DEFAULT_NOT_FOUND_PATH):
        self.resolver = resolver
        self.not_found_path = not_found_path
        self.state = GuardState.LOADING
        self.current_path: Optional[str] = None
        self._redirect_issued = False

    def reset(self) -> None:
        self.state = GuardState.LOADING
        self.current_path = None
        self._redirect_issued = False

    def evaluate(self, path: str) -> GuardDecision:
        """
        경로 접근 판단

        Args:
            path: 현재 이동 경로

        Returns:
            GuardDecision
        """
        if path != self.current_path:
            self.reset()
            self.current_path = path

        if self.resolver.is_loading:
            self.state = GuardState.LOADING
            return GuardDecision(GuardState.LOADING, path)

        if is_unrestricted(self.resolver.identity) or self.resolver.has_access_to_path(path):
            self.state = GuardState.ALLOWED
            return GuardDecision(GuardState.ALLOWED, path)

        self.state = GuardState.DENIED
        if self._redirect_issued:
            return GuardDecision(GuardState.DENIED, path)

        self._redirect_issued = True
        identity = self.resolver.identity
        logger.warning(f"Access denied: {identity.email if identity else 'anonymous'} -> {path}")
        return GuardDecision(GuardState.DENIED, path, redirect_to=self.not_found_path, replace=True)
