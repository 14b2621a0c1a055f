"""
페이지 라우팅 시스템

메뉴 권한 기반 페이지 라우팅 및 동적 페이지 로딩을 처리합니다.
"""

import importlib
from typing import Callable, Optional

import streamlit as st

from gacha_admin.context import AppContext
from gacha_admin.log.logger import get_logger
from gacha_admin.permissions.guard import GuardState
from gacha_admin.ui.session_state import navigate_to, run_async

logger = get_logger('Router')


class PageRouter:
    """페이지 라우팅 관리 클래스"""

    def __init__(self, not_found_path: str = '/404'):
        """라우터 초기화"""
        self.not_found_path = not_found_path
        self.routes: dict[str, tuple[str, str, bool]] = {}
        self._register_default_routes()

    def _register_default_routes(self):
        """기본 라우트 등록"""
        # 로그인한 관리자 누구나
        self.register('/', 'gacha_admin.ui.pages.dashboard', 'render_dashboard', guarded=False)
        self.register(self.not_found_path, 'gacha_admin.ui.pages.not_found', 'render_not_found', guarded=False)

        # 메뉴 권한 필요
        self.register('/menus', 'gacha_admin.ui.pages.menus', 'render_menu_management_page')
        self.register('/admin-users', 'gacha_admin.ui.pages.admin_users', 'render_admin_users_page')

    def register(self, path: str, module_path: str, function_name: str, guarded: bool = True):
        """
        라우트 등록

        Args:
            path: 경로 (예: '/menus')
            module_path: 모듈 경로 (예: 'gacha_admin.ui.pages.menus')
            function_name: 렌더링 함수 이름
            guarded: 메뉴 권한 검사 여부
        """
        self.routes[path] = (module_path, function_name, guarded)
        logger.debug(f"Route registered: {path} -> {module_path}.{function_name}")

    def navigate(self, path: str, context: AppContext) -> bool:
        """
        페이지 탐색 및 렌더링

        Args:
            path: 이동할 경로
            context: 현재 세션의 서비스

        Returns:
            페이지를 렌더링했는지 여부
        """
        route = self.routes.get(path)
        guarded = route[2] if route else True

        if guarded:
            resolver = context.resolver
            if resolver.is_stale:
                with st.spinner("권한 확인 중..."):
                    run_async(resolver.load())

            decision = context.guard.evaluate(path)
            if decision.state == GuardState.LOADING:
                st.info("권한 확인 중...")
                return False
            if decision.should_redirect:
                navigate_to(decision.redirect_to, replace=decision.replace)
                return False
            if not decision.should_render:
                return False
        else:
            # 가드를 거치지 않는 페이지로 나가면 다음 보호 경로는 처음부터 판단
            context.guard.reset()

        if route is None:
            logger.warning(f"Route not found: {path}")
            navigate_to(self.not_found_path, replace=True)
            return False

        module_path, function_name, _ = route
        return self._render(path, module_path, function_name, context)

    def _render(self, path: str, module_path: str, function_name: str, context: AppContext) -> bool:
        try:
            module = importlib.import_module(module_path)
            render_function: Callable = getattr(module, function_name)
            render_function(context)
            return True
        except ModuleNotFoundError as e:
            st.error(f"❌ 페이지 모듈을 찾을 수 없습니다: {module_path}")
            logger.error(f"Module not found: {module_path} - {e}")
            return False
        except AttributeError as e:
            st.error(f"❌ 렌더링 함수를 찾을 수 없습니다: {function_name}")
            logger.error(f"Function not found: {function_name} in {module_path} - {e}")
            return False
        except Exception as e:
            st.error(f"❌ 페이지 렌더링 중 오류가 발생했습니다: {str(e)}")
            logger.error(f"Error rendering page {path}: {e}", exc_info=True)
            return False

    def get_routes(self) -> dict[str, tuple[str, str, bool]]:
        """
        등록된 모든 라우트 반환

        Returns:
            라우트 딕셔너리
        """
        return self.routes.copy()


# 전역 라우터 인스턴스
_router: Optional[PageRouter] = None


def get_router(not_found_path: str = '/404') -> PageRouter:
    """
    전역 라우터 인스턴스 반환

    Returns:
        PageRouter 인스턴스
    """
    global _router
    if _router is None:
        _router = PageRouter(not_found_path)
    return _router
