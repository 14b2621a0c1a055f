"""
네비게이션 컴포넌트

현재 관리자에게 허용된 메뉴 트리로 사이드바를 렌더링합니다.
"""

import streamlit as st

from gacha_admin.auth.models import AdminIdentity
from gacha_admin.context import AppContext
from gacha_admin.log.logger import get_logger
from gacha_admin.menu.tree import MenuTree
from gacha_admin.ui.session_state import navigate_to, run_async

logger = get_logger('Navigation')

INDENT = "　"


class NavigationMenu:
    """네비게이션 메뉴 관리 클래스"""

    def __init__(self, identity: AdminIdentity, context: AppContext):
        """
        Args:
            identity: 현재 로그인한 관리자
            context: 현재 세션의 서비스
        """
        self.identity = identity
        self.context = context

    def render(self):
        """사이드바 네비게이션 렌더링"""
        st.sidebar.header("🧭 Navigation")
        self._render_user_info()
        st.sidebar.markdown("---")

        if st.sidebar.button("🏠 대시보드", key="nav_home", use_container_width=True):
            navigate_to('/')

        resolver = self.context.resolver
        if resolver.is_stale:
            run_async(resolver.load())

        if resolver.error:
            st.sidebar.error(f"메뉴를 불러오지 못했습니다: {resolver.error}")
            if st.sidebar.button("🔄 다시 시도", key="nav_retry"):
                run_async(resolver.load(force=True))
                st.rerun()
        else:
            self._render_menu_tree(resolver.tree)

        st.sidebar.markdown("---")
        if st.sidebar.button("🚪 로그아웃", use_container_width=True):
            self._handle_logout()

    def _render_user_info(self):
        """관리자 정보 표시"""
        st.sidebar.markdown(f"**👤 {self.identity.display_name}**")
        st.sidebar.caption(f"역할: {self.identity.role.value}")

    def _render_menu_tree(self, tree: MenuTree):
        """
        메뉴 트리 렌더링 (경로 없는 메뉴는 제목으로만 표시)

        Args:
            tree: 접근 가능한 메뉴 트리
        """
        current_page = st.session_state.get('current_page', '/')

        for entry in tree.flatten():
            if not entry.is_active:
                continue
            indent = INDENT * tree.depth_of(entry.id)
            label = f"{indent}{entry.icon or '📄'} {entry.name}"

            if not entry.is_routable():
                st.sidebar.markdown(f"**{label}**")
                continue

            button_type = "primary" if current_page == entry.path else "secondary"
            if st.sidebar.button(label, key=f"nav_{entry.id}", use_container_width=True, type=button_type):
                logger.info(f"Admin {self.identity.email} navigated to {entry.path}")
                navigate_to(entry.path)

    def _handle_logout(self):
        """로그아웃 처리"""
        _, message = self.context.auth_service.sign_out()
        st.session_state.current_page = '/'
        st.session_state.permission_editor = None
        st.session_state.flash_message = message
        st.rerun()


def render_sidebar_navigation(identity: AdminIdentity, context: AppContext):
    """
    사이드바 네비게이션 렌더링

    Args:
        identity: 현재 로그인한 관리자
        context: 현재 세션의 서비스
    """
    NavigationMenu(identity, context).render()
