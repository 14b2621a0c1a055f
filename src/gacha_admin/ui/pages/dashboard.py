"""
대시보드 페이지
"""

import streamlit as st

from gacha_admin.auth.models import is_unrestricted
from gacha_admin.context import AppContext
from gacha_admin.menu.tree import find_paths


def render_dashboard(context: AppContext):
    """대시보드 렌더링"""
    identity = context.session_store.identity
    st.title("🏠 대시보드")
    st.markdown(f"**{identity.display_name}**님, 환영합니다.")

    if is_unrestricted(identity):
        st.info("super_admin 계정은 모든 메뉴에 접근할 수 있습니다.")
        return

    paths = sorted(find_paths(context.resolver.tree))
    if not paths:
        st.warning("접근 가능한 메뉴가 없습니다. super_admin에게 권한을 요청하세요.")
        return

    st.subheader("접근 가능한 메뉴")
    for path in paths:
        st.markdown(f"- `{path}`")
