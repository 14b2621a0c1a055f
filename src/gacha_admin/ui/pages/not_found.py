"""
Not-found 페이지

존재하지 않거나 권한이 없는 경로로 이동했을 때 표시됩니다.
"""

import streamlit as st

from gacha_admin.context import AppContext
from gacha_admin.ui.session_state import navigate_to


def render_not_found(context: AppContext):
    st.title("404")
    st.markdown("요청하신 페이지를 찾을 수 없습니다.")
    if st.button("대시보드로 이동"):
        navigate_to('/', replace=True)
