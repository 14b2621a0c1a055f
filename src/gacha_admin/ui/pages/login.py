"""
로그인 페이지

관리자 인증을 처리하는 Streamlit 페이지입니다.
"""

import streamlit as st

from gacha_admin.context import AppContext
from gacha_admin.log.logger import get_logger
from gacha_admin.ui.session_state import run_async

# Logger 설정
logger = get_logger('LoginPage')


def render_login_page(context: AppContext):
    """로그인 페이지 렌더링"""
    st.title("🔐 관리자 로그인")

    flash = st.session_state.get('flash_message')
    if flash:
        st.success(flash)
        st.session_state.flash_message = None

    with st.form("login_form"):
        st.markdown("### 계정 정보를 입력하세요")

        email = st.text_input("이메일", placeholder="admin@example.com")
        password = st.text_input("비밀번호", type="password", placeholder="••••••••")

        submit = st.form_submit_button("로그인", use_container_width=True)

        if submit:
            handle_login(context, email, password)


def handle_login(context: AppContext, email: str, password: str):
    """
    로그인 처리

    Args:
        context: 현재 세션의 서비스
        email: 이메일
        password: 비밀번호
    """
    success, message, identity = run_async(context.auth_service.sign_in(email, password))

    if success:
        st.session_state.current_page = '/'
        logger.info(f"Admin logged in: {identity.email}")
        st.rerun()
    else:
        st.error(f"❌ {message}")
