import streamlit as st

from gacha_admin.log.logger import get_logger, setup_logger
from gacha_admin.ui.navigation import render_sidebar_navigation
from gacha_admin.ui.pages.login import render_login_page
from gacha_admin.ui.router import get_router
from gacha_admin.ui.session_state import get_app_context, initialize_session_state

# Set up logger for app.py
app_logger = get_logger('StreamlitApp')


def configure_logging(log_file: str, log_level: str):
    """Attach the file handler once the log file location is known."""
    global app_logger
    app_logger = setup_logger("StreamlitApp", log_file, log_level)


def main():
    st.set_page_config(page_title="Gacha Admin", layout="wide")

    # Initialize session state
    initialize_session_state()

    try:
        context = get_app_context()
    except ValueError as e:
        app_logger.error(f"설정 로드 실패: {e}")
        st.error(f"설정을 로드할 수 없습니다: {e}")
        return

    if not st.session_state.get("logging_configured"):
        configure_logging(context.config.log_file, context.config.log_level)
        st.session_state.logging_configured = True

    identity = context.session_store.identity
    if identity is None:
        render_login_page(context)
        return

    render_sidebar_navigation(identity, context)

    router = get_router(context.config.not_found_path)
    router.navigate(st.session_state.current_page, context)


if __name__ == "__main__":
    main()
