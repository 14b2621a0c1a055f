"""
Session state management module for the Streamlit console.

This module provides functions for initializing and managing Streamlit
session state variables.
"""

import asyncio
from typing import Awaitable, TypeVar

import streamlit as st

from gacha_admin.adapters.streamlit_cache import StreamlitCacheProvider
from gacha_admin.config import load_config
from gacha_admin.context import AppContext, build_context

T = TypeVar('T')

DEFAULT_PAGE = '/'


def initialize_session_state():
    """
    Initialize all session state variables with default values.

    This function should be called at the start of the Streamlit app
    to ensure all required session state variables exist.
    """
    defaults = {
        'app_context': None,
        # Navigation state
        'current_page': DEFAULT_PAGE,
        # Permission dialog state
        'permission_editor': None,
        'permission_target_name': None,
        'flash_message': None,
    }

    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def get_app_context() -> AppContext:
    """Return this browser session's services, creating them on first use."""
    if st.session_state.get('app_context') is None:
        st.session_state.app_context = build_context(load_config(), cache_provider=StreamlitCacheProvider())
    return st.session_state.app_context


def run_async(coro: Awaitable[T]) -> T:
    """Drive one coroutine to completion from a Streamlit script run."""
    return asyncio.run(coro)


def navigate_to(path: str, replace: bool = False):
    """
    Change the current page and rerun the script.

    Args:
        path: Destination path
        replace: Replace the current entry instead of recording it in recent history
    """
    if not replace:
        history = st.session_state.setdefault('page_history', [])
        history.append(st.session_state.get('current_page', DEFAULT_PAGE))
    st.session_state.current_page = path
    st.rerun()
