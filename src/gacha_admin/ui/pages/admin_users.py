"""
관리자 계정 페이지

super_admin이 관리자 목록을 보고 관리자별 메뉴 권한을 편집하는 페이지입니다.
"""

from typing import List

import pandas as pd
import streamlit as st

from gacha_admin.auth.models import AdminIdentity, AdminRole, is_unrestricted
from gacha_admin.auth.repository import AdminUserFilters
from gacha_admin.context import AppContext
from gacha_admin.exceptions import ApiError, SaveInProgressError
from gacha_admin.log.logger import get_logger
from gacha_admin.permissions.editor import PermissionEditor
from gacha_admin.ui.session_state import run_async

# Logger 설정
logger = get_logger('AdminUsersPage')

ALL = "all"


def render_admin_users_page(context: AppContext):
    """관리자 계정 페이지 렌더링"""
    st.title("👥 관리자 계정")

    if not is_unrestricted(context.session_store.identity):
        st.error("❌ super_admin만 관리자 권한을 관리할 수 있습니다.")
        return

    flash = st.session_state.get('flash_message')
    if flash:
        st.success(flash)
        st.session_state.flash_message = None

    editor = st.session_state.get('permission_editor')
    if editor is not None and editor.is_open:
        render_permission_editor(editor, st.session_state.get('permission_target_name') or '')
        st.markdown("---")

    render_admin_user_list(context)


def admin_users_to_dataframe(users: List[AdminIdentity]) -> pd.DataFrame:
    rows = [{
        '이메일': user.email,
        '이름': user.full_name or '',
        '역할': user.role.value,
        '상태': user.status.value,
        '승인': user.approval_status.value,
        '마지막 로그인': user.last_login_at.strftime('%Y-%m-%d %H:%M') if user.last_login_at else '',
    } for user in users]
    return pd.DataFrame(rows, columns=['이메일', '이름', '역할', '상태', '승인', '마지막 로그인'])


def render_admin_user_list(context: AppContext):
    """관리자 목록 렌더링"""
    st.subheader("관리자 목록")

    col1, col2 = st.columns(2)
    with col1:
        role = st.selectbox("역할", options=[ALL] + [r.value for r in AdminRole])
    with col2:
        search = st.text_input("검색", placeholder="이메일 또는 이름")

    filters = AdminUserFilters(role=role, approval_status=ALL, status=ALL, search=search or None)

    try:
        users = run_async(context.admin_user_repo.list_admin_users(filters))
    except ApiError as e:
        logger.error(f"Failed to load admin users: {e.message}")
        st.error(f"관리자 목록을 불러오지 못했습니다: {e.message}")
        return

    if not users:
        st.info("등록된 관리자가 없습니다.")
        return

    st.dataframe(admin_users_to_dataframe(users), use_container_width=True, hide_index=True)

    for user in users:
        col1, col2 = st.columns([3, 1])
        with col1:
            st.markdown(f"**{user.display_name}** ({user.role.value})")
        with col2:
            # super_admin은 권한 테이블의 제약을 받지 않음
            if st.button("메뉴 권한", key=f"perm_open_{user.id}", disabled=is_unrestricted(user)):
                handle_open_editor(context, user)


def handle_open_editor(context: AppContext, user: AdminIdentity):
    """권한 편집 세션 시작"""
    editor = st.session_state.get('permission_editor')
    if editor is None:
        editor = context.new_permission_editor()
        st.session_state.permission_editor = editor

    with st.spinner("메뉴 로딩 중..."):
        run_async(editor.open(user.id))

    st.session_state.permission_target_name = user.display_name
    st.session_state.permission_editor_version = 0
    st.rerun()


def _on_toggle(editor: PermissionEditor, menu_id: str, widget_key: str, cascade: bool):
    checked = st.session_state[widget_key]
    if cascade:
        editor.toggle_with_descendants(menu_id, checked)
    else:
        editor.toggle(menu_id, checked)
    # 위젯 키를 바꿔 하위 체크박스가 새 선택 상태로 다시 그려지게 함
    st.session_state.permission_editor_version = st.session_state.get('permission_editor_version', 0) + 1


def render_permission_editor(editor: PermissionEditor, target_name: str):
    """
    메뉴 권한 편집 영역 렌더링

    Args:
        editor: 열린 PermissionEditor
        target_name: 대상 관리자 표시 이름
    """
    st.subheader("메뉴 권한 관리")
    st.markdown(f"**{target_name}** 관리자가 접근할 수 있는 메뉴를 선택하세요.")

    if editor.error:
        st.error(editor.error)

    if editor.is_loading:
        st.info("메뉴 로딩 중...")
    elif len(editor.tree) == 0:
        st.info("메뉴가 없습니다.")
    else:
        version = st.session_state.get('permission_editor_version', 0)
        tree = editor.tree
        for entry in tree.flatten():
            widget_key = f"perm_{version}_{entry.id}"
            label = "　" * tree.depth_of(entry.id) + entry.name
            if entry.description:
                label += f" ({entry.description})"
            st.checkbox(
                label,
                value=editor.is_checked(entry.id),
                key=widget_key,
                on_change=_on_toggle,
                args=(editor, entry.id, widget_key, tree.has_children(entry.id))
            )

    col1, col2 = st.columns(2)
    with col1:
        if st.button("취소", key="perm_cancel"):
            editor.close()
            st.rerun()
    with col2:
        save_label = "저장 중..." if editor.is_saving else "저장"
        if st.button(save_label, key="perm_save", type="primary", disabled=editor.is_saving or not editor.is_ready):
            handle_save_permissions(editor, target_name)


def handle_save_permissions(editor: PermissionEditor, target_name: str):
    """권한 저장 처리 (실패하면 선택 상태를 유지한 채 다시 시도할 수 있음)"""
    try:
        saved = run_async(editor.save())
    except SaveInProgressError as e:
        st.warning(str(e))
        return

    if saved:
        logger.info(f"Menu permissions saved for {target_name}")
        editor.close()
        st.session_state.flash_message = f"{target_name} 관리자의 메뉴 권한이 저장되었습니다."
        st.rerun()
    else:
        st.error(editor.error or "권한 저장 실패")
