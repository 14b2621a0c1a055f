"""
메뉴 관리 페이지

super_admin이 메뉴를 생성, 수정, 삭제하는 페이지입니다.
"""

from typing import List, Optional

import pandas as pd
import streamlit as st

from gacha_admin.auth.models import is_unrestricted
from gacha_admin.context import AppContext
from gacha_admin.exceptions import ApiError
from gacha_admin.log.logger import get_logger
from gacha_admin.menu.models import MenuEntry, MenuInput
from gacha_admin.menu.service import MenuAdminService
from gacha_admin.menu.tree import MenuTree
from gacha_admin.ui.session_state import run_async

# Logger 설정
logger = get_logger('MenuManagementPage')

NO_PARENT = "(최상위)"


def render_menu_management_page(context: AppContext):
    """메뉴 관리 페이지 렌더링"""
    st.title("📑 메뉴 관리")

    if not is_unrestricted(context.session_store.identity):
        st.error("❌ super_admin만 메뉴를 관리할 수 있습니다.")
        return

    service = context.menu_admin_service

    try:
        tree = run_async(service.get_all_menus())
    except ApiError as e:
        logger.error(f"Failed to load menus: {e.message}")
        st.error(f"메뉴를 불러오지 못했습니다: {e.message}")
        if st.button("다시 시도"):
            run_async(service.get_all_menus(force=True))
            st.rerun()
        return

    tab1, tab2 = st.tabs(["📋 메뉴 목록", "➕ 메뉴 생성"])

    with tab1:
        render_menu_list(service, tree)

    with tab2:
        render_menu_form(service, tree)


def menus_to_dataframe(tree: MenuTree) -> pd.DataFrame:
    """트리를 들여쓰기한 이름의 표로 변환"""
    rows = []
    for entry in tree.flatten():
        rows.append({
            '이름': "　" * tree.depth_of(entry.id) + entry.name,
            '코드': entry.code,
            '경로': entry.path or '',
            '순서': entry.display_order,
            '활성': entry.is_active,
            '설명': entry.description or '',
        })
    return pd.DataFrame(rows, columns=['이름', '코드', '경로', '순서', '활성', '설명'])


def render_menu_list(service: MenuAdminService, tree: MenuTree):
    """메뉴 목록 렌더링"""
    if len(tree) == 0:
        st.info("메뉴가 없습니다.")
        return

    st.dataframe(menus_to_dataframe(tree), use_container_width=True, hide_index=True)

    for entry in tree.flatten():
        with st.expander(f"{'🟢' if entry.is_active else '🔴'} {entry.name} ({entry.code})"):
            render_menu_form(service, tree, entry)

            col1, col2 = st.columns(2)
            with col1:
                if st.button("비활성화", key=f"soft_delete_{entry.id}", disabled=not entry.is_active):
                    handle_delete_menu(service, entry, hard_delete=False)
            with col2:
                if st.button("🗑️ 영구 삭제", key=f"hard_delete_{entry.id}", type="secondary"):
                    handle_delete_menu(service, entry, hard_delete=True)


def _parent_options(tree: MenuTree, editing: Optional[MenuEntry]) -> List[Optional[str]]:
    # 자기 자신과 하위 메뉴는 상위 메뉴가 될 수 없음
    excluded = set(tree.descendants(editing.id)) if editing else set()
    return [None] + [entry.id for entry in tree.flatten() if entry.id not in excluded]


def render_menu_form(service: MenuAdminService, tree: MenuTree, editing: Optional[MenuEntry] = None):
    """
    메뉴 생성/수정 폼 렌더링

    Args:
        service: 메뉴 관리 서비스
        tree: 전체 메뉴 트리
        editing: 수정할 메뉴 (None이면 생성)
    """
    form_key = f"menu_form_{editing.id}" if editing else "menu_form_new"
    parent_options = _parent_options(tree, editing)

    def parent_label(menu_id: Optional[str]) -> str:
        if menu_id is None:
            return NO_PARENT
        entry = tree.get(menu_id)
        return f"{entry.name} ({entry.code})" if entry else menu_id

    with st.form(form_key):
        code = st.text_input("메뉴 코드", value=editing.code if editing else "", placeholder="shop_management")
        name = st.text_input("메뉴 이름", value=editing.name if editing else "")
        description = st.text_input("설명", value=(editing.description or "") if editing else "")
        path = st.text_input("경로", value=(editing.path or "") if editing else "", placeholder="/shops")
        icon = st.text_input("아이콘", value=(editing.icon or "") if editing else "")

        current_parent = editing.parent_id if editing else None
        parent_id = st.selectbox(
            "상위 메뉴",
            options=parent_options,
            index=parent_options.index(current_parent) if current_parent in parent_options else 0,
            format_func=parent_label
        )
        display_order = st.number_input(
            "정렬 순서", min_value=0, step=1, value=editing.display_order if editing else 0
        )
        is_active = st.checkbox("활성화", value=editing.is_active if editing else True)

        submit = st.form_submit_button("저장" if editing else "생성")

    if not submit:
        return

    menu_input = MenuInput(
        code=code.strip(),
        name=name.strip(),
        description=description.strip() or None,
        parent_id=parent_id,
        path=path.strip() or None,
        icon=icon.strip() or None,
        display_order=int(display_order),
        is_active=is_active
    )

    if editing:
        success, message, _ = run_async(service.update_menu(editing.id, menu_input))
    else:
        success, message, _ = run_async(service.create_menu(menu_input))

    if success:
        st.success(f"✅ {message}")
        st.rerun()
    else:
        st.error(f"❌ {message}")


def handle_delete_menu(service: MenuAdminService, entry: MenuEntry, hard_delete: bool):
    """메뉴 삭제 처리"""
    success, message = run_async(service.delete_menu(entry.id, hard_delete=hard_delete))
    if success:
        logger.info(f"Menu {entry.code} deleted (hard_delete={hard_delete})")
        st.success(f"✅ {message}")
        st.rerun()
    else:
        st.error(f"❌ {message}")
