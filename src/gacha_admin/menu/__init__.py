"""Menu management module for Gacha Admin."""

from gacha_admin.menu.models import AdminMenuPermission, MenuEntry, MenuInput
from gacha_admin.menu.repository import MenuRepository
from gacha_admin.menu.service import MenuAdminService, validate_menu_input
from gacha_admin.menu.tree import MenuTree, extract_ids, find_codes, find_paths, flatten

__all__ = [
    'MenuEntry',
    'MenuInput',
    'AdminMenuPermission',
    'MenuTree',
    'flatten',
    'extract_ids',
    'find_paths',
    'find_codes',
    'MenuRepository',
    'MenuAdminService',
    'validate_menu_input',
]
