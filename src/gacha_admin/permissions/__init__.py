"""Menu-permission access control for Gacha Admin."""

from gacha_admin.permissions.editor import PermissionEditor
from gacha_admin.permissions.guard import GuardDecision, GuardState, RouteGuard
from gacha_admin.permissions.resolver import AccessStatus, PermissionResolver

__all__ = [
    'AccessStatus',
    'PermissionResolver',
    'GuardState',
    'GuardDecision',
    'RouteGuard',
    'PermissionEditor',
]
