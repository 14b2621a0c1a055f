"""Authentication module for Gacha Admin."""

from gacha_admin.auth.models import (
    AccountStatus,
    AdminIdentity,
    AdminRole,
    ApprovalStatus,
    AuthSession,
    is_unrestricted,
)
from gacha_admin.auth.repository import AdminUserFilters, AdminUserRepository
from gacha_admin.auth.service import AuthService
from gacha_admin.auth.session import SessionStore

__all__ = [
    # Models
    'AdminIdentity',
    'AdminRole',
    'AccountStatus',
    'ApprovalStatus',
    'AuthSession',
    'is_unrestricted',
    # Session
    'SessionStore',
    # Repository
    'AdminUserFilters',
    'AdminUserRepository',
    # Service
    'AuthService',
]
