"""
Gacha Admin Package

Menu-permission access control and admin console for the gacha shop directory.
"""

from gacha_admin.config import Config, load_config
from gacha_admin.context import AppContext, build_context
from gacha_admin.exceptions import ApiError, AuthenticationRequiredError, GachaAdminError, SaveInProgressError
from gacha_admin.log.logger import setup_logger

__version__ = "0.1.0"

__all__ = [
    # Config & Logger
    'Config', 'load_config', 'setup_logger',

    # Wiring
    'AppContext', 'build_context',

    # Errors
    'GachaAdminError', 'ApiError', 'AuthenticationRequiredError', 'SaveInProgressError',
]
