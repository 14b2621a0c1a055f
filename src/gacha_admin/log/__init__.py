"""Logging module for Gacha Admin."""

from gacha_admin.log.logger import cleanup_logger, get_logger, setup_logger

__all__ = [
    'setup_logger',
    'cleanup_logger',
    'get_logger',
]
