"""Configuration module for Gacha Admin."""

from gacha_admin.config.config import Config, load_config

__all__ = ['Config', 'load_config']
