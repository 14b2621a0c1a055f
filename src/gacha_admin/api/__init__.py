"""Edge Function API client for Gacha Admin."""

from gacha_admin.api.client import EdgeFunctionClient

__all__ = ['EdgeFunctionClient']
