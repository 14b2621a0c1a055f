"""
Adapters - framework-specific implementations of application interfaces.
"""

from gacha_admin.adapters.streamlit_cache import StreamlitCacheProvider

__all__ = ['StreamlitCacheProvider']
