"""
Streamlit console for Gacha Admin.

Run with ``streamlit run -m gacha_admin.ui.app`` or the ``gacha-admin`` script.
"""
