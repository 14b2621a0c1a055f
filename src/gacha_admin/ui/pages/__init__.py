"""Streamlit pages for the Gacha Admin console."""
