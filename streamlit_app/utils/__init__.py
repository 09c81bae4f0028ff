"""
Utility modules for the Streamlit frontend.

This package contains:
- session: Per-browser-session FoodieFrame client and login state
"""
