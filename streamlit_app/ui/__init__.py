"""
UI feedback components shared by all FoodieFrame pages.
"""

from streamlit_app.ui.feedback import show_api_error, show_empty_state, show_error, working_spinner

__all__ = [
    "show_api_error",
    "show_empty_state",
    "show_error",
    "working_spinner",
]
