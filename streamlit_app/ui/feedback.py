"""
Standardized feedback utilities for consistent error, empty, and loading states.

Every page reports API failures through show_api_error(), which is the one
place that decides severity: an unreachable backend is a warning (try again
later), anything the backend rejected is an error.
"""

import logging
from contextlib import contextmanager
from typing import Optional

import streamlit as st

from foodieframe.errors import ValidationError, is_transport_error, user_message

logger = logging.getLogger(__name__)


def show_error(message: str, hint: Optional[str] = None) -> None:
    """
    Display a standardized error message with optional hint.

    Args:
        message: Main error message to display
        hint: Optional hint text to help users resolve the issue
    """
    st.error(f"⚠️ {message}")
    if hint:
        st.caption(f"💡 {hint}")


def show_api_error(exc: BaseException, hint: Optional[str] = None) -> None:
    """
    Display any exception raised by the FoodieFrame client.

    Args:
        exc: The caught exception
        hint: Optional hint shown below the message
    """
    if is_transport_error(exc):
        st.warning(f"📡 {user_message(exc)}")
        if hint:
            st.caption(f"💡 {hint}")
        return
    if isinstance(exc, ValidationError):
        for message in exc.errors.values():
            st.error(message)
        return
    logger.debug("Showing API error to user: %s", exc)
    show_error(user_message(exc), hint)


def show_empty_state(
    title: str,
    subtitle: Optional[str] = None,
    action_label: str = "Get started",
    action_page_path: Optional[str] = None
) -> None:
    """
    Display a standardized empty state with optional action button.

    Args:
        title: Main empty state title
        subtitle: Optional subtitle/description text
        action_label: Label for the action button
        action_page_path: Optional page path to navigate to when button is clicked
    """
    st.info(f"📭 **{title}**")
    if subtitle:
        st.caption(subtitle)

    if action_page_path:
        if st.button(action_label, use_container_width=True, type="primary"):
            st.switch_page(action_page_path)


@contextmanager
def working_spinner(label: str = "Working…"):
    """
    Context manager wrapper for standardized loading spinners.

    Usage:
        with working_spinner("Loading recipes…"):
            listing.refresh()
    """
    with st.spinner(label):
        yield
