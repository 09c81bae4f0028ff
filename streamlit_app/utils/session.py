"""
Session management utilities for Streamlit pages.

Streamlit reruns every page script on each interaction, so anything that must
survive navigation lives in st.session_state. This module keeps two things
there:
- the serialized FoodieFrame session (via StreamlitSessionStorage), so the
  logged-in user persists across pages within one browser session
- one FoodieFrameClient per browser session (get_client), so HTTP connections
  are reused between reruns

A 401 anywhere clears the session and sets AUTH_EXPIRED_KEY. Pages catch
AuthenticationError around calls that raise and call redirect_to_login(), and
end with redirect_if_auth_expired() for calls that only record their errors.

# NOTE: st.session_state is per browser tab. Refreshing the page or opening a
    new tab starts logged out.
"""

import logging
from typing import Optional

import streamlit as st

from foodieframe.client import FoodieFrameClient
from foodieframe.models import Session
from foodieframe.session import STORAGE_KEY, SessionStorage, SessionStore

logger = logging.getLogger(__name__)

CLIENT_KEY = "foodieframe_client"
# Set when a 401 cleared the session; pages redirect to login while it is set
AUTH_EXPIRED_KEY = "auth_expired"

LOGIN_PAGE = "pages/01_🔑_Login.py"
RECIPES_PAGE = "pages/02_🍲_Recipes.py"


class StreamlitSessionStorage(SessionStorage):
    """Keeps the serialized session in st.session_state."""

    def __init__(self, key: str = STORAGE_KEY) -> None:
        self.key = key

    def load(self) -> Optional[str]:
        return st.session_state.get(self.key)

    def save(self, raw: str) -> None:
        st.session_state[self.key] = raw

    def clear(self) -> None:
        if self.key in st.session_state:
            del st.session_state[self.key]


def _mark_auth_expired() -> None:
    logger.info("Session expired; redirecting to login on next render")
    st.session_state[AUTH_EXPIRED_KEY] = True


def get_client() -> FoodieFrameClient:
    """
    Get the FoodieFrameClient for this browser session, creating it on first use.

    Returns:
        The cached client, bound to a StreamlitSessionStorage-backed store.
    """
    if CLIENT_KEY not in st.session_state:
        store = SessionStore(StreamlitSessionStorage())
        st.session_state[CLIENT_KEY] = FoodieFrameClient(store, on_unauthorized=_mark_auth_expired)
    return st.session_state[CLIENT_KEY]


def get_current_session() -> Optional[Session]:
    return get_client().current_user


def require_login() -> Session:
    """
    Stop the page unless someone is logged in.

    Sends the user to the login page when the session is missing, which is
    also the case after a 401 cleared it. Use at the top of pages that need a
    user.
    """
    session = get_current_session()
    if session is None:
        redirect_to_login()
    return session


def redirect_to_login() -> None:
    """Switch to the login page and end this script run."""
    st.switch_page(LOGIN_PAGE)
    st.stop()


def redirect_if_auth_expired() -> None:
    """
    Redirect when a 401 cleared the session during this run.

    Call at the end of a page, after calls that swallow their errors (such as
    InteractionState.load) had a chance to hit a 401. The flag stays set so
    the login page can explain why the user landed there.
    """
    if st.session_state.get(AUTH_EXPIRED_KEY):
        redirect_to_login()


def consume_auth_expired() -> bool:
    """Return and reset the "session expired" flag."""
    return bool(st.session_state.pop(AUTH_EXPIRED_KEY, False))
