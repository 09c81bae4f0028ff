"""
FoodieFrame - Streamlit Frontend Main Entry Point.

Sets up the page configuration and the global sidebar (who is logged in,
logout, backend settings).

Note: Multi-page routing is handled automatically by Streamlit via the `pages/` folder.
Files in `pages/` starting with numbered prefixes (e.g., `01_🔑_Login.py`) will appear
as pages in the sidebar navigation.
"""

import sys
from pathlib import Path

# Add project root to path so `streamlit run streamlit_app/app.py` works without installing
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any other code accesses environment variables
from foodieframe.config import get_config_summary

import streamlit as st

from streamlit_app.utils.session import LOGIN_PAGE, get_client

# Page configuration - must be called before any other Streamlit commands
st.set_page_config(
    page_title="FoodieFrame",
    page_icon="🍲",
    layout="wide",
    initial_sidebar_state="expanded"
)

client = get_client()
session = client.current_user

with st.sidebar:
    st.markdown("### 🍲 **FoodieFrame**")
    st.divider()

    if session is not None:
        display_name = session.user.name or session.user.username or f"User {session.user_id}"
        st.markdown(f"Signed in as **{display_name}**")
        if st.button("Log out", use_container_width=True):
            client.session.logout()
            st.rerun()
    else:
        st.caption("You are not signed in.")
        if st.button("Log in", use_container_width=True, type="primary"):
            st.switch_page(LOGIN_PAGE)

    st.divider()

    with st.expander("Backend settings", expanded=False):
        summary = get_config_summary()
        st.markdown(f"**API:** `{summary['api_url']}`")
        st.markdown(f"**Uploads:** `{summary['upload_url']}`")
        st.caption(f"Timeout: {summary['timeout_seconds']:.0f}s")

st.title("FoodieFrame")
st.caption("Share recipes, save favourites, and see what your friends are cooking.")

if session is None:
    st.info("Log in or create an account to like, save, and comment on recipes.")
else:
    st.success("Head to **Recipes** in the sidebar to start browsing.")
