"""
Session state helpers for the recipe browser.

The browser keeps one cookbook.browser.BrowserState per Streamlit session plus
a session id that is sent to the backend as X-Session-ID.

# NOTE: Everything here lives in st.session_state, so it is reset when the user
    refreshes the page or opens a new tab.
"""

import uuid

import streamlit as st

from cookbook.browser import BrowserState

SESSION_ID_KEY = "session_id"
BROWSER_STATE_KEY = "browser_state"


def get_or_create_session_id() -> str:
    """
    Get or create a persistent session ID stored in st.session_state.

    Returns:
        Session ID string (UUID format)
    """
    if SESSION_ID_KEY not in st.session_state:
        st.session_state[SESSION_ID_KEY] = str(uuid.uuid4())
    return st.session_state[SESSION_ID_KEY]


def get_browser_state() -> BrowserState:
    """Get the session's BrowserState, creating it on first use."""
    if BROWSER_STATE_KEY not in st.session_state:
        st.session_state[BROWSER_STATE_KEY] = BrowserState()
    return st.session_state[BROWSER_STATE_KEY]
