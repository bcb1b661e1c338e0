"""
Standardized feedback utilities for error and loading states.
"""

from contextlib import contextmanager
from typing import Optional

import streamlit as st


def show_error(message: str, hint: Optional[str] = None) -> None:
    """
    Display the error banner with an optional hint.

    Args:
        message: Main error message to display
        hint: Optional hint text to help users resolve the issue
    """
    st.error(f"⚠️ {message}")
    if hint:
        st.caption(f"💡 {hint}")


@contextmanager
def working_spinner(label: str = "Working…"):
    """
    Context manager wrapper for standardized loading spinners.

    Usage:
        with working_spinner("Finding recipes..."):
            data = search_recipes_by_ingredients(params)
    """
    with st.spinner(label):
        yield


def render_backend_status(status: Optional[dict]) -> None:
    """
    Display backend connection status as a status pill.

    Args:
        status: Dictionary from get_health_status() or None if backend unreachable.

    Shows:
        - 🟢 "Backend online" plus recipe API / AI chef configuration
        - 🔴 "Backend offline / unreachable" if status is None
    """
    if not status or status.get("status") != "ok":
        st.error("🔴 Backend offline / unreachable")
        return

    st.success("🟢 Backend online")
    raw = status.get("raw", {})
    recipe_api = "configured" if raw.get("spoonacular_configured") else "missing API key"
    remix = "AI chef" if raw.get("llm_configured") else "substitution rules"
    st.caption(f"Recipe API: {recipe_api}")
    st.caption(f"Remix: {remix}")
    if status.get("docs_url"):
        st.caption(f"[API docs]({status['docs_url']})")
