"""
Recipe Transformer - Streamlit Frontend Main Entry Point.

A single-page recipe browser with three views kept in one BrowserState:
- search: ingredients, diet/intolerance/cuisine filters and pantry options
- results: recipe cards with used/missing ingredient badges
- detail: summary, ingredients, instructions, nutrition and remix

Run with:
    streamlit run streamlit_app/app.py
"""

import sys
from pathlib import Path

# Ensure the streamlit_app directory is in the Python path
# This allows imports to work regardless of how the app is run
streamlit_app_dir = Path(__file__).parent
if str(streamlit_app_dir) not in sys.path:
    sys.path.insert(0, str(streamlit_app_dir))

# Add project root to path so we can import api.config and cookbook
project_root = streamlit_app_dir.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

from typing import Optional

import streamlit as st

from cookbook.browser import (
    DETAIL_FAILED_MESSAGE,
    REMIX_FAILED_MESSAGE,
    SEARCH_FAILED_MESSAGE,
    VIEW_DETAIL,
    VIEW_RESULTS,
)
from cookbook.exceptions import EmptyIngredientsError
from cookbook.query import build_search_params
from ui.feedback import render_backend_status, show_error, working_spinner
from ui.layout import page_header, render_footer
from ui.recipe_views import render_detail_view, render_results_view, render_search_view
from ui.styles import load_global_styles
from utils.api_client import (
    ApiClientError,
    get_health_status,
    get_recipe,
    remix_recipe,
    search_recipes_by_ingredients,
)
from utils.state import get_browser_state, get_or_create_session_id

# Page configuration - must be called before any other Streamlit commands
st.set_page_config(
    page_title="Recipe Transformer",
    page_icon="👨‍🍳",
    layout="wide",
    initial_sidebar_state="collapsed",
)

load_global_styles()

session_id = get_or_create_session_id()
state = get_browser_state()


def run_search() -> None:
    """Search with the current form values and switch to results when anything came back."""
    try:
        request = state.to_search_request()
    except EmptyIngredientsError as e:
        state.fail(e.message)
        st.rerun()

    state.start_request()
    try:
        with working_spinner("Finding recipes..."):
            data = search_recipes_by_ingredients(build_search_params(request), session_id=session_id)
    except ApiClientError as e:
        state.fail(e.message, default=SEARCH_FAILED_MESSAGE)
    else:
        state.finish_request()
        state.apply_search_response(data)
    st.rerun()


def open_recipe(recipe_id: int) -> None:
    state.start_request()
    try:
        with working_spinner("Loading recipe..."):
            recipe = get_recipe(recipe_id, session_id=session_id)
    except ApiClientError as e:
        state.fail(e.message, default=DETAIL_FAILED_MESSAGE)
        return
    state.finish_request()
    state.apply_recipe_detail(recipe)


def run_remix(remix_type: str, custom_prompt: Optional[str]) -> None:
    state.start_request()
    try:
        with working_spinner("Remixing recipe..."):
            remix = remix_recipe(state.selected_recipe or {}, remix_type, custom_prompt, session_id=session_id)
    except ApiClientError as e:
        state.fail(e.message, default=REMIX_FAILED_MESSAGE)
    else:
        state.finish_request()
        state.apply_remix(remix)
    st.rerun()


with st.sidebar:
    st.markdown("### 👨‍🍳 **Recipe Transformer**")
    st.divider()
    with st.expander("System status", expanded=False):
        render_backend_status(get_health_status())

page_header("Recipe Transformer", subtitle="Discover recipes tailored to your ingredients")

if state.error:
    show_error(state.error)

if state.view == VIEW_DETAIL:
    render_detail_view(state, on_back=state.back_to_results, on_remix=run_remix)
elif state.view == VIEW_RESULTS:
    render_results_view(state, on_new_search=state.back_to_search, on_open=open_recipe)
else:
    render_search_view(state, on_search=run_search)

render_footer()
