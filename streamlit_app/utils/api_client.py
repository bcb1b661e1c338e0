"""
Backend API Client Module.

This module is the **single source of truth** for all backend API communication.
All HTTP calls to the FastAPI backend go through functions in this module.

Key principles:
- Centralized error handling for network issues
- A single user-facing message per failure (ApiClientError.message)
- The backend's ``message`` field is shown when present, otherwise a default
- Every call carries the X-Session-ID header so backend events can be grouped

# NOTE: Recipe calls raise ApiClientError instead of returning None. The app
    stores the message on the browser state and renders it in the error banner,
    so the functions here never call st.error themselves.
"""

import os
from typing import Any, Dict, Optional

import requests
import streamlit as st

SEARCH_TIMEOUT_SECONDS = 30
DETAIL_TIMEOUT_SECONDS = 30
REMIX_TIMEOUT_SECONDS = 60

DEFAULT_SEARCH_ERROR = "Failed to fetch recipes"
DEFAULT_DETAIL_ERROR = "Failed to fetch recipe details"
DEFAULT_REMIX_ERROR = "Failed to remix recipe"


class ApiClientError(Exception):
    """A backend call failed; ``message`` is safe to show to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def get_backend_url() -> str:
    """
    Get the backend API base URL from environment variable or use default.

    Returns:
        Backend URL string with trailing slash removed. Defaults to
        http://localhost:8000 for local development.
    """
    url = os.getenv("BACKEND_URL", "http://localhost:8000")
    return url.rstrip("/")


def _session_headers(session_id: Optional[str]) -> Dict[str, str]:
    """Build headers dict with the X-Session-ID header (empty without a session)."""
    return {"X-Session-ID": session_id} if session_id else {}


def _error_message(response: requests.Response, default: str) -> str:
    """Read ``message`` (or a string ``detail``) from an error body."""
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict):
        for key in ("message", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return default


def _request(method: str, path: str, default_error: str, timeout: int, **kwargs) -> Any:
    """
    Perform a backend request and return its JSON body.

    Raises:
        ApiClientError: On network failure, a non-2xx status or a non-JSON body
    """
    url = f"{get_backend_url()}{path}"
    try:
        response = requests.request(method, url, timeout=timeout, **kwargs)
    except requests.exceptions.Timeout as e:
        raise ApiClientError(f"{default_error}: the request timed out. Please try again.") from e
    except requests.exceptions.ConnectionError as e:
        raise ApiClientError(
            f"{default_error}: could not connect to the backend. Please check that it is running."
        ) from e
    except requests.exceptions.RequestException as e:
        raise ApiClientError(f"{default_error}. Please try again.") from e

    if not response.ok:
        raise ApiClientError(_error_message(response, default_error), status_code=response.status_code)

    try:
        return response.json()
    except ValueError as e:
        raise ApiClientError(default_error, status_code=response.status_code) from e


@st.cache_data(ttl=60)  # Cache for 60 seconds to avoid hitting backend too frequently
def get_health_status() -> Optional[Dict[str, Any]]:
    """
    Check backend health status by calling /health endpoint.

    Returns:
        Dictionary with normalized status info:
        {
            "status": "ok",
            "raw": {...},  # Full response from /health endpoint
            "docs_url": "http://localhost:8000/docs"
        }
        Or None if backend is unreachable.
    """
    try:
        backend_url = get_backend_url()
        response = requests.get(f"{backend_url}/health", timeout=5)
        response.raise_for_status()
        data = response.json()
    except (requests.exceptions.RequestException, ValueError):
        return None

    if data.get("status") != "ok":
        return None
    return {
        "status": "ok",
        "raw": data,
        "docs_url": f"{backend_url}/docs",
    }


def search_recipes_by_ingredients(
    params: Dict[str, str],
    session_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Search recipes by ingredients.

    Args:
        params: Query parameters built by cookbook.query.build_search_params
        session_id: Session identifier sent as X-Session-ID

    Returns:
        The backend response: {"results": [...], "totalResults": n}

    Raises:
        ApiClientError: With the backend message, or "Failed to fetch recipes"
    """
    return _request(
        "GET",
        "/api/recipes/by-ingredients",
        DEFAULT_SEARCH_ERROR,
        SEARCH_TIMEOUT_SECONDS,
        params=params,
        headers=_session_headers(session_id),
    )


def get_recipe(recipe_id: int, session_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Get a recipe's full information, including nutrition.

    Raises:
        ApiClientError: With the backend message, or "Failed to fetch recipe details"
    """
    return _request(
        "GET",
        f"/api/recipes/{recipe_id}",
        DEFAULT_DETAIL_ERROR,
        DETAIL_TIMEOUT_SECONDS,
        headers=_session_headers(session_id),
    )


def remix_recipe(
    recipe: Dict[str, Any],
    remix_type: str,
    custom_prompt: Optional[str] = None,
    session_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Ask the backend to rewrite a recipe.

    Returns:
        {"enhanced": "...", "type": "vegan", "source": "rules"}

    Raises:
        ApiClientError: With the backend message, or "Failed to remix recipe"
    """
    body: Dict[str, Any] = {"recipe": recipe, "type": remix_type}
    if custom_prompt:
        body["customPrompt"] = custom_prompt
    return _request(
        "POST",
        "/api/recipes/remix",
        DEFAULT_REMIX_ERROR,
        REMIX_TIMEOUT_SECONDS,
        json=body,
        headers=_session_headers(session_id),
    )
