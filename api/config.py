"""
Configuration management for Recipe Transformer.

This module centralizes environment variable loading from .env file at project root.
It should be imported early in both backend (api/main.py) and frontend (streamlit_app/app.py)
to ensure .env is loaded before any other code accesses environment variables.

In production, .env will not exist, but load_dotenv() is safe to call and will no-op.
Environment variables from the hosting platform will be used instead.

Environment Variables:
- SPOONACULAR_API_KEY: Required for recipe search and detail
- SPOONACULAR_BASE_URL: Optional, defaults to "https://api.spoonacular.com"
- SPOONACULAR_TIMEOUT: Optional, request timeout in seconds (default 15)
- OPENAI_API_KEY: Optional, enables language-model remixes (required for custom prompts)
- OPENAI_MODEL: Optional, defaults to "gpt-4o-mini"
- RECIPE_EVENTS_LOG: Optional, path of the JSONL event log (default "events.log")
- BACKEND_URL: Optional, backend URL (defaults to http://localhost:8000 for local dev)
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    Locates the project root by going up from this file's location
    (api/config.py -> project root) and loads .env if it exists.
    Existing environment variables take precedence (override=False).
    """
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


# Load .env file on module import
load_env_file()


class SpoonacularConfig:
    """Configuration for the Spoonacular recipe connector."""

    @staticmethod
    def get_api_key() -> Optional[str]:
        """
        Get Spoonacular API key from environment.

        Note:
            This does not raise an error - the connector handles validation.
        """
        return os.getenv("SPOONACULAR_API_KEY")

    @staticmethod
    def get_base_url() -> str:
        return os.getenv("SPOONACULAR_BASE_URL", "https://api.spoonacular.com")

    @staticmethod
    def get_timeout() -> float:
        return float(os.getenv("SPOONACULAR_TIMEOUT", "15"))


class RemixConfig:
    """Configuration for language-model remixes."""

    @staticmethod
    def get_openai_api_key() -> Optional[str]:
        return os.getenv("OPENAI_API_KEY")


def get_required_env_vars() -> dict:
    """
    Get a dictionary of configuration variables and whether they are set.

    Returns:
        Dictionary with keys:
        - spoonacular_api_key: bool (True if set)
        - openai_api_key: bool (True if set)
    """
    return {
        "spoonacular_api_key": SpoonacularConfig.get_api_key() is not None,
        "openai_api_key": RemixConfig.get_openai_api_key() is not None,
    }

