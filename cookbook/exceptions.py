"""
Exception hierarchy for the recipe core.

The API layer maps these onto HTTP status codes; the Streamlit client never sees
them directly, only the ``message`` field of the backend's error responses.
"""

from typing import Optional


class RecipeError(Exception):
    """Base class for all recipe core errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EmptyIngredientsError(RecipeError, ValueError):
    """Raised when a search is attempted without any ingredients."""

    def __init__(self, message: str = "Please enter at least one ingredient (e.g. chicken, garlic, rice)") -> None:
        super().__init__(message)


class ConnectorConfigError(RecipeError, RuntimeError):
    """Raised when a connector is missing required configuration (e.g. API key)."""


class RecipeNotFoundError(RecipeError):
    """Raised when the recipe API does not know the requested recipe id."""

    def __init__(self, recipe_id: int, message: Optional[str] = None) -> None:
        super().__init__(message or f"Recipe {recipe_id} not found")
        self.recipe_id = recipe_id


class UpstreamError(RecipeError):
    """
    Raised when the recipe API fails or cannot be reached.

    Attributes:
        status_code: HTTP status reported by the recipe API, or 502/504 for
                     connection errors and timeouts.
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamAuthError(UpstreamError):
    """Raised when the recipe API rejects our credentials or quota (401/402/403)."""


class InvalidRemixError(RecipeError, ValueError):
    """Raised for unknown remix types or a custom remix without a prompt."""


class RemixUnavailableError(RecipeError):
    """Raised when a remix cannot be produced (e.g. custom prompt without an LLM)."""
