"""
Spoonacular connector using the Spoonacular REST API.

The connector:
- Searches recipes by ingredients via GET /recipes/complexSearch, ranked by the
  number of used ingredients and filled with used/missed ingredient details
- Retrieves recipe detail via GET /recipes/{id}/information
- Maps HTTP failures onto cookbook.exceptions so the API layer can pick a status

Requires SPOONACULAR_API_KEY in .env file. The base URL defaults to
https://api.spoonacular.com but can be overridden via SPOONACULAR_BASE_URL.
"""

import logging
import os
from typing import Any, Dict, Optional

import requests
from dotenv import load_dotenv

from cookbook.exceptions import (
    ConnectorConfigError,
    RecipeNotFoundError,
    UpstreamAuthError,
    UpstreamError,
)

from .base import BaseRecipeConnector

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.spoonacular.com"
DEFAULT_TIMEOUT_SECONDS = 15.0

# Query parameters forwarded as-is to complexSearch
_FORWARDED_FILTERS = ("diet", "intolerances", "excludeIngredients", "cuisine")


class SpoonacularConnector(BaseRecipeConnector):
    """
    Connector for the Spoonacular recipe API.

    A requests.Session is kept per connector so repeated calls reuse the
    underlying connection.
    """
    source = "spoonacular"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the Spoonacular connector.

        Args:
            api_key: Spoonacular API key (optional, reads SPOONACULAR_API_KEY if not provided)
            base_url: API base URL (optional, reads SPOONACULAR_BASE_URL or uses the public API)
            timeout: Request timeout in seconds (optional, reads SPOONACULAR_TIMEOUT)
            session: requests.Session to use (optional, mainly for tests)

        Raises:
            ConnectorConfigError: If SPOONACULAR_API_KEY is not set.
        """
        load_dotenv()

        key = api_key or os.getenv("SPOONACULAR_API_KEY")
        if not key:
            raise ConnectorConfigError(
                "SPOONACULAR_API_KEY is not set. Please add it to your .env file at the project root:\n"
                "SPOONACULAR_API_KEY=your_spoonacular_key_here"
            )
        self.api_key = key
        self.base_url = (base_url or os.getenv("SPOONACULAR_BASE_URL", DEFAULT_BASE_URL)).rstrip("/")
        if timeout is None:
            timeout = float(os.getenv("SPOONACULAR_TIMEOUT", DEFAULT_TIMEOUT_SECONDS))
        self.timeout = timeout
        self.session = session or requests.Session()

    def search_by_ingredients(self, params: Dict[str, str]) -> Dict[str, Any]:
        """
        Search recipes by ingredients via complexSearch.

        Returns:
            Dictionary with:
            - results: recipe dicts with id, title, image, usedIngredientCount,
              missedIngredientCount, usedIngredients, missedIngredients, ...
            - totalResults: total number of matches

        Raises:
            UpstreamAuthError: If the API key is rejected or the quota is exhausted
            UpstreamError: For any other failure talking to Spoonacular
        """
        query: Dict[str, Any] = {
            "includeIngredients": params["ingredients"],
            "number": params.get("number", "20"),
            "ignorePantry": params.get("ignorePantry", "true"),
            "fillIngredients": "true",
            "sort": "max-used-ingredients",
        }
        for name in _FORWARDED_FILTERS:
            if params.get(name):
                query[name] = params[name]

        logger.info("Spoonacular complexSearch: ingredients=%r filters=%r",
                    query["includeIngredients"], {k: query[k] for k in _FORWARDED_FILTERS if k in query})
        data = self._get("/recipes/complexSearch", query)

        if not isinstance(data, dict) or "results" not in data:
            raise UpstreamError(
                502,
                "Unexpected response format from Spoonacular complexSearch: missing 'results'.",
            )
        return {
            "results": data.get("results") or [],
            "totalResults": data.get("totalResults", len(data.get("results") or [])),
        }

    def get_recipe(self, recipe_id: int, include_nutrition: bool = True) -> Dict[str, Any]:
        """
        Get a recipe's full information.

        Raises:
            RecipeNotFoundError: If Spoonacular answers 404
            UpstreamAuthError: If the API key is rejected or the quota is exhausted
            UpstreamError: For any other failure talking to Spoonacular
        """
        try:
            return self._get(
                f"/recipes/{recipe_id}/information",
                {"includeNutrition": "true" if include_nutrition else "false"},
            )
        except UpstreamError as e:
            if e.status_code == 404:
                raise RecipeNotFoundError(recipe_id) from e
            raise

    def _get(self, path: str, params: Dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(
                url,
                params={**params, "apiKey": self.api_key},
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise UpstreamError(504, "Recipe service timed out. Please try again.") from e
        except requests.exceptions.ConnectionError as e:
            raise UpstreamError(502, "Could not connect to the recipe service.") from e
        except requests.exceptions.RequestException as e:
            raise UpstreamError(502, f"Error calling the recipe service: {e}") from e

        if not response.ok:
            message = _error_message(response)
            logger.warning("Spoonacular %s returned %d: %s", path, response.status_code, message)
            if response.status_code in (401, 402, 403):
                raise UpstreamAuthError(response.status_code, message)
            raise UpstreamError(response.status_code, message)

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(502, f"Invalid JSON from the recipe service for {path}") from e


def _error_message(response: requests.Response) -> str:
    """Pick the ``message`` field of an error body, falling back to the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Recipe service returned {response.status_code}"
