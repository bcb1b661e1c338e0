"""
Recipe search and detail lookup.

This module is the entry point the API uses to talk to the recipe API:
- search_recipes() validates the request, builds query parameters, checks the
  TTL cache, calls the connector and normalizes the response
- get_recipe_detail() returns a recipe body unmodified (cached)

Search flow: Streamlit -> GET /api/recipes/by-ingredients -> search_recipes()
-> SpoonacularConnector.search_by_ingredients() -> {"results", "totalResults"}
"""

import logging
from typing import Any, Dict, Optional

from cookbook.connectors.base import BaseRecipeConnector
from cookbook.connectors.spoonacular_connector import SpoonacularConnector
from cookbook.events import log_recipe_search, log_recipe_viewed
from cookbook.models import RecipeSearchRequest, RecipeSearchResult
from cookbook.query import build_search_params, normalize_search_response, split_ingredients
from cookbook.utils.cache import (
    get_cached,
    make_recipe_cache_key,
    make_search_cache_key,
    set_cached,
)

logger = logging.getLogger(__name__)


# Using a function so that patches in tests work correctly
def _get_connector() -> BaseRecipeConnector:
    """Instantiate the configured recipe connector."""
    return SpoonacularConnector()


def search_recipes(
    request: RecipeSearchRequest,
    connector: Optional[BaseRecipeConnector] = None,
    session_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Search recipes that use the requested ingredients.

    Args:
        request: Search request with ingredients and optional filters (labels)
        connector: Connector to use (defaults to the Spoonacular connector)
        session_id: Optional session identifier for event logging

    Returns:
        Dictionary with:
        - results: list of recipe dicts, passed through from the recipe API
        - totalResults: total matches (defaults to len(results))

    Raises:
        EmptyIngredientsError: If the ingredients query is blank
        ConnectorConfigError: If the connector is not configured
        UpstreamError: If the recipe API fails
    """
    params = build_search_params(request)
    logger.info("Recipe search request: %r", params)

    cache_key = make_search_cache_key(params)
    result = get_cached(cache_key)
    if result is not None:
        logger.debug("Recipe search cache hit: %r", cache_key)
    else:
        connector = connector or _get_connector()
        raw = connector.search_by_ingredients(params)
        recipes, total = normalize_search_response(raw)
        logger.info("Recipe search returned %d recipes (totalResults=%d)", len(recipes), total)

        result = RecipeSearchResult(results=recipes, totalResults=total).model_dump()
        # Only non-empty results are cached
        if recipes:
            set_cached(cache_key, result)

    log_recipe_search(
        session_id,
        ingredients=split_ingredients(params["ingredients"]),
        filters={k: v for k, v in params.items() if k not in ("ingredients", "number")},
        result_count=len(result["results"]),
        total_results=result["totalResults"],
    )
    return result


def get_recipe_detail(
    recipe_id: int,
    include_nutrition: bool = True,
    connector: Optional[BaseRecipeConnector] = None,
    session_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Get a recipe's full body (summary, extendedIngredients, analyzedInstructions, nutrition).

    Raises:
        RecipeNotFoundError: If the recipe id is unknown
        ConnectorConfigError: If the connector is not configured
        UpstreamError: If the recipe API fails
    """
    cache_key = make_recipe_cache_key(recipe_id, include_nutrition)
    recipe = get_cached(cache_key)
    if recipe is None:
        connector = connector or _get_connector()
        recipe = connector.get_recipe(recipe_id, include_nutrition=include_nutrition)
        set_cached(cache_key, recipe)
    else:
        logger.debug("Recipe detail cache hit: %s", recipe_id)

    log_recipe_viewed(session_id, recipe_id, recipe.get("title") if isinstance(recipe, dict) else None)
    return recipe
