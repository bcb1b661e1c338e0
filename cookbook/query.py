"""
Query-string assembly for search-by-ingredients requests.

Turns a RecipeSearchRequest (display labels, free text) into the query
parameters sent to GET /api/recipes/by-ingredients, and normalizes the two
response shapes the backend may return (a bare array or
``{"results": [...], "totalResults": n}``).
"""

from typing import Any, Dict, List, Tuple

from cookbook.exceptions import EmptyIngredientsError
from cookbook.filters import cuisine_to_api_value, diet_to_api_value, intolerance_to_api_value
from cookbook.models import RecipeSearchRequest


def validate_ingredients(text: str) -> str:
    """
    Trim the ingredients query and make sure something is left.

    Raises:
        EmptyIngredientsError: If the query is empty or whitespace only
    """
    trimmed = (text or "").strip()
    if not trimmed:
        raise EmptyIngredientsError()
    return trimmed


def split_ingredients(text: str) -> List[str]:
    """
    Split a comma-separated ingredients string into clean entries.

    Examples:
        >>> split_ingredients(" chicken, garlic ,, rice ")
        ['chicken', 'garlic', 'rice']
    """
    return [part.strip() for part in (text or "").split(",") if part.strip()]


def build_search_params(request: RecipeSearchRequest) -> Dict[str, str]:
    """
    Build the query parameters for a search-by-ingredients request.

    ``ingredients``, ``number`` and ``ignorePantry`` are always present. The
    optional filters are only added when the user set them.

    Args:
        request: Search request holding display labels

    Returns:
        Ordered dict of string parameters, e.g.::

            {"ingredients": "chicken, rice", "number": "20", "ignorePantry": "true",
             "diet": "gluten free,vegan", "cuisine": "middle eastern"}

    Raises:
        EmptyIngredientsError: If the ingredients query is blank
    """
    params: Dict[str, str] = {
        "ingredients": validate_ingredients(request.ingredients),
        "number": str(request.number),
        "ignorePantry": "true" if request.ignore_pantry else "false",
    }
    if request.diets:
        params["diet"] = ",".join(diet_to_api_value(d) for d in request.diets)
    if request.intolerances:
        params["intolerances"] = ",".join(intolerance_to_api_value(i) for i in request.intolerances)
    if request.exclude_ingredients.strip():
        params["excludeIngredients"] = request.exclude_ingredients.strip()
    if request.cuisine:
        params["cuisine"] = cuisine_to_api_value(request.cuisine)
    return params


def normalize_search_response(data: Any) -> Tuple[List[Dict[str, Any]], int]:
    """
    Normalize a search response into (recipes, total).

    Accepts either a list of recipes or a dict with ``results`` and optional
    ``totalResults``. When ``totalResults`` is missing or null the total is the
    number of recipes returned.
    """
    if isinstance(data, list):
        return data, len(data)
    if not isinstance(data, dict):
        return [], 0

    recipes = data.get("results") or []
    total = data.get("totalResults")
    if total is None:
        total = len(recipes)
    return recipes, int(total)
