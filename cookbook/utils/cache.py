"""
In-process TTL cache for recipe searches and recipe details.

Spoonacular charges per request (points per call), so identical searches and
repeated detail views within a few minutes are served from memory.

The cache is process-local and in-memory, with automatic expiration based on TTL.
"""

import time
from typing import Any, Dict, Hashable, Optional, Tuple

# Key -> (timestamp, cached_value)
_RECIPE_CACHE: Dict[Hashable, Tuple[float, Any]] = {}

RECIPE_CACHE_TTL_SECONDS = 300


def make_search_cache_key(params: Dict[str, str]) -> Hashable:
    """
    Create a deterministic cache key for a search-by-ingredients request.

    Ingredients are lower-cased and split so that "Rice, chicken" and
    "chicken,rice" share an entry. Comma-separated filters are sorted.

    Args:
        params: Query parameters from cookbook.query.build_search_params

    Returns:
        Hashable cache key (tuple)
    """
    def _norm_list(value: Optional[str]) -> Tuple[str, ...]:
        if not value:
            return ()
        return tuple(sorted(part.strip().lower() for part in value.split(",") if part.strip()))

    return (
        "search",
        _norm_list(params.get("ingredients")),
        params.get("number", ""),
        params.get("ignorePantry", ""),
        _norm_list(params.get("diet")),
        _norm_list(params.get("intolerances")),
        _norm_list(params.get("excludeIngredients")),
        (params.get("cuisine") or "").strip().lower(),
    )


def make_recipe_cache_key(recipe_id: int, include_nutrition: bool) -> Hashable:
    """Create the cache key for a recipe detail lookup."""
    return ("recipe", int(recipe_id), bool(include_nutrition))


def get_cached(key: Hashable) -> Optional[Any]:
    """
    Retrieve a cached value if it exists and hasn't expired.

    Returns:
        Cached value, or None if not found or expired
    """
    entry = _RECIPE_CACHE.get(key)
    if not entry:
        return None

    timestamp, value = entry
    if time.time() - timestamp > RECIPE_CACHE_TTL_SECONDS:
        _RECIPE_CACHE.pop(key, None)
        return None
    return value


def set_cached(key: Hashable, value: Any) -> None:
    """Store a value in the cache."""
    _RECIPE_CACHE[key] = (time.time(), value)


def clear_cache() -> None:
    """Clear all cached entries (useful for testing)."""
    _RECIPE_CACHE.clear()


def get_cache_size() -> int:
    """Get the current number of cached entries (reported by /health)."""
    return len(_RECIPE_CACHE)
