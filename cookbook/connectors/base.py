"""
Base connector abstract class for recipe API integrations.

All recipe connectors must:
- Implement the source attribute (e.g., "spoonacular")
- Provide search_by_ingredients returning {"results": [...], "totalResults": n}
  or a bare list of recipes
- Provide get_recipe returning the full recipe body, untouched
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Union


class BaseRecipeConnector(ABC):
    """
    Abstract base class for all recipe API connectors.

    Attributes:
        source: String identifier for the recipe API (e.g., "spoonacular")
    """
    source: str

    @abstractmethod
    def search_by_ingredients(self, params: Dict[str, str]) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        """
        Search recipes that use the given ingredients.

        Args:
            params: Query parameters built by cookbook.query.build_search_params
                    (ingredients, number, ignorePantry and the optional diet,
                    intolerances, excludeIngredients, cuisine)

        Returns:
            Either a list of recipe dicts or {"results": [...], "totalResults": n}.
        """
        pass

    @abstractmethod
    def get_recipe(self, recipe_id: int, include_nutrition: bool = True) -> Dict[str, Any]:
        """
        Retrieve a single recipe by id.

        Args:
            recipe_id: Recipe identifier from a search result
            include_nutrition: Whether to include the ``nutrition`` block

        Returns:
            The recipe body as returned by the recipe API.
        """
        pass
