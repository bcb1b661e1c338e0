"""
Recipe search and remix models for the recipe core.

Recipe bodies returned by the recipe API (``recipe``, ``nutrition``,
``extendedIngredients``, ``analyzedInstructions``) are passed through to the
frontend unmodified. The models here describe the requests this project
builds and the envelopes it returns around those bodies.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator

# Number of recipes requested per search (the UI has no pagination)
RESULTS_PER_PAGE = 20


class RecipeSearchRequest(BaseModel):
    """
    A search-by-ingredients request as the user composed it in the UI.

    Diets, intolerances and cuisine hold display labels (e.g. "Gluten Free");
    cookbook.query converts them to API values.
    """
    ingredients: str = Field(..., description="Comma-separated ingredients, e.g. 'chicken, garlic, rice'")
    number: int = Field(RESULTS_PER_PAGE, ge=1, le=100, description="Number of recipes to request")
    ignore_pantry: bool = Field(True, description="Ignore pantry staples such as salt, water and flour")
    diets: List[str] = Field(default_factory=list, description="Selected diet labels")
    intolerances: List[str] = Field(default_factory=list, description="Selected intolerance labels")
    exclude_ingredients: str = Field("", description="Comma-separated ingredients to exclude")
    cuisine: str = Field("", description="Cuisine label, empty for any cuisine")

    @field_validator("ingredients", "exclude_ingredients", "cuisine", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value


class RecipeSearchResult(BaseModel):
    """Normalized search response returned by GET /api/recipes/by-ingredients."""
    results: List[Dict[str, Any]] = Field(default_factory=list, description="Matching recipes, as returned by the recipe API")
    totalResults: int = Field(0, ge=0, description="Total number of matches known to the recipe API")


class RemixResult(BaseModel):
    """A rewritten recipe produced by cookbook.remix."""
    enhanced: str = Field(..., description="Rewritten recipe text")
    type: str = Field(..., description="Remix type that produced the text")
    source: str = Field(..., description="'llm' when written by the language model, 'rules' for the substitution engine")
