"""
Pydantic schemas for FastAPI request and response models.

The schemas include:
- RecipeSearchResponse: results + totalResults for GET /api/recipes/by-ingredients
- RemixRequest / RemixResponse: body and answer of POST /api/recipes/remix
- ErrorResponse: shape of every error answer ({"detail", "message"})

# NOTE: Recipe bodies are passed through as plain dicts. Field names follow the
    recipe API (camelCase); the frontend reads them as-is.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class RecipeSearchResponse(BaseModel):
    """Response model for the search-by-ingredients endpoint."""
    results: List[Dict[str, Any]] = Field(..., description="Recipes using the requested ingredients")
    totalResults: int = Field(..., ge=0, description="Total number of matching recipes")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "results": [
                    {
                        "id": 716429,
                        "title": "Pasta with Garlic, Scallions, Cauliflower & Breadcrumbs",
                        "image": "https://img.spoonacular.com/recipes/716429-312x231.jpg",
                        "usedIngredientCount": 2,
                        "missedIngredientCount": 3,
                    }
                ],
                "totalResults": 86,
            }
        }
    )


class RemixRequest(BaseModel):
    """Request body for POST /api/recipes/remix."""
    recipe: Dict[str, Any] = Field(..., description="Recipe body as returned by GET /api/recipes/{id}")
    type: str = Field(..., min_length=1, description="Remix type, e.g. 'low-carb', 'vegan' or 'custom'")
    customPrompt: Optional[str] = Field(None, description="Free-text instructions (required for 'custom')")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "recipe": {"id": 716429, "title": "Pasta with Garlic", "extendedIngredients": []},
                "type": "low-carb",
            }
        }
    )


class RemixResponse(BaseModel):
    """Response model for POST /api/recipes/remix."""
    enhanced: str = Field(..., description="Rewritten recipe text")
    type: str = Field(..., description="Remix type that was applied")
    source: str = Field(..., description="'llm' or 'rules'")


class ErrorResponse(BaseModel):
    """Error body; ``message`` mirrors ``detail`` for the frontend."""
    detail: Union[str, List[Any]] = Field(..., description="Error text, or the list of validation errors for 422")
    message: str
