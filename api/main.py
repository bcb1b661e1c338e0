"""
FastAPI application for the Recipe Transformer API.

This module defines the REST API endpoints used by the Streamlit frontend:
- GET /api/recipes/by-ingredients: Search recipes that use the given ingredients
- GET /api/recipes/{recipe_id}: Get a recipe with ingredients, instructions and nutrition
- POST /api/recipes/remix: Rewrite a recipe (low-carb, vegan, ..., or a custom prompt)
- GET /health: Health check

Every error response carries both ``detail`` (FastAPI convention) and
``message`` (read by the frontend).

Run the API with:
    uvicorn api.main:app --reload

Access API documentation at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import logging
import time
from typing import Any, Dict, Optional

from fastapi import FastAPI, Header, HTTPException, Query, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import SpoonacularConfig, get_required_env_vars
from api.routers.analytics import router as analytics_router
from api.schemas import ErrorResponse, RecipeSearchResponse, RemixRequest, RemixResponse
from cookbook.connectors.base import BaseRecipeConnector
from cookbook.connectors.spoonacular_connector import SpoonacularConnector
from cookbook.events import log_recipe_remixed
from cookbook.exceptions import (
    ConnectorConfigError,
    EmptyIngredientsError,
    InvalidRemixError,
    RecipeNotFoundError,
    RemixUnavailableError,
    UpstreamAuthError,
    UpstreamError,
)
from cookbook.models import RESULTS_PER_PAGE, RecipeSearchRequest
from cookbook.query import split_ingredients
from cookbook.remix import remix_recipe
from cookbook.search import get_recipe_detail, search_recipes
from cookbook.utils.cache import get_cache_size

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

# Track app start time for uptime calculation
_APP_START_TIME = time.time()

app = FastAPI(
    title="Recipe Transformer API",
    description="Find recipes by the ingredients you have, view their nutrition and remix them.",
    version=API_VERSION,
    openapi_tags=[
        {
            "name": "recipes",
            "description": "Search recipes by ingredients and get recipe details.",
        },
        {
            "name": "remix",
            "description": "Rewrite a recipe under a transformation such as low-carb or vegan.",
        },
        {
            "name": "health",
            "description": "Health check and monitoring endpoints.",
        },
    ],
)

app.include_router(analytics_router)

# Documented error shape for the recipe endpoints
ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (400, 404, 500, 502, 503, 504)
}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Add a ``message`` key next to ``detail`` on every HTTP error."""
    detail = exc.detail if exc.detail is not None else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": detail, "message": str(detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    fields = ", ".join(".".join(str(p) for p in e.get("loc", [])[1:]) or "body" for e in errors)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": errors, "message": f"Invalid request parameters: {fields}"},
    )


def get_connector() -> BaseRecipeConnector:
    """
    Build the recipe connector from configuration.

    Raises:
        ConnectorConfigError: If SPOONACULAR_API_KEY is not set
    """
    return SpoonacularConnector(
        api_key=SpoonacularConfig.get_api_key(),
        base_url=SpoonacularConfig.get_base_url(),
        timeout=SpoonacularConfig.get_timeout(),
    )


def upstream_to_http(error: UpstreamError) -> HTTPException:
    """
    Map a recipe API failure onto the status code returned to the frontend.

    - 504 upstream timeout -> 504
    - 401/402/403 (key or quota) -> 502
    - other 4xx -> 400 (the request parameters were rejected)
    - anything else -> 502
    """
    if error.status_code == 504:
        code = status.HTTP_504_GATEWAY_TIMEOUT
    elif isinstance(error, UpstreamAuthError):
        code = status.HTTP_502_BAD_GATEWAY
    elif 400 <= error.status_code < 500:
        code = status.HTTP_400_BAD_REQUEST
    else:
        code = status.HTTP_502_BAD_GATEWAY
    return HTTPException(status_code=code, detail=error.message)


@app.get(
    "/api/recipes/by-ingredients",
    response_model=RecipeSearchResponse,
    responses=ERROR_RESPONSES,
    tags=["recipes"],
    summary="Search recipes by ingredients",
    description="Find recipes that use as many of the given ingredients as possible, "
                "optionally filtered by diet, intolerances, cuisine and excluded ingredients.",
)
def recipes_by_ingredients(
    ingredients: str = Query("", description="Comma-separated ingredients (e.g., 'chicken, garlic, rice')"),
    number: int = Query(RESULTS_PER_PAGE, ge=1, le=100, description="Number of recipes to return (max: 100)"),
    ignorePantry: bool = Query(True, description="Ignore typical pantry items such as water, salt and flour"),
    diet: Optional[str] = Query(None, description="Comma-separated diets (e.g., 'vegetarian,gluten free')"),
    intolerances: Optional[str] = Query(None, description="Comma-separated intolerances (e.g., 'dairy,tree nut')"),
    excludeIngredients: Optional[str] = Query(None, description="Comma-separated ingredients to exclude"),
    cuisine: Optional[str] = Query(None, description="Cuisine (e.g., 'italian')"),
    x_session_id: Optional[str] = Header(None, alias="X-Session-ID", description="Session identifier (optional)"),
) -> RecipeSearchResponse:
    """
    Search recipes by ingredients.

    Returns:
        RecipeSearchResponse containing:
        - results: recipes passed through from the recipe API
        - totalResults: total number of matches

    Raises:
        HTTPException 400: If no ingredients are given or the recipe API rejects the filters
        HTTPException 502/504: If the recipe API fails or times out
        HTTPException 503: If the recipe API is not configured

    Example:
        ```bash
        GET /api/recipes/by-ingredients?ingredients=chicken,rice&number=20&ignorePantry=true&diet=gluten%20free
        ```
    """
    try:
        request = RecipeSearchRequest(
            ingredients=ingredients,
            number=number,
            ignore_pantry=ignorePantry,
            diets=split_ingredients(diet or ""),
            intolerances=split_ingredients(intolerances or ""),
            exclude_ingredients=excludeIngredients or "",
            cuisine=cuisine or "",
        )
        if not request.ingredients:
            raise EmptyIngredientsError()
        result = search_recipes(request, connector=get_connector(), session_id=x_session_id)
        return RecipeSearchResponse(**result)
    except EmptyIngredientsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except ConnectorConfigError as e:
        logger.error("Recipe connector not configured: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Recipe search is not configured on the server (missing SPOONACULAR_API_KEY).",
        ) from e
    except UpstreamError as e:
        logger.warning("Recipe search failed upstream (%d): %s", e.status_code, e.message)
        raise upstream_to_http(e) from e
    except Exception as e:
        logger.error("Unexpected error during recipe search: %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error performing recipe search: {str(e)}"
        ) from e


@app.get(
    "/api/recipes/{recipe_id}",
    tags=["recipes"],
    summary="Get recipe details",
    responses=ERROR_RESPONSES,
    description="Get a recipe with summary, ingredients, instructions and (optionally) nutrition.",
)
def recipe_detail(
    recipe_id: int,
    includeNutrition: bool = Query(True, description="Include the nutrition block"),
    x_session_id: Optional[str] = Header(None, alias="X-Session-ID", description="Session identifier (optional)"),
) -> Dict[str, Any]:
    """
    Get a recipe's full information, passed through unmodified.

    Raises:
        HTTPException 404: If the recipe does not exist
        HTTPException 502/504: If the recipe API fails or times out
        HTTPException 503: If the recipe API is not configured
    """
    try:
        return get_recipe_detail(
            recipe_id,
            include_nutrition=includeNutrition,
            connector=get_connector(),
            session_id=x_session_id,
        )
    except RecipeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except ConnectorConfigError as e:
        logger.error("Recipe connector not configured: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Recipe details are not configured on the server (missing SPOONACULAR_API_KEY).",
        ) from e
    except UpstreamError as e:
        logger.warning("Recipe detail %s failed upstream (%d): %s", recipe_id, e.status_code, e.message)
        raise upstream_to_http(e) from e
    except Exception as e:
        logger.error("Unexpected error loading recipe %s: %s", recipe_id, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error loading recipe details: {str(e)}"
        ) from e


@app.post(
    "/api/recipes/remix",
    response_model=RemixResponse,
    responses=ERROR_RESPONSES,
    tags=["remix"],
    summary="Remix a recipe",
    description="Rewrite a recipe under a named transformation (low-carb, vegan, ...) or a custom prompt.",
)
def remix(
    body: RemixRequest,
    x_session_id: Optional[str] = Header(None, alias="X-Session-ID", description="Session identifier (optional)"),
) -> RemixResponse:
    """
    Remix a recipe.

    Raises:
        HTTPException 400: Unknown remix type, or custom remix without a prompt
        HTTPException 503: Custom remix requested but no language model is available
    """
    try:
        result = remix_recipe(body.recipe, body.type, body.customPrompt)
    except InvalidRemixError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except RemixUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message) from e
    except Exception as e:
        logger.error("Unexpected error during remix: %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error remixing recipe: {str(e)}"
        ) from e

    log_recipe_remixed(x_session_id, body.recipe.get("id"), result.type, result.source)
    return RemixResponse(**result.model_dump())


@app.get("/health", tags=["health"])
def health():
    """
    Health check endpoint for monitoring and status checks.

    Returns:
        Dictionary with status, API metadata, uptime and configuration flags.
        Always returns 200 OK if the endpoint is reachable.
    """
    configured = get_required_env_vars()
    return {
        "status": "ok",
        "name": "Recipe Transformer API",
        "version": API_VERSION,
        "uptime_seconds": int(time.time() - _APP_START_TIME),
        "spoonacular_configured": configured["spoonacular_api_key"],
        "llm_configured": configured["openai_api_key"],
        "cache_entries": get_cache_size(),
    }


@app.get("/")
def root():
    """Root endpoint providing API information."""
    return {
        "name": "Recipe Transformer API",
        "version": API_VERSION,
        "description": "Find recipes by the ingredients you have, view their nutrition and remix them.",
        "docs": "/docs",
    }
