"""
View state of the recipe browser.

The browser has three mutually exclusive views: ``search`` (form), ``results``
(recipe cards) and ``detail`` (one recipe). BrowserState holds everything the
views render plus the transitions between them; the Streamlit app keeps one
instance per session in st.session_state.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from cookbook.filters import toggle_selection
from cookbook.models import RESULTS_PER_PAGE, RecipeSearchRequest
from cookbook.query import normalize_search_response, validate_ingredients

VIEW_SEARCH = "search"
VIEW_RESULTS = "results"
VIEW_DETAIL = "detail"

NO_RESULTS_MESSAGE = "No recipes found for these ingredients. Try adding or changing ingredients."
SEARCH_FAILED_MESSAGE = "Failed to fetch recipes. Please try again."
DETAIL_FAILED_MESSAGE = "Failed to load recipe details. Please try again."
REMIX_FAILED_MESSAGE = "Failed to remix recipe. Please try again."


@dataclass
class BrowserState:
    """
    UI state of the recipe browser.

    Attributes:
        view: "search", "results" or "detail"
        ingredients_query: Free-text, comma-separated ingredients
        ignore_pantry: Ignore pantry staples (salt, water, flour, ...)
        exclude_ingredients_query: Comma-separated ingredients to exclude
        selected_diets: Selected diet labels, in selection order
        selected_intolerances: Selected intolerance labels, in selection order
        selected_cuisine: Cuisine label, "" for any cuisine
        recipes: Current search results
        selected_recipe: Recipe shown in the detail view
        total_results: Total matches reported by the backend
        loading: A request is in flight
        error: Single error message shown to the user ("" when none)
        remix: Last remix response for the selected recipe
    """
    view: str = VIEW_SEARCH
    ingredients_query: str = ""
    ignore_pantry: bool = True
    exclude_ingredients_query: str = ""
    selected_diets: List[str] = field(default_factory=list)
    selected_intolerances: List[str] = field(default_factory=list)
    selected_cuisine: str = ""
    recipes: List[Dict[str, Any]] = field(default_factory=list)
    selected_recipe: Optional[Dict[str, Any]] = None
    total_results: int = 0
    loading: bool = False
    error: str = ""
    remix: Optional[Dict[str, Any]] = None

    def toggle_diet(self, diet: str) -> None:
        self.selected_diets = toggle_selection(self.selected_diets, diet)

    def toggle_intolerance(self, intolerance: str) -> None:
        self.selected_intolerances = toggle_selection(self.selected_intolerances, intolerance)

    @property
    def search_disabled(self) -> bool:
        """The search button is only disabled while a request is running."""
        return self.loading

    def to_search_request(self) -> RecipeSearchRequest:
        """
        Build the search request from the form fields.

        Raises:
            EmptyIngredientsError: If no ingredients were entered
        """
        return RecipeSearchRequest(
            ingredients=validate_ingredients(self.ingredients_query),
            number=RESULTS_PER_PAGE,
            ignore_pantry=self.ignore_pantry,
            diets=list(self.selected_diets),
            intolerances=list(self.selected_intolerances),
            exclude_ingredients=self.exclude_ingredients_query,
            cuisine=self.selected_cuisine,
        )

    def start_request(self) -> None:
        self.loading = True
        self.error = ""

    def finish_request(self) -> None:
        self.loading = False

    def fail(self, message: Optional[str], default: str = SEARCH_FAILED_MESSAGE) -> None:
        self.error = message or default
        self.loading = False

    def apply_search_response(self, data: Any) -> bool:
        """
        Store a search response.

        Switches to the results view when at least one recipe came back;
        otherwise stays on the current view with the "no recipes" message.

        Returns:
            True when the view switched to results
        """
        recipes, total = normalize_search_response(data)
        if not recipes:
            self.error = NO_RESULTS_MESSAGE
            return False
        self.recipes = recipes
        self.total_results = total
        self.error = ""
        self.view = VIEW_RESULTS
        return True

    def apply_recipe_detail(self, recipe: Dict[str, Any]) -> None:
        self.selected_recipe = recipe
        self.remix = None
        self.error = ""
        self.view = VIEW_DETAIL

    def apply_remix(self, remix: Dict[str, Any]) -> None:
        self.remix = remix
        self.error = ""

    def back_to_search(self) -> None:
        self.view = VIEW_SEARCH
        self.error = ""

    def back_to_results(self) -> None:
        self.view = VIEW_RESULTS
        self.remix = None
        self.error = ""
