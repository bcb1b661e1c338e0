"""
Tests for the recipe browser view state and its transitions.
"""

import pytest

from cookbook.browser import (
    NO_RESULTS_MESSAGE,
    REMIX_FAILED_MESSAGE,
    SEARCH_FAILED_MESSAGE,
    VIEW_DETAIL,
    VIEW_RESULTS,
    VIEW_SEARCH,
    BrowserState,
)
from cookbook.exceptions import EmptyIngredientsError


class TestSearchForm:

    def test_defaults(self):
        state = BrowserState()
        assert state.view == VIEW_SEARCH
        assert state.ignore_pantry is True
        assert state.selected_cuisine == ""
        assert state.error == ""

    def test_search_button_only_disabled_while_loading(self):
        state = BrowserState()
        assert state.search_disabled is False
        state.start_request()
        assert state.search_disabled is True
        state.finish_request()
        assert state.search_disabled is False

    def test_toggles(self):
        state = BrowserState()
        state.toggle_diet("Vegan")
        state.toggle_diet("Paleo")
        state.toggle_diet("Vegan")
        state.toggle_intolerance("Dairy")
        assert state.selected_diets == ["Paleo"]
        assert state.selected_intolerances == ["Dairy"]

    def test_to_search_request(self):
        state = BrowserState(
            ingredients_query=" chicken, rice ",
            ignore_pantry=False,
            exclude_ingredients_query="olives",
            selected_diets=["Vegan"],
            selected_cuisine="Thai",
        )
        request = state.to_search_request()
        assert request.ingredients == "chicken, rice"
        assert request.number == 20
        assert request.ignore_pantry is False
        assert request.diets == ["Vegan"]
        assert request.exclude_ingredients == "olives"
        assert request.cuisine == "Thai"

    def test_empty_query_raises(self):
        with pytest.raises(EmptyIngredientsError):
            BrowserState(ingredients_query="  ").to_search_request()


class TestTransitions:

    def test_results_switch_view(self):
        state = BrowserState(error="old error")
        assert state.apply_search_response({"results": [{"id": 1}], "totalResults": 10}) is True
        assert state.view == VIEW_RESULTS
        assert state.total_results == 10
        assert state.error == ""

    def test_bare_list_response(self):
        state = BrowserState()
        state.apply_search_response([{"id": 1}, {"id": 2}])
        assert state.total_results == 2

    def test_no_results_stays_on_view(self):
        state = BrowserState()
        assert state.apply_search_response({"results": []}) is False
        assert state.view == VIEW_SEARCH
        assert state.error == NO_RESULTS_MESSAGE

    def test_fail_uses_message_or_default(self):
        state = BrowserState()
        state.start_request()
        state.fail("Recipe service timed out.")
        assert state.error == "Recipe service timed out."
        assert state.loading is False

        state.fail(None)
        assert state.error == SEARCH_FAILED_MESSAGE
        state.fail("", default=REMIX_FAILED_MESSAGE)
        assert state.error == REMIX_FAILED_MESSAGE

    def test_detail_and_back(self):
        state = BrowserState()
        state.apply_search_response([{"id": 1}])
        state.apply_recipe_detail({"id": 1, "title": "Soup"})
        assert state.view == VIEW_DETAIL
        assert state.selected_recipe["title"] == "Soup"

        state.apply_remix({"enhanced": "Vegan soup", "type": "vegan", "source": "rules"})
        assert state.remix["type"] == "vegan"

        state.back_to_results()
        assert state.view == VIEW_RESULTS
        assert state.remix is None
        assert state.recipes == [{"id": 1}]

    def test_new_search_keeps_form(self):
        state = BrowserState(ingredients_query="rice", selected_diets=["Vegan"])
        state.apply_search_response([{"id": 1}])
        state.back_to_search()
        assert state.view == VIEW_SEARCH
        assert state.ingredients_query == "rice"
        assert state.selected_diets == ["Vegan"]
