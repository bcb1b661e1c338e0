"""
Tests for the Spoonacular connector.

The requests.Session is mocked to avoid real API calls.
"""

import os
from unittest.mock import Mock, patch

import pytest
import requests

from cookbook.connectors.spoonacular_connector import SpoonacularConnector
from cookbook.exceptions import (
    ConnectorConfigError,
    RecipeNotFoundError,
    UpstreamAuthError,
    UpstreamError,
)


def _response(status_code=200, json_data=None, json_error=False):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def connector(session):
    return SpoonacularConnector(
        api_key="test-key",
        base_url="https://api.example.com/",
        timeout=5,
        session=session,
    )


class TestConfiguration:

    @patch("cookbook.connectors.spoonacular_connector.load_dotenv")
    def test_missing_api_key_raises(self, _mock_load_dotenv):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConnectorConfigError) as exc_info:
                SpoonacularConnector()
        assert "SPOONACULAR_API_KEY" in exc_info.value.message

    @patch("cookbook.connectors.spoonacular_connector.load_dotenv")
    def test_reads_environment(self, _mock_load_dotenv):
        env = {
            "SPOONACULAR_API_KEY": "env-key",
            "SPOONACULAR_BASE_URL": "https://proxy.example.com/",
            "SPOONACULAR_TIMEOUT": "7.5",
        }
        with patch.dict(os.environ, env, clear=True):
            connector = SpoonacularConnector()
        assert connector.api_key == "env-key"
        assert connector.base_url == "https://proxy.example.com"
        assert connector.timeout == 7.5


class TestSearchByIngredients:

    def test_builds_complex_search_query(self, connector, session):
        session.get.return_value = _response(json_data={"results": [{"id": 1}], "totalResults": 9})

        result = connector.search_by_ingredients({
            "ingredients": "chicken, rice",
            "number": "20",
            "ignorePantry": "false",
            "diet": "vegan",
            "cuisine": "thai",
        })

        assert result == {"results": [{"id": 1}], "totalResults": 9}
        args, kwargs = session.get.call_args
        assert args[0] == "https://api.example.com/recipes/complexSearch"
        assert kwargs["timeout"] == 5
        params = kwargs["params"]
        assert params["includeIngredients"] == "chicken, rice"
        assert params["number"] == "20"
        assert params["ignorePantry"] == "false"
        assert params["fillIngredients"] == "true"
        assert params["sort"] == "max-used-ingredients"
        assert params["diet"] == "vegan"
        assert params["cuisine"] == "thai"
        assert "intolerances" not in params
        assert params["apiKey"] == "test-key"

    def test_missing_total_defaults_to_result_count(self, connector, session):
        session.get.return_value = _response(json_data={"results": [{"id": 1}, {"id": 2}]})
        assert connector.search_by_ingredients({"ingredients": "egg"})["totalResults"] == 2

    def test_missing_results_is_an_upstream_error(self, connector, session):
        session.get.return_value = _response(json_data={"status": "failure"})
        with pytest.raises(UpstreamError) as exc_info:
            connector.search_by_ingredients({"ingredients": "egg"})
        assert exc_info.value.status_code == 502

    def test_quota_exhausted_is_auth_error(self, connector, session):
        session.get.return_value = _response(402, {"message": "Your daily points limit of 150 has been reached."})
        with pytest.raises(UpstreamAuthError) as exc_info:
            connector.search_by_ingredients({"ingredients": "egg"})
        assert exc_info.value.status_code == 402
        assert "daily points limit" in exc_info.value.message

    def test_error_without_body_message(self, connector, session):
        session.get.return_value = _response(500, json_error=True)
        with pytest.raises(UpstreamError) as exc_info:
            connector.search_by_ingredients({"ingredients": "egg"})
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Recipe service returned 500"

    def test_timeout(self, connector, session):
        session.get.side_effect = requests.exceptions.Timeout()
        with pytest.raises(UpstreamError) as exc_info:
            connector.search_by_ingredients({"ingredients": "egg"})
        assert exc_info.value.status_code == 504

    def test_connection_error(self, connector, session):
        session.get.side_effect = requests.exceptions.ConnectionError()
        with pytest.raises(UpstreamError) as exc_info:
            connector.search_by_ingredients({"ingredients": "egg"})
        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "Could not connect to the recipe service."

    def test_invalid_json(self, connector, session):
        session.get.return_value = _response(200, json_error=True)
        with pytest.raises(UpstreamError) as exc_info:
            connector.search_by_ingredients({"ingredients": "egg"})
        assert exc_info.value.status_code == 502


class TestGetRecipe:

    def test_get_recipe(self, connector, session, sample_recipe):
        session.get.return_value = _response(json_data=sample_recipe)

        assert connector.get_recipe(715538) == sample_recipe
        args, kwargs = session.get.call_args
        assert args[0] == "https://api.example.com/recipes/715538/information"
        assert kwargs["params"]["includeNutrition"] == "true"

    def test_without_nutrition(self, connector, session):
        session.get.return_value = _response(json_data={"id": 1})
        connector.get_recipe(1, include_nutrition=False)
        assert session.get.call_args[1]["params"]["includeNutrition"] == "false"

    def test_not_found(self, connector, session):
        session.get.return_value = _response(404, {"status": "failure", "code": 404})
        with pytest.raises(RecipeNotFoundError) as exc_info:
            connector.get_recipe(999)
        assert exc_info.value.recipe_id == 999
        assert exc_info.value.message == "Recipe 999 not found"
