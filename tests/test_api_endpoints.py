"""
Tests for the recipe API endpoints.

The connector is mocked through api.main.get_connector and the language model
through cookbook.remix._get_llm_client, so no real API calls are made.
"""

from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient

from api.main import app
from cookbook.exceptions import (
    ConnectorConfigError,
    RecipeNotFoundError,
    UpstreamAuthError,
    UpstreamError,
)

client = TestClient(app)


@pytest.fixture
def connector():
    mock_connector = Mock()
    mock_connector.search_by_ingredients.return_value = {
        "results": [{"id": 1, "title": "Chicken Fried Rice", "usedIngredientCount": 2}],
        "totalResults": 7,
    }
    with patch("api.main.get_connector", return_value=mock_connector):
        yield mock_connector


class TestSearchEndpoint:

    def test_search_ok(self, connector):
        resp = client.get(
            "/api/recipes/by-ingredients",
            params={"ingredients": "chicken,rice", "diet": "gluten free,vegan", "cuisine": "thai"},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["totalResults"] == 7
        assert data["results"][0]["title"] == "Chicken Fried Rice"

        params = connector.search_by_ingredients.call_args[0][0]
        assert params["ingredients"] == "chicken,rice"
        assert params["number"] == "20"
        assert params["ignorePantry"] == "true"
        assert params["diet"] == "gluten free,vegan"
        assert params["cuisine"] == "thai"

    def test_ignore_pantry_false(self, connector):
        resp = client.get("/api/recipes/by-ingredients", params={"ingredients": "egg", "ignorePantry": "false"})
        assert resp.status_code == 200
        assert connector.search_by_ingredients.call_args[0][0]["ignorePantry"] == "false"

    def test_session_header_is_logged(self, connector):
        client.get(
            "/api/recipes/by-ingredients",
            params={"ingredients": "egg"},
            headers={"X-Session-ID": "abc"},
        )
        events = client.get("/analytics/events/recent").json()["events"]
        assert events[0]["event"] == "recipe_search_performed"
        assert events[0]["session_id"] == "abc"

    @pytest.mark.parametrize("ingredients", ["", "   "])
    def test_empty_ingredients(self, connector, ingredients):
        resp = client.get("/api/recipes/by-ingredients", params={"ingredients": ingredients})
        assert resp.status_code == 400
        assert "at least one ingredient" in resp.json()["message"]
        connector.search_by_ingredients.assert_not_called()

    def test_number_validation(self, connector):
        resp = client.get("/api/recipes/by-ingredients", params={"ingredients": "egg", "number": 0})
        assert resp.status_code == 422
        assert resp.json()["message"].startswith("Invalid request parameters")

    def test_documented_error_shape_allows_validation_lists(self, connector):
        resp = client.get("/api/recipes/by-ingredients", params={"ingredients": "egg", "number": 0})
        assert isinstance(resp.json()["detail"], list)

        schema = client.get("/openapi.json").json()["components"]["schemas"]["ErrorResponse"]
        detail_types = {option.get("type") for option in schema["properties"]["detail"]["anyOf"]}
        assert detail_types == {"string", "array"}

    def test_not_configured(self):
        with patch("api.main.get_connector", side_effect=ConnectorConfigError("missing key")):
            resp = client.get("/api/recipes/by-ingredients", params={"ingredients": "egg"})
        assert resp.status_code == 503
        body = resp.json()
        assert "SPOONACULAR_API_KEY" in body["message"]
        assert body["detail"] == body["message"]

    @pytest.mark.parametrize("error,expected_status", [
        (UpstreamError(504, "Recipe service timed out. Please try again."), 504),
        (UpstreamAuthError(402, "Your daily points limit of 150 has been reached."), 502),
        (UpstreamError(400, "Unknown diet"), 400),
        (UpstreamError(500, "Recipe service returned 500"), 502),
    ])
    def test_upstream_errors(self, connector, error, expected_status):
        connector.search_by_ingredients.side_effect = error
        resp = client.get("/api/recipes/by-ingredients", params={"ingredients": "egg"})
        assert resp.status_code == expected_status
        assert resp.json()["message"] == error.message

    def test_unexpected_error(self, connector):
        connector.search_by_ingredients.side_effect = KeyError("boom")
        resp = client.get("/api/recipes/by-ingredients", params={"ingredients": "egg"})
        assert resp.status_code == 500
        assert resp.json()["message"].startswith("Error performing recipe search")


class TestRecipeDetailEndpoint:

    def test_detail_ok(self, connector, sample_recipe):
        connector.get_recipe.return_value = sample_recipe
        resp = client.get("/api/recipes/715538")
        assert resp.status_code == 200
        assert resp.json() == sample_recipe
        connector.get_recipe.assert_called_once_with(715538, include_nutrition=True)

    def test_detail_not_found(self, connector):
        connector.get_recipe.side_effect = RecipeNotFoundError(42)
        resp = client.get("/api/recipes/42")
        assert resp.status_code == 404
        assert resp.json()["message"] == "Recipe 42 not found"

    def test_detail_id_must_be_int(self, connector):
        resp = client.get("/api/recipes/not-a-number")
        assert resp.status_code == 422


class TestRemixEndpoint:

    @patch("cookbook.remix._get_llm_client", return_value=None)
    def test_rules_remix(self, _mock_client, sample_recipe):
        resp = client.post(
            "/api/recipes/remix",
            json={"recipe": sample_recipe, "type": "vegan"},
            headers={"X-Session-ID": "abc"},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["type"] == "vegan"
        assert data["source"] == "rules"
        assert "(Vegan remix)" in data["enhanced"]

        event = client.get("/analytics/events/recent").json()["events"][0]
        assert event["event"] == "recipe_remixed"
        assert event["payload"] == {"recipe_id": 715538, "type": "vegan", "source": "rules"}

    def test_unknown_type(self, sample_recipe):
        resp = client.post("/api/recipes/remix", json={"recipe": sample_recipe, "type": "carnivore"})
        assert resp.status_code == 400
        assert "Invalid remix type" in resp.json()["message"]

    @patch("cookbook.remix._get_llm_client", return_value=None)
    def test_custom_without_llm(self, _mock_client, sample_recipe):
        resp = client.post(
            "/api/recipes/remix",
            json={"recipe": sample_recipe, "type": "custom", "customPrompt": "make it spicy"},
        )
        assert resp.status_code == 503
        assert "OPENAI_API_KEY" in resp.json()["message"]

    def test_missing_type(self, sample_recipe):
        resp = client.post("/api/recipes/remix", json={"recipe": sample_recipe})
        assert resp.status_code == 422
        assert "type" in resp.json()["message"]


class TestHealth:

    def test_health(self, monkeypatch):
        monkeypatch.setenv("SPOONACULAR_API_KEY", "test-key")
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["spoonacular_configured"] is True
        assert data["llm_configured"] is False
        assert data["cache_entries"] == 0

    def test_root(self):
        data = client.get("/").json()
        assert data["name"] == "Recipe Transformer API"
        assert data["docs"] == "/docs"

    def test_unknown_route_has_message(self):
        resp = client.get("/no-such-route")
        assert resp.status_code == 404
        assert resp.json()["message"] == "Not Found"
