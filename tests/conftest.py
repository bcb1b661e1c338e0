"""
Shared fixtures: every test gets an empty recipe cache, its own event log and
no language model unless it patches one in.
"""

import pytest

from cookbook.utils.cache import clear_cache


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    clear_cache()
    monkeypatch.setenv("RECIPE_EVENTS_LOG", str(tmp_path / "events.log"))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_MODEL", raising=False)
    yield
    clear_cache()


@pytest.fixture
def sample_recipe():
    """A recipe body shaped like GET /recipes/{id}/information."""
    return {
        "id": 715538,
        "title": "Bruschetta Style Pork & Pasta",
        "image": "https://img.spoonacular.com/recipes/715538-556x370.jpg",
        "readyInMinutes": 35,
        "servings": 4,
        "summary": "<p>A <b>quick</b> weeknight pasta.</p>",
        "extendedIngredients": [
            {"name": "pasta", "original": "8 oz pasta"},
            {"name": "pork chops", "original": "2 pork chops"},
            {"name": "garlic", "original": "2 cloves garlic"},
        ],
        "analyzedInstructions": [
            {
                "name": "",
                "steps": [
                    {"number": 1, "step": "Boil the pasta."},
                    {"number": 2, "step": "Sear the pork with the garlic."},
                ],
            }
        ],
        "nutrition": {
            "nutrients": [
                {"name": "Calories", "amount": 521.4, "unit": "kcal", "percentOfDailyNeeds": 26.1},
                {"name": "Fat", "amount": 12.5, "unit": "g", "percentOfDailyNeeds": 19.2},
                {"name": "Protein", "amount": 31, "unit": "g", "percentOfDailyNeeds": 62.0},
            ]
        },
    }
