"""
Tests for the recipe card and detail view formatting helpers.
"""

import pytest

from cookbook.formatting import (
    MAX_NUTRIENTS,
    detail_badges,
    fallback_instructions,
    format_nutrient_amount,
    ingredient_counts,
    ingredient_lines,
    instruction_steps,
    nutrient_rows,
    strip_html,
)


class TestIngredientCounts:

    def test_numeric_counts_win(self):
        recipe = {"usedIngredientCount": 2, "missedIngredientCount": 0, "missedIngredients": [{}, {}]}
        assert ingredient_counts(recipe) == (2, 0)

    def test_lists_used_when_counts_missing(self):
        recipe = {"usedIngredients": [{}, {}, {}], "missedIngredients": [{}]}
        assert ingredient_counts(recipe) == (3, 1)

    def test_no_badges(self):
        assert ingredient_counts({"usedIngredients": [], "missedIngredientCount": None}) == (None, None)


class TestFormatNutrientAmount:

    @pytest.mark.parametrize("amount,expected", [
        (12, "12"),
        (12.0, "12"),
        (3.14159, "3.1"),
        (0.25, "0.3"),
        (2.96, "3"),
        (521.44, "521.4"),
        (None, ""),
        ("n/a", "n/a"),
    ])
    def test_format(self, amount, expected):
        assert format_nutrient_amount(amount) == expected


class TestDetailHelpers:

    def test_nutrient_rows(self, sample_recipe):
        assert nutrient_rows(sample_recipe)[:2] == [
            {"value": "521.4kcal", "name": "Calories"},
            {"value": "12.5g", "name": "Fat"},
        ]

    def test_nutrient_rows_are_capped(self):
        recipe = {"nutrition": {"nutrients": [{"name": f"N{i}", "amount": i, "unit": "mg"} for i in range(20)]}}
        rows = nutrient_rows(recipe)
        assert len(rows) == MAX_NUTRIENTS
        assert rows[-1] == {"value": "11mg", "name": "N11"}

    def test_no_nutrition(self):
        assert nutrient_rows({}) == []

    def test_instruction_steps_from_first_block(self, sample_recipe):
        sample_recipe["analyzedInstructions"].append({"steps": [{"number": 1, "step": "Other block"}]})
        assert [s["step"] for s in instruction_steps(sample_recipe)] == [
            "Boil the pasta.",
            "Sear the pork with the garlic.",
        ]
        assert fallback_instructions(sample_recipe) is None

    def test_fallback_instructions(self):
        recipe = {"analyzedInstructions": [], "instructions": "<p>Mix and bake.</p>"}
        assert instruction_steps(recipe) == []
        assert fallback_instructions(recipe) == "<p>Mix and bake.</p>"
        assert fallback_instructions({}) is None

    def test_ingredient_lines(self, sample_recipe):
        assert ingredient_lines(sample_recipe) == ["8 oz pasta", "2 pork chops", "2 cloves garlic"]

    def test_detail_badges(self, sample_recipe):
        assert detail_badges(sample_recipe) == ["35 minutes", "Serves 4"]
        assert detail_badges({"readyInMinutes": 0, "servings": 2}) == ["Serves 2"]
        assert detail_badges({}) == []

    def test_strip_html(self):
        assert strip_html("<p>A <b>quick</b> &amp; easy pasta.</p><p>Serves 4.</p>") == "A quick & easy pasta.\nServes 4."
        assert strip_html(None) == ""
