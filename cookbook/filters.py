"""
Selection vocabularies for the recipe search filters.

The UI shows human-readable labels (e.g. "Gluten Free", "Tree Nut"); the recipe
API expects lower-case values. This module holds the label lists in display
order and the label -> API value mapping for diets, intolerances and cuisines.
"""

import re
from typing import List

DIET_OPTIONS = [
    "Gluten Free",
    "Ketogenic",
    "Vegetarian",
    "Lacto-Vegetarian",
    "Ovo-Vegetarian",
    "Vegan",
    "Pescetarian",
    "Paleo",
    "Primal",
    "Low FODMAP",
    "Whole30",
]

# Explicit mapping; anything not listed falls back to label.lower()
DIET_API_VALUES = {
    "Gluten Free": "gluten free",
    "Ketogenic": "ketogenic",
    "Vegetarian": "vegetarian",
    "Lacto-Vegetarian": "lacto-vegetarian",
    "Ovo-Vegetarian": "ovo-vegetarian",
    "Vegan": "vegan",
    "Pescetarian": "pescetarian",
    "Paleo": "paleo",
    "Primal": "primal",
    "Low FODMAP": "low fodmap",
    "Whole30": "whole30",
}

INTOLERANCE_OPTIONS = [
    "Dairy",
    "Egg",
    "Gluten",
    "Grain",
    "Peanut",
    "Seafood",
    "Sesame",
    "Shellfish",
    "Soy",
    "Sulfite",
    "Tree Nut",
    "Wheat",
]

# First entry is the "Any cuisine" choice
CUISINE_OPTIONS = [
    "",
    "African",
    "Asian",
    "American",
    "British",
    "Cajun",
    "Caribbean",
    "Chinese",
    "Eastern European",
    "European",
    "French",
    "German",
    "Greek",
    "Indian",
    "Irish",
    "Italian",
    "Japanese",
    "Jewish",
    "Korean",
    "Latin American",
    "Mediterranean",
    "Mexican",
    "Middle Eastern",
    "Nordic",
    "Southern",
    "Spanish",
    "Thai",
    "Vietnamese",
]

_WHITESPACE_RE = re.compile(r"\s+")


def _normalize_label(label: str) -> str:
    return _WHITESPACE_RE.sub(" ", label.lower()).strip()


def diet_to_api_value(label: str) -> str:
    """
    Convert a diet label to the value the recipe API expects.

    Examples:
        >>> diet_to_api_value("Gluten Free")
        'gluten free'
        >>> diet_to_api_value("Raw Food")
        'raw food'
    """
    return DIET_API_VALUES.get(label, label.lower())


def intolerance_to_api_value(label: str) -> str:
    """Lower-case an intolerance label and collapse inner whitespace."""
    return _normalize_label(label)


def cuisine_to_api_value(label: str) -> str:
    """Lower-case a cuisine label; the empty "Any cuisine" label stays empty."""
    return _normalize_label(label) if label else ""


def cuisine_display_label(label: str) -> str:
    """Label shown in the cuisine dropdown."""
    return label or "Any cuisine"


def toggle_selection(selected: List[str], value: str) -> List[str]:
    """
    Add or remove a value from a multi-select list.

    Returns a new list: ``value`` is removed if present, otherwise appended at the
    end. The relative order of the other entries is kept and ``selected`` is not
    modified.

    Examples:
        >>> toggle_selection(["Vegan"], "Paleo")
        ['Vegan', 'Paleo']
        >>> toggle_selection(["Vegan", "Paleo"], "Vegan")
        ['Paleo']
    """
    if value in selected:
        return [item for item in selected if item != value]
    return [*selected, value]
