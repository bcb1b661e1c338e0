"""
Render decisions for recipe cards and the recipe detail view.

These helpers decide which recipe fields are shown and how: ingredient badges
on result cards, nutrient amounts, instruction steps and the time/servings
badges. They work on the raw recipe dicts returned by the recipe API.
"""

import html
import math
import re
from numbers import Number
from typing import Any, Dict, List, Optional, Tuple

MAX_NUTRIENTS = 12

_TAG_RE = re.compile(r"<[^>]+>")
_BLANK_LINES_RE = re.compile(r"\n\s*\n+")


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _badge_count(recipe: Dict[str, Any], count_key: str, list_key: str) -> Optional[int]:
    count = recipe.get(count_key)
    if _is_number(count):
        return int(count)
    items = recipe.get(list_key)
    if items:
        return len(items)
    return None


def ingredient_counts(recipe: Dict[str, Any]) -> Tuple[Optional[int], Optional[int]]:
    """
    Get the "Used" and "Missing" badge values of a result card.

    A numeric usedIngredientCount/missedIngredientCount wins; otherwise the
    length of a non-empty usedIngredients/missedIngredients list is used.
    None means the badge is not shown.

    Examples:
        >>> ingredient_counts({"usedIngredientCount": 0, "missedIngredients": [{}, {}]})
        (0, 2)
        >>> ingredient_counts({})
        (None, None)
    """
    return (
        _badge_count(recipe, "usedIngredientCount", "usedIngredients"),
        _badge_count(recipe, "missedIngredientCount", "missedIngredients"),
    )


def format_nutrient_amount(amount: Any) -> str:
    """
    Format a nutrient amount: integers as-is, everything else rounded to one decimal.

    Examples:
        >>> format_nutrient_amount(12)
        '12'
        >>> format_nutrient_amount(3.14159)
        '3.1'
    """
    if not _is_number(amount):
        return str(amount) if amount is not None else ""
    if float(amount).is_integer():
        return str(int(amount))
    # half-up rounding to one decimal
    rounded = math.floor(float(amount) * 10 + 0.5) / 10
    return str(int(rounded)) if rounded.is_integer() else str(rounded)


def top_nutrients(recipe: Dict[str, Any], limit: int = MAX_NUTRIENTS) -> List[Dict[str, Any]]:
    """First ``limit`` nutrients of the recipe's nutrition block (empty when absent)."""
    nutrition = recipe.get("nutrition") or {}
    nutrients = nutrition.get("nutrients") or []
    return list(nutrients[:limit])


def nutrient_rows(recipe: Dict[str, Any], limit: int = MAX_NUTRIENTS) -> List[Dict[str, str]]:
    """Nutrients as display rows: {"value": "12.5g", "name": "Fat"}."""
    return [
        {
            "value": f"{format_nutrient_amount(n.get('amount'))}{n.get('unit') or ''}",
            "name": n.get("name") or "",
        }
        for n in top_nutrients(recipe, limit)
    ]


def instruction_steps(recipe: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Steps of the first analyzed instruction block; empty when there is none."""
    blocks = recipe.get("analyzedInstructions") or []
    if not blocks:
        return []
    return list(blocks[0].get("steps") or [])


def fallback_instructions(recipe: Dict[str, Any]) -> Optional[str]:
    """Raw ``instructions`` HTML, only used when there are no analyzed steps."""
    if recipe.get("analyzedInstructions"):
        return None
    return recipe.get("instructions") or None


def ingredient_lines(recipe: Dict[str, Any]) -> List[str]:
    """The ``original`` text of every extended ingredient."""
    return [
        ing.get("original") or ing.get("name") or ""
        for ing in (recipe.get("extendedIngredients") or [])
    ]


def detail_badges(recipe: Dict[str, Any]) -> List[str]:
    """Badges under the detail title; each is only shown for a truthy value."""
    badges = []
    if recipe.get("readyInMinutes"):
        badges.append(f"{recipe['readyInMinutes']} minutes")
    if recipe.get("servings"):
        badges.append(f"Serves {recipe['servings']}")
    return badges


def strip_html(text: Optional[str]) -> str:
    """Drop tags and unescape entities from recipe API HTML (summaries, instructions)."""
    if not text:
        return ""
    text = re.sub(r"<\s*(br|/p|/li)\s*/?>", "\n", text, flags=re.IGNORECASE)
    text = html.unescape(_TAG_RE.sub("", text))
    return _BLANK_LINES_RE.sub("\n", text).strip()
