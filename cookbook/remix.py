"""
Recipe remix engine.

A remix rewrites a recipe under a named transformation (e.g. "low-carb",
"vegan") or under a free-text custom prompt.

Two strategies are used:
- LLM: when OPENAI_API_KEY is set, the OpenAI chat completions API rewrites the
  recipe from its title, ingredient lines, steps and the transformation
- Rules: keyword substitution tables per transformation, applied to every
  ingredient line and step, plus a few tips. Always available for named types.

A named remix falls back to the rules when the LLM call fails. A custom remix
needs the LLM and raises RemixUnavailableError without it.
"""

import logging
import os
import re
from typing import Any, Dict, List, Optional, Tuple

from openai import OpenAI, OpenAIError

from cookbook.exceptions import InvalidRemixError, RemixUnavailableError
from cookbook.formatting import ingredient_lines, instruction_steps, strip_html
from cookbook.models import RemixResult

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"

CUSTOM_REMIX = "custom"

# Remix type -> description used in the LLM prompt and as the rules heading
REMIX_TYPES: Dict[str, str] = {
    "low-carb": "Low-carb: replace starches, grains and sugar with low-carb alternatives",
    "vegan": "Vegan: remove all animal products, including dairy, eggs and honey",
    "vegetarian": "Vegetarian: replace meat and fish with vegetarian proteins",
    "gluten-free": "Gluten-free: replace wheat, barley, rye and other gluten sources",
    "dairy-free": "Dairy-free: replace milk, butter, cream, cheese and yogurt",
    "healthier": "Healthier: less sugar, saturated fat and refined grains",
    "high-protein": "High-protein: increase the protein content of the dish",
    "quick": "Quick: shorten the preparation and cooking time",
    CUSTOM_REMIX: "Custom: follow the user's own instructions",
}

# Substitution tables: ingredient keyword -> replacement.
# Matching is case-insensitive on whole words, longest keyword first.
SUBSTITUTIONS: Dict[str, Dict[str, str]] = {
    "low-carb": {
        "spaghetti": "zucchini noodles",
        "pasta": "zucchini noodles",
        "noodles": "shirataki noodles",
        "rice": "cauliflower rice",
        "potatoes": "cauliflower florets",
        "potato": "cauliflower",
        "bread": "lettuce wraps",
        "tortillas": "lettuce wraps",
        "tortilla": "lettuce wrap",
        "flour": "almond flour",
        "sugar": "erythritol",
        "honey": "sugar-free syrup",
        "breadcrumbs": "crushed pork rinds",
    },
    "vegan": {
        "chicken broth": "vegetable broth",
        "beef broth": "vegetable broth",
        "chicken": "chickpeas",
        "beef": "lentils",
        "ground beef": "crumbled tempeh",
        "pork": "jackfruit",
        "bacon": "smoked tempeh",
        "fish": "firm tofu",
        "shrimp": "king oyster mushrooms",
        "butter": "vegan butter",
        "milk": "oat milk",
        "heavy cream": "coconut cream",
        "cream": "coconut cream",
        "sour cream": "cashew cream",
        "cheese": "nutritional yeast",
        "parmesan": "nutritional yeast",
        "yogurt": "coconut yogurt",
        "eggs": "flax eggs",
        "egg": "flax egg",
        "honey": "maple syrup",
        "mayonnaise": "vegan mayonnaise",
    },
    "vegetarian": {
        "chicken broth": "vegetable broth",
        "beef broth": "vegetable broth",
        "chicken": "chickpeas",
        "beef": "lentils",
        "ground beef": "crumbled tempeh",
        "pork": "jackfruit",
        "bacon": "smoked tempeh",
        "sausage": "vegetarian sausage",
        "fish": "firm tofu",
        "salmon": "marinated tofu",
        "tuna": "mashed chickpeas",
        "shrimp": "king oyster mushrooms",
        "anchovies": "capers",
        "fish sauce": "soy sauce",
        "gelatin": "agar agar",
    },
    "gluten-free": {
        "all-purpose flour": "gluten-free flour blend",
        "flour": "gluten-free flour",
        "spaghetti": "gluten-free spaghetti",
        "pasta": "gluten-free pasta",
        "noodles": "rice noodles",
        "bread": "gluten-free bread",
        "breadcrumbs": "gluten-free breadcrumbs",
        "soy sauce": "tamari",
        "couscous": "quinoa",
        "barley": "brown rice",
        "bulgur": "quinoa",
        "tortillas": "corn tortillas",
        "beer": "gluten-free beer",
    },
    "dairy-free": {
        "milk": "oat milk",
        "butter": "olive oil",
        "heavy cream": "coconut cream",
        "cream": "coconut cream",
        "sour cream": "cashew cream",
        "cheese": "dairy-free cheese",
        "parmesan": "nutritional yeast",
        "yogurt": "coconut yogurt",
        "buttermilk": "oat milk with lemon juice",
        "ghee": "coconut oil",
    },
    "healthier": {
        "sugar": "a little honey",
        "white rice": "brown rice",
        "rice": "brown rice",
        "butter": "olive oil",
        "heavy cream": "greek yogurt",
        "sour cream": "greek yogurt",
        "mayonnaise": "greek yogurt",
        "flour": "whole wheat flour",
        "pasta": "whole wheat pasta",
        "spaghetti": "whole wheat spaghetti",
        "bacon": "turkey bacon",
        "ground beef": "lean ground turkey",
        "vegetable oil": "olive oil",
    },
    "high-protein": {
        "pasta": "chickpea pasta",
        "spaghetti": "lentil spaghetti",
        "rice": "quinoa",
        "yogurt": "greek yogurt",
        "milk": "ultra-filtered milk",
        "flour": "protein-enriched flour",
        "sour cream": "greek yogurt",
        "cream cheese": "cottage cheese",
    },
    "quick": {
        "dried beans": "canned beans",
        "garlic": "jarred minced garlic",
        "rice": "instant rice",
        "chicken breast": "rotisserie chicken",
        "stock": "store-bought stock",
        "broth": "store-bought broth",
    },
}

TIPS: Dict[str, List[str]] = {
    "low-carb": [
        "Bulk up the plate with non-starchy vegetables.",
        "Check sauces and marinades for hidden sugar.",
    ],
    "vegan": [
        "Season plant proteins generously; they carry less fat than meat.",
        "A splash of soy sauce or miso adds the savory depth of meat or cheese.",
    ],
    "vegetarian": [
        "Brown the plant protein well before adding liquids.",
        "Mushrooms and soy sauce add a meaty umami note.",
    ],
    "gluten-free": [
        "Check stock cubes, spice blends and sauces for hidden gluten.",
        "Gluten-free flours absorb more liquid; add it gradually.",
    ],
    "dairy-free": [
        "Stir coconut cream in at the end to keep sauces from splitting.",
        "Nutritional yeast gives a cheesy flavor without dairy.",
    ],
    "healthier": [
        "Add an extra portion of vegetables.",
        "Taste before salting; herbs and citrus can replace some salt.",
    ],
    "high-protein": [
        "Top with seeds, nuts or a boiled egg for extra protein.",
        "Use greek yogurt as the base for dressings and sauces.",
    ],
    "quick": [
        "Prep all ingredients before you start cooking.",
        "Cut vegetables smaller so they cook faster.",
    ],
}


def _compile_table(table: Dict[str, str]) -> "re.Pattern[str]":
    keywords = sorted(table, key=len, reverse=True)
    return re.compile(r"\b(" + "|".join(re.escape(k) for k in keywords) + r")\b", re.IGNORECASE)


_PATTERNS = {name: _compile_table(table) for name, table in SUBSTITUTIONS.items()}


def substitute(text: str, remix_type: str) -> Tuple[str, List[Tuple[str, str]]]:
    """
    Apply the substitution table of ``remix_type`` to a line of text.

    Substitution is done in a single pass, so a replacement is never replaced
    again. Capitalized keywords get a capitalized replacement.

    Returns:
        Tuple of (new text, list of (original word, replacement) pairs)

    Examples:
        >>> substitute("2 cups Rice", "low-carb")
        ('2 cups Cauliflower rice', [('Rice', 'cauliflower rice')])
    """
    table = SUBSTITUTIONS.get(remix_type)
    if not table:
        return text, []
    table_lower = {k.lower(): v for k, v in table.items()}
    swaps: List[Tuple[str, str]] = []

    def _replace(match: "re.Match[str]") -> str:
        word = match.group(0)
        replacement = table_lower[word.lower()]
        swaps.append((word, replacement))
        if word[:1].isupper():
            return replacement[:1].upper() + replacement[1:]
        return replacement

    return _PATTERNS[remix_type].sub(_replace, text), swaps


def _recipe_steps(recipe: Dict[str, Any]) -> List[str]:
    steps = [str(step.get("step") or "").strip() for step in instruction_steps(recipe)]
    steps = [s for s in steps if s]
    if steps:
        return steps
    plain = strip_html(recipe.get("instructions"))
    return [line.strip() for line in plain.split("\n") if line.strip()]


def rules_remix(recipe: Dict[str, Any], remix_type: str) -> str:
    """
    Rewrite a recipe with the substitution tables.

    Every ingredient line and step gets the substitutions for ``remix_type``;
    changed ingredient lines mention what they replace.
    """
    title = recipe.get("title") or "Recipe"
    heading = REMIX_TYPES[remix_type].split(":", 1)[0]
    lines = [f"{title} ({heading} remix)", ""]

    lines.append("Ingredients:")
    ingredients = [line for line in ingredient_lines(recipe) if line]
    changed = 0
    for original in ingredients:
        new_line, swaps = substitute(original, remix_type)
        if swaps:
            changed += 1
            lines.append(f"- {new_line} (instead of: {original})")
        else:
            lines.append(f"- {original}")
    if not ingredients:
        lines.append("- (no ingredient list available)")

    steps = _recipe_steps(recipe)
    if steps:
        lines.append("")
        lines.append("Instructions:")
        for number, step in enumerate(steps, start=1):
            lines.append(f"{number}. {substitute(step, remix_type)[0]}")

    lines.append("")
    lines.append("Tips:")
    if ingredients and not changed:
        lines.append("- This recipe already fits this remix; no ingredient swaps needed.")
    for tip in TIPS.get(remix_type, []):
        lines.append(f"- {tip}")
    return "\n".join(lines)


def build_llm_prompt(recipe: Dict[str, Any], remix_type: str, custom_prompt: Optional[str]) -> str:
    """Build the user message sent to the language model."""
    ingredients = "\n".join(f"- {line}" for line in ingredient_lines(recipe) if line) or "- (not provided)"
    steps = "\n".join(f"{n}. {s}" for n, s in enumerate(_recipe_steps(recipe), start=1)) or "(not provided)"
    if remix_type == CUSTOM_REMIX:
        goal = f"Rewrite the recipe following these instructions: {custom_prompt.strip()}"
    else:
        goal = f"Rewrite the recipe as a {REMIX_TYPES[remix_type]}."
        if custom_prompt and custom_prompt.strip():
            goal += f" Also: {custom_prompt.strip()}"
    return (
        f"{goal}\n\n"
        f"Title: {recipe.get('title') or 'Untitled recipe'}\n"
        f"Servings: {recipe.get('servings') or 'unknown'}\n"
        f"Ready in: {recipe.get('readyInMinutes') or 'unknown'} minutes\n\n"
        f"Ingredients:\n{ingredients}\n\n"
        f"Instructions:\n{steps}\n\n"
        "Answer with a new title, an ingredient list, numbered instructions and a short note "
        "on what changed. Plain text, no markdown tables."
    )


# Using a function so that patches in tests work correctly
def _get_llm_client() -> Optional[OpenAI]:
    """OpenAI client when OPENAI_API_KEY is configured, None otherwise."""
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        return None
    return OpenAI(api_key=api_key)


def llm_remix(client: OpenAI, recipe: Dict[str, Any], remix_type: str, custom_prompt: Optional[str]) -> str:
    """
    Rewrite a recipe with the OpenAI chat completions API.

    Raises:
        RemixUnavailableError: If the API call fails or returns no text
    """
    model = os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)
    try:
        completion = client.chat.completions.create(
            model=model,
            messages=[
                {
                    "role": "system",
                    "content": "You are an experienced chef who adapts home recipes. "
                               "Keep quantities realistic and the steps easy to follow.",
                },
                {"role": "user", "content": build_llm_prompt(recipe, remix_type, custom_prompt)},
            ],
            temperature=0.7,
        )
    except OpenAIError as e:
        raise RemixUnavailableError(f"Remix service failed: {e}") from e

    content = completion.choices[0].message.content if completion.choices else None
    if not content or not content.strip():
        raise RemixUnavailableError("Remix service returned an empty answer.")
    return content.strip()


def remix_recipe(
    recipe: Dict[str, Any],
    remix_type: str,
    custom_prompt: Optional[str] = None,
) -> RemixResult:
    """
    Remix a recipe under a named transformation or a custom prompt.

    Args:
        recipe: Recipe body (as returned by the recipe API)
        remix_type: One of REMIX_TYPES
        custom_prompt: Free-text instructions; required for "custom"

    Returns:
        RemixResult with the rewritten text and the strategy that produced it

    Raises:
        InvalidRemixError: Unknown type, or "custom" without a prompt
        RemixUnavailableError: "custom" without a working language model
    """
    remix_type = (remix_type or "").strip().lower()
    if remix_type not in REMIX_TYPES:
        raise InvalidRemixError(
            f"Invalid remix type: '{remix_type}'. Valid types: {', '.join(REMIX_TYPES)}"
        )
    if remix_type == CUSTOM_REMIX and not (custom_prompt or "").strip():
        raise InvalidRemixError("A custom remix needs a prompt describing the change.")

    client = _get_llm_client()
    if client is not None:
        try:
            text = llm_remix(client, recipe, remix_type, custom_prompt)
            return RemixResult(enhanced=text, type=remix_type, source="llm")
        except RemixUnavailableError as e:
            if remix_type == CUSTOM_REMIX:
                raise
            logger.warning("LLM remix failed for type=%s, falling back to rules: %s", remix_type, e)

    if remix_type == CUSTOM_REMIX:
        raise RemixUnavailableError(
            "Custom remixes need a language model. Set OPENAI_API_KEY on the backend."
        )

    logger.info("Rules remix: type=%s title=%r", remix_type, recipe.get("title"))
    return RemixResult(enhanced=rules_remix(recipe, remix_type), type=remix_type, source="rules")
