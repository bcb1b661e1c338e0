"""
The three views of the recipe browser: search form, result cards and recipe detail.

Each render function reads a cookbook.browser.BrowserState and calls back into
the app for actions that talk to the backend (search, open recipe, remix).
"""

import html
from typing import Any, Callable, Dict, List, Optional

import pandas as pd
import streamlit as st

from cookbook.browser import BrowserState
from cookbook.filters import (
    CUISINE_OPTIONS,
    DIET_OPTIONS,
    INTOLERANCE_OPTIONS,
    cuisine_display_label,
)
from cookbook.formatting import (
    detail_badges,
    fallback_instructions,
    ingredient_counts,
    ingredient_lines,
    instruction_steps,
    nutrient_rows,
)
from cookbook.remix import CUSTOM_REMIX, REMIX_TYPES
from ui.layout import badges, section

CARDS_PER_ROW = 4
NUTRIENT_COLUMNS = 4


def _toggle_row(options: List[str], selected: List[str], on_toggle: Callable[[str], None], key_prefix: str) -> None:
    """Pill buttons for a multi-select filter; selected options use the primary style."""
    columns = st.columns(4)
    for index, option in enumerate(options):
        with columns[index % 4]:
            st.button(
                option,
                key=f"{key_prefix}_{option}",
                type="primary" if option in selected else "secondary",
                on_click=on_toggle,
                args=(option,),
                use_container_width=True,
            )


def render_search_view(state: BrowserState, on_search: Callable[[], None]) -> None:
    """Render the search form. Widget values are copied back onto ``state``."""
    state.ingredients_query = st.text_input(
        "What ingredients do you have?",
        value=state.ingredients_query,
        key="ingredients_query",
        placeholder="e.g. chicken, garlic, rice, tomatoes",
        help="Separate ingredients with commas.",
    )

    section("Diet")
    _toggle_row(DIET_OPTIONS, state.selected_diets, state.toggle_diet, "diet")

    section("Cuisine")
    state.selected_cuisine = st.selectbox(
        "Cuisine",
        CUISINE_OPTIONS,
        index=CUISINE_OPTIONS.index(state.selected_cuisine) if state.selected_cuisine in CUISINE_OPTIONS else 0,
        format_func=cuisine_display_label,
        key="cuisine",
        label_visibility="collapsed",
    )

    section("Intolerances")
    _toggle_row(INTOLERANCE_OPTIONS, state.selected_intolerances, state.toggle_intolerance, "intolerance")

    st.divider()
    state.ignore_pantry = st.checkbox(
        "Ignore pantry staples (salt, water, flour, etc.)",
        value=state.ignore_pantry,
        key="ignore_pantry",
    )
    state.exclude_ingredients_query = st.text_input(
        "Ingredients to ignore",
        value=state.exclude_ingredients_query,
        key="exclude_ingredients_query",
        placeholder="e.g. mushrooms, olives",
    )

    if st.button(
        "Find recipes by ingredients",
        key="search_button",
        type="primary",
        disabled=state.search_disabled,
        use_container_width=True,
    ):
        on_search()


def _render_card(index: int, recipe: Dict[str, Any], on_open: Callable[[int], None]) -> None:
    with st.container(border=True):
        if recipe.get("image"):
            st.image(recipe["image"], use_container_width=True)
        else:
            st.markdown('<div class="rt-card-placeholder">🍽️</div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="rt-card-title">{html.escape(recipe.get("title") or "Untitled recipe")}</div>',
            unsafe_allow_html=True,
        )

        used, missing = ingredient_counts(recipe)
        row = []
        if used is not None:
            row.append(badges([f"✓ Used: {used}"], "used"))
        if missing is not None:
            row.append(badges([f"+ Missing: {missing}"], "missing"))
        if row:
            st.markdown(" ".join(row), unsafe_allow_html=True)

        recipe_id = recipe.get("id")
        st.button(
            "View recipe",
            key=f"view_recipe_{index}_{recipe_id}",
            on_click=on_open,
            args=(recipe_id,),
            disabled=recipe_id is None,
            use_container_width=True,
        )


def render_results_view(
    state: BrowserState,
    on_new_search: Callable[[], None],
    on_open: Callable[[int], None],
) -> None:
    """Render the result cards, CARDS_PER_ROW per row."""
    header, action = st.columns([4, 1])
    with header:
        st.markdown(f"## Found {state.total_results} recipes")
        st.caption(f"Showing {len(state.recipes)} recipes for: {state.ingredients_query}")
    with action:
        st.button("New Search", key="new_search", on_click=on_new_search, use_container_width=True)

    for start in range(0, len(state.recipes), CARDS_PER_ROW):
        columns = st.columns(CARDS_PER_ROW)
        for offset, (column, recipe) in enumerate(zip(columns, state.recipes[start:start + CARDS_PER_ROW])):
            with column:
                _render_card(start + offset, recipe, on_open)


def _render_instructions(recipe: Dict[str, Any]) -> None:
    section("Instructions")
    steps = instruction_steps(recipe)
    if steps:
        for step in steps:
            number, text = st.columns([1, 12])
            with number:
                st.markdown(
                    f'<div class="rt-step-number">{html.escape(str(step.get("number", "")))}</div>',
                    unsafe_allow_html=True,
                )
            with text:
                st.write(step.get("step") or "")
        return

    raw = fallback_instructions(recipe)
    if raw:
        st.markdown(raw, unsafe_allow_html=True)
    else:
        st.caption("No instructions available for this recipe.")


def _render_nutrition(recipe: Dict[str, Any]) -> None:
    rows = nutrient_rows(recipe)
    if not rows:
        return
    section("Nutrition (per serving)")
    for start in range(0, len(rows), NUTRIENT_COLUMNS):
        columns = st.columns(NUTRIENT_COLUMNS)
        for column, row in zip(columns, rows[start:start + NUTRIENT_COLUMNS]):
            with column:
                st.markdown(
                    f'<div class="rt-nutrient"><div class="value">{html.escape(row["value"])}</div>'
                    f'<div class="name">{html.escape(row["name"])}</div></div>',
                    unsafe_allow_html=True,
                )

    nutrients = (recipe.get("nutrition") or {}).get("nutrients") or []
    with st.expander("All nutrients"):
        df = pd.DataFrame(
            [
                {
                    "Nutrient": n.get("name"),
                    "Amount": n.get("amount"),
                    "Unit": n.get("unit"),
                    "% Daily Value": n.get("percentOfDailyNeeds"),
                }
                for n in nutrients
            ]
        )
        st.dataframe(df, hide_index=True, use_container_width=True)


def _render_remix(state: BrowserState, on_remix: Callable[[str, Optional[str]], None]) -> None:
    section("Remix This Recipe", "Rewrite the recipe for a diet or goal, or describe your own change.")
    remix_type = st.selectbox(
        "Remix type",
        list(REMIX_TYPES),
        format_func=lambda t: REMIX_TYPES[t].split(":", 1)[0],
        key="remix_type",
    )
    custom_prompt = None
    if remix_type == CUSTOM_REMIX:
        custom_prompt = st.text_area(
            "Describe the change",
            key="remix_prompt",
            placeholder="e.g. make it spicier and serve it as a wrap",
        )
    if st.button("Remix recipe", key="remix_button", type="primary", disabled=state.loading):
        on_remix(remix_type, custom_prompt)

    if state.remix:
        source = "AI chef" if state.remix.get("source") == "llm" else "substitution rules"
        st.caption(f"Remixed with {source}")
        st.text(state.remix.get("enhanced") or "")


def render_detail_view(
    state: BrowserState,
    on_back: Callable[[], None],
    on_remix: Callable[[str, Optional[str]], None],
) -> None:
    """Render the selected recipe: summary, ingredients, instructions, nutrition and remix."""
    recipe = state.selected_recipe or {}
    st.button("← Back to Results", key="back_to_results", on_click=on_back)

    st.markdown(f"## {recipe.get('title') or 'Untitled recipe'}")
    if recipe.get("image"):
        st.image(recipe["image"], use_container_width=True)

    badge_labels = detail_badges(recipe)
    if badge_labels:
        st.markdown(badges(badge_labels, "detail"), unsafe_allow_html=True)

    if recipe.get("summary"):
        section("About This Recipe")
        st.markdown(recipe["summary"], unsafe_allow_html=True)

    lines = [line for line in ingredient_lines(recipe) if line]
    if lines:
        section("Ingredients")
        st.markdown("\n".join(f"- {line}" for line in lines))

    _render_instructions(recipe)
    _render_nutrition(recipe)

    st.divider()
    _render_remix(state, on_remix)
