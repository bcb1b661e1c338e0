"""
Layout primitives for consistent page structure.

Provides the page header banner, section headers, badges and the footer.
"""

import html
from typing import List, Optional

import streamlit as st


def page_header(title: str, subtitle: Optional[str] = None) -> None:
    """
    Render the gradient header banner.

    The title is rendered with st.title so it stays a real heading; the banner
    styling comes from the surrounding div.
    """
    st.markdown('<div class="rt-header">', unsafe_allow_html=True)
    st.title(f"👨‍🍳 {title}")
    if subtitle:
        st.markdown(f'<div class="subtitle">{html.escape(subtitle)}</div>', unsafe_allow_html=True)
    st.markdown('</div>', unsafe_allow_html=True)


def section(title: str, caption: Optional[str] = None) -> None:
    """
    Render a section header with optional caption.

    Args:
        title: Section title
        caption: Optional caption/help text below title
    """
    st.markdown(f"### {title}")
    if caption:
        st.caption(caption)


def badges(labels: List[str], variant: str) -> str:
    """HTML for a row of pill badges (variant: used, missing or detail)."""
    return " ".join(
        f'<span class="rt-badge rt-badge--{variant}">{html.escape(label)}</span>'
        for label in labels
    )


def render_footer() -> None:
    """Render the footer shown under every view."""
    st.markdown(
        '<div class="rt-footer">Powered by Spoonacular API • Built with Streamlit &amp; FastAPI</div>',
        unsafe_allow_html=True,
    )
