"""
UI Styling and Components Module.

This module provides global CSS styling, layout primitives and the three
recipe views (search, results, detail) of the Recipe Transformer app.
"""

from ui.styles import load_global_styles
from ui.layout import page_header, section, render_footer

__all__ = [
    "load_global_styles",
    "page_header",
    "section",
    "render_footer",
]
