"""
Global CSS Styling for Recipe Transformer.

This module provides load_global_styles() to inject the warm orange/red theme:
serif headings, rounded cards, pill-shaped filter buttons and the header and
footer gradients.
"""

import streamlit as st


def load_global_styles() -> None:
    """
    Inject global CSS styles for the Recipe Transformer app.

    This function:
    - Uses Georgia for headings and the system font for body text
    - Paints the page with a soft amber-to-red gradient
    - Styles the header banner, recipe cards, badges and footer
    - Rounds buttons into pills (selected filters use the primary color)
    """
    css = """
    <style>
        /* Page background */
        .stApp {
            background: linear-gradient(135deg, #fffbeb 0%, #fff7ed 50%, #fef2f2 100%);
        }

        html, body, [class*="css"] {
            font-family: system-ui, -apple-system, 'Segoe UI', sans-serif;
        }

        h1, h2, h3, h4 {
            font-family: Georgia, serif !important;
            color: #1f2937;
        }

        /* Header banner */
        .rt-header {
            background: linear-gradient(90deg, #ea580c 0%, #dc2626 100%);
            color: white;
            border-radius: 18px;
            padding: 1.75rem 2rem;
            margin-bottom: 2rem;
            box-shadow: 0 20px 40px rgba(220, 38, 38, 0.2);
        }

        .rt-header h1 {
            color: white !important;
            margin: 0 !important;
            font-size: 2.4rem !important;
        }

        .rt-header .subtitle {
            color: #ffedd5;
            margin-top: 0.25rem;
        }

        /* Buttons - pills */
        .stButton > button {
            border-radius: 999px !important;
            font-weight: 500 !important;
            transition: all 0.2s ease !important;
        }

        .stButton > button[kind="primary"] {
            background: linear-gradient(90deg, #f97316 0%, #ef4444 100%) !important;
            border: none !important;
        }

        /* Recipe card */
        .rt-card-title {
            font-family: Georgia, serif;
            font-weight: 700;
            font-size: 1.05rem;
            color: #1f2937;
            min-height: 2.8rem;
        }

        .rt-card-placeholder {
            height: 180px;
            border-radius: 14px;
            background: linear-gradient(135deg, #ffedd5 0%, #fee2e2 100%);
            display: flex;
            align-items: center;
            justify-content: center;
            font-size: 3.5rem;
        }

        /* Badges */
        .rt-badge {
            display: inline-block;
            padding: 0.1rem 0.6rem;
            border-radius: 999px;
            font-size: 0.85rem;
            font-weight: 500;
            margin-right: 0.4rem;
        }

        .rt-badge--used {
            background: #dcfce7;
            color: #166534;
        }

        .rt-badge--missing {
            background: #fef3c7;
            color: #92400e;
        }

        .rt-badge--detail {
            background: #ffedd5;
            color: #9a3412;
            font-size: 0.95rem;
            padding: 0.3rem 0.9rem;
        }

        /* Instruction step number */
        .rt-step-number {
            width: 2.5rem;
            height: 2.5rem;
            border-radius: 999px;
            background: linear-gradient(135deg, #f97316 0%, #ef4444 100%);
            color: white;
            font-weight: 700;
            display: flex;
            align-items: center;
            justify-content: center;
        }

        /* Nutrient tile */
        .rt-nutrient {
            background: #fff7ed;
            border-radius: 14px;
            padding: 0.9rem;
            text-align: center;
            margin-bottom: 0.8rem;
        }

        .rt-nutrient .value {
            font-size: 1.4rem;
            font-weight: 700;
            color: #ea580c;
        }

        .rt-nutrient .name {
            font-size: 0.85rem;
            color: #4b5563;
        }

        /* Footer */
        .rt-footer {
            margin-top: 4rem;
            padding: 1.5rem;
            border-radius: 18px;
            background: linear-gradient(90deg, #ea580c 0%, #dc2626 100%);
            color: #ffedd5;
            text-align: center;
        }
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)
