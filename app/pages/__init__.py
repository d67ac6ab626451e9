"""Page modules for the Payday Planner Streamlit application."""

from .budget import render_page as render_budget_page
from .data import render_page as render_data_page
from .payday import render_page as render_payday_page

__all__ = [
    "render_budget_page",
    "render_data_page",
    "render_payday_page",
]
