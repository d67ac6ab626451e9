"""Streamlit application package for the Payday Planner."""

from .main import main

__all__ = ["main"]
