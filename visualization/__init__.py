"""Visualization utilities for Payday Planner dashboards."""

from .charts import (
    build_allowance_chart,
    build_budget_share_chart,
    build_category_budget_chart,
)
from .theme import theme_tokens

__all__ = [
    "build_allowance_chart",
    "build_budget_share_chart",
    "build_category_budget_chart",
    "theme_tokens",
]
