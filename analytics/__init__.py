"""Analytics helpers shared across Payday Planner services."""

from analytics.categorisation import (
    BudgetOverview,
    build_category_breakdown,
    compute_category_spent,
    summarise_budget,
    totals_by_category,
)
from analytics.forecasting import bills_due_by_day, build_allowance_timeline
from analytics.payday import (
    aggregate,
    build_projection,
    calculate_current_balance,
    calculate_daily_budget,
    calculate_savings_per_day,
    calculate_weekly_budget,
    days_in_current_week,
    days_until_payday,
    filter_before_payday,
    resolve_next_payday,
)
from analytics.recurring import expand_recurring_bills

__all__ = [
    "BudgetOverview",
    "build_category_breakdown",
    "compute_category_spent",
    "summarise_budget",
    "totals_by_category",
    "bills_due_by_day",
    "build_allowance_timeline",
    "aggregate",
    "build_projection",
    "calculate_current_balance",
    "calculate_daily_budget",
    "calculate_savings_per_day",
    "calculate_weekly_budget",
    "days_in_current_week",
    "days_until_payday",
    "filter_before_payday",
    "resolve_next_payday",
    "expand_recurring_bills",
]
