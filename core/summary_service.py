"""Core logic for assembling Payday Planner dashboard summaries."""

from __future__ import annotations

from dataclasses import replace
from datetime import date

from analytics.categorisation import (
    CATEGORY_HORIZON_MONTHS,
    NEAR_LIMIT_RATIO,
    build_category_breakdown,
    compute_category_spent,
    summarise_budget,
)
from analytics.forecasting import build_allowance_timeline
from analytics.payday import build_projection
from core.formatting import build_payday_insights, projection_status
from core.models import BudgetDocument, PaydayDashboard

__all__ = ["prepare_payday_dashboard", "refresh_category_spent"]


def refresh_category_spent(
    document: BudgetDocument,
    today: date,
    horizon_months: int = CATEGORY_HORIZON_MONTHS,
) -> BudgetDocument:
    """Return ``document`` with every category's ``spent`` recomputed."""

    categories = compute_category_spent(
        document.categories,
        document.daily_expenses,
        document.payday_calculator.bills,
        today,
        horizon_months,
    )
    return replace(document, categories=tuple(categories))


def prepare_payday_dashboard(
    document: BudgetDocument,
    today: date,
    *,
    horizon_months: int = CATEGORY_HORIZON_MONTHS,
    near_limit_ratio: float = NEAR_LIMIT_RATIO,
    currency_symbol: str = "$",
) -> PaydayDashboard:
    calculator = document.payday_calculator
    categories = list(refresh_category_spent(document, today, horizon_months).categories)
    projection = build_projection(calculator, document.daily_expenses, today)

    return {
        "today": today,
        "projection": projection,
        "categories": categories,
        "category_breakdown": build_category_breakdown(categories, projection, near_limit_ratio),
        "budget_overview": summarise_budget(categories),
        "allowance_timeline": build_allowance_timeline(projection, today),
        "status_message": projection_status(calculator, projection),
        "insights": build_payday_insights(
            calculator=calculator,
            projection=projection,
            today=today,
            symbol=currency_symbol,
        ),
    }
