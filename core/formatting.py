"""Formatting helpers for payday summaries."""

from __future__ import annotations

import html
from datetime import date
from typing import Optional

from core.models import PaydayCalculator, Projection

__all__ = [
    "build_payday_insights",
    "format_currency",
    "format_date_label",
    "format_due_phrase",
    "projection_status",
]


def format_currency(value: float, symbol: str = "$") -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_date_label(value: Optional[date]) -> str:
    if value is None:
        return "Not set"
    return value.strftime("%a %d %b %Y")


def format_due_phrase(days: int) -> str:
    if days < 0:
        return f"Overdue by {abs(days)} day{'s' if abs(days) != 1 else ''}"
    if days == 0:
        return "Due today"
    if days == 1:
        return "Due tomorrow"
    return f"Due in {days} days"


def projection_status(calculator: PaydayCalculator, projection: Projection) -> Optional[str]:
    """Return the prompt shown instead of results, or ``None`` when results apply."""

    if projection.next_payday is None:
        return "Please set your payday schedule"
    if calculator.starting_balance is None:
        return "Please enter your current balance"
    return None


def build_payday_insights(
    *,
    calculator: PaydayCalculator,
    projection: Projection,
    today: date,
    symbol: str = "$",
) -> list[str]:
    if projection.next_payday is None or calculator.starting_balance is None:
        return []

    insights: list[str] = []
    days = projection.days_remaining
    insights.append(
        f"<strong>{days}</strong> day{'s' if days != 1 else ''} until payday "
        f"({format_date_label(projection.next_payday)}). "
        f"Spend up to <strong>{format_currency(projection.daily_budget, symbol)}</strong> a day."
    )

    if projection.next_payday < today:
        insights.append("Your manual payday has passed. Update it to get a fresh allowance.")

    if projection.total_bills or projection.total_expenses:
        insights.append(
            f"Bills before payday: <strong>{format_currency(projection.total_bills, symbol)}</strong>; "
            f"expenses: <strong>{format_currency(projection.total_expenses, symbol)}</strong>."
        )

    if projection.current_balance < 0:
        insights.append(
            f"Heads up: you're <strong>{format_currency(-projection.current_balance, symbol)}</strong> "
            "short before payday."
        )
    elif calculator.savings_goal.enabled and calculator.savings_goal.amount:
        if projection.current_balance < calculator.savings_goal.amount:
            insights.append("Your savings goal is larger than what's left, so the allowance is zero.")
        else:
            insights.append(
                f"Setting aside <strong>{format_currency(projection.savings_per_day, symbol)}</strong> "
                "a day reaches your savings goal by payday."
            )

    if projection.days_in_current_week:
        insights.append(
            f"This week ({projection.days_in_current_week} day"
            f"{'s' if projection.days_in_current_week != 1 else ''} left): "
            f"<strong>{format_currency(projection.current_week_budget, symbol)}</strong>."
        )

    target = calculator.spending_target
    if target.enabled and target.amount:
        allowance = projection.daily_budget if target.period == "daily" else projection.weekly_budget
        verdict = "within" if target.amount <= allowance else "above"
        insights.append(
            f"Your {html.escape(target.period)} spending target of {format_currency(target.amount, symbol)} "
            f"is {verdict} the allowance."
        )

    return insights
