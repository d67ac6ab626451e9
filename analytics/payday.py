"""Payday projection engine: next payday, pre-payday window and daily allowance."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional, Sequence, TypeVar

from analytics.recurring import advance, coerce_interval, expand_recurring_bills
from core.dates import parse_date
from core.models import (
    SCHEDULE_RECURRENCES,
    AnyBill,
    BudgetFigures,
    Expense,
    PaydayCalculator,
    Projection,
    SavingsGoal,
    Schedule,
)

__all__ = [
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
    "sum_amounts",
]

T = TypeVar("T")

_SATURDAY = 5


def resolve_next_payday(schedule: Optional[Schedule], today: date) -> date | None:
    """Return the next payday for ``schedule`` relative to ``today``.

    A manual payday is returned as entered, even when it has already passed.
    A recurring payday is stepped forward from its anchor until it falls
    strictly after ``today``, so a payday landing on today is skipped. Monthly
    steps keep the anchor's day-of-month and overflow short months forward.
    """

    if schedule is None:
        return None

    if schedule.type == "manual":
        return parse_date(schedule.next_payday)

    if schedule.type != "recurring":
        return None

    anchor = parse_date(schedule.anchor_date)
    if anchor is None:
        return None
    if schedule.recurring_type not in SCHEDULE_RECURRENCES:
        return anchor

    interval = coerce_interval(schedule.interval)
    next_payday: date | None = anchor
    while next_payday is not None and next_payday <= today:
        next_payday = advance(next_payday, schedule.recurring_type, interval)
    return next_payday


def days_until_payday(next_payday: date | str | None, today: date) -> int:
    payday = parse_date(next_payday)
    if payday is None:
        return 0
    return max((payday - today).days, 0)


def filter_before_payday(items: Iterable[T], next_payday: date | str | None) -> list[T]:
    """Return the items dated on or before ``next_payday``.

    Items whose date is missing or malformed are skipped individually. No
    payday means no window, so the result is empty.
    """

    payday = parse_date(next_payday)
    if payday is None:
        return []

    kept: list[T] = []
    for item in items:
        if item is None:
            continue
        item_date = parse_date(getattr(item, "date", None))
        if item_date is None:
            continue
        if item_date <= payday:
            kept.append(item)
    return kept


def sum_amounts(items: Iterable[object]) -> float:
    return float(sum(float(getattr(item, "amount", 0) or 0) for item in items))


def calculate_current_balance(
    starting_balance: Optional[float],
    expenses: Iterable[Expense],
    bills: Iterable[AnyBill],
) -> float:
    # An unset starting balance reads as 0; callers check the input separately.
    if starting_balance is None:
        return 0.0
    return float(starting_balance) - sum_amounts(expenses) - sum_amounts(bills)


def calculate_daily_budget(
    current_balance: float,
    days_remaining: int,
    savings_goal: Optional[SavingsGoal],
) -> float:
    if days_remaining <= 0:
        return 0.0

    available = float(current_balance)
    if savings_goal is not None and savings_goal.enabled and savings_goal.amount:
        available -= float(savings_goal.amount)

    if available < 0:
        return 0.0
    return available / days_remaining


def calculate_savings_per_day(savings_goal: Optional[SavingsGoal], days_remaining: int) -> float:
    if savings_goal is None or not savings_goal.enabled or not savings_goal.amount:
        return 0.0
    if days_remaining <= 0:
        return 0.0
    return float(savings_goal.amount) / days_remaining


def calculate_weekly_budget(daily_budget: float) -> float:
    return daily_budget * 7


def days_in_current_week(today: date, next_payday: date | str | None) -> int:
    """Count days from ``today`` through Saturday or payday, whichever is first.

    Today is included. Returns 0 when there is no payday or it has passed.
    """

    payday = parse_date(next_payday)
    if payday is None:
        return 0

    saturday = today + timedelta(days=(_SATURDAY - today.weekday()) % 7)
    week_end = min(payday, saturday)
    return max((week_end - today).days + 1, 0)


def aggregate(
    starting_balance: Optional[float],
    expenses_before_payday: Sequence[Expense],
    bills_before_payday: Sequence[AnyBill],
    savings_goal: Optional[SavingsGoal],
    days_remaining: int,
) -> BudgetFigures:
    """Combine balance, savings goal and days left into the allowance figures."""

    current_balance = calculate_current_balance(
        starting_balance, expenses_before_payday, bills_before_payday
    )
    daily_budget = calculate_daily_budget(current_balance, days_remaining, savings_goal)
    return {
        "current_balance": current_balance,
        "daily_budget": daily_budget,
        "weekly_budget": calculate_weekly_budget(daily_budget),
        "savings_per_day": calculate_savings_per_day(savings_goal, days_remaining),
    }


def build_projection(
    calculator: PaydayCalculator,
    expenses: Iterable[Expense],
    today: date,
) -> Projection:
    """Run the full payday pipeline for one calculator state and expense list."""

    next_payday = resolve_next_payday(calculator.schedule, today)
    days_remaining = days_until_payday(next_payday, today)

    bill_instances = expand_recurring_bills(calculator.bills, next_payday, today)
    bills_before = filter_before_payday(bill_instances, next_payday)
    expenses_before = filter_before_payday(expenses, next_payday)

    figures = aggregate(
        calculator.starting_balance,
        expenses_before,
        bills_before,
        calculator.savings_goal,
        days_remaining,
    )
    week_days = days_in_current_week(today, next_payday)

    return Projection(
        next_payday=next_payday,
        days_remaining=days_remaining,
        bills_before_payday=tuple(bills_before),
        expenses_before_payday=tuple(expenses_before),
        current_balance=figures["current_balance"],
        daily_budget=figures["daily_budget"],
        weekly_budget=figures["weekly_budget"],
        savings_per_day=figures["savings_per_day"],
        total_bills=sum_amounts(bills_before),
        total_expenses=sum_amounts(expenses_before),
        days_in_current_week=week_days,
        current_week_budget=figures["daily_budget"] * week_days,
    )
