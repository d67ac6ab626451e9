"""Category spend aggregation and budget breakdown helpers."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import replace
from datetime import date
from typing import Iterable, Sequence, TypedDict

import numpy as np
import pandas as pd

from analytics.recurring import expand_recurring_bills
from core.dates import add_months
from core.models import Bill, Category, Expense, Projection

__all__ = [
    "BREAKDOWN_COLUMNS",
    "BudgetOverview",
    "CATEGORY_HORIZON_MONTHS",
    "NEAR_LIMIT_RATIO",
    "build_category_breakdown",
    "category_status",
    "compute_category_spent",
    "summarise_budget",
    "totals_by_category",
]

CATEGORY_HORIZON_MONTHS = 3
NEAR_LIMIT_RATIO = 0.8

BREAKDOWN_COLUMNS: tuple[str, ...] = (
    "CategoryId",
    "Category",
    "Budget",
    "Spent",
    "Remaining",
    "PctUsed",
    "ExpensesBeforePayday",
    "BillsBeforePayday",
    "TotalBeforePayday",
    "Status",
)


class BudgetOverview(TypedDict):
    total_budget: float
    total_spent: float
    total_remaining: float
    overall_pct: float
    is_over_budget: bool


def totals_by_category(items: Iterable[object]) -> dict[str, float]:
    """Sum ``amount`` per ``category_id``; unlinked items are ignored."""

    totals: dict[str, float] = defaultdict(float)
    for item in items:
        category_id = getattr(item, "category_id", None)
        if not category_id:
            continue
        totals[category_id] += float(getattr(item, "amount", 0) or 0)
    return dict(totals)


def category_status(budget: float, spent: float, near_limit_ratio: float = NEAR_LIMIT_RATIO) -> str:
    """Classify spending against a budget as ``over``, ``near`` or ``ok``.

    Over means spent exceeds the budget. Near means at least
    ``near_limit_ratio`` of a positive budget is used.
    """

    budget = float(budget or 0.0)
    spent = float(spent or 0.0)
    if budget - spent < 0:
        return "over"
    if budget > 0 and spent / budget >= near_limit_ratio:
        return "near"
    return "ok"


def compute_category_spent(
    categories: Sequence[Category],
    expenses: Iterable[Expense],
    bills: Iterable[Bill],
    today: date,
    horizon_months: int = CATEGORY_HORIZON_MONTHS,
) -> list[Category]:
    """Return ``categories`` with ``spent`` rebuilt from expenses and upcoming bills.

    Bills are expanded over a fixed window of ``horizon_months`` from today,
    independent of the payday, so a category reflects the obligations it is
    about to carry. The result never depends on the previous ``spent`` value.
    """

    horizon = add_months(today, max(int(horizon_months), 0))
    instances = expand_recurring_bills(bills, horizon, today)

    expense_totals = totals_by_category(expenses)
    bill_totals = totals_by_category(instances)

    return [
        replace(
            category,
            spent=expense_totals.get(category.id, 0.0) + bill_totals.get(category.id, 0.0),
        )
        for category in categories
    ]


def build_category_breakdown(
    categories: Sequence[Category],
    projection: Projection,
    near_limit_ratio: float = NEAR_LIMIT_RATIO,
) -> pd.DataFrame:
    """Describe how each category is affected by expenses and bills before payday.

    Only categories with before-payday activity are listed; when none has any,
    every category is listed so the table is never empty while categories exist.
    """

    if not categories:
        return pd.DataFrame(columns=list(BREAKDOWN_COLUMNS))

    expense_totals = totals_by_category(projection.expenses_before_payday)
    bill_totals = totals_by_category(projection.bills_before_payday)

    relevant = [
        category
        for category in categories
        if expense_totals.get(category.id, 0.0) > 0 or bill_totals.get(category.id, 0.0) > 0
    ]
    selected = relevant or list(categories)

    frame = pd.DataFrame(
        {
            "CategoryId": [category.id for category in selected],
            "Category": [category.name or "Unnamed Category" for category in selected],
            "Budget": [float(category.budget or 0.0) for category in selected],
            "Spent": [float(category.spent or 0.0) for category in selected],
            "ExpensesBeforePayday": [expense_totals.get(category.id, 0.0) for category in selected],
            "BillsBeforePayday": [bill_totals.get(category.id, 0.0) for category in selected],
        }
    )
    frame["Remaining"] = frame["Budget"] - frame["Spent"]
    frame["TotalBeforePayday"] = frame["ExpensesBeforePayday"] + frame["BillsBeforePayday"]

    budget = frame["Budget"].to_numpy(dtype=float)
    spent = frame["Spent"].to_numpy(dtype=float)
    pct = np.divide(spent, budget, out=np.zeros_like(spent), where=budget > 0)
    frame["PctUsed"] = pct

    frame["Status"] = [
        category_status(row_budget, row_spent, near_limit_ratio) for row_budget, row_spent in zip(budget, spent)
    ]

    return frame[list(BREAKDOWN_COLUMNS)].reset_index(drop=True)


def summarise_budget(categories: Sequence[Category]) -> BudgetOverview:
    total_budget = float(sum(float(category.budget or 0.0) for category in categories))
    total_spent = float(sum(float(category.spent or 0.0) for category in categories))
    total_remaining = total_budget - total_spent
    overall_pct = total_spent / total_budget if total_budget > 0 else 0.0
    return {
        "total_budget": total_budget,
        "total_spent": total_spent,
        "total_remaining": total_remaining,
        "overall_pct": overall_pct,
        "is_over_budget": total_remaining < 0,
    }
