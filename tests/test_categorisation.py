"""Tests for category totals, breakdown and overview."""

from __future__ import annotations

import pytest

from analytics.categorisation import (
    BREAKDOWN_COLUMNS,
    build_category_breakdown,
    category_status,
    compute_category_spent,
    summarise_budget,
    totals_by_category,
)
from analytics.payday import build_projection
from core.models import Category, Expense, Projection


def _empty_projection() -> Projection:
    return Projection(
        next_payday=None,
        days_remaining=0,
        bills_before_payday=(),
        expenses_before_payday=(),
        current_balance=0.0,
        daily_budget=0.0,
        weekly_budget=0.0,
        savings_per_day=0.0,
    )


def test_totals_by_category_skips_unlinked_items():
    items = [
        Expense(id="a", date="2024-01-01", amount=10.0, category_id="x"),
        Expense(id="b", date="2024-01-02", amount=5.5, category_id="x"),
        Expense(id="c", date="2024-01-03", amount=7.0, category_id=None),
        Expense(id="d", date="2024-01-03", amount=2.0, category_id="y"),
    ]

    assert totals_by_category(items) == {"x": pytest.approx(15.5), "y": pytest.approx(2.0)}


def test_spent_combines_expenses_and_three_months_of_bills(sample_document, today):
    categories = compute_category_spent(
        sample_document.categories,
        sample_document.daily_expenses,
        sample_document.payday_calculator.bills,
        today,
    )
    spent = {category.id: category.spent for category in categories}

    assert spent["groceries"] == pytest.approx(150.0 + 200.0)
    assert spent["rent"] == 0.0
    # 40 + 99 in expenses, plus thirteen weekly gym bills from 15 Jan to 8 Apr.
    assert spent["fun"] == pytest.approx(40.0 + 99.0 + 13 * 50.0)


def test_spent_is_recomputed_not_accumulated(sample_document, today):
    stale = tuple(
        Category(id=c.id, name=c.name, budget=c.budget, spent=9999.0)
        for c in sample_document.categories
    )

    first = compute_category_spent(stale, sample_document.daily_expenses, (), today)
    second = compute_category_spent(first, sample_document.daily_expenses, (), today)

    assert [c.spent for c in first] == [c.spent for c in second]
    assert first[1].spent == 0.0


def test_horizon_limits_recurring_bills(sample_document, today):
    categories = compute_category_spent(
        sample_document.categories,
        (),
        sample_document.payday_calculator.bills,
        today,
        horizon_months=0,
    )

    fun = next(category for category in categories if category.id == "fun")
    assert fun.spent == 0.0


def test_breakdown_lists_categories_touched_before_payday(sample_document, today):
    categories = compute_category_spent(
        sample_document.categories,
        sample_document.daily_expenses,
        sample_document.payday_calculator.bills,
        today,
    )
    projection = build_projection(
        sample_document.payday_calculator,
        sample_document.daily_expenses,
        today,
    )

    breakdown = build_category_breakdown(categories, projection)

    assert list(breakdown.columns) == list(BREAKDOWN_COLUMNS)
    assert breakdown["CategoryId"].tolist() == ["groceries", "fun"]

    groceries = breakdown.iloc[0]
    assert groceries["ExpensesBeforePayday"] == pytest.approx(150.0)
    assert groceries["BillsBeforePayday"] == pytest.approx(200.0)
    assert groceries["TotalBeforePayday"] == pytest.approx(350.0)
    assert groceries["Remaining"] == pytest.approx(-50.0)
    assert groceries["Status"] == "over"

    fun = breakdown.iloc[1]
    assert fun["ExpensesBeforePayday"] == 0.0
    assert fun["BillsBeforePayday"] == pytest.approx(50.0)


def test_breakdown_falls_back_to_all_categories_with_status():
    categories = [
        Category(id="a", name="Near", budget=100.0, spent=85.0),
        Category(id="b", name="Fine", budget=100.0, spent=50.0),
        Category(id="c", name="", budget=0.0, spent=0.0),
        Category(id="d", name="Over", budget=20.0, spent=21.0),
    ]

    breakdown = build_category_breakdown(categories, _empty_projection(), near_limit_ratio=0.8)

    assert breakdown["Status"].tolist() == ["near", "ok", "ok", "over"]
    assert breakdown["Category"].tolist()[2] == "Unnamed Category"
    assert breakdown["PctUsed"].tolist() == pytest.approx([0.85, 0.5, 0.0, 1.05])


def test_breakdown_without_categories_is_empty():
    breakdown = build_category_breakdown([], _empty_projection())

    assert breakdown.empty
    assert list(breakdown.columns) == list(BREAKDOWN_COLUMNS)


def test_summarise_budget():
    overview = summarise_budget(
        [
            Category(id="a", name="A", budget=200.0, spent=150.0),
            Category(id="b", name="B", budget=100.0, spent=180.0),
        ]
    )

    assert overview["total_budget"] == pytest.approx(300.0)
    assert overview["total_spent"] == pytest.approx(330.0)
    assert overview["total_remaining"] == pytest.approx(-30.0)
    assert overview["overall_pct"] == pytest.approx(1.1)
    assert overview["is_over_budget"] is True


def test_summarise_budget_without_categories():
    overview = summarise_budget([])

    assert overview["overall_pct"] == 0.0
    assert overview["is_over_budget"] is False


@pytest.mark.parametrize(
    ("budget", "spent", "expected"),
    [
        (100.0, 50.0, "ok"),
        (100.0, 80.0, "near"),
        (100.0, 100.0, "near"),
        (100.0, 100.01, "over"),
        (0.0, 0.0, "ok"),
        (0.0, 5.0, "over"),
    ],
)
def test_category_status_thresholds(budget, spent, expected):
    assert category_status(budget, spent) == expected


def test_category_status_honours_custom_ratio():
    assert category_status(100.0, 60.0, near_limit_ratio=0.5) == "near"
