"""Tests for recurring bill expansion."""

from __future__ import annotations

from datetime import date

import pytest

from analytics.recurring import advance, coerce_interval, expand_recurring_bills
from core.models import Bill, BillInstance


def _recurring(bill_id: str = "bill-1", **kwargs) -> Bill:
    values = dict(
        id=bill_id,
        amount=10.0,
        description="Streaming",
        is_recurring=True,
        recurring_type="weekly",
        recurring_interval=1,
        start_date="2024-01-01",
    )
    values.update(kwargs)
    return Bill(**values)


def _dates(instances) -> list[str]:
    return [instance.date for instance in instances]


def test_monthly_from_31st_overflows_short_months():
    bill = _recurring(recurring_type="monthly", start_date="2023-01-31")

    instances = expand_recurring_bills([bill], date(2023, 4, 30), date(2023, 1, 1))

    assert _dates(instances) == ["2023-01-31", "2023-03-03", "2023-04-03"]


def test_monthly_from_31st_in_leap_year():
    bill = _recurring(recurring_type="monthly", start_date="2024-01-31")

    instances = expand_recurring_bills([bill], date(2024, 3, 31), date(2024, 1, 1))

    assert _dates(instances) == ["2024-01-31", "2024-03-02"]


def test_yearly_from_leap_day_rolls_to_march():
    bill = _recurring(recurring_type="yearly", start_date="2024-02-29")

    instances = expand_recurring_bills([bill], date(2025, 12, 31), date(2024, 1, 1))

    assert _dates(instances) == ["2024-02-29", "2025-03-01"]


def test_instances_stay_within_today_and_target():
    bill = _recurring(recurring_type="biweekly", start_date="2023-11-01")
    today = date(2024, 1, 10)
    target = date(2024, 3, 1)

    instances = expand_recurring_bills([bill], target, today)

    assert instances
    for instance in instances:
        assert today <= date.fromisoformat(instance.date) <= target
    assert _dates(instances)[0] == "2024-01-10"
    assert _dates(instances)[-1] == "2024-02-21"


def test_target_date_is_inclusive():
    bill = _recurring(start_date="2024-01-01")

    instances = expand_recurring_bills([bill], "2024-01-15", date(2024, 1, 1))

    assert _dates(instances) == ["2024-01-01", "2024-01-08", "2024-01-15"]


def test_expansion_is_idempotent(sample_document, today):
    bills = sample_document.payday_calculator.bills

    first = expand_recurring_bills(bills, date(2024, 3, 1), today)
    second = expand_recurring_bills(bills, date(2024, 3, 1), today)

    assert first == second


def test_instances_carry_template_details():
    bill = _recurring(bill_id="gym", amount=25.0, category_id="fun", recurring_interval=2)

    instances = expand_recurring_bills([bill], date(2024, 1, 31), date(2024, 1, 1))

    assert _dates(instances) == ["2024-01-01", "2024-01-15", "2024-01-29"]
    first = instances[0]
    assert isinstance(first, BillInstance)
    assert first.id == "gym-2024-01-01"
    assert first.recurring_bill_id == "gym"
    assert first.is_recurring_instance is True
    assert first.amount == 25.0
    assert first.category_id == "fun"
    assert first.description == "Streaming"


def test_one_time_bills_pass_through_in_order():
    one_off = Bill(id="once", amount=5.0, date="2030-01-01")
    bill = _recurring(start_date="2024-01-01")

    instances = expand_recurring_bills([one_off, None, bill], date(2024, 1, 8), date(2024, 1, 1))

    assert [instance.id for instance in instances] == ["once", "bill-1-2024-01-01", "bill-1-2024-01-08"]
    assert instances[0] is one_off


def test_missing_target_returns_templates():
    bill = _recurring()

    assert expand_recurring_bills([bill, None], None, date(2024, 1, 1)) == [bill]
    assert expand_recurring_bills([bill], "not a date", date(2024, 1, 1)) == [bill]


def test_unknown_recurrence_emits_first_occurrence_only():
    bill = _recurring(recurring_type="fortnightly", start_date="2024-01-05")

    instances = expand_recurring_bills([bill], date(2024, 6, 1), date(2024, 1, 1))

    assert _dates(instances) == ["2024-01-05"]


def test_start_date_falls_back_to_date_then_passes_through():
    dated = _recurring(start_date="", date="2024-01-03")
    undated = _recurring(bill_id="undated", start_date="", date="")

    instances = expand_recurring_bills([dated, undated], date(2024, 1, 10), date(2024, 1, 1))

    assert _dates(instances[:2]) == ["2024-01-03", "2024-01-10"]
    assert instances[2] is undated


@pytest.mark.parametrize(
    ("recurring_type", "interval", "expected"),
    [
        ("weekly", 1, date(2024, 1, 8)),
        ("weekly", 2, date(2024, 1, 15)),
        ("biweekly", 1, date(2024, 1, 15)),
        ("monthly", 1, date(2024, 2, 1)),
        ("yearly", 1, date(2025, 1, 1)),
    ],
)
def test_advance_steps(recurring_type, interval, expected):
    assert advance(date(2024, 1, 1), recurring_type, interval) == expected


def test_advance_unknown_unit_returns_none():
    assert advance(date(2024, 1, 1), "daily", 1) is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [(3, 3), ("2", 2), (0, 1), (-1, 1), (None, 1), ("x", 1), (float("inf"), 1)],
)
def test_coerce_interval(value, expected):
    assert coerce_interval(value) == expected


@pytest.mark.parametrize(
    ("recurring_type", "interval"),
    [("weekly", 10**9), ("biweekly", 10**9), ("monthly", 100_000), ("yearly", 10**6)],
)
def test_advance_past_the_calendar_returns_none(recurring_type, interval):
    assert advance(date(2024, 1, 1), recurring_type, interval) is None


def test_expansion_stops_when_the_next_step_overflows():
    bill = Bill(
        id="tax",
        amount=10.0,
        is_recurring=True,
        recurring_type="monthly",
        recurring_interval=100_000,
        start_date="2024-01-05",
    )

    instances = expand_recurring_bills([bill], date(2024, 3, 1), date(2024, 1, 1))

    assert [instance.id for instance in instances] == ["tax-2024-01-05"]
