"""Tests for category, expense and bill bookkeeping."""

from __future__ import annotations

import pytest

from core.ledger import (
    add_bill,
    add_category,
    add_expense,
    delete_bill,
    delete_category,
    delete_expense,
    generate_id,
    reset_document,
    sort_bills_by_due_date,
    update_bill,
    update_calculator,
    update_category,
)
from core.models import Bill, BudgetDocument, SavingsGoal, Schedule


def test_generate_id_is_unique_hex():
    first, second = generate_id(), generate_id()

    assert first != second
    assert len(first) == 32
    int(first, 16)


def test_add_category_appends_without_mutating():
    document = BudgetDocument()

    updated = add_category(document, "  Groceries ", 250)

    assert document.categories == ()
    assert len(updated.categories) == 1
    category = updated.categories[0]
    assert category.name == "Groceries"
    assert category.budget == 250.0
    assert category.spent == 0.0


@pytest.mark.parametrize(("name", "budget"), [("", 100), ("   ", 100), ("Food", 0), ("Food", -5)])
def test_add_category_validation(name, budget):
    with pytest.raises(ValueError):
        add_category(BudgetDocument(), name, budget)


def test_update_category(sample_document):
    updated = update_category(sample_document, "rent", name="Housing", budget=1200)

    rent = updated.categories[1]
    assert rent.name == "Housing"
    assert rent.budget == 1200.0
    assert updated.categories[0] == sample_document.categories[0]


def test_update_unknown_category_raises_key_error(sample_document):
    with pytest.raises(KeyError):
        update_category(sample_document, "nope", name="X")


def test_update_category_rejects_invalid_budget(sample_document):
    with pytest.raises(ValueError):
        update_category(sample_document, "rent", budget=0)


def test_delete_category_cascades_to_expenses_only(sample_document):
    updated = delete_category(sample_document, "groceries")

    assert [category.id for category in updated.categories] == ["rent", "fun"]
    assert all(expense.category_id != "groceries" for expense in updated.daily_expenses)
    assert len(updated.daily_expenses) == 2
    bill_categories = [bill.category_id for bill in updated.payday_calculator.bills]
    assert "groceries" in bill_categories


def test_add_expense(sample_document):
    updated = add_expense(sample_document, "2024-01-11", "rent", 12.5, " Keys ")

    expense = updated.daily_expenses[-1]
    assert expense.category_id == "rent"
    assert expense.amount == 12.5
    assert expense.description == "Keys"
    assert len(updated.daily_expenses) == len(sample_document.daily_expenses) + 1


@pytest.mark.parametrize(
    ("on", "category_id", "amount", "error"),
    [
        ("2024-01-11", None, 10, ValueError),
        ("2024-01-11", "rent", 0, ValueError),
        ("someday", "rent", 10, ValueError),
        ("2024-01-11", "ghost", 10, KeyError),
    ],
)
def test_add_expense_validation(sample_document, on, category_id, amount, error):
    with pytest.raises(error):
        add_expense(sample_document, on, category_id, amount)


def test_delete_expense(sample_document):
    updated = delete_expense(sample_document, "e2")

    assert [expense.id for expense in updated.daily_expenses] == ["e1", "e3"]
    with pytest.raises(KeyError):
        delete_expense(updated, "e2")


def test_add_one_time_bill(sample_document):
    updated = add_bill(sample_document, 80, "Water", category_id="", date="2024-01-18")

    bill = updated.payday_calculator.bills[-1]
    assert bill.amount == 80.0
    assert bill.category_id is None
    assert bill.is_recurring is False
    assert bill.recurring_type == ""
    assert bill.start_date == ""


def test_add_recurring_bill(sample_document):
    updated = add_bill(
        sample_document,
        15,
        "Music",
        is_recurring=True,
        recurring_type="monthly",
        recurring_interval=0,
        start_date="2024-01-12",
    )

    bill = updated.payday_calculator.bills[-1]
    assert bill.is_recurring is True
    assert bill.recurring_type == "monthly"
    assert bill.recurring_interval == 1
    assert bill.start_date == "2024-01-12"


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(amount=0, date="2024-01-18"),
        dict(amount=10, date=""),
        dict(amount=10, is_recurring=True, recurring_type="daily", start_date="2024-01-01"),
        dict(amount=10, is_recurring=True, recurring_type="weekly", start_date=""),
    ],
)
def test_add_bill_validation(sample_document, kwargs):
    with pytest.raises(ValueError):
        add_bill(sample_document, **kwargs)


def test_update_and_delete_bill(sample_document):
    updated = update_bill(sample_document, "b1", amount=210.0, category_id="")

    bill = updated.payday_calculator.bills[0]
    assert bill.amount == 210.0
    assert bill.category_id is None

    removed = delete_bill(updated, "b1")
    assert [bill.id for bill in removed.payday_calculator.bills] == ["b2", "b3"]
    with pytest.raises(KeyError):
        delete_bill(removed, "b1")


def test_update_bill_validates_result(sample_document):
    with pytest.raises(ValueError):
        update_bill(sample_document, "b1", amount=-1)


def test_update_calculator_replaces_settings(sample_document):
    updated = update_calculator(
        sample_document,
        starting_balance=0.0,
        savings_goal=SavingsGoal(enabled=True, amount=50.0),
        schedule=Schedule(type="recurring", recurring_type="weekly", anchor_date="2024-01-05"),
    )

    calculator = updated.payday_calculator
    assert calculator.starting_balance == 0.0
    assert calculator.savings_goal.amount == 50.0
    assert calculator.schedule.type == "recurring"
    assert calculator.bills == sample_document.payday_calculator.bills


def test_reset_document():
    assert reset_document() == BudgetDocument()


def test_update_bill_changes_schedule_fields(sample_document):
    updated = update_bill(
        sample_document,
        "b3",
        recurring_type="monthly",
        recurring_interval=0,
        start_date="2024-02-01",
    )

    gym = updated.payday_calculator.bills[2]
    assert gym.recurring_type == "monthly"
    assert gym.recurring_interval == 1
    assert gym.start_date == "2024-02-01"


def test_update_bill_due_date(sample_document):
    updated = update_bill(sample_document, "b1", date="2024-01-19")

    assert updated.payday_calculator.bills[0].date == "2024-01-19"
    with pytest.raises(ValueError):
        update_bill(sample_document, "b1", date="")


def test_sort_bills_by_due_date(sample_document):
    undated = Bill(id="b4", amount=5.0, date="")
    bills = sample_document.payday_calculator.bills + (undated,)

    assert [bill.id for bill in sort_bills_by_due_date(bills)] == ["b3", "b1", "b2", "b4"]
