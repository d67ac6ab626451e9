"""Shared pytest fixtures for the Payday Planner test suite."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest
import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.models import (  # noqa: E402
    Bill,
    BudgetDocument,
    Category,
    Expense,
    PaydayCalculator,
    SavingsGoal,
    Schedule,
)


@pytest.fixture(autouse=True)
def clear_streamlit_secrets(monkeypatch):
    """Provide an empty secrets mapping so tests don't rely on Streamlit runtime."""

    monkeypatch.setattr(st, "secrets", {}, raising=False)


@pytest.fixture()
def today() -> date:
    # A Wednesday.
    return date(2024, 1, 10)


@pytest.fixture()
def sample_document() -> BudgetDocument:
    categories = (
        Category(id="groceries", name="Groceries", budget=300.0),
        Category(id="rent", name="Rent", budget=1000.0),
        Category(id="fun", name="Fun", budget=50.0),
    )
    expenses = (
        Expense(id="e1", date="2024-01-09", amount=150.0, category_id="groceries", description="Weekly shop"),
        Expense(id="e2", date="2024-01-25", amount=40.0, category_id="fun", description="Cinema"),
        Expense(id="e3", date="not a date", amount=99.0, category_id="fun"),
    )
    bills = (
        Bill(id="b1", amount=200.0, description="Phone", date="2024-01-15", category_id="groceries"),
        Bill(id="b2", amount=75.0, description="Insurance", date="2024-02-01"),
        Bill(
            id="b3",
            amount=50.0,
            description="Gym",
            category_id="fun",
            is_recurring=True,
            recurring_type="weekly",
            recurring_interval=1,
            start_date="2024-01-08",
        ),
    )
    calculator = PaydayCalculator(
        starting_balance=1000.0,
        savings_goal=SavingsGoal(enabled=False, amount=0.0),
        schedule=Schedule(type="manual", next_payday="2024-01-20"),
        bills=bills,
    )
    return BudgetDocument(categories=categories, daily_expenses=expenses, payday_calculator=calculator)
