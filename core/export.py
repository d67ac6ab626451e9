"""CSV and JSON export of budget documents."""

from __future__ import annotations

import csv
import io
import json
from typing import Sequence

import pandas as pd

from core.models import BudgetDocument, Category
from core.serialization import document_to_dict

__all__ = ["CSV_FILENAME", "JSON_FILENAME", "export_csv", "export_json"]

CSV_FILENAME = "budget-export.csv"
JSON_FILENAME = "budget-export.json"


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _category_names(categories: Sequence[Category]) -> dict[str, str]:
    return {category.id: category.name for category in categories}


def _write_section(buffer: io.StringIO, title: str, header: Sequence[str], frame: pd.DataFrame) -> None:
    buffer.write(f"\n{title}\n")
    buffer.write(",".join(header) + "\n")
    if frame.empty:
        return
    frame.to_csv(
        buffer,
        index=False,
        header=False,
        quoting=csv.QUOTE_NONNUMERIC,
        lineterminator="\n",
    )


def export_csv(document: BudgetDocument) -> str:
    """Flatten the document into a sectioned, human-readable CSV dump.

    Text cells are quoted and numbers are written bare. The bills section is
    only present when bills exist.
    """

    names = _category_names(document.categories)
    calculator = document.payday_calculator
    buffer = io.StringIO()
    buffer.write("Budget Data Export\n")

    categories = pd.DataFrame(
        [
            (category.name, category.budget, category.spent, category.budget - category.spent)
            for category in document.categories
        ],
        columns=["Name", "Budget", "Spent", "Remaining"],
    )
    _write_section(buffer, "Categories", categories.columns, categories)

    expenses = pd.DataFrame(
        [
            (
                expense.date,
                names.get(expense.category_id or "", "Unknown"),
                expense.amount,
                expense.description or "",
            )
            for expense in document.daily_expenses
        ],
        columns=["Date", "Category", "Amount", "Description"],
    )
    _write_section(buffer, "Daily Expenses", expenses.columns, expenses)

    settings = pd.DataFrame(
        [
            (
                "" if calculator.starting_balance is None else str(calculator.starting_balance),
                _flag(calculator.spending_target.enabled),
                calculator.spending_target.amount,
                calculator.spending_target.period,
                _flag(calculator.savings_goal.enabled),
                calculator.savings_goal.amount,
            )
        ],
        columns=[
            "Starting Balance",
            "Spending Target Enabled",
            "Spending Target Amount",
            "Spending Target Period",
            "Savings Goal Enabled",
            "Savings Goal Amount",
        ],
    )
    _write_section(buffer, "Payday Calculator", settings.columns, settings)

    schedule = calculator.schedule
    schedule_frame = pd.DataFrame(
        [
            (
                schedule.type,
                schedule.next_payday,
                schedule.recurring_type,
                schedule.anchor_date,
                schedule.interval,
            )
        ],
        columns=["Type", "Next Payday", "Recurring Type", "Anchor Date", "Interval"],
    )
    _write_section(buffer, "Payday Schedule", schedule_frame.columns, schedule_frame)

    if calculator.bills:
        bills = pd.DataFrame(
            [
                (
                    bill.start_date or bill.date if bill.is_recurring else bill.date,
                    bill.amount,
                    bill.description or "",
                    names.get(bill.category_id or "", ""),
                    f"every {bill.recurring_interval} {bill.recurring_type}" if bill.is_recurring else "",
                )
                for bill in calculator.bills
            ],
            columns=["Date", "Amount", "Description", "Category", "Recurrence"],
        )
        _write_section(buffer, "Bills", bills.columns, bills)

    return buffer.getvalue()


def export_json(document: BudgetDocument) -> str:
    return json.dumps(document_to_dict(document), indent=2)
