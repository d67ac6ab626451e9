"""Category, expense and bill bookkeeping over immutable budget documents.

Every function returns a new :class:`BudgetDocument`; the input is never
modified. Category ``spent`` values are not touched here. They are rebuilt
from scratch by the summary service whenever the document changes.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Optional, Sequence
from uuid import uuid4

from core.dates import parse_date
from core.models import (
    BILL_RECURRENCES,
    Bill,
    BudgetDocument,
    Category,
    Expense,
    PaydayCalculator,
)

__all__ = [
    "add_bill",
    "add_category",
    "add_expense",
    "delete_bill",
    "delete_category",
    "delete_expense",
    "generate_id",
    "reset_document",
    "sort_bills_by_due_date",
    "update_bill",
    "update_calculator",
    "update_category",
]


def generate_id() -> str:
    return uuid4().hex


def _validate_category(name: str, budget: float) -> None:
    if not name or not name.strip():
        raise ValueError("Category name cannot be empty")
    if budget is None or budget <= 0:
        raise ValueError("Category budget must be greater than zero")


def _validate_bill(bill: Bill) -> None:
    if bill.amount is None or bill.amount <= 0:
        raise ValueError("Bill amount must be greater than zero")
    if bill.is_recurring:
        if bill.recurring_type not in BILL_RECURRENCES:
            raise ValueError(f"Unsupported recurrence: {bill.recurring_type!r}")
        if parse_date(bill.start_date) is None:
            raise ValueError("Recurring bills need a valid start date")
    elif parse_date(bill.date) is None:
        raise ValueError("Bills need a valid due date")


def _index_of(items: tuple[Any, ...], item_id: str, kind: str) -> int:
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    raise KeyError(f"{kind} {item_id!r} not found")


def add_category(document: BudgetDocument, name: str, budget: float) -> BudgetDocument:
    _validate_category(name, budget)
    category = Category(id=generate_id(), name=name.strip(), budget=float(budget), spent=0.0)
    return replace(document, categories=document.categories + (category,))


def update_category(document: BudgetDocument, category_id: str, **changes: Any) -> BudgetDocument:
    index = _index_of(document.categories, category_id, "Category")
    current = document.categories[index]
    updated = replace(current, **changes)
    _validate_category(updated.name, updated.budget)
    updated = replace(updated, name=updated.name.strip(), budget=float(updated.budget))

    categories = list(document.categories)
    categories[index] = updated
    return replace(document, categories=tuple(categories))


def delete_category(document: BudgetDocument, category_id: str) -> BudgetDocument:
    """Remove a category together with every expense filed under it."""

    _index_of(document.categories, category_id, "Category")
    return replace(
        document,
        categories=tuple(c for c in document.categories if c.id != category_id),
        daily_expenses=tuple(e for e in document.daily_expenses if e.category_id != category_id),
    )


def add_expense(
    document: BudgetDocument,
    date: str,
    category_id: Optional[str],
    amount: float,
    description: str = "",
) -> BudgetDocument:
    if not category_id:
        raise ValueError("Expenses must be filed under a category")
    _index_of(document.categories, category_id, "Category")
    if amount is None or amount <= 0:
        raise ValueError("Expense amount must be greater than zero")
    if parse_date(date) is None:
        raise ValueError("Expenses need a valid date")

    expense = Expense(
        id=generate_id(),
        date=str(date),
        amount=float(amount),
        category_id=category_id,
        description=(description or "").strip(),
    )
    return replace(document, daily_expenses=document.daily_expenses + (expense,))


def delete_expense(document: BudgetDocument, expense_id: str) -> BudgetDocument:
    _index_of(document.daily_expenses, expense_id, "Expense")
    return replace(
        document,
        daily_expenses=tuple(e for e in document.daily_expenses if e.id != expense_id),
    )


def _with_bills(document: BudgetDocument, bills: tuple[Bill, ...]) -> BudgetDocument:
    return replace(document, payday_calculator=replace(document.payday_calculator, bills=bills))


def add_bill(
    document: BudgetDocument,
    amount: float,
    description: str = "",
    category_id: Optional[str] = None,
    date: str = "",
    is_recurring: bool = False,
    recurring_type: str = "",
    recurring_interval: int = 1,
    start_date: str = "",
) -> BudgetDocument:
    """Append a one-time bill, or a recurring template when ``is_recurring``."""

    bill = Bill(
        id=generate_id(),
        amount=float(amount) if amount is not None else 0.0,
        description=(description or "").strip(),
        category_id=category_id or None,
        date=date or "",
        is_recurring=is_recurring,
        recurring_type=recurring_type if is_recurring else "",
        recurring_interval=max(int(recurring_interval or 1), 1) if is_recurring else 1,
        start_date=start_date if is_recurring else "",
    )
    _validate_bill(bill)
    return _with_bills(document, document.payday_calculator.bills + (bill,))


def update_bill(document: BudgetDocument, bill_id: str, **changes: Any) -> BudgetDocument:
    bills = list(document.payday_calculator.bills)
    index = _index_of(tuple(bills), bill_id, "Bill")
    updated = replace(bills[index], **changes)
    if "category_id" in changes:
        updated = replace(updated, category_id=changes["category_id"] or None)
    if "recurring_interval" in changes:
        updated = replace(updated, recurring_interval=max(int(changes["recurring_interval"] or 1), 1))
    _validate_bill(updated)
    bills[index] = updated
    return _with_bills(document, tuple(bills))


def sort_bills_by_due_date(bills: Sequence[Bill]) -> list[Bill]:
    """Order bills by due date (start date for recurring ones); undated bills go last."""

    def due(bill: Bill) -> date:
        return parse_date(bill.start_date if bill.is_recurring else bill.date) or date.max

    return sorted(bills, key=due)


def delete_bill(document: BudgetDocument, bill_id: str) -> BudgetDocument:
    bills = document.payday_calculator.bills
    _index_of(bills, bill_id, "Bill")
    return _with_bills(document, tuple(b for b in bills if b.id != bill_id))


def update_calculator(document: BudgetDocument, **changes: Any) -> BudgetDocument:
    """Replace top-level calculator settings such as ``schedule`` or ``savings_goal``."""

    calculator: PaydayCalculator = replace(document.payday_calculator, **changes)
    return replace(document, payday_calculator=calculator)


def reset_document() -> BudgetDocument:
    return BudgetDocument()
