"""Conversion between budget documents and their persisted JSON shape.

The persisted shape mirrors what the browser version of the planner stored::

    {
        "categories": [...],
        "dailyExpenses": [...],
        "paydayCalculator": {
            "startingBalance": ..., "spendingTarget": {...},
            "savingsGoal": {...}, "schedule": {...}, "bills": [...]
        }
    }

Reading is lenient: missing or mistyped fields fall back to defaults so a
partially valid document still loads.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from core.migration import migrate_legacy_document, needs_migration
from core.models import (
    Bill,
    BudgetDocument,
    Category,
    Expense,
    PaydayCalculator,
    SavingsGoal,
    Schedule,
    SpendingTarget,
)

__all__ = [
    "DocumentImportError",
    "ImportPreview",
    "bill_from_dict",
    "bill_to_dict",
    "calculator_from_dict",
    "calculator_to_dict",
    "document_from_dict",
    "document_to_dict",
    "parse_import_payload",
]

logger = logging.getLogger(__name__)


class DocumentImportError(ValueError):
    """Raised when imported data cannot be turned into a budget document."""


@dataclass(frozen=True)
class ImportPreview:
    document: BudgetDocument
    migrated: bool


def _to_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _to_optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_int(value: Any, default: int = 1) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _to_id(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _records(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def category_from_dict(data: Mapping[str, Any]) -> Category:
    return Category(
        id=_to_text(data.get("id")),
        name=_to_text(data.get("name")),
        budget=_to_float(data.get("budget")),
        spent=_to_float(data.get("spent")),
    )


def category_to_dict(category: Category) -> dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "budget": category.budget,
        "spent": category.spent,
    }


def expense_from_dict(data: Mapping[str, Any]) -> Expense:
    return Expense(
        id=_to_text(data.get("id")),
        date=_to_text(data.get("date")),
        amount=_to_float(data.get("amount")),
        category_id=_to_id(data.get("categoryId")),
        description=_to_text(data.get("description")),
    )


def expense_to_dict(expense: Expense) -> dict[str, Any]:
    return {
        "id": expense.id,
        "date": expense.date,
        "categoryId": expense.category_id,
        "amount": expense.amount,
        "description": expense.description,
    }


def bill_from_dict(data: Mapping[str, Any]) -> Bill:
    return Bill(
        id=_to_text(data.get("id")),
        amount=_to_float(data.get("amount")),
        description=_to_text(data.get("description")),
        category_id=_to_id(data.get("categoryId")),
        date=_to_text(data.get("date")),
        is_recurring=bool(data.get("isRecurring", False)),
        recurring_type=_to_text(data.get("recurringType")),
        recurring_interval=_to_int(data.get("recurringInterval"), 1),
        start_date=_to_text(data.get("startDate")),
    )


def bill_to_dict(bill: Bill) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": bill.id,
        "date": bill.date,
        "amount": bill.amount,
        "description": bill.description,
        "categoryId": bill.category_id,
    }
    if bill.is_recurring:
        payload.update(
            {
                "isRecurring": True,
                "recurringType": bill.recurring_type,
                "recurringInterval": bill.recurring_interval,
                "startDate": bill.start_date,
            }
        )
    return payload


def calculator_from_dict(data: Any) -> PaydayCalculator:
    """Build a calculator state, substituting defaults for absent sections."""

    data = _mapping(data)
    target = _mapping(data.get("spendingTarget"))
    goal = _mapping(data.get("savingsGoal"))
    schedule = _mapping(data.get("schedule"))

    return PaydayCalculator(
        starting_balance=_to_optional_float(data.get("startingBalance")),
        spending_target=SpendingTarget(
            enabled=bool(target.get("enabled", False)),
            amount=_to_float(target.get("amount")),
            period=_to_text(target.get("period")) or "daily",
        ),
        savings_goal=SavingsGoal(
            enabled=bool(goal.get("enabled", False)),
            amount=_to_float(goal.get("amount")),
        ),
        schedule=Schedule(
            type=_to_text(schedule.get("type")) or "manual",
            next_payday=_to_text(schedule.get("nextPayday")),
            recurring_type=_to_text(schedule.get("recurringType")) or "biweekly",
            anchor_date=_to_text(schedule.get("anchorDate")),
            interval=_to_int(schedule.get("interval"), 1),
        ),
        bills=tuple(bill_from_dict(item) for item in _records(data.get("bills"))),
    )


def calculator_to_dict(calculator: PaydayCalculator) -> dict[str, Any]:
    return {
        "startingBalance": calculator.starting_balance,
        "spendingTarget": {
            "enabled": calculator.spending_target.enabled,
            "amount": calculator.spending_target.amount,
            "period": calculator.spending_target.period,
        },
        "savingsGoal": {
            "enabled": calculator.savings_goal.enabled,
            "amount": calculator.savings_goal.amount,
        },
        "schedule": {
            "type": calculator.schedule.type,
            "nextPayday": calculator.schedule.next_payday,
            "recurringType": calculator.schedule.recurring_type,
            "anchorDate": calculator.schedule.anchor_date,
            "interval": calculator.schedule.interval,
        },
        "bills": [bill_to_dict(bill) for bill in calculator.bills],
    }


def document_from_dict(data: Any) -> BudgetDocument:
    data = _mapping(data)
    return BudgetDocument(
        categories=tuple(category_from_dict(item) for item in _records(data.get("categories"))),
        daily_expenses=tuple(expense_from_dict(item) for item in _records(data.get("dailyExpenses"))),
        payday_calculator=calculator_from_dict(data.get("paydayCalculator")),
    )


def document_to_dict(document: BudgetDocument) -> dict[str, Any]:
    return {
        "categories": [category_to_dict(category) for category in document.categories],
        "dailyExpenses": [expense_to_dict(expense) for expense in document.daily_expenses],
        "paydayCalculator": calculator_to_dict(document.payday_calculator),
    }


def parse_import_payload(text: str) -> ImportPreview:
    """Parse pasted or uploaded JSON into a document ready for confirmation.

    Legacy ``{"version", "data"}`` exports are migrated on the way in.

    Raises
    ------
    DocumentImportError
        If the text is not valid JSON or does not hold a JSON object.
    """

    try:
        raw = json.loads(text)
    except (TypeError, json.JSONDecodeError) as exc:
        logger.warning("Rejected import payload: %s", exc)
        raise DocumentImportError(
            "Invalid JSON. Please check your data and try again."
        ) from exc

    if not isinstance(raw, dict):
        raise DocumentImportError("Imported JSON must be an object with budget data.")

    migrated = needs_migration(raw)
    if migrated:
        logger.info("Migrating legacy payday calculator export (version %s)", raw.get("version"))
        raw = migrate_legacy_document(raw)

    return ImportPreview(document=document_from_dict(raw), migrated=migrated)
