"""Core domain package for the Payday Planner application."""

from .export import export_csv, export_json
from .migration import migrate_legacy_document, needs_migration
from .models import (
    Bill,
    BillInstance,
    BudgetDocument,
    Category,
    Expense,
    PaydayCalculator,
    PaydayDashboard,
    Projection,
    SavingsGoal,
    Schedule,
    SpendingTarget,
)
from .serialization import DocumentImportError, ImportPreview, document_from_dict, document_to_dict, parse_import_payload
from .store import BudgetStore

__all__ = [
    "Bill",
    "BillInstance",
    "BudgetDocument",
    "BudgetStore",
    "Category",
    "DocumentImportError",
    "Expense",
    "ImportPreview",
    "PaydayCalculator",
    "PaydayDashboard",
    "Projection",
    "SavingsGoal",
    "Schedule",
    "SpendingTarget",
    "document_from_dict",
    "document_to_dict",
    "export_csv",
    "export_json",
    "migrate_legacy_document",
    "needs_migration",
    "parse_import_payload",
]
