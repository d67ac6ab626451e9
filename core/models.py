"""Shared data model definitions for the Payday Planner."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Optional, TypedDict, Union

import pandas as pd

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from analytics.categorisation import BudgetOverview

SCHEDULE_RECURRENCES: tuple[str, ...] = ("weekly", "biweekly", "monthly")
BILL_RECURRENCES: tuple[str, ...] = ("weekly", "biweekly", "monthly", "yearly")


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    budget: float = 0.0
    spent: float = 0.0

    @property
    def remaining(self) -> float:
        return self.budget - self.spent


@dataclass(frozen=True)
class Expense:
    id: str
    date: str
    amount: float
    category_id: Optional[str] = None
    description: str = ""


@dataclass(frozen=True)
class Bill:
    """A one-time bill, or the template of a recurring one."""

    id: str
    amount: float
    description: str = ""
    category_id: Optional[str] = None
    date: str = ""
    is_recurring: bool = False
    recurring_type: str = ""
    recurring_interval: int = 1
    start_date: str = ""


@dataclass(frozen=True)
class BillInstance(Bill):
    """One dated occurrence of a recurring bill, regenerated on demand."""

    is_recurring_instance: bool = True
    recurring_bill_id: str = ""


@dataclass(frozen=True)
class Schedule:
    type: str = "manual"
    next_payday: str = ""
    recurring_type: str = "biweekly"
    anchor_date: str = ""
    interval: int = 1


@dataclass(frozen=True)
class SpendingTarget:
    enabled: bool = False
    amount: float = 0.0
    period: str = "daily"


@dataclass(frozen=True)
class SavingsGoal:
    enabled: bool = False
    amount: float = 0.0


@dataclass(frozen=True)
class PaydayCalculator:
    starting_balance: Optional[float] = None
    spending_target: SpendingTarget = field(default_factory=SpendingTarget)
    savings_goal: SavingsGoal = field(default_factory=SavingsGoal)
    schedule: Schedule = field(default_factory=Schedule)
    bills: tuple[Bill, ...] = ()


@dataclass(frozen=True)
class BudgetDocument:
    categories: tuple[Category, ...] = ()
    daily_expenses: tuple[Expense, ...] = ()
    payday_calculator: PaydayCalculator = field(default_factory=PaydayCalculator)

    @property
    def has_data(self) -> bool:
        return bool(self.categories or self.daily_expenses or self.payday_calculator.bills)


AnyBill = Union[Bill, BillInstance]


@dataclass(frozen=True)
class Projection:
    next_payday: Optional[date]
    days_remaining: int
    bills_before_payday: tuple[AnyBill, ...]
    expenses_before_payday: tuple[Expense, ...]
    current_balance: float
    daily_budget: float
    weekly_budget: float
    savings_per_day: float
    total_bills: float = 0.0
    total_expenses: float = 0.0
    days_in_current_week: int = 0
    current_week_budget: float = 0.0


class BudgetFigures(TypedDict):
    current_balance: float
    daily_budget: float
    weekly_budget: float
    savings_per_day: float


class PaydayDashboard(TypedDict):
    today: date
    projection: Projection
    categories: list[Category]
    category_breakdown: pd.DataFrame
    budget_overview: "BudgetOverview"
    allowance_timeline: pd.DataFrame
    status_message: str | None
    insights: list[str]


__all__ = [
    "AnyBill",
    "BILL_RECURRENCES",
    "Bill",
    "BillInstance",
    "BudgetDocument",
    "BudgetFigures",
    "Category",
    "Expense",
    "PaydayCalculator",
    "PaydayDashboard",
    "Projection",
    "SCHEDULE_RECURRENCES",
    "SavingsGoal",
    "Schedule",
    "SpendingTarget",
]
