"""Day-by-day spendable cash projection until payday."""

from __future__ import annotations

from datetime import date

import numpy as np
import pandas as pd

from core.dates import parse_date
from core.models import Projection

__all__ = ["TIMELINE_COLUMNS", "build_allowance_timeline", "bills_due_by_day"]

TIMELINE_COLUMNS: tuple[str, ...] = ("Day", "Allowance", "BillsDue", "Spendable", "Balance")


def bills_due_by_day(projection: Projection, today: date) -> pd.Series:
    """Return bill totals indexed by due day for bills between today and payday."""

    rows: list[tuple[pd.Timestamp, float]] = []
    for bill in projection.bills_before_payday:
        due = parse_date(bill.date)
        if due is None or due < today:
            continue
        rows.append((pd.Timestamp(due), float(bill.amount or 0.0)))

    if not rows:
        return pd.Series(dtype=float)

    due = pd.DataFrame(rows, columns=["Day", "Amount"])
    return due.groupby("Day")["Amount"].sum()


def build_allowance_timeline(projection: Projection, today: date) -> pd.DataFrame:
    """Project the spendable cash left at the end of each day until payday.

    One row is produced per remaining day, starting with today. ``Spendable``
    is what is left of the allowance after spending that day's share, and
    ``Balance`` the account balance it implies, which ends at the reserved
    savings goal. ``BillsDue`` shows obligations already counted in the
    balance.
    """

    if projection.days_remaining <= 0:
        return pd.DataFrame(columns=list(TIMELINE_COLUMNS))

    try:
        days = pd.date_range(pd.Timestamp(today), periods=projection.days_remaining, freq="D")
        due = bills_due_by_day(projection, today).reindex(days, fill_value=0.0)
    except (pd.errors.OutOfBoundsDatetime, pd.errors.OutOfBoundsTimedelta, OverflowError):
        # Paydays centuries away fall outside the pandas timestamp range.
        return pd.DataFrame(columns=list(TIMELINE_COLUMNS))

    elapsed = np.arange(1, projection.days_remaining + 1, dtype=float)
    daily = float(projection.daily_budget)

    spendable = np.clip(daily * (projection.days_remaining - elapsed), 0.0, None)
    balance = projection.current_balance - daily * elapsed

    timeline = pd.DataFrame(
        {
            "Day": days,
            "Allowance": daily,
            "BillsDue": due.to_numpy(dtype=float),
            "Spendable": spendable,
            "Balance": balance,
        }
    )
    return timeline
