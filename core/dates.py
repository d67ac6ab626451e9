"""Calendar helpers shared by the payday engine."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

import pandas as pd

__all__ = ["add_months", "add_years", "iso", "parse_date"]


def parse_date(value: Any) -> date | None:
    """Return ``value`` as a calendar date, or ``None`` when it cannot be read.

    Strings, ``date``/``datetime`` objects and pandas timestamps are accepted.
    Any time-of-day component is dropped. Empty and malformed input yields
    ``None`` instead of raising.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        timestamp = pd.Timestamp(text)
    except (TypeError, ValueError, OverflowError):
        return None
    if pd.isna(timestamp):
        return None
    return timestamp.date()


def iso(value: date) -> str:
    return value.isoformat()


def add_months(value: date, months: int) -> date:
    """Shift ``value`` by whole months, overflowing short months forward.

    The day-of-month is kept and any excess rolls into the following month,
    so 31 January plus one month is 3 March (2 March in a leap year).
    """

    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, 1) + timedelta(days=value.day - 1)


def add_years(value: date, years: int) -> date:
    """Shift ``value`` by whole years; 29 February rolls to 1 March."""

    return date(value.year + years, value.month, 1) + timedelta(days=value.day - 1)
