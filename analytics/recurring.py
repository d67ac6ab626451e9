"""Recurring bill expansion helpers."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date, timedelta
from typing import Any, Iterable

from core.dates import add_months, add_years, iso, parse_date
from core.models import AnyBill, Bill, BillInstance

__all__ = [
    "advance",
    "coerce_interval",
    "expand_recurring_bills",
]


def coerce_interval(value: Any) -> int:
    """Return a usable recurrence interval; anything below one becomes one."""

    try:
        interval = int(value)
    except (TypeError, ValueError, OverflowError):
        return 1
    return max(interval, 1)


def advance(current: date, recurring_type: str, interval: int) -> date | None:
    """Return the next occurrence after ``current``.

    ``None`` means there is no next occurrence: the unit is unknown or the step
    lands outside the representable calendar.
    """

    try:
        if recurring_type == "weekly":
            return current + timedelta(days=7 * interval)
        if recurring_type == "biweekly":
            return current + timedelta(days=14 * interval)
        if recurring_type == "monthly":
            return add_months(current, interval)
        if recurring_type == "yearly":
            return add_years(current, interval)
    except (OverflowError, ValueError):
        return None
    return None


def expand_recurring_bills(
    bills: Iterable[Bill],
    target_date: date | str | None,
    today: date,
) -> list[AnyBill]:
    """Expand recurring bill templates into dated instances up to ``target_date``.

    Parameters
    ----------
    bills:
        One-time bills and recurring templates, in any order.
    target_date:
        Inclusive horizon for generated instances. When it is unset or cannot
        be parsed the templates are returned unexpanded.
    today:
        Occurrences dated before this day are suppressed.

    Returns
    -------
    list[Bill | BillInstance]
        Input order is kept, with each recurring template replaced by its
        instances and one-time bills passed through unchanged. Instance ids
        are ``"<template id>-<ISO date>"`` so repeated expansion yields
        identical lists.
    """

    templates = [bill for bill in bills if bill is not None]
    target = parse_date(target_date)
    if target is None:
        return list(templates)

    expanded: list[AnyBill] = []
    for bill in templates:
        if not bill.is_recurring or not bill.recurring_type:
            expanded.append(bill)
            continue

        start = parse_date(bill.start_date or bill.date)
        if start is None:
            expanded.append(bill)
            continue

        expanded.extend(_bill_occurrences(bill, start, target, today))

    return expanded


def _bill_occurrences(bill: Bill, start: date, target: date, today: date) -> list[BillInstance]:
    interval = coerce_interval(bill.recurring_interval)
    occurrences: list[BillInstance] = []
    current: date | None = start

    while current is not None and current <= target:
        if current >= today:
            occurrences.append(_make_instance(bill, current))
        current = advance(current, bill.recurring_type, interval)

    return occurrences


def _make_instance(bill: Bill, occurrence: date) -> BillInstance:
    values = asdict(bill)
    values.update(
        id=f"{bill.id}-{iso(occurrence)}",
        date=iso(occurrence),
        recurring_bill_id=bill.id,
        is_recurring_instance=True,
    )
    return BillInstance(**values)
