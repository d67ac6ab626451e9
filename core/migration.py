"""One-way translation of legacy payday calculator exports."""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional

__all__ = ["migrate_legacy_document", "needs_migration"]

logger = logging.getLogger(__name__)


def needs_migration(data: Any) -> bool:
    """Return ``True`` for the legacy ``{"version": ..., "data": {...}}`` wrapper."""

    if not isinstance(data, Mapping):
        return False
    return bool(data.get("version") and data.get("data"))


def migrate_legacy_document(data: Mapping[str, Any], timestamp_ms: Optional[int] = None) -> dict[str, Any]:
    """Translate a legacy export into the current document shape.

    Documents already in the current shape are returned unchanged. The legacy
    format only carried payday calculator state, so categories and expenses
    come back empty. Bills without an id are given ``migrated-<ms>-<index>``.
    """

    if not needs_migration(data):
        return dict(data)

    legacy = data["data"]
    if not isinstance(legacy, Mapping):
        legacy = {}
    stamp = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)

    schedule = {
        "type": "recurring" if legacy.get("scheduleMode") == "recurring" else "manual",
        "nextPayday": legacy.get("manualDate") or "",
        "recurringType": "biweekly",
        "anchorDate": "",
        "interval": 1,
    }
    recurrence = legacy.get("recurrence")
    if isinstance(recurrence, Mapping):
        schedule["recurringType"] = recurrence.get("type") or "biweekly"
        schedule["anchorDate"] = recurrence.get("anchorDate") or ""
        schedule["interval"] = recurrence.get("interval") or 1

    spending_target = {
        "enabled": bool(legacy.get("dailyTargetEnabled", False)),
        "amount": legacy.get("dailyTarget") or 0,
        "period": legacy.get("targetPeriod") or "daily",
    }
    savings_goal = {
        "enabled": bool(legacy.get("savingsGoalEnabled", False)),
        "amount": legacy.get("savingsGoal") or 0,
    }

    bills = []
    for index, bill in enumerate(legacy.get("bills") or []):
        if not isinstance(bill, Mapping):
            continue
        bill_id = str(bill["id"]) if bill.get("id") else f"migrated-{stamp}-{index}"
        bills.append(
            {
                "id": bill_id,
                "date": bill.get("dueDate") or bill.get("date") or "",
                "amount": bill.get("amount") or 0,
                "description": bill.get("name") or bill.get("description") or "",
                "categoryId": bill.get("categoryId") or None,
            }
        )

    logger.info("Migrated legacy export with %d bill(s)", len(bills))
    return {
        "categories": [],
        "dailyExpenses": [],
        "paydayCalculator": {
            "startingBalance": legacy.get("balance"),
            "spendingTarget": spending_target,
            "savingsGoal": savings_goal,
            "schedule": schedule,
            "bills": bills,
        },
    }
