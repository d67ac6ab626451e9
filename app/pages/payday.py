"""Payday calculator page layout."""

from __future__ import annotations

import html
from dataclasses import replace
from datetime import date
from typing import Iterable

import pandas as pd
import streamlit as st

from app.layout import card, render_insight_list, status_badge
from app.state import commit
from config import Settings
from core.dates import iso, parse_date
from core.formatting import format_currency, format_date_label, format_due_phrase
from core.ledger import add_bill, delete_bill, sort_bills_by_due_date, update_bill, update_calculator
from core.models import (
    BILL_RECURRENCES,
    SCHEDULE_RECURRENCES,
    AnyBill,
    Bill,
    BudgetDocument,
    PaydayDashboard,
    Projection,
    SavingsGoal,
    SpendingTarget,
)
from visualization import build_allowance_chart

_NO_CATEGORY = ""


def _apply(document: BudgetDocument) -> None:
    if commit(document):
        st.rerun()


def _recurrence_label(bill: Bill) -> str:
    if not bill.is_recurring:
        return "One-time"
    interval = bill.recurring_interval or 1
    return f"Every {interval} {bill.recurring_type}" if interval > 1 else bill.recurring_type.capitalize()


def _render_balance_card(document: BudgetDocument, symbol: str) -> None:
    calculator = document.payday_calculator
    with st.form("balance-goals"):
        balance = st.number_input(
            f"Current balance ({symbol})",
            value=calculator.starting_balance,
            step=10.0,
            format="%.2f",
            placeholder="Enter your balance",
        )
        target_cols = st.columns((1, 1, 1))
        target_enabled = target_cols[0].checkbox("Spending target", value=calculator.spending_target.enabled)
        target_amount = target_cols[1].number_input(
            "Target amount",
            min_value=0.0,
            value=float(calculator.spending_target.amount),
            step=5.0,
            format="%.2f",
        )
        periods = ["daily", "weekly"]
        target_period = target_cols[2].selectbox(
            "Per",
            periods,
            index=periods.index(calculator.spending_target.period)
            if calculator.spending_target.period in periods
            else 0,
        )
        goal_cols = st.columns((1, 2))
        goal_enabled = goal_cols[0].checkbox("Savings goal", value=calculator.savings_goal.enabled)
        goal_amount = goal_cols[1].number_input(
            "Keep aside by payday",
            min_value=0.0,
            value=float(calculator.savings_goal.amount),
            step=10.0,
            format="%.2f",
        )
        submitted = st.form_submit_button("Save balance & goals")

    if submitted:
        _apply(
            update_calculator(
                document,
                starting_balance=balance,
                spending_target=SpendingTarget(target_enabled, float(target_amount), target_period),
                savings_goal=SavingsGoal(goal_enabled, float(goal_amount)),
            )
        )


def _render_schedule_card(document: BudgetDocument, today: date) -> None:
    schedule = document.payday_calculator.schedule
    with st.form("payday-schedule"):
        mode = st.radio(
            "Schedule",
            ["manual", "recurring"],
            index=1 if schedule.type == "recurring" else 0,
            format_func=lambda key: "Pick a date" if key == "manual" else "Repeats",
            horizontal=True,
        )
        next_payday = st.date_input(
            "Next payday",
            value=parse_date(schedule.next_payday),
            help="Used when the schedule is set to a single date.",
        )
        cols = st.columns((1, 1, 1))
        recurring_type = cols[0].selectbox(
            "Frequency",
            list(SCHEDULE_RECURRENCES),
            index=SCHEDULE_RECURRENCES.index(schedule.recurring_type)
            if schedule.recurring_type in SCHEDULE_RECURRENCES
            else 1,
        )
        anchor = cols[1].date_input(
            "A known payday",
            value=parse_date(schedule.anchor_date) or today,
        )
        interval = cols[2].number_input(
            "Every",
            min_value=1,
            value=max(int(schedule.interval or 1), 1),
            step=1,
            key="schedule-interval",
        )
        submitted = st.form_submit_button("Save schedule")

    if submitted:
        updated = replace(
            schedule,
            type=mode,
            next_payday=iso(next_payday) if next_payday else "",
            recurring_type=recurring_type,
            anchor_date=iso(anchor) if anchor else "",
            interval=int(interval),
        )
        _apply(update_calculator(document, schedule=updated))


def _category_options(document: BudgetDocument) -> dict[str, str]:
    options = {_NO_CATEGORY: "No category"}
    options.update({category.id: category.name for category in document.categories})
    return options


def _render_bill_form(document: BudgetDocument, today: date, symbol: str) -> None:
    options = _category_options(document)
    with st.form("add-bill", clear_on_submit=True):
        cols = st.columns((1, 2, 1.4))
        amount = cols[0].number_input(
            f"Amount ({symbol})", min_value=0.0, step=5.0, format="%.2f", key="new-bill-amount"
        )
        description = cols[1].text_input("Description", placeholder="e.g. Rent", key="new-bill-description")
        category_id = cols[2].selectbox(
            "Category", list(options), format_func=options.get, key="new-bill-category"
        )

        is_recurring = st.checkbox("Recurring bill")
        detail_cols = st.columns((1, 1, 1, 1))
        due_date = detail_cols[0].date_input("Due date", value=today, help="For one-time bills.")
        recurring_type = detail_cols[1].selectbox("Repeats", list(BILL_RECURRENCES), index=2)
        interval = detail_cols[2].number_input("Every", min_value=1, value=1, step=1, key="new-bill-interval")
        start_date = detail_cols[3].date_input("First due", value=today, help="For recurring bills.")
        submitted = st.form_submit_button("Add bill")

    if submitted:
        try:
            updated = add_bill(
                document,
                amount=amount,
                description=description,
                category_id=category_id or None,
                date=iso(due_date) if due_date and not is_recurring else "",
                is_recurring=is_recurring,
                recurring_type=recurring_type,
                recurring_interval=int(interval),
                start_date=iso(start_date) if start_date and is_recurring else "",
            )
        except ValueError as exc:
            st.warning(str(exc))
        else:
            _apply(updated)


def _render_bill_list(document: BudgetDocument, symbol: str) -> None:
    bills = sort_bills_by_due_date(document.payday_calculator.bills)
    if not bills:
        st.caption("No bills added yet.")
        return

    options = _category_options(document)
    for bill in bills:
        cols = st.columns((1, 2, 1.2, 1.2, 0.6))
        cols[0].markdown(format_currency(bill.amount, symbol))
        cols[1].text(bill.description or "Untitled bill")
        cols[2].markdown(bill.start_date if bill.is_recurring else bill.date)
        cols[3].markdown(_recurrence_label(bill))
        if cols[4].button("Delete", key=f"delete-bill-{bill.id}"):
            _apply(delete_bill(document, bill.id))

        with st.expander(f"Edit {bill.description or 'bill'}"):
            _render_bill_edit_form(document, bill, options, symbol)


def _render_bill_edit_form(
    document: BudgetDocument,
    bill: Bill,
    options: dict[str, str],
    symbol: str,
) -> None:
    with st.form(f"edit-bill-{bill.id}"):
        amount = st.number_input(
            f"Amount ({symbol})",
            min_value=0.0,
            value=float(bill.amount),
            step=5.0,
            format="%.2f",
            key=f"bill-amount-{bill.id}",
        )
        description = st.text_input("Description", value=bill.description, key=f"bill-description-{bill.id}")
        keys = list(options)
        category_id = st.selectbox(
            "Category",
            keys,
            index=keys.index(bill.category_id) if bill.category_id in options else 0,
            format_func=lambda key: options.get(key, "Unknown"),
            key=f"bill-category-{bill.id}",
        )

        changes: dict[str, object] = {}
        if bill.is_recurring:
            cols = st.columns((1, 1, 1))
            recurrences = list(BILL_RECURRENCES)
            changes["recurring_type"] = cols[0].selectbox(
                "Repeats",
                recurrences,
                index=recurrences.index(bill.recurring_type) if bill.recurring_type in recurrences else 0,
                key=f"bill-recurrence-{bill.id}",
            )
            interval = cols[1].number_input(
                "Every",
                min_value=1,
                value=max(int(bill.recurring_interval or 1), 1),
                step=1,
                key=f"bill-interval-{bill.id}",
            )
            start_date = cols[2].date_input(
                "First due",
                value=parse_date(bill.start_date),
                key=f"bill-start-{bill.id}",
            )
            changes["recurring_interval"] = int(interval)
            changes["start_date"] = iso(start_date) if start_date else ""
        else:
            due_date = st.date_input("Due date", value=parse_date(bill.date), key=f"bill-date-{bill.id}")
            changes["date"] = iso(due_date) if due_date else ""
        save_clicked = st.form_submit_button("Save bill")

    if save_clicked:
        try:
            updated = update_bill(
                document,
                bill.id,
                amount=float(amount),
                description=description.strip(),
                category_id=category_id,
                **changes,
            )
        except (ValueError, KeyError) as exc:
            st.warning(str(exc))
        else:
            _apply(updated)


def _render_results_card(dashboard: PaydayDashboard, symbol: str) -> None:
    status = dashboard["status_message"]
    if status:
        st.info(status)
        return

    projection: Projection = dashboard["projection"]
    top = st.columns(3)
    top[0].metric("Next payday", format_date_label(projection.next_payday))
    top[1].metric("Days remaining", projection.days_remaining)
    top[2].metric("Left after bills & expenses", format_currency(projection.current_balance, symbol))

    bottom = st.columns(4)
    bottom[0].metric("Daily budget", format_currency(projection.daily_budget, symbol))
    bottom[1].metric("Weekly budget", format_currency(projection.weekly_budget, symbol))
    bottom[2].metric("This week", format_currency(projection.current_week_budget, symbol))
    bottom[3].metric("Save per day", format_currency(projection.savings_per_day, symbol))

    if dashboard["insights"]:
        render_insight_list(dashboard["insights"])


def upcoming_bill_items(bills: Iterable[AnyBill], today: date, symbol: str) -> list[str]:
    """Return escaped list markup for bills due before payday, soonest first."""

    ordered = sorted(bills, key=lambda bill: parse_date(bill.date) or date.max)
    items = []
    for bill in ordered:
        due = parse_date(bill.date)
        phrase = format_due_phrase((due - today).days) if due else "Date unknown"
        name = html.escape(bill.description or "Bill")
        items.append(f"<strong>{name}</strong> · {format_currency(bill.amount, symbol)} · {phrase}")
    return items


def breakdown_table_html(breakdown: pd.DataFrame, symbol: str) -> str:
    """Render the category impact table; only the status badge is raw markup."""

    rows = []
    for _, row in breakdown.iterrows():
        rows.append(
            {
                "Category": html.escape(str(row["Category"])),
                "Expenses": format_currency(row["ExpensesBeforePayday"], symbol),
                "Bills": format_currency(row["BillsBeforePayday"], symbol),
                "Total before payday": format_currency(row["TotalBeforePayday"], symbol),
                "Remaining budget": format_currency(row["Remaining"], symbol),
                "Status": status_badge(row["Status"]),
            }
        )
    return pd.DataFrame(rows).to_html(escape=False, index=False)


def _render_upcoming_bills(dashboard: PaydayDashboard, symbol: str) -> None:
    items = upcoming_bill_items(dashboard["projection"].bills_before_payday, dashboard["today"], symbol)
    if not items:
        st.success("No bills due before payday.")
        return
    render_insight_list(items)


def _render_breakdown(dashboard: PaydayDashboard, symbol: str) -> None:
    breakdown = dashboard["category_breakdown"]
    if breakdown.empty:
        st.info("Add categories to see how upcoming bills and expenses land.")
        return
    st.markdown(breakdown_table_html(breakdown, symbol), unsafe_allow_html=True)


def render_page(document: BudgetDocument, dashboard: PaydayDashboard, settings: Settings) -> None:
    """Render the payday calculator page."""

    st.title("Payday Calculator")
    st.caption("Work out what you can spend each day until your next payday.")
    symbol = settings.currency_symbol
    today = dashboard["today"]

    inputs_col, results_col = st.columns([2, 3], gap="medium")
    with inputs_col:
        with card("Balance & goals"):
            _render_balance_card(document, symbol)
        with card("Payday schedule", suffix=document.payday_calculator.schedule.type.capitalize()):
            _render_schedule_card(document, today)
    with results_col:
        with card("Your allowance", suffix="Until payday"):
            _render_results_card(dashboard, symbol)
        with card("Spendable runway", suffix="Day by day"):
            st.plotly_chart(
                build_allowance_chart(dashboard["allowance_timeline"], symbol),
                use_container_width=True,
                key="allowance-runway",
            )

    bills_col, breakdown_col = st.columns([3, 2], gap="medium")
    with bills_col:
        with card("Bills", suffix=f"{len(document.payday_calculator.bills)} saved"):
            _render_bill_form(document, today, symbol)
            _render_bill_list(document, symbol)
    with breakdown_col:
        with card("Due before payday", suffix="Bills"):
            _render_upcoming_bills(dashboard, symbol)
        with card("Category impact", suffix="Before payday"):
            _render_breakdown(dashboard, symbol)


__all__ = ["breakdown_table_html", "render_page", "upcoming_bill_items"]
