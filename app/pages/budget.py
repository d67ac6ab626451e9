"""Budget planner page: categories, spending and daily expenses."""

from __future__ import annotations

from datetime import date

import pandas as pd
import streamlit as st

from analytics.categorisation import category_status
from app.layout import card, status_badge
from app.state import commit
from config import Settings
from core.dates import iso, parse_date
from core.formatting import format_currency
from core.ledger import (
    add_category,
    add_expense,
    delete_category,
    delete_expense,
    update_category,
)
from core.models import BudgetDocument, Category, PaydayDashboard
from visualization import build_budget_share_chart, build_category_budget_chart


def _apply(document: BudgetDocument) -> None:
    if commit(document):
        st.rerun()


def _render_overview_card(dashboard: PaydayDashboard, symbol: str) -> None:
    overview = dashboard["budget_overview"]
    cols = st.columns(3)
    cols[0].metric("Total budget", format_currency(overview["total_budget"], symbol))
    cols[1].metric("Total spent", format_currency(overview["total_spent"], symbol))
    cols[2].metric(
        "Remaining",
        format_currency(overview["total_remaining"], symbol),
        "Over budget" if overview["is_over_budget"] else None,
        delta_color="inverse",
    )
    st.progress(
        float(min(max(overview["overall_pct"], 0.0), 1.0)),
        text=f"{overview['overall_pct']:.0%} of budget used",
    )
    st.caption("Spent includes expenses plus bills due in the next few months.")


def _render_category_form(document: BudgetDocument, symbol: str) -> None:
    with st.form("add-category", clear_on_submit=True):
        cols = st.columns((2, 1))
        name = cols[0].text_input("Category name", placeholder="e.g. Groceries")
        budget = cols[1].number_input(f"Budget ({symbol})", min_value=0.0, step=10.0, format="%.2f")
        submitted = st.form_submit_button("Add category")

    if submitted:
        try:
            updated = add_category(document, name, budget)
        except ValueError as exc:
            st.warning(str(exc))
        else:
            _apply(updated)


def _render_category_row(
    document: BudgetDocument,
    category: Category,
    settings: Settings,
) -> None:
    symbol = settings.currency_symbol
    status = category_status(category.budget, category.spent, settings.near_limit_ratio)
    cols = st.columns((2, 1, 1, 1, 1))
    cols[0].markdown(f"**{category.name}**")
    cols[1].markdown(format_currency(category.budget, symbol))
    cols[2].markdown(format_currency(category.spent, symbol))
    cols[3].markdown(format_currency(category.remaining, symbol))
    cols[4].markdown(status_badge(status), unsafe_allow_html=True)

    with st.expander(f"Edit {category.name}"):
        with st.form(f"edit-category-{category.id}"):
            name = st.text_input("Name", value=category.name, key=f"category-name-{category.id}")
            budget = st.number_input(
                f"Budget ({symbol})",
                min_value=0.0,
                value=float(category.budget),
                step=10.0,
                format="%.2f",
                key=f"category-budget-{category.id}",
            )
            save_clicked = st.form_submit_button("Save changes")
        if save_clicked:
            try:
                updated = update_category(document, category.id, name=name, budget=budget)
            except (ValueError, KeyError) as exc:
                st.warning(str(exc))
            else:
                _apply(updated)

        st.caption("Deleting a category also deletes its expenses.")
        if st.button("Delete category", key=f"delete-category-{category.id}", type="secondary"):
            try:
                updated = delete_category(document, category.id)
            except KeyError as exc:
                st.warning(str(exc))
            else:
                _apply(updated)


def _render_categories_card(document: BudgetDocument, dashboard: PaydayDashboard, settings: Settings) -> None:
    _render_category_form(document, settings.currency_symbol)

    categories = dashboard["categories"]
    if not categories:
        st.info("No categories yet. Add one above to start budgeting.")
        return

    header = st.columns((2, 1, 1, 1, 1))
    for col, label in zip(header, ("Category", "Budget", "Spent", "Remaining", "Status")):
        col.caption(label)
    for category in categories:
        _render_category_row(document, category, settings)


def _render_expense_form(document: BudgetDocument, today: date, symbol: str) -> None:
    categories = document.categories
    if not categories:
        st.info("Add a category before logging expenses.")
        return

    names = {category.id: category.name for category in categories}
    with st.form("add-expense", clear_on_submit=True):
        cols = st.columns((1, 1.4, 1))
        expense_date = cols[0].date_input("Date", value=today)
        category_id = cols[1].selectbox(
            "Category",
            list(names),
            format_func=lambda key: names.get(key, "Unknown"),
        )
        amount = cols[2].number_input(f"Amount ({symbol})", min_value=0.0, step=1.0, format="%.2f")
        description = st.text_input("Description", placeholder="Optional note")
        submitted = st.form_submit_button("Add expense")

    if submitted:
        try:
            updated = add_expense(
                document,
                iso(expense_date) if expense_date else "",
                category_id,
                amount,
                description,
            )
        except (ValueError, KeyError) as exc:
            st.warning(str(exc))
        else:
            _apply(updated)


def _render_expense_list(document: BudgetDocument, symbol: str) -> None:
    expenses = sorted(
        document.daily_expenses,
        key=lambda expense: parse_date(expense.date) or date.min,
        reverse=True,
    )
    if not expenses:
        st.caption("No expenses logged yet.")
        return

    names = {category.id: category.name for category in document.categories}
    for expense in expenses:
        cols = st.columns((1, 1.4, 1, 2, 0.6))
        cols[0].markdown(expense.date)
        cols[1].markdown(names.get(expense.category_id or "", "Unknown"))
        cols[2].markdown(format_currency(expense.amount, symbol))
        cols[3].markdown(expense.description or "—")
        if cols[4].button("Delete", key=f"delete-expense-{expense.id}"):
            _apply(delete_expense(document, expense.id))


def render_page(document: BudgetDocument, dashboard: PaydayDashboard, settings: Settings) -> None:
    """Render the budget planner page."""

    st.title("Budget Planner")
    st.caption(f"Plan category budgets and track daily spending. Today is {dashboard['today']:%d %b %Y}.")
    symbol = settings.currency_symbol

    left, right = st.columns([2, 3], gap="medium")
    with left:
        with card("Budget overview", suffix="All categories"):
            _render_overview_card(dashboard, symbol)
        with card("Budget split"):
            breakdown = pd.DataFrame(
                {
                    "Category": [category.name for category in dashboard["categories"]],
                    "Budget": [category.budget for category in dashboard["categories"]],
                    "Spent": [category.spent for category in dashboard["categories"]],
                    "Remaining": [category.remaining for category in dashboard["categories"]],
                }
            )
            st.plotly_chart(build_budget_share_chart(breakdown), use_container_width=True, key="budget-donut")
    with right:
        with card("Categories", suffix=f"{len(dashboard['categories'])} total"):
            _render_categories_card(document, dashboard, settings)

    with card("Spending by category", suffix="Budget vs spent"):
        st.plotly_chart(
            build_category_budget_chart(dashboard["category_breakdown"], symbol),
            use_container_width=True,
            key="category-bars",
        )

    with card("Daily expenses", suffix=f"{len(document.daily_expenses)} logged"):
        _render_expense_form(document, dashboard["today"], symbol)
        _render_expense_list(document, symbol)


__all__ = ["render_page"]
