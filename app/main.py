"""Payday Planner dashboard with responsive card layout."""

from __future__ import annotations

import logging
from datetime import date

import streamlit as st

from app.layout import (
    NAV_LINKS,
    determine_active_page,
    inject_css,
    render_navbar,
    render_sidebar,
)
from app.pages import render_budget_page, render_data_page, render_payday_page
from app.state import bind_store
from config import Settings, get_settings
from core.store import BudgetStore
from core.summary_service import prepare_payday_dashboard

logger = logging.getLogger(__name__)

_PAGE_TITLES = {link.slug: link.label for link in NAV_LINKS}


@st.cache_resource(show_spinner=False)
def _get_store(data_path: str) -> BudgetStore:
    return BudgetStore(data_path)


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Application entrypoint for the Payday Planner dashboard."""

    settings = get_settings()
    _configure_logging(settings)

    valid_pages = [link.slug for link in NAV_LINKS]
    active_page = determine_active_page(valid_pages)

    st.set_page_config(
        page_title=f"Payday Planner | {_PAGE_TITLES.get(active_page, 'Budget Planner')}",
        page_icon="💸",
        layout="wide",
        initial_sidebar_state="collapsed",
    )
    inject_css()

    store = _get_store(str(settings.data_path))
    document = bind_store(store, settings.category_horizon_months)

    render_navbar(active_page)
    render_sidebar(active_page, str(store.path), document.has_data)

    today = date.today()
    dashboard = prepare_payday_dashboard(
        document,
        today,
        horizon_months=settings.category_horizon_months,
        near_limit_ratio=settings.near_limit_ratio,
        currency_symbol=settings.currency_symbol,
    )

    if active_page == "payday":
        render_payday_page(document, dashboard, settings)
    elif active_page == "data":
        render_data_page(document, dashboard, settings)
    else:
        render_budget_page(document, dashboard, settings)


if __name__ == "__main__":
    main()
