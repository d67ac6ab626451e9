import importlib
from datetime import date

import pandas as pd
import plotly.graph_objects as go

from analytics.forecasting import build_allowance_timeline
from analytics.payday import build_projection
from core.models import Bill, PaydayCalculator, Schedule
from visualization import build_allowance_chart, build_budget_share_chart, build_category_budget_chart


def test_app_package_exports_main():
    module = importlib.import_module("app")

    assert hasattr(module, "main"), "app package should expose main entrypoint"


def test_pages_expose_renderers():
    pages = importlib.import_module("app.pages")

    for name in ("render_budget_page", "render_payday_page", "render_data_page"):
        assert callable(getattr(pages, name))


def test_navigation_covers_every_page():
    layout = importlib.import_module("app.layout")

    assert [link.slug for link in layout.NAV_LINKS] == ["budget", "payday", "data"]
    assert "pp-status--over" in layout.status_badge("over")
    assert "pp-status--ok" in layout.status_badge("mystery")


def test_charts_handle_empty_frames():
    assert isinstance(build_allowance_chart(pd.DataFrame()), go.Figure)
    assert isinstance(build_category_budget_chart(pd.DataFrame()), go.Figure)
    assert isinstance(build_budget_share_chart(pd.DataFrame()), go.Figure)


def test_allowance_chart_plots_spendable_and_bills():
    calculator = PaydayCalculator(
        starting_balance=500.0,
        schedule=Schedule(next_payday="2024-01-15"),
        bills=(Bill(id="b", amount=40.0, date="2024-01-12"),),
    )
    today = date(2024, 1, 10)
    timeline = build_allowance_timeline(build_projection(calculator, (), today), today)

    figure = build_allowance_chart(timeline, "$")

    names = [trace.name for trace in figure.data]
    assert "Spendable left" in names
    assert "Bills due" in names
