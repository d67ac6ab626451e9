"""Plotly chart builders for the Payday Planner dashboard."""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .theme import theme_tokens

TOKENS = theme_tokens()

__all__ = [
    "build_allowance_chart",
    "build_category_budget_chart",
    "build_budget_share_chart",
]

_STATUS_COLORS = {
    "over": TOKENS.over_budget_red,
    "near": TOKENS.near_limit_amber,
    "ok": TOKENS.on_track_green,
}


def _empty_plotly_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[
            dict(
                text=message,
                x=0.5,
                y=0.5,
                xref="paper",
                yref="paper",
                showarrow=False,
                font=dict(color=TOKENS.neutral_grey, size=14, family=TOKENS.label_font),
            )
        ],
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=0, r=0, t=20, b=0),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def build_allowance_chart(
    timeline: pd.DataFrame,
    currency_symbol: str | None = "$",
) -> go.Figure:
    """Render spendable cash left each day until payday, with bills due as bars."""

    if timeline.empty:
        return _empty_plotly_figure("Set a payday and balance to see your runway.")

    df = timeline.copy()
    df["Day"] = pd.to_datetime(df["Day"], errors="coerce").dt.normalize()
    df = df.dropna(subset=["Day"])

    currency_prefix = currency_symbol or ""
    hover_template = f"%{{x|{TOKENS.time_format}}}<br>{currency_prefix}%{{y:,.2f}}<extra></extra>"

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=df["Day"],
            y=df["Spendable"],
            mode="lines+markers",
            name="Spendable left",
            line=dict(color=TOKENS.brand_blue, width=3, shape="spline", smoothing=0.45),
            marker=dict(size=7, color=TOKENS.brand_blue, line=dict(color=TOKENS.neutral_white, width=1.5)),
            fill="tozeroy",
            fillcolor=TOKENS.brand_blue_soft,
            hovertemplate=hover_template,
        )
    )

    bills = df[df["BillsDue"] > 0]
    if not bills.empty:
        fig.add_trace(
            go.Bar(
                x=bills["Day"],
                y=bills["BillsDue"],
                name="Bills due",
                marker=dict(color=TOKENS.accent_orange),
                hovertemplate=hover_template,
            )
        )

    first_point = df.iloc[[0]]
    fig.add_trace(
        go.Scatter(
            x=first_point["Day"],
            y=first_point["Spendable"],
            mode="markers",
            marker=dict(
                size=10,
                color=TOKENS.brand_blue_focus,
                symbol="circle",
                line=dict(color=TOKENS.neutral_white, width=2),
            ),
            hovertemplate=hover_template,
            name="Today",
            showlegend=False,
        )
    )

    fig.update_layout(
        title="",
        xaxis_title="Date",
        yaxis_title="Amount",
        margin=dict(l=0, r=0, t=20, b=0),
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
        xaxis=dict(showgrid=False, tickformat=TOKENS.time_format),
        yaxis=dict(showgrid=True, gridcolor=TOKENS.neutral_background, zeroline=False),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )

    return fig


def build_category_budget_chart(
    breakdown: pd.DataFrame,
    currency_symbol: str | None = "$",
) -> go.Figure:
    """Render budget against spent per category as grouped horizontal bars."""

    if breakdown.empty:
        return _empty_plotly_figure("No categories yet.")

    data = breakdown.sort_values("Spent", ascending=True).reset_index(drop=True)
    currency_prefix = currency_symbol or ""
    spent_colors = [_STATUS_COLORS.get(status, TOKENS.brand_blue) for status in data["Status"]]

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            y=data["Category"],
            x=data["Budget"],
            orientation="h",
            name="Budget",
            marker=dict(color=TOKENS.neutral_background),
            hovertemplate=f"%{{y}}<br>Budget: {currency_prefix}%{{x:,.2f}}<extra></extra>",
        )
    )
    fig.add_trace(
        go.Bar(
            y=data["Category"],
            x=data["Spent"],
            orientation="h",
            name="Spent",
            marker=dict(color=spent_colors),
            customdata=data[["PctUsed"]].to_numpy(),
            hovertemplate=(
                f"%{{y}}<br>Spent: {currency_prefix}%{{x:,.2f}}<br>"
                "Used: %{customdata[0]:.1%}<extra></extra>"
            ),
        )
    )

    fig.update_layout(
        barmode="overlay",
        margin=dict(l=0, r=10, t=20, b=0),
        xaxis=dict(title=f"Amount ({currency_prefix})", showgrid=False, zeroline=False),
        yaxis=dict(title="", automargin=True),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
        bargap=0.35,
        height=max(220, 48 * len(data)),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )

    return fig


def build_budget_share_chart(breakdown: pd.DataFrame) -> go.Figure:
    """Render a donut chart of how the total budget is split across categories."""

    palette = list(TOKENS.category_palette)

    if breakdown.empty or float(breakdown["Budget"].sum()) <= 0:
        empty = pd.DataFrame({"Category": [], "Budget": []})
        fig = px.pie(empty, names="Category", values="Budget", hole=0.55)
        fig.update_layout(showlegend=False, margin=dict(l=0, r=0, t=0, b=0))
        return fig

    data = breakdown.sort_values("Budget", ascending=False).reset_index(drop=True)
    if len(data) > len(palette):
        repeats = (len(data) // len(palette)) + 1
        color_sequence = (palette * repeats)[: len(data)]
    else:
        color_sequence = palette[: len(data)]

    fig = px.pie(
        data,
        names="Category",
        values="Budget",
        hole=0.55,
        color="Category",
        color_discrete_sequence=color_sequence,
    )

    fig.update_traces(
        textposition="inside",
        texttemplate="%{label}<br>%{percent:.1%}",
        customdata=data[["Spent", "Remaining"]],
        hovertemplate=(
            "%{label}<br>"
            "Budget: %{value:,.2f}<br>"
            "Spent: %{customdata[0]:,.2f}<br>"
            "Remaining: %{customdata[1]:,.2f}<extra></extra>"
        ),
        marker=dict(line=dict(color=TOKENS.neutral_white, width=2)),
    )

    fig.update_layout(
        margin=dict(l=0, r=0, t=0, b=0),
        legend=dict(
            title="",
            orientation="v",
            yanchor="middle",
            y=0.5,
            xanchor="left",
            x=1.05,
            font=dict(color=TOKENS.label_color, family=TOKENS.label_font, size=TOKENS.label_size),
        ),
        showlegend=True,
    )

    return fig
