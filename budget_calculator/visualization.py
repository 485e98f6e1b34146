"""Plotly visualisation helpers for the budget calculator.

Each function accepts the DataFrame produced by
:func:`budget_calculator.summary.budget_summary` and returns a
`plotly.graph_objects.Figure` that Streamlit renders via
``st.plotly_chart``.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

BAR_COLORS = {
    'Allocated': '#2e7d32',
    'Spent': '#90a4ae',
}
OVER_BUDGET_COLOR = '#d32f2f'


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_allocation_donut(summary: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Generate a donut chart of the percentage split.

    Parameters
    ----------
    summary : pandas.DataFrame
        Budget summary indexed by category label with a ``Percent`` column.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Donut chart of the allocation.
    """
    if summary.empty or summary['Percent'].sum() == 0:
        return _empty_figure()
    df = summary.reset_index()[['Category', 'Percent']]
    fig = px.pie(df, names="Category", values="Percent", hole=0.5)
    fig.update_traces(textinfo="label+percent", sort=False)
    fig.update_layout(title=title or "Allocation", showlegend=False)
    return fig


def create_allocated_vs_spent_chart(summary: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Grouped bars comparing allocated and spent amounts per category.

    Spent bars for over-budget categories are drawn in red.
    """
    if summary.empty:
        return _empty_figure()
    categories = list(summary.index)
    spent_colors = [
        OVER_BUDGET_COLOR if over else BAR_COLORS['Spent']
        for over in summary['Over Budget']
    ]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        name="Allocated",
        x=categories,
        y=summary['Allocated'],
        marker_color=BAR_COLORS['Allocated'],
    ))
    fig.add_trace(go.Bar(
        name="Spent",
        x=categories,
        y=summary['Spent'],
        marker_color=spent_colors,
    ))
    fig.update_layout(
        title=title or "Allocated vs spent",
        barmode="group",
        xaxis_title="Category",
        yaxis_title="Amount ($)",
    )
    return fig
