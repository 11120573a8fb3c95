"""
charts.py

Plotly figures for the projection and the current allocation.
Which series are shown is a display choice made by the caller.
"""

from typing import Dict, Optional

import plotly.express as px
from plotly import graph_objects as go

from config import ASSET_TYPE_COLORS, CATEGORY_COLORS, DEFAULT_VISIBLE_SERIES, OTHER_COLOR, SERIES_COLORS
from models import PortfolioSummary, ProjectionResult

SERIES_LABELS = {
    "totalAssets": "Total Assets",
    "targetGoal": "Target Goal",
    "additionalSavings": "Additional Savings",
}


def series_color(name: str) -> str:
    return SERIES_COLORS.get(name) or ASSET_TYPE_COLORS.get(name) or CATEGORY_COLORS.get(name) or OTHER_COLOR


def build_projection_figure(result: ProjectionResult,
                            visible_series: Optional[Dict[str, bool]] = None) -> go.Figure:
    """
    Line chart of the projection keyed by year, one trace per visible series.
    Series missing from `visible_series` fall back to the default visibility.
    """
    visible = dict(DEFAULT_VISIBLE_SERIES)
    visible.update(visible_series or {})
    frame = result.to_frame()

    fig = go.Figure()
    for column in frame.columns:
        if column == "year" or not visible.get(column, False):
            continue
        fig.add_trace(go.Scatter(
            x=frame["year"],
            y=frame[column],
            mode="lines",
            name=SERIES_LABELS.get(column, column),
            line=dict(color=series_color(column), dash="dash" if column == "targetGoal" else "solid"),
        ))
    fig.update_layout(
        title="Projected Asset Growth",
        xaxis_title="Year",
        yaxis_title="Value ($)",
        yaxis_tickformat="$,.0f",
        hovermode="x unified",
        title_x=0.5,
    )
    return fig


def build_allocation_figure(summary: PortfolioSummary, by: str = "category") -> go.Figure:
    """Pie chart of current holdings by 'category' or 'asset_type'; empty slices are dropped."""
    if by == "category":
        totals, colors = summary.category_totals, CATEGORY_COLORS
    elif by == "asset_type":
        totals, colors = summary.asset_type_totals, ASSET_TYPE_COLORS
    else:
        raise ValueError(f"by must be 'category' or 'asset_type', not {by!r}")

    names = [name for name, value in totals.items() if value > 0]
    values = [totals[name] for name in names]
    fig = px.pie(
        names=names,
        values=values,
        color=names,
        color_discrete_map={name: colors.get(name, OTHER_COLOR) for name in names},
        title="Asset Allocation",
    )
    fig.update_traces(textinfo="label+percent", textposition="inside")
    fig.update_layout(title_x=0.5)
    return fig
