"""
Renderer adapter.

Draws ``ChartReadyData`` with Plotly, or with Altair when an axis uses a
discrete point scale (label-vs-label charts).
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import altair as alt
import pandas as pd
import plotly.graph_objects as go

from .config import (
    DEFAULT_COLORS,
    DEFAULT_FONT,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    FONT_FAMILIES,
    TRANS,
)
from .models import ChartFamily, ChartReadyData, ChartType

logger = logging.getLogger(__name__)


@dataclass
class RenderOptions:
    responsive: bool = True
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    title: str = ""
    font_family: str = DEFAULT_FONT
    font_size: int = 14
    colors: List[str] = field(default_factory=lambda: list(DEFAULT_COLORS))
    show_legend: bool = True


def _axis_color(colors):
    return colors[2] if len(colors) > 2 else "#B6B6B6"


def create_plotly_template(colors, font_family):
    """Create a custom Plotly template"""
    line_color = _axis_color(colors)
    axis = dict(
        showgrid=False,
        showline=True,
        linecolor=line_color,
        zeroline=True,
        zerolinecolor=line_color
    )
    return go.layout.Template(
        layout=go.Layout(
            font=dict(
                family=FONT_FAMILIES.get(font_family, FONT_FAMILIES[DEFAULT_FONT]),
                size=14,
                color=line_color
            ),
            colorway=colors,
            plot_bgcolor=TRANS,
            paper_bgcolor=TRANS,
            xaxis=axis,
            yaxis=axis
        )
    )


# ── Plotly traces ─────────────────────────────────────────────────────────
def _xy(data, series):
    """Return the x and y arrays of a series"""
    if data.labels is None:
        return [p.x for p in series.values], [p.y for p in series.values]
    return data.labels, series.values


def _bar_traces(data):
    traces = []
    for s in data.series:
        marker = dict(color=s.color, line=dict(color=s.border_color, width=s.border_width))
        if data.orientation == "h":
            traces.append(go.Bar(y=data.labels, x=s.values, name=s.name, marker=marker, orientation="h"))
        else:
            traces.append(go.Bar(x=data.labels, y=s.values, name=s.name, marker=marker))
    return traces


def _line_traces(data):
    traces = []
    for s in data.series:
        x, y = _xy(data, s)
        traces.append(go.Scatter(
            x=x, y=y, name=s.name,
            mode="lines+markers",
            line_color=s.color,
            fill="tozeroy" if s.fill else None,
            fillcolor=s.color if s.fill else None,
        ))
    return traces


def _radar_traces(data):
    return [
        go.Scatterpolar(
            r=s.values, theta=data.labels, name=s.name,
            fill="toself" if s.fill else "none",
            line_color=s.color,
        )
        for s in data.series
    ]


def _pie_traces(data):
    s = data.series[0]
    hole = .4 if data.chart_type == ChartType.DOUGHNUT else 0
    return [go.Pie(
        labels=data.labels, values=s.values, name=s.name, hole=hole,
        marker=dict(colors=s.color, line=dict(color=s.border_color, width=s.border_width)),
    )]


def _polar_area_traces(data):
    s = data.series[0]
    return [go.Barpolar(
        r=s.values, theta=data.labels, name=s.name,
        marker=dict(color=s.color, line=dict(color=s.border_color, width=s.border_width)),
    )]


def _scatter_traces(data):
    traces = []
    for s in data.series:
        x, y = _xy(data, s)
        marker = dict(color=s.color)
        if data.chart_type == ChartType.BUBBLE:
            # Radius in pixels, Plotly sizes by diameter
            marker.update(size=[2 * p.r for p in s.values], sizemode="diameter")
        traces.append(go.Scatter(x=x, y=y, name=s.name, mode="markers", marker=marker))
    return traces


TRACE_BUILDERS = {
    ChartType.BAR: _bar_traces,
    ChartType.LINE: _line_traces,
    ChartType.RADAR: _radar_traces,
    ChartType.PIE: _pie_traces,
    ChartType.DOUGHNUT: _pie_traces,
    ChartType.POLAR_AREA: _polar_area_traces,
    ChartType.SCATTER: _scatter_traces,
    ChartType.BUBBLE: _scatter_traces,
}

PLOTLY_AXIS_TYPES = {"category": "category", "linear": "linear", "time": "date"}


def render_plotly(data: ChartReadyData, options: RenderOptions) -> go.Figure:
    fig = go.Figure(TRACE_BUILDERS[data.chart_type](data))
    fig.update_layout(
        title=options.title,
        barmode="group",
        showlegend=options.show_legend,
        template=create_plotly_template(options.colors, options.font_family),
        font=dict(
            family=FONT_FAMILIES.get(options.font_family, FONT_FAMILIES[DEFAULT_FONT]),
            size=options.font_size,
        ),
    )
    if options.responsive:
        fig.update_layout(autosize=True, height=options.height)
    else:
        fig.update_layout(width=options.width, height=options.height)

    if data.chart_type.family != ChartFamily.PROPORTION and data.chart_type != ChartType.RADAR:
        fig.update_xaxes(title_text=data.x_title, type=PLOTLY_AXIS_TYPES.get(data.x_scale))
        fig.update_yaxes(title_text=data.y_title, type=PLOTLY_AXIS_TYPES.get(data.y_scale))
    return fig


# ── Altair (point scales) ─────────────────────────────────────────────────
def _long_frame(data):
    """Melt series into ``x``/``y``/``Series`` rows"""
    records = []
    for s in data.series:
        x, y = _xy(data, s)
        if data.orientation == "h":
            x, y = y, x
        records.extend({"x": xv, "y": yv, "Series": s.name} for xv, yv in zip(x, y))
    return pd.DataFrame.from_records(records, columns=["x", "y", "Series"])


def _encoding_type(scale):
    return {"point": "N", "category": "N", "time": "T"}.get(scale, "Q")


def render_altair(data: ChartReadyData, options: RenderOptions) -> alt.Chart:
    df = _long_frame(data)
    props = dict(
        width="container" if options.responsive else options.width,
        height=options.height,
    )
    if options.title:
        props["title"] = options.title
    base = alt.Chart(df).properties(**props)
    x = alt.X(f"x:{_encoding_type(data.x_scale)}", title=data.x_title, sort=None)
    y = alt.Y(f"y:{_encoding_type(data.y_scale)}", title=data.y_title, sort=None)
    color = alt.Color(
        "Series:N",
        scale=alt.Scale(range=[s.color for s in data.series]),
        legend=alt.Legend() if options.show_legend else None,
    )

    if data.chart_type == ChartType.LINE:
        chart = base.mark_line(point=True).encode(x=x, y=y, color=color)
    else:
        chart = base.mark_bar().encode(x=x, y=y, color=color)

    font = FONT_FAMILIES.get(options.font_family, FONT_FAMILIES[DEFAULT_FONT])
    return chart.configure(font=font).configure_axis(
        grid=False, labelFontSize=options.font_size, titleFontSize=options.font_size
    )


def uses_point_scale(data: ChartReadyData) -> bool:
    return "point" in (data.x_scale, data.y_scale)


def render(data: ChartReadyData, options: Optional[RenderOptions] = None):
    """Draw chart-ready data; returns a Plotly figure or an Altair chart"""
    options = options or RenderOptions()
    if uses_point_scale(data):
        logger.debug("Rendering %s with Altair point scales", data.chart_type.value)
        return render_altair(data, options)
    return render_plotly(data, options)


def export_html(chart) -> str:
    """Standalone HTML for a rendered chart"""
    if isinstance(chart, go.Figure):
        return chart.to_html(include_plotlyjs="cdn")
    return chart.to_html()
