"""
Chart-data mapper.

Maps a ``Dataset`` plus the current role assignment onto the series/points
structure a renderer draws. One function per chart family or axis mode,
picked through a single dispatch keyed on chart type and ``AxisMode``.

Coercion rules differ by path:

* categorical and proportion values: non-numeric or missing cells count as 0;
* line charts on a continuous axis and scatter/bubble points: rows whose x
  or y cannot be parsed are dropped, so no point lands at a made-up origin.
"""

import logging
from typing import Optional

import pandas as pd

from .colors import RandomColorSource
from .columns import (
    is_numeric_like,
    looks_like_date,
    to_datetime_or_nat,
    to_number,
    to_number_or_nan,
)
from .config import BORDER_COLOR, BUBBLE_RADIUS_COLUMN, DEFAULT_BUBBLE_RADIUS
from .models import (
    AxisMode,
    ChartFamily,
    ChartReadyData,
    ChartType,
    Point,
    Series,
)
from .roles import is_ready

logger = logging.getLogger(__name__)

FILLED_TYPES = (ChartType.LINE, ChartType.RADAR)


def _text(series) -> pd.Series:
    return series.map(lambda v: "" if v is None or (isinstance(v, float) and v != v) else str(v))


def _y_title(y_cols):
    return y_cols[0] if len(y_cols) == 1 else "Value"


# ── Categorical: bar / line / radar ──────────────────────────────────────
def _map_categorical(frame, chart_type, roles, colors):
    labels = _text(frame[roles.x]).tolist()
    series = [
        Series(
            name=col,
            values=to_number(frame[col]).tolist(),
            color=colors.next_color(),
            fill=chart_type in FILLED_TYPES,
            border_color=BORDER_COLOR,
            border_width=1,
        )
        for col in roles.y
    ]
    return ChartReadyData(
        chart_type=chart_type,
        labels=labels,
        series=series,
        x_title=roles.x,
        y_title=_y_title(roles.y),
    )


def _map_bar_counts(frame, chart_type, roles, colors):
    """Bar of row counts per distinct x value when no y column is chosen"""
    if roles.y:
        return _map_categorical(frame, chart_type, roles, colors)

    keys = _text(frame[roles.x])
    counts = keys.groupby(keys, sort=False).size()
    series = Series(
        name="count",
        values=[int(n) for n in counts.tolist()],
        color=colors.next_color(),
        border_color=BORDER_COLOR,
    )
    return ChartReadyData(
        chart_type=chart_type,
        labels=[str(k) for k in counts.index],
        series=[series],
        x_title=roles.x,
        y_title="count",
    )


def _map_discrete_bar(frame, chart_type, roles, colors):
    """Bar over possibly non-numeric columns, one series per y column.

    Horizontal when x is numeric and the single y is not; the numeric
    column then supplies bar lengths and y supplies the categories. With
    any text y column every series is plotted on a point scale.
    """
    x_col = roles.x
    x_numeric = is_numeric_like(frame[x_col])
    y_numeric = all(is_numeric_like(frame[col]) for col in roles.y)

    if len(roles.y) == 1 and x_numeric and not y_numeric:
        y_col = roles.y[0]
        series = Series(
            name=x_col,
            values=to_number(frame[x_col]).tolist(),
            color=colors.next_color(),
            border_color=BORDER_COLOR,
        )
        return ChartReadyData(
            chart_type=chart_type,
            labels=_text(frame[y_col]).tolist(),
            series=[series],
            orientation="h",
            x_scale="linear",
            y_scale="category",
            x_title=x_col,
            y_title=y_col,
        )

    coerce = to_number if y_numeric else _text
    series = [
        Series(
            name=col,
            values=coerce(frame[col]).tolist(),
            color=colors.next_color(),
            border_color=BORDER_COLOR,
        )
        for col in roles.y
    ]
    return ChartReadyData(
        chart_type=chart_type,
        labels=_text(frame[x_col]).tolist(),
        series=series,
        x_scale="category",
        y_scale="linear" if y_numeric else "point",
        x_title=x_col,
        y_title=_y_title(roles.y),
    )


# ── Line on a sorted or point axis ───────────────────────────────────────
def _line_points(xs, ys, sort):
    points = pd.DataFrame({"x": xs, "y": ys}).dropna()
    if sort:
        points = points.sort_values("x", kind="stable")
    return [Point(x=x, y=y) for x, y in points.itertuples(index=False, name=None)]


def _map_line(frame, chart_type, roles, colors, discrete=False):
    x_raw = frame[roles.x]
    x_is_date = looks_like_date(x_raw.iloc[0])
    x_categorical = discrete and not x_is_date and not is_numeric_like(x_raw)

    if x_categorical:
        xs, x_scale = _text(x_raw), "point"
    elif x_is_date:
        xs, x_scale = to_datetime_or_nat(x_raw), "time"
    else:
        xs, x_scale = to_number_or_nan(x_raw), "linear"

    series = []
    y_scale = "linear"
    for col in roles.y:
        if discrete and not is_numeric_like(frame[col]):
            ys = _text(frame[col])
            y_scale = "point"
        else:
            ys = to_number_or_nan(frame[col])
        series.append(Series(
            name=col,
            values=_line_points(xs, ys, sort=not x_categorical),
            color=colors.next_color(),
            border_color=BORDER_COLOR,
        ))

    return ChartReadyData(
        chart_type=chart_type,
        series=series,
        x_scale=x_scale,
        y_scale=y_scale,
        x_title=roles.x,
        y_title=_y_title(roles.y),
    )


def _map_continuous_line(frame, chart_type, roles, colors):
    return _map_line(frame, chart_type, roles, colors)


def _map_discrete_line(frame, chart_type, roles, colors):
    return _map_line(frame, chart_type, roles, colors, discrete=True)


# ── Proportion: pie / doughnut / polarArea ───────────────────────────────
def _map_proportion(frame, chart_type, roles, colors):
    value_col = roles.y[0]
    if roles.label:
        labels = [
            f"Item {i + 1}" if v is None or (isinstance(v, float) and v != v) else str(v)
            for i, v in enumerate(frame[roles.label].tolist())
        ]
    else:
        labels = [f"Item {i + 1}" for i in range(len(frame))]

    series = Series(
        name=value_col,
        values=to_number(frame[value_col]).tolist(),
        color=[colors.next_color() for _ in labels],
        border_color=[BORDER_COLOR for _ in labels],
        border_width=1,
    )
    return ChartReadyData(
        chart_type=chart_type,
        labels=labels,
        series=[series],
        x_title=roles.label,
        y_title=value_col,
    )


# ── Coordinate: scatter / bubble ─────────────────────────────────────────
def _map_coordinate(frame, chart_type, roles, colors):
    y_col = roles.y[0]
    xs = to_number_or_nan(frame[roles.x])
    ys = to_number_or_nan(frame[y_col])
    keep = xs.notna() & ys.notna()

    if chart_type == ChartType.BUBBLE:
        if BUBBLE_RADIUS_COLUMN in frame.columns:
            rs = to_number_or_nan(frame[BUBBLE_RADIUS_COLUMN])
            rs = rs.where(rs.notna() & (rs != 0), DEFAULT_BUBBLE_RADIUS)
        else:
            rs = pd.Series(DEFAULT_BUBBLE_RADIUS, index=frame.index, dtype=float)
        points = [
            Point(x=float(x), y=float(y), r=float(r))
            for x, y, r in zip(xs[keep], ys[keep], rs[keep])
        ]
    else:
        points = [Point(x=float(x), y=float(y)) for x, y in zip(xs[keep], ys[keep])]

    dropped = int((~keep).sum())
    if dropped:
        logger.debug("Dropped %d rows with non-numeric %s/%s", dropped, roles.x, y_col)

    series = Series(name=y_col, values=points, color=colors.next_color())
    return ChartReadyData(
        chart_type=chart_type,
        series=[series],
        x_scale="linear",
        y_scale="linear",
        x_title=roles.x,
        y_title=y_col,
    )


# ── Dispatch ──────────────────────────────────────────────────────────────
MODE_MAPPERS = {
    (ChartType.BAR, AxisMode.SCALED): _map_bar_counts,
    (ChartType.BAR, AxisMode.DISCRETE): _map_discrete_bar,
    (ChartType.LINE, AxisMode.SCALED): _map_continuous_line,
    (ChartType.LINE, AxisMode.DISCRETE): _map_discrete_line,
}

FAMILY_MAPPERS = {
    ChartFamily.CATEGORICAL: _map_categorical,
    ChartFamily.PROPORTION: _map_proportion,
    ChartFamily.COORDINATE: _map_coordinate,
}


def _referenced_columns(roles, chart_type):
    contract = chart_type.contract
    cols = list(roles.y)
    if contract.x_enabled and roles.x is not None:
        cols.append(roles.x)
    if contract.label_enabled and roles.label is not None:
        cols.append(roles.label)
    return cols


def map_to_chart_data(dataset, chart_type, roles, colors=None,
                      mode=AxisMode.CATEGORY) -> Optional[ChartReadyData]:
    """Map ``dataset`` to chart-ready data for ``chart_type``.

    Returns ``None`` while the roles do not yet satisfy the chart type, or
    when they name a column the dataset does not have.
    """
    chart_type = ChartType(chart_type)
    mode = AxisMode(mode)

    if dataset is None or not is_ready(roles, chart_type, mode):
        logger.debug("Mapping not ready for %s with %s", chart_type.value, roles)
        return None

    unknown = [col for col in _referenced_columns(roles, chart_type) if col not in dataset.columns]
    if unknown:
        logger.debug("Mapping not ready: unknown columns %s", unknown)
        return None

    if colors is None:
        colors = RandomColorSource()

    mapper = MODE_MAPPERS.get((chart_type, mode), FAMILY_MAPPERS[chart_type.family])
    return mapper(dataset.frame, chart_type, roles, colors)
