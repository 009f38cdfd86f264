"""
Data model for the chart viewer.

A ``Dataset`` is built once per upload by ``normalize`` and never mutated.
Role assignments and chart-ready data are derived values; every role or
chart-type change produces new instances rather than editing old ones.

Missing cells are kept as absent (``NaN`` in the frame) and are coerced by
the mapper, never raised on.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd

Scalar = Union[str, int, float]
Row = Dict[str, Scalar]


class ChartFamily(str, Enum):
    CATEGORICAL = "categorical"
    PROPORTION = "proportion"
    COORDINATE = "coordinate"


class Role(str, Enum):
    X = "x"
    LABEL = "label"
    Y = "y"


class AxisMode(str, Enum):
    """How bar and line charts lay out their axes.

    ``category`` plots one label per row. ``scaled`` counts rows per x value
    for a bar without y columns and sorts a line on a continuous date/number
    axis. ``discrete`` handles label-vs-label axes with point scales.
    """
    CATEGORY = "category"
    SCALED = "scaled"
    DISCRETE = "discrete"


@dataclass(frozen=True)
class ShapeContract:
    """Roles a chart type accepts and the value shape it produces.

    Parameters
    ----------
    family : ChartFamily
        Mapping algorithm used for the chart type.
    x_enabled : bool
        Whether the ``x`` role can be assigned.
    label_enabled : bool
        Whether the ``label`` role can be assigned.
    y_min, y_max : int, int or None
        Cardinality of the ``y`` role; ``None`` means unbounded.
    value_shape : str
        ``"number"``, ``"point"`` (``{x, y}``) or ``"bubble"`` (``{x, y, r}``).
    """
    family: ChartFamily
    x_enabled: bool
    label_enabled: bool
    y_min: int
    y_max: Optional[int]
    value_shape: str


_CATEGORICAL = ShapeContract(ChartFamily.CATEGORICAL, True, False, 1, None, "number")
_PROPORTION = ShapeContract(ChartFamily.PROPORTION, False, True, 1, 1, "number")


class ChartType(str, Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    RADAR = "radar"
    DOUGHNUT = "doughnut"
    POLAR_AREA = "polarArea"
    SCATTER = "scatter"
    BUBBLE = "bubble"

    @property
    def contract(self) -> ShapeContract:
        return CONTRACTS[self]

    @property
    def family(self) -> ChartFamily:
        return CONTRACTS[self].family

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES[self]


CONTRACTS = {
    ChartType.BAR: _CATEGORICAL,
    ChartType.LINE: _CATEGORICAL,
    ChartType.RADAR: _CATEGORICAL,
    ChartType.PIE: _PROPORTION,
    ChartType.DOUGHNUT: _PROPORTION,
    ChartType.POLAR_AREA: _PROPORTION,
    ChartType.SCATTER: ShapeContract(ChartFamily.COORDINATE, True, False, 1, 1, "point"),
    ChartType.BUBBLE: ShapeContract(ChartFamily.COORDINATE, True, False, 1, 1, "bubble"),
}

DISPLAY_NAMES = {
    ChartType.BAR: "Bar",
    ChartType.LINE: "Line",
    ChartType.PIE: "Pie",
    ChartType.RADAR: "Radar",
    ChartType.DOUGHNUT: "Doughnut",
    ChartType.POLAR_AREA: "Polar Area",
    ChartType.SCATTER: "Scatter",
    ChartType.BUBBLE: "Bubble",
}


@dataclass(frozen=True, eq=False)
class Dataset:
    """Normalized rows from one upload.

    Parameters
    ----------
    frame : pandas.DataFrame
        Object-dtype frame, one row per record, columns in ``columns`` order.
        Cells missing from a record are ``NaN``.
    columns : tuple of str
        Column names from the first record, in first-seen order.
    source_format : str
        Lower-case extension of the uploaded file (``"csv"``, ``"json"``, …).
    truncated : bool
        ``True`` when preview truncation dropped rows.
    """
    frame: pd.DataFrame
    columns: Tuple[str, ...]
    source_format: str = ""
    truncated: bool = False

    def __len__(self):
        return len(self.frame)

    @property
    def rows(self) -> List[Row]:
        """Row dicts in source order; missing cells are omitted"""
        records = []
        for values in self.frame.itertuples(index=False, name=None):
            records.append({
                col: val for col, val in zip(self.columns, values)
                if not _is_missing(val)
            })
        return records


def _is_missing(value):
    return value is None or (isinstance(value, float) and value != value)


@dataclass(frozen=True)
class RoleAssignment:
    x: Optional[str] = None
    label: Optional[str] = None
    y: Tuple[str, ...] = ()

    @property
    def is_empty(self):
        return self.x is None and self.label is None and not self.y


@dataclass(frozen=True)
class Point:
    x: Any
    y: Any
    r: Optional[float] = None


@dataclass(frozen=True)
class Series:
    """One plotted series.

    ``color`` is a single color, or one color per value for proportion
    charts.
    """
    name: str
    values: List[Any]
    color: Union[str, List[str]]
    fill: bool = False
    border_color: Union[str, List[str], None] = None
    border_width: int = 1


@dataclass(frozen=True)
class ChartReadyData:
    chart_type: ChartType
    series: List[Series]
    labels: Optional[List[str]] = None
    orientation: str = "v"
    x_scale: str = "category"
    y_scale: str = "linear"
    x_title: Optional[str] = None
    y_title: Optional[str] = None
