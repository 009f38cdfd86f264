# chart_viewer  ·  v1.0.0
# ------------------------------------------------
# Tabular file → chart pipeline used by the Streamlit viewer in app.py

from .errors import ChartViewerError, ParseFailure, UnsupportedFormat
from .models import (
    AxisMode,
    ChartFamily,
    ChartReadyData,
    ChartType,
    Dataset,
    Point,
    Role,
    RoleAssignment,
    Series,
)
from .normalize import load_file, normalize
from .mapper import map_to_chart_data

__version__ = "1.0.0"

__all__ = [
    "AxisMode",
    "ChartFamily",
    "ChartReadyData",
    "ChartType",
    "ChartViewerError",
    "Dataset",
    "ParseFailure",
    "Point",
    "Role",
    "RoleAssignment",
    "Series",
    "UnsupportedFormat",
    "load_file",
    "map_to_chart_data",
    "normalize",
]
