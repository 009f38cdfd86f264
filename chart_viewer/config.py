# ── Configuration ─────────────────────────────────────────────────────────
from dataclasses import dataclass
from typing import Optional

SUPPORTED_EXTENSIONS = ["csv", "tsv", "txt", "json", "yaml", "yml", "xml", "xls", "xlsx"]

# Rows kept when preview truncation is switched on
DEFAULT_PREVIEW_ROWS = 10

FONT_FAMILIES = {
    "Red Hat Display": "Red Hat Display, sans-serif",
    "Inter": "Inter, sans-serif",
    "Helvetica": "Helvetica, Arial, sans-serif",
    "Georgia": "Georgia, serif",
    "Roboto": "Roboto, sans-serif",
    "IBM Plex Sans": "IBM Plex Sans, sans-serif"
}
DEFAULT_FONT = "Red Hat Display"

# Brand defaults
DEFAULT_COLORS = ["#987F2F", "#E5C96A", "#B6B6B6", "#5B7083"]
TRANS = "rgba(0,0,0,0)"
BORDER_COLOR = "rgba(0, 0, 0, 0.1)"
COLOR_ALPHA = 0.6

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 500

# Bubble radius always comes from this column
BUBBLE_RADIUS_COLUMN = "r"
DEFAULT_BUBBLE_RADIUS = 5


@dataclass(frozen=True)
class ViewerSettings:
    """Runtime policies for one viewer session"""
    exclusive_axes: bool = True
    preview_limit: Optional[int] = None
    axis_mode: str = "category"
    seed: Optional[int] = None
