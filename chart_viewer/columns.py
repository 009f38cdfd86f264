# ── Column Inference ──────────────────────────────────────────────────────
import re

import pandas as pd

DATE_PATTERNS = [
    r'^\d{4}-\d{2}-\d{2}',  # YYYY-MM-DD
    r'^\d{2}-\d{2}-\d{4}',  # DD-MM-YYYY
    r'^\d{2}/\d{2}/\d{4}',  # MM/DD/YYYY or DD/MM/YYYY
    r'^\d{4}/\d{2}/\d{2}',  # YYYY/MM/DD
    r'^\d{1,2}\s+\w+\s+\d{4}',  # D Month YYYY
    r'^[A-Za-z]{3,9}\.?\s+\d{1,2},?\s+\d{4}',  # Month D, YYYY
]


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _non_blank(series):
    series = series.map(_strip)
    return series[series.notna() & (series != "")]


def to_number(series) -> pd.Series:
    """Numeric coercion; non-numeric and missing cells become 0"""
    return pd.to_numeric(series.map(_strip), errors="coerce").fillna(0).astype(float)


def to_number_or_nan(series) -> pd.Series:
    """Numeric coercion keeping failures as NaN so callers can drop them"""
    return pd.to_numeric(series.map(_strip), errors="coerce").astype(float)


def _date_text(value):
    """Cell text when it has a calendar-date shape, else ''"""
    if value is None or isinstance(value, (bool, int, float)):
        return ""
    text = str(value).strip()
    if any(re.match(pattern, text) for pattern in DATE_PATTERNS):
        return text
    return ""


def to_datetime_or_nat(series) -> pd.Series:
    """Naive UTC timestamps; offsets are converted, other cells become NaT"""
    parsed = pd.to_datetime(series.map(_date_text), errors="coerce", format="mixed", utc=True)
    return parsed.dt.tz_convert(None)


def detect_column_type(series):
    """Detect the likely data type of a column"""
    series_clean = _non_blank(series)

    if len(series_clean) == 0:
        return "text"

    numeric = pd.to_numeric(series_clean, errors="coerce")
    if numeric.notna().all():
        # Numbers stored as text count as decimal when any has a point
        if any('.' in str(x) for x in series_clean) or not (numeric == numeric.round()).all():
            return "decimal"
        return "integer"

    sample_values = series_clean.head(10).astype(str)
    for pattern in DATE_PATTERNS:
        matches = sum(1 for val in sample_values if re.match(pattern, val))
        if matches >= len(sample_values) * 0.5:  # At least 50% match
            return "date"

    return "text"


def is_numeric_like(series) -> bool:
    return detect_column_type(series) in ("integer", "decimal")


def is_number(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return pd.notna(pd.to_numeric(pd.Series([_strip(value)]), errors="coerce").iloc[0])


def looks_like_date(value) -> bool:
    """Whether a single cell reads as a calendar date.

    Numbers never count, so an integer x column stays on a numeric axis.
    """
    text = _date_text(value)
    if not text or is_number(text):
        return False
    return pd.notna(pd.to_datetime(text, errors="coerce", utc=True))
