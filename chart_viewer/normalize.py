"""
Row model normalizer.

Turns whatever a format parser produced into a ``Dataset``: an ordered,
non-empty list of flat records whose column list comes from the first record.

Single-object input is shaped per format. JSON objects contribute their
values as rows (a lone ``{"key": [...]}`` wrapper unwraps to the list);
YAML and every other format treat the object as one row.
"""

import datetime
import json
import logging
from collections.abc import Mapping
from typing import Optional

import numpy as np
import pandas as pd

from .errors import ParseFailure
from .models import Dataset
from .parsers import parse_file, parse_pasted

logger = logging.getLogger(__name__)


def to_scalar(value):
    """Coerce a parsed cell to ``str``/``int``/``float``.

    ``None`` and NaN become ``""``; booleans become ``"true"``/``"false"``;
    containers become JSON text and dates become ISO text.
    """
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and value != value:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return value
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def _as_records(parsed, source_format):
    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, Mapping):
        if source_format != "json":
            return [parsed]
        values = list(parsed.values())
        if len(values) == 1 and isinstance(values[0], list):
            return values[0]
        return values
    raise ParseFailure(
        f"Expected a list of records, got {type(parsed).__name__}"
    )


def normalize(parsed, source_format: str, preview_limit: Optional[int] = None) -> Dataset:
    """Build a ``Dataset`` from a parsed value.

    Parameters
    ----------
    parsed : object
        Output of a format parser.
    source_format : str
        Extension the value was parsed from; selects the single-object policy.
    preview_limit : int, optional
        Keep only the first ``preview_limit`` rows and flag the dataset as
        truncated. Off when ``None``.
    """
    records = _as_records(parsed, source_format)

    rows = []
    for i, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise ParseFailure(
                f"Row {i + 1} is a {type(record).__name__}, not a record"
            )
        rows.append({str(key): to_scalar(val) for key, val in record.items()})

    if not rows:
        raise ParseFailure("File contains no rows")

    columns = tuple(rows[0].keys())
    if not columns:
        raise ParseFailure("First row has no columns")

    truncated = False
    if preview_limit is not None and len(rows) > preview_limit:
        rows = rows[:preview_limit]
        truncated = True

    frame = pd.DataFrame(
        [[row.get(col) for col in columns] for row in rows],
        columns=list(columns),
        dtype=object,
    )
    return Dataset(frame=frame, columns=columns, source_format=source_format, truncated=truncated)


def load_file(filename, content, preview_limit: Optional[int] = None) -> Dataset:
    """Parse and normalize one uploaded file.

    Either the whole file becomes a ``Dataset`` or ``UnsupportedFormat`` /
    ``ParseFailure`` is raised; there is no partial result.
    """
    ext, parsed = parse_file(filename, content)
    dataset = normalize(parsed, ext, preview_limit=preview_limit)
    logger.info(
        "Loaded %d rows x %d columns from %s%s",
        len(dataset), len(dataset.columns), filename,
        " (truncated)" if dataset.truncated else "",
    )
    return dataset


def load_pasted(text, preview_limit: Optional[int] = None) -> Dataset:
    """Normalize delimited text pasted into the app"""
    try:
        parsed = parse_pasted(text)
    except Exception as e:
        raise ParseFailure(f"Could not parse pasted data: {e}") from e
    return normalize(parsed, "paste", preview_limit=preview_limit)
