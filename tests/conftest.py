"""
Shared fixtures for chart viewer tests.
"""
import pytest

from chart_viewer.colors import RandomColorSource
from chart_viewer.normalize import normalize


@pytest.fixture
def colors():
    """Seeded color source so mapped output is reproducible."""
    return RandomColorSource(seed=42)


@pytest.fixture
def make_dataset():
    """Build a dataset from a list of row dicts."""
    def _make(rows, source_format="json", **kwargs):
        return normalize(rows, source_format, **kwargs)
    return _make
