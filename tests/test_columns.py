"""
Tests for column inference and numeric coercion.
"""
import pandas as pd
import pytest

from chart_viewer.columns import (
    detect_column_type,
    is_numeric_like,
    looks_like_date,
    to_datetime_or_nat,
    to_number,
    to_number_or_nan,
)


def col(*values):
    return pd.Series(list(values), dtype=object)


class TestCoercion:
    """Tests for numeric coercion."""

    def test_failures_become_zero(self):
        assert to_number(col("10", "x", None, " 5 ", 2)).tolist() == [10.0, 0.0, 0.0, 5.0, 2.0]

    def test_failures_kept_as_nan(self):
        result = to_number_or_nan(col("1", "nope"))
        assert result.iloc[0] == 1.0
        assert pd.isna(result.iloc[1])


class TestColumnTypes:
    """Tests for column type detection."""

    @pytest.mark.parametrize("values,expected", [
        (("1", "2", "3"), "integer"),
        (("1.5", "2"), "decimal"),
        ((1, 2), "integer"),
        (("2021-01-01", "2021-02-01"), "date"),
        (("apple", "pear"), "text"),
        (("", None), "text"),
    ])
    def test_detect(self, values, expected):
        assert detect_column_type(col(*values)) == expected

    def test_numeric_like_ignores_blanks(self):
        assert is_numeric_like(col("1", "", "2"))
        assert not is_numeric_like(col("1", "b"))


class TestDateSniffing:
    """Tests for single-value date detection."""

    @pytest.mark.parametrize("value,expected", [
        ("2021-01-02", True),
        ("Jan 5 2020", True),
        ("10", False),
        (10, False),
        (2.5, False),
        ("foo", False),
        ("today", False),
        ("now", False),
        ("2021-01-02T00:00:00Z", True),
        ("", False),
        (None, False),
    ])
    def test_looks_like_date(self, value, expected):
        assert looks_like_date(value) is expected

    def test_mixed_offsets_convert_to_naive_utc(self):
        result = to_datetime_or_nat(col("2021-01-02T01:00:00+01:00", "2021-01-01", "later"))
        assert result.iloc[0] == pd.Timestamp("2021-01-02 00:00")
        assert result.iloc[1] == pd.Timestamp("2021-01-01")
        assert pd.isna(result.iloc[2])

    def test_relative_words_are_not_dates(self):
        result = to_datetime_or_nat(col("today", "now", "2020-03-04"))
        assert pd.isna(result.iloc[0])
        assert pd.isna(result.iloc[1])
        assert result.iloc[2] == pd.Timestamp("2020-03-04")
