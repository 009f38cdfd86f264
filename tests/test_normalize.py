"""
Tests for the row model normalizer.
"""
import datetime
import json

import numpy as np
import pytest

from chart_viewer.errors import ParseFailure, UnsupportedFormat
from chart_viewer.normalize import load_file, load_pasted, normalize, to_scalar


class TestScalarCoercion:
    """Tests for cell coercion."""

    def test_scalars_pass_through(self):
        assert to_scalar("a") == "a"
        assert to_scalar(3) == 3
        assert to_scalar(2.5) == 2.5
        assert to_scalar(True) == "true"
        assert to_scalar(np.bool_(False)) == "false"

    def test_missing_becomes_empty_string(self):
        assert to_scalar(None) == ""
        assert to_scalar(float("nan")) == ""

    def test_numpy_scalars_unwrap(self):
        value = to_scalar(np.int64(3))
        assert value == 3
        assert type(value) is int

    def test_containers_become_json(self):
        assert to_scalar({"b": 1}) == '{"b": 1}'
        assert to_scalar([1, 2]) == "[1, 2]"

    def test_dates_become_iso_text(self):
        assert to_scalar(datetime.date(2021, 1, 2)) == "2021-01-02"


class TestNormalize:
    """Tests for shaping parsed values into a dataset."""

    def test_list_of_records(self):
        ds = normalize([{"a": 1, "b": "x"}, {"a": 2, "b": "y"}], "json")
        assert ds.columns == ("a", "b")
        assert ds.rows == [{"a": 1, "b": "x"}, {"a": 2, "b": "y"}]
        assert len(ds) == 2
        assert ds.source_format == "json"
        assert not ds.truncated

    def test_columns_come_from_first_row(self):
        ds = normalize([{"a": 1}, {"a": 2, "c": 3}], "json")
        assert ds.columns == ("a",)
        assert ds.rows == [{"a": 1}, {"a": 2}]

    def test_missing_keys_are_absent(self):
        ds = normalize([{"a": 1, "b": 2}, {"a": 3}], "json")
        assert ds.columns == ("a", "b")
        assert ds.rows[1] == {"a": 3}

    def test_nested_values_are_stringified(self):
        ds = normalize([{"a": {"b": 1}, "c": None}], "json")
        assert ds.rows == [{"a": '{"b": 1}', "c": ""}]

    def test_json_object_values_become_rows(self):
        ds = normalize({"first": {"a": 1}, "second": {"a": 2}}, "json")
        assert ds.rows == [{"a": 1}, {"a": 2}]

    def test_json_single_key_wrapper_unwraps(self):
        ds = normalize({"rows": [{"a": 1}, {"a": 2}]}, "json")
        assert ds.rows == [{"a": 1}, {"a": 2}]

    def test_yaml_object_is_one_row(self):
        ds = normalize({"a": 1, "b": "x"}, "yaml")
        assert ds.rows == [{"a": 1, "b": "x"}]

    def test_json_object_of_scalars_is_rejected(self):
        with pytest.raises(ParseFailure):
            normalize({"a": 1, "b": 2}, "json")

    @pytest.mark.parametrize("value", [[], {}, None, 5, "text", [1, 2]])
    def test_not_records(self, value):
        with pytest.raises(ParseFailure):
            normalize(value, "json")

    def test_empty_first_row(self):
        with pytest.raises(ParseFailure):
            normalize([{}], "json")


class TestTruncation:
    """Tests for the preview truncation mode."""

    def test_off_by_default(self):
        ds = normalize([{"i": i} for i in range(15)], "json")
        assert len(ds) == 15
        assert not ds.truncated

    def test_caps_rows(self):
        ds = normalize([{"i": i} for i in range(15)], "json", preview_limit=10)
        assert len(ds) == 10
        assert ds.truncated
        assert ds.rows[-1] == {"i": 9}

    def test_short_dataset_not_flagged(self):
        ds = normalize([{"i": i} for i in range(5)], "json", preview_limit=10)
        assert len(ds) == 5
        assert not ds.truncated


class TestLoadFile:
    """Tests for parsing and normalizing uploads in one step."""

    def test_csv(self):
        ds = load_file("scores.csv", b"name,score\nA,10\nB,20")
        assert ds.columns == ("name", "score")
        assert ds.rows == [{"name": "A", "score": "10"}, {"name": "B", "score": "20"}]

    def test_yaml_list(self):
        ds = load_file("rows.yaml", b"- a: 1\n  d: 2021-01-01\n- a: 2\n  d: 2021-01-02\n")
        assert ds.rows == [{"a": 1, "d": "2021-01-01"}, {"a": 2, "d": "2021-01-02"}]

    def test_json_booleans_become_text(self):
        ds = load_file("flags.json", b'[{"name": "a", "on": true}, {"name": "b", "on": false}]')
        assert ds.rows == [{"name": "a", "on": "true"}, {"name": "b", "on": "false"}]

    def test_reupload_is_identical(self):
        content = json.dumps([{"t": "2021-01-02", "v": 5}, {"t": "2021-01-01", "v": 3}]).encode()
        first = load_file("data.json", content)
        second = load_file("data.json", content)
        assert first.columns == second.columns
        assert first.rows == second.rows
        assert first.frame.equals(second.frame)

    def test_unsupported(self):
        with pytest.raises(UnsupportedFormat):
            load_file("image.png", b"\x89PNG")

    def test_header_only_csv_is_empty(self):
        with pytest.raises(ParseFailure):
            load_file("empty.csv", b"a,b\n")

    def test_preview_limit(self):
        content = b"i\n" + b"\n".join(str(i).encode() for i in range(12))
        ds = load_file("rows.csv", content, preview_limit=10)
        assert len(ds) == 10
        assert ds.truncated

    def test_pasted(self):
        ds = load_pasted("x|y\n1|2\n3|4")
        assert ds.columns == ("x", "y")
        assert ds.source_format == "paste"
        assert len(ds) == 2

    def test_pasted_garbage(self):
        with pytest.raises(ParseFailure):
            load_pasted("")
