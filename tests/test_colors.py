"""
Tests for color sources.
"""
import re

import pytest

from chart_viewer.colors import PaletteColorSource, RandomColorSource

RGBA = re.compile(r"^rgba\((\d{1,3}), (\d{1,3}), (\d{1,3}), 0\.6\)$")


class TestRandomColorSource:
    """Tests for RandomColorSource."""

    def test_format(self):
        color = RandomColorSource(seed=1).next_color()
        match = RGBA.match(color)
        assert match
        assert all(0 <= int(c) < 255 for c in match.groups())

    def test_seeded_sequence_repeats(self):
        a = RandomColorSource(seed=7)
        b = RandomColorSource(seed=7)
        assert [a.next_color() for _ in range(5)] == [b.next_color() for _ in range(5)]


class TestPaletteColorSource:
    """Tests for PaletteColorSource."""

    def test_cycles(self):
        source = PaletteColorSource(["#111111", "#222222"])
        assert [source.next_color() for _ in range(3)] == ["#111111", "#222222", "#111111"]

    def test_default_palette(self):
        assert PaletteColorSource().next_color().startswith("#")

    def test_empty_palette(self):
        with pytest.raises(ValueError):
            PaletteColorSource([])
