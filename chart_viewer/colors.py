"""
Color sources for chart series.

The mapper asks a source for one color per series (or per slice). Tests pass
a seeded ``RandomColorSource`` so mapped output is reproducible.
"""

import itertools
import random
from typing import Iterable, Optional, Protocol

from .config import COLOR_ALPHA, DEFAULT_COLORS


class ColorSource(Protocol):
    def next_color(self) -> str:
        ...


class RandomColorSource:
    """Random translucent ``rgba()`` colors"""

    def __init__(self, seed: Optional[int] = None, alpha: float = COLOR_ALPHA):
        self._rng = random.Random(seed)
        self.alpha = alpha

    def next_color(self) -> str:
        r, g, b = (self._rng.randrange(255) for _ in range(3))
        return f"rgba({r}, {g}, {b}, {self.alpha})"


class PaletteColorSource:
    """Cycles through a fixed list of colors"""

    def __init__(self, colors: Optional[Iterable[str]] = None):
        colors = list(DEFAULT_COLORS if colors is None else colors)
        if not colors:
            raise ValueError("palette needs at least one color")
        self.colors = colors
        self._cycle = itertools.cycle(colors)

    def next_color(self) -> str:
        return next(self._cycle)
