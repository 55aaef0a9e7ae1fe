"""Type aliases and small value types for tonegrade.

Provides the color and curve tuples returned by the pipeline.
"""

from collections.abc import Sequence
from typing import NamedTuple

# RGB or RGBA color given as any float sequence
ColorLike = tuple[float, float, float] | tuple[float, float, float, float] | Sequence[float]


class Color(NamedTuple):
    """Display-referred color, channels nominally in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @property
    def rgb(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)


class CurvePoint(NamedTuple):
    """One sample of the tone-response curve (8-bit input -> 8-bit output)."""

    x: int
    y: int
