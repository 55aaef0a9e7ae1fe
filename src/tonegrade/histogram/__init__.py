"""Histogram computation module.

Compute 256-bin R, G, B and luminance histograms of RGBA8 buffers.

Example:
    >>> from tonegrade.histogram import analyze
    >>>
    >>> hist = analyze(pixels, width, height)
    >>> print(f"Mean red level: {hist.mean('red')}")
    >>> print(f"Black/white point: {hist.black_point()}/{hist.white_point()}")
"""

from tonegrade.histogram.apply import analyze, as_pixel_rows
from tonegrade.histogram.result import CHANNELS, Histogram

__all__ = [
    "analyze",
    "as_pixel_rows",
    "Histogram",
    "CHANNELS",
]
