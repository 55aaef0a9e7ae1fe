"""Histogram result dataclass with analysis methods."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from tonegrade.constants import CLIP_FRACTION, N_LEVELS
from tonegrade.histogram.kernels import clip_point_numba, weighted_mean_numba

CHANNELS = ("red", "green", "blue", "luminance")


@dataclass(frozen=True)
class Histogram:
    """Per-channel and luminance histograms of an 8-bit image.

    Attributes:
        red: Red channel counts [256]
        green: Green channel counts [256]
        blue: Blue channel counts [256]
        luminance: BT.709 luminance counts [256]
        n_pixels: Number of pixels analyzed (each array sums to this)

    Example:
        >>> hist = analyze(pixels, width, height)
        >>> hist.mean("red"), hist.black_point(), hist.white_point()
    """

    red: np.ndarray
    green: np.ndarray
    blue: np.ndarray
    luminance: np.ndarray
    n_pixels: int

    def __post_init__(self):
        for name in CHANNELS:
            getattr(self, name).setflags(write=False)

    @classmethod
    def empty(cls, n_bins: int = N_LEVELS) -> Histogram:
        """Create a zeroed histogram (result of an empty or invalid buffer).

        :param n_bins: Number of bins per channel
        :return: Histogram with all counts zero
        """
        return cls(
            red=np.zeros(n_bins, dtype=np.int64),
            green=np.zeros(n_bins, dtype=np.int64),
            blue=np.zeros(n_bins, dtype=np.int64),
            luminance=np.zeros(n_bins, dtype=np.int64),
            n_pixels=0,
        )

    @property
    def n_bins(self) -> int:
        return len(self.red)

    @property
    def is_empty(self) -> bool:
        return self.n_pixels == 0

    @property
    def counts(self) -> np.ndarray:
        """Stacked counts, shape [4, n_bins] in (red, green, blue, luminance) order."""
        return np.stack([self.red, self.green, self.blue, self.luminance])

    def channel(self, name: str) -> np.ndarray:
        """Get counts for one channel.

        :param name: "red", "green", "blue" or "luminance" (or r/g/b/l)
        :return: Counts [n_bins]
        :raises ValueError: If channel name is unknown
        """
        aliases = {"r": "red", "g": "green", "b": "blue", "l": "luminance", "luma": "luminance"}
        key = aliases.get(name.lower(), name.lower())
        if key not in CHANNELS:
            raise ValueError(f"Unknown channel: {name!r} (expected one of {CHANNELS})")
        return getattr(self, key)

    def mean(self, channel: str = "luminance") -> float:
        """Gray-world average level of a channel (0-255 units).

        :param channel: Channel name
        :return: sum(count[v] * v) / n_pixels, 0.0 when empty
        """
        return float(weighted_mean_numba(self.channel(channel)))

    def black_point(self, clip_fraction: float = CLIP_FRACTION) -> int:
        """Lowest luminance bin where the cumulative count exceeds clip_fraction.

        :param clip_fraction: Fraction of pixels allowed below the black point
        :return: Bin index in [0, 255]
        """
        threshold = self.n_pixels * clip_fraction
        return int(clip_point_numba(self.luminance, threshold, False))

    def white_point(self, clip_fraction: float = CLIP_FRACTION) -> int:
        """Highest luminance bin where the cumulative count from the top exceeds clip_fraction.

        :param clip_fraction: Fraction of pixels allowed above the white point
        :return: Bin index in [0, 255]
        """
        threshold = self.n_pixels * clip_fraction
        return int(clip_point_numba(self.luminance, threshold, True))

    def percentile(self, p: float, channel: str = "luminance") -> int:
        """Compute percentile level from histogram.

        :param p: Percentile value (0-100)
        :param channel: Channel name
        :return: Bin index at percentile
        """
        counts = self.channel(channel)
        cumsum = np.cumsum(counts)
        total = cumsum[-1]
        if total == 0:
            return 0
        idx = int(np.searchsorted(cumsum, total * (p / 100.0)))
        return min(idx, self.n_bins - 1)

    def to_dict(self) -> list[dict[str, int]]:
        """Chart-ready series, one row per level.

        :return: List of {"level", "red", "green", "blue", "luminance"} dicts
        """
        return [
            {
                "level": v,
                "red": int(self.red[v]),
                "green": int(self.green[v]),
                "blue": int(self.blue[v]),
                "luminance": int(self.luminance[v]),
            }
            for v in range(self.n_bins)
        ]
