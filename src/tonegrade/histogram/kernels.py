"""Numba-optimized histogram computation kernels."""

from __future__ import annotations

import logging

import numpy as np
from numba import njit
from numpy.typing import NDArray

from tonegrade.constants import LUMA_709_B, LUMA_709_G, LUMA_709_R, MAX_LEVEL

logger = logging.getLogger(__name__)


# Note: Not using parallel=True because histogram accumulation has race conditions
@njit(cache=True, nogil=True)
def histogram_rgba8_numba(
    pixels: NDArray[np.uint8],
    out_r: NDArray[np.int64],
    out_g: NDArray[np.int64],
    out_b: NDArray[np.int64],
    out_lum: NDArray[np.int64],
) -> None:
    """Accumulate per-channel and BT.709 luminance histograms in one pass.

    :param pixels: Input pixels [N, 4] (alpha ignored)
    :param out_r: Output histogram for R channel [256]
    :param out_g: Output histogram for G channel [256]
    :param out_b: Output histogram for B channel [256]
    :param out_lum: Output luminance histogram [256]
    """
    N = pixels.shape[0]

    for i in range(N):
        r = pixels[i, 0]
        g = pixels[i, 1]
        b = pixels[i, 2]

        out_r[r] += 1
        out_g[g] += 1
        out_b[b] += 1

        lum = int(LUMA_709_R * r + LUMA_709_G * g + LUMA_709_B * b + 0.5)
        if lum > MAX_LEVEL:
            lum = MAX_LEVEL
        out_lum[lum] += 1


@njit(cache=True, nogil=True)
def weighted_mean_numba(counts: NDArray[np.int64]) -> float:
    """Mean level of a histogram (sum(count[v] * v) / sum(count)).

    :param counts: Histogram [n_bins]
    :returns: Mean bin index, 0.0 for an empty histogram
    """
    total = 0
    acc = 0.0
    for v in range(counts.shape[0]):
        total += counts[v]
        acc += counts[v] * v
    if total == 0:
        return 0.0
    return acc / total


@njit(cache=True, nogil=True)
def clip_point_numba(counts: NDArray[np.int64], threshold: float, from_top: bool) -> int:
    """Find the first bin whose cumulative count exceeds a threshold.

    :param counts: Histogram [n_bins]
    :param threshold: Cumulative count that must be exceeded
    :param from_top: Scan from the highest bin downward
    :returns: Bin index; the far end when no bin qualifies
    """
    n = counts.shape[0]
    acc = 0
    if from_top:
        for v in range(n - 1, -1, -1):
            acc += counts[v]
            if acc > threshold:
                return v
        return 0
    for v in range(n):
        acc += counts[v]
        if acc > threshold:
            return v
    return n - 1
