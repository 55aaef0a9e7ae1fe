"""Histogram computation functions."""

from __future__ import annotations

import logging

import numpy as np

from tonegrade.constants import N_LEVELS
from tonegrade.histogram.kernels import histogram_rgba8_numba
from tonegrade.histogram.result import Histogram

logger = logging.getLogger(__name__)


def as_pixel_rows(pixels: np.ndarray, width: int, height: int) -> np.ndarray | None:
    """View an RGBA8 buffer as [width * height, 4] rows.

    Accepts flat [W*H*4], [W*H, 4] or [H, W, 4] buffers.

    :param pixels: uint8 RGBA buffer
    :param width: Image width in pixels
    :param height: Image height in pixels
    :return: Contiguous uint8 array [W*H, 4], or None if the buffer is empty
        or inconsistent with width and height
    """
    if pixels is None or width <= 0 or height <= 0:
        return None

    pixels = np.asarray(pixels)
    if pixels.size != width * height * 4:
        return None
    if pixels.ndim not in (1, 2, 3) or (pixels.ndim > 1 and pixels.shape[-1] != 4):
        return None

    if pixels.dtype != np.uint8:
        pixels = np.clip(pixels, 0, 255).astype(np.uint8)
    return np.ascontiguousarray(pixels.reshape(-1, 4))


def analyze(pixels: np.ndarray, width: int, height: int) -> Histogram:
    """Compute R, G, B and BT.709 luminance histograms of an RGBA8 buffer.

    An empty buffer, or one whose size does not match width x height,
    yields an empty histogram instead of an error.

    :param pixels: uint8 RGBA buffer (row-major, straight alpha)
    :param width: Image width in pixels
    :param height: Image height in pixels
    :return: Histogram whose four arrays each sum to width * height

    Example:
        >>> hist = analyze(np.full((2, 2, 4), 128, np.uint8), 2, 2)
        >>> int(hist.luminance[128])
        4
    """
    rows = as_pixel_rows(pixels, width, height)
    if rows is None:
        size = None if pixels is None else np.asarray(pixels).shape
        logger.warning(
            "[Histogram] Buffer shape %s does not match %dx%d RGBA, returning empty histogram",
            size,
            width,
            height,
        )
        return Histogram.empty()

    counts_r = np.zeros(N_LEVELS, dtype=np.int64)
    counts_g = np.zeros(N_LEVELS, dtype=np.int64)
    counts_b = np.zeros(N_LEVELS, dtype=np.int64)
    counts_lum = np.zeros(N_LEVELS, dtype=np.int64)

    histogram_rgba8_numba(rows, counts_r, counts_g, counts_b, counts_lum)

    logger.debug("[Histogram] Analyzed %dx%d pixels", width, height)

    return Histogram(
        red=counts_r,
        green=counts_g,
        blue=counts_b,
        luminance=counts_lum,
        n_pixels=width * height,
    )
