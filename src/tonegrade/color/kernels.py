"""Numba-optimized kernels for the color transform pipeline.

The per-pixel transform is written once as a scalar njit function and
reused by the scalar API, the float buffer kernel and the RGBA8 buffer
kernel, so every entry point produces the same numbers.

Stage order (fixed):
    1. White balance (Kelvin fit + tint)
    2. Exposure
    3. Highlights / shadows (BT.601 luminance masks)
    4. Whites / blacks
    5. Contrast
    6. Saturation / vibrance (HSL)
    7. Clamp to [0, 1]
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

from tonegrade.constants import (
    LUMA_601_B,
    LUMA_601_G,
    LUMA_601_R,
    MIN_FIT_KELVIN,
    P_BLACKS,
    P_CONTRAST,
    P_EXPOSURE,
    P_HIGHLIGHTS,
    P_SATURATION,
    P_SHADOWS,
    P_TEMPERATURE,
    P_TINT,
    P_VIBRANCE,
    P_WHITES,
    REFERENCE_KELVIN,
)

logger = logging.getLogger(__name__)

# Fastmath is off for every kernel here: it assumes finite values, and the
# kernels screen NaN/inf inputs explicitly.


# =============================================================================
# Scalar helpers
# =============================================================================


@njit(cache=True, nogil=True)
def clamp01(v: float) -> float:
    """Clamp to [0, 1]; NaN maps to 0."""
    if not v > 0.0:
        return 0.0
    if v > 1.0:
        return 1.0
    return v


@njit(cache=True, nogil=True)
def sanitize_channel(v: float) -> float:
    """Map non-finite input channels into range (NaN -> 0, +inf -> 1, -inf -> 0)."""
    if math.isnan(v):
        return 0.0
    if math.isinf(v):
        return 1.0 if v > 0.0 else 0.0
    return v


@njit(cache=True, nogil=True)
def smoothstep(edge0: float, edge1: float, x: float) -> float:
    """Cubic Hermite step between two edges (edges may be reversed)."""
    t = (x - edge0) / (edge1 - edge0)
    if t < 0.0:
        t = 0.0
    elif t > 1.0:
        t = 1.0
    return t * t * (3.0 - 2.0 * t)


@njit(cache=True, nogil=True)
def kelvin_to_rgb_numba(kelvin: float) -> tuple[float, float, float]:
    """Piecewise fit of blackbody color (Tanner Helland), each channel in [0, 1].

    :param kelvin: Color temperature in Kelvin
    :returns: Tuple of (r, g, b); NaN channels when kelvin is out of the fit domain
    """
    t = kelvin / 100.0

    if t <= 66.0:
        r = 1.0
        g = 0.39008157876901960784 * math.log(t) - 0.63184144378862745098
    else:
        r = 1.29293618606274509804 * math.pow(t - 60.0, -0.1332047592)
        g = 1.12989086089529411765 * math.pow(t - 60.0, -0.0755148492)

    if t >= 66.0:
        b = 1.0
    elif t <= 19.0:
        b = 0.0
    else:
        b = 0.54320678911019607843 * math.log(t - 10.0) - 1.19625408914

    # NaN survives clamp01 only as 0, so keep it visible for the caller
    if math.isnan(r) or math.isnan(g) or math.isnan(b):
        return math.nan, math.nan, math.nan
    return clamp01(r), clamp01(g), clamp01(b)


@njit(cache=True, nogil=True)
def white_balance_numba(kelvin: float) -> tuple[float, float, float]:
    """White-balance multiplier, normalized so REFERENCE_KELVIN is (1, 1, 1).

    Falls back to identity for temperatures below the fit domain or when
    the fit yields a non-finite or zero reference channel.
    """
    if not kelvin >= MIN_FIT_KELVIN or math.isinf(kelvin):
        return 1.0, 1.0, 1.0

    r, g, b = kelvin_to_rgb_numba(kelvin)
    ref_r, ref_g, ref_b = kelvin_to_rgb_numba(REFERENCE_KELVIN)

    if ref_r == 0.0 or ref_g == 0.0 or ref_b == 0.0:
        return 1.0, 1.0, 1.0

    wr = r / ref_r
    wg = g / ref_g
    wb = b / ref_b
    if not (math.isfinite(wr) and math.isfinite(wg) and math.isfinite(wb)):
        return 1.0, 1.0, 1.0
    return wr, wg, wb


@njit(cache=True, nogil=True)
def rgb_to_hsl_numba(r: float, g: float, b: float) -> tuple[float, float, float]:
    """RGB -> HSL, all components nominally in [0, 1]."""
    max_val = max(r, max(g, b))
    min_val = min(r, min(g, b))
    delta = max_val - min_val

    h = 0.0
    s = 0.0
    l = (max_val + min_val) / 2.0  # noqa: E741

    if delta != 0.0:
        if l < 0.5:
            denom = max_val + min_val
        else:
            denom = 2.0 - max_val - min_val
        # Channels pushed outside [0, 1] can zero the denominator
        s = delta / denom if denom != 0.0 else 0.0

        if max_val == r:
            h = (g - b) / delta + (6.0 if g < b else 0.0)
        elif max_val == g:
            h = (b - r) / delta + 2.0
        else:
            h = (r - g) / delta + 4.0
        h /= 6.0
        if h >= 1.0:
            h -= 1.0
        elif h < 0.0:
            h += 1.0

    return h, s, l


@njit(cache=True, nogil=True)
def hue_to_rgb_numba(p: float, q: float, t: float) -> float:
    if t < 0.0:
        t += 1.0
    if t > 1.0:
        t -= 1.0
    if t < 1.0 / 6.0:
        return p + (q - p) * 6.0 * t
    if t < 1.0 / 2.0:
        return q
    if t < 2.0 / 3.0:
        return p + (q - p) * (2.0 / 3.0 - t) * 6.0
    return p


@njit(cache=True, nogil=True)
def hsl_to_rgb_numba(h: float, s: float, l: float) -> tuple[float, float, float]:  # noqa: E741
    """HSL -> RGB; S == 0 returns (L, L, L) exactly."""
    if s == 0.0:
        return l, l, l

    if l < 0.5:
        q = l * (1.0 + s)
    else:
        q = l + s - l * s
    p = 2.0 * l - q

    r = hue_to_rgb_numba(p, q, h + 1.0 / 3.0)
    g = hue_to_rgb_numba(p, q, h)
    b = hue_to_rgb_numba(p, q, h - 1.0 / 3.0)
    return r, g, b


# =============================================================================
# Per-pixel transform
# =============================================================================


@njit(cache=True, nogil=True)
def transform_pixel_numba(
    r: float,
    g: float,
    b: float,
    params: NDArray[np.float64],
) -> tuple[float, float, float]:
    """Apply the full pipeline to one RGB triple.

    :param r: Red channel
    :param g: Green channel
    :param b: Blue channel
    :param params: Clamped parameters packed in PARAMETER_ORDER [10]
    :returns: Tuple of (r, g, b) in [0, 1]
    """
    r = sanitize_channel(r)
    g = sanitize_channel(g)
    b = sanitize_channel(b)

    # 1. White balance
    wr, wg, wb = white_balance_numba(params[P_TEMPERATURE])
    r *= wr
    g *= wg
    b *= wb

    tint = params[P_TINT] * 0.01
    r *= 1.0 - tint
    g *= 1.0 + tint
    b *= 1.0 - tint

    # 2. Exposure
    gain = math.pow(2.0, params[P_EXPOSURE])
    r *= gain
    g *= gain
    b *= gain

    # 3. Highlights and shadows
    lum = LUMA_601_R * r + LUMA_601_G * g + LUMA_601_B * b

    k = 1.0 + params[P_HIGHLIGHTS] * 0.01 * smoothstep(0.5, 1.0, lum)
    r *= k
    g *= k
    b *= k
    k = 1.0 + params[P_SHADOWS] * 0.01 * smoothstep(0.5, 0.0, lum)
    r *= k
    g *= k
    b *= k

    # 4. Whites and blacks (same luminance as stage 3)
    k = 1.0 + params[P_WHITES] * 0.01 * smoothstep(0.75, 1.0, lum)
    r *= k
    g *= k
    b *= k
    k = 1.0 + params[P_BLACKS] * 0.01 * smoothstep(0.25, 0.0, lum)
    r *= k
    g *= k
    b *= k

    # 5. Contrast around mid-gray
    slope = 1.0 + (params[P_CONTRAST] - 50.0) / 50.0
    r = (r - 0.5) * slope + 0.5
    g = (g - 0.5) * slope + 0.5
    b = (b - 0.5) * slope + 0.5

    # 6. Saturation, then vibrance weighted by remaining headroom
    h, s, l = rgb_to_hsl_numba(r, g, b)  # noqa: E741
    s *= 1.0 + params[P_SATURATION] * 0.01
    s *= 1.0 + params[P_VIBRANCE] * 0.01 * (1.0 - s)
    r, g, b = hsl_to_rgb_numba(h, s, l)

    # 7. Final clamp
    return clamp01(r), clamp01(g), clamp01(b)


@njit(cache=True, nogil=True)
def encode_unorm8(v: float) -> np.uint8:
    """Encode a [0, 1] channel as an 8-bit level (round half up)."""
    return np.uint8(int(clamp01(v) * 255.0 + 0.5))


# =============================================================================
# Buffer kernels
# =============================================================================


@njit(parallel=True, cache=True, nogil=True)
def transform_float_numba(
    colors: NDArray[np.float64],
    params: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """Apply the pipeline to a float buffer, one prange iteration per pixel.

    :param colors: Input colors [N, 3] or [N, 4]
    :param params: Packed parameters [10]
    :param out: Output colors, same shape as colors (modified in-place)
    """
    n = colors.shape[0]
    has_alpha = colors.shape[1] == 4

    for i in prange(n):
        r, g, b = transform_pixel_numba(colors[i, 0], colors[i, 1], colors[i, 2], params)
        out[i, 0] = r
        out[i, 1] = g
        out[i, 2] = b
        if has_alpha:
            out[i, 3] = colors[i, 3]


@njit(parallel=True, cache=True, nogil=True)
def transform_rgba8_numba(
    pixels: NDArray[np.uint8],
    params: NDArray[np.float64],
    out: NDArray[np.uint8],
) -> None:
    """Apply the pipeline to an RGBA8 buffer, one prange iteration per pixel.

    :param pixels: Input pixels [N, 4]
    :param params: Packed parameters [10]
    :param out: Output pixels [N, 4] (modified in-place); alpha copied through
    """
    n = pixels.shape[0]
    inv = 1.0 / 255.0

    for i in prange(n):
        r, g, b = transform_pixel_numba(
            pixels[i, 0] * inv,
            pixels[i, 1] * inv,
            pixels[i, 2] * inv,
            params,
        )
        out[i, 0] = encode_unorm8(r)
        out[i, 1] = encode_unorm8(g)
        out[i, 2] = encode_unorm8(b)
        out[i, 3] = pixels[i, 3]


_WARMED_UP = False


def warmup_color_kernels() -> None:
    """Trigger JIT compilation of the buffer kernels.

    Called lazily by the first buffer render; safe to call repeatedly.
    """
    global _WARMED_UP
    if _WARMED_UP:
        return

    from tonegrade.config.values import DEFAULT_PARAMETERS

    params = DEFAULT_PARAMETERS.to_array()
    colors = np.random.rand(16, 4)
    pixels = (np.random.rand(16, 4) * 255).astype(np.uint8)

    transform_float_numba(colors, params, np.empty_like(colors))
    transform_rgba8_numba(pixels, params, np.empty_like(pixels))

    _WARMED_UP = True
    logger.debug("Color Numba kernels warmed up")
