"""Apply adjustment parameters to colors and pixel buffers.

This module is the public face of the color transform pipeline. Every
function clamps the ParameterSet before packing it for the Numba kernels,
so out-of-range values never reach the per-pixel math.
"""

from __future__ import annotations

import logging

import numpy as np

from tonegrade.color.kernels import (
    hsl_to_rgb_numba,
    kelvin_to_rgb_numba,
    rgb_to_hsl_numba,
    transform_float_numba,
    transform_pixel_numba,
    transform_rgba8_numba,
    warmup_color_kernels,
    white_balance_numba,
)
from tonegrade.color.kernels import smoothstep as _smoothstep
from tonegrade.config.values import ParameterSet
from tonegrade.types import Color, ColorLike

logger = logging.getLogger(__name__)


def pack_parameters(params: ParameterSet | None) -> np.ndarray:
    """Clamp parameters and pack them for the kernels.

    :param params: Parameters (None = defaults)
    :returns: float64 vector [10] in pipeline order
    """
    if params is None:
        params = ParameterSet()
    return params.clamp().to_array()


def transform(color: ColorLike, params: ParameterSet | None = None) -> Color:
    """Apply the pipeline to a single color.

    Pure and deterministic: identical inputs give bit-identical outputs.

    :param color: RGB or RGBA color with channels nominally in [0, 1]
    :param params: Adjustment parameters (clamped before use)
    :returns: Transformed Color; alpha is carried through unmodified

    Example:
        >>> transform((0.25, 0.25, 0.25), ParameterSet(exposure=1.0)).r
        0.5
    """
    if len(color) not in (3, 4):
        raise ValueError(f"Expected an RGB or RGBA color, got {len(color)} channels")

    alpha = float(color[3]) if len(color) == 4 else 1.0
    r, g, b = transform_pixel_numba(
        float(color[0]), float(color[1]), float(color[2]), pack_parameters(params)
    )
    return Color(float(r), float(g), float(b), alpha)


def apply_parameters(
    colors: np.ndarray,
    params: ParameterSet | None = None,
    out: np.ndarray | None = None,
) -> np.ndarray:
    """Apply the pipeline to a float color buffer.

    :param colors: Float colors [..., 3] or [..., 4] in [0, 1]
    :param params: Adjustment parameters (clamped before use)
    :param out: Optional float64 output buffer with the same shape as colors
    :returns: Transformed colors as float64, same shape as input
    :raises ValueError: If the last axis is not 3 or 4 channels
    """
    colors = np.asarray(colors)
    if colors.ndim == 0 or colors.shape[-1] not in (3, 4):
        raise ValueError(f"Expected colors with 3 or 4 channels, got shape {colors.shape}")

    shape = colors.shape
    flat = np.ascontiguousarray(colors.reshape(-1, shape[-1]), dtype=np.float64)

    if out is None:
        result = np.empty_like(flat)
    else:
        if out.shape != shape or out.dtype != np.float64 or not out.flags["C_CONTIGUOUS"]:
            raise ValueError(f"out must be a contiguous float64 array with shape {shape}")
        result = out.reshape(-1, shape[-1])

    if flat.shape[0] == 0:
        return result.reshape(shape)

    warmup_color_kernels()
    transform_float_numba(flat, pack_parameters(params), result)
    return result.reshape(shape)


def apply_parameters_rgba8(
    pixels: np.ndarray,
    params: ParameterSet | None = None,
    out: np.ndarray | None = None,
) -> np.ndarray:
    """Apply the pipeline to an 8-bit RGBA buffer.

    :param pixels: uint8 pixels [..., 4] (straight alpha)
    :param params: Adjustment parameters (clamped before use)
    :param out: Optional uint8 output buffer with the same shape as pixels
    :returns: Transformed uint8 pixels, same shape as input
    :raises ValueError: If the last axis is not 4 channels
    """
    pixels = np.asarray(pixels)
    if pixels.ndim == 0 or pixels.shape[-1] != 4:
        raise ValueError(f"Expected RGBA pixels [..., 4], got shape {pixels.shape}")

    shape = pixels.shape
    flat = np.ascontiguousarray(pixels.reshape(-1, 4), dtype=np.uint8)

    if out is None:
        result = np.empty_like(flat)
    else:
        if out.shape != shape or out.dtype != np.uint8 or not out.flags["C_CONTIGUOUS"]:
            raise ValueError(f"out must be a contiguous uint8 array with shape {shape}")
        result = out.reshape(-1, 4)

    if flat.shape[0] == 0:
        return result.reshape(shape)

    warmup_color_kernels()
    transform_rgba8_numba(flat, pack_parameters(params), result)
    return result.reshape(shape)


def kelvin_to_rgb(kelvin: float) -> tuple[float, float, float]:
    """Raw Kelvin fit, each channel clamped to [0, 1].

    :param kelvin: Color temperature in Kelvin
    :returns: Tuple of (r, g, b)
    """
    r, g, b = kelvin_to_rgb_numba(float(kelvin))
    return float(r), float(g), float(b)


def white_balance_multiplier(kelvin: float) -> tuple[float, float, float]:
    """Per-channel white-balance gain applied by the pipeline.

    The Kelvin fit is normalized by its value at the 5500 K reference,
    so 5500 K returns exactly (1.0, 1.0, 1.0). Temperatures below 1000 K
    or non-finite results fall back to identity.

    :param kelvin: Color temperature in Kelvin
    :returns: Tuple of (r, g, b) gains
    """
    r, g, b = white_balance_numba(float(kelvin))
    return float(r), float(g), float(b)


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert RGB to HSL.

    :returns: Tuple of (h, s, l), hue in [0, 1)
    """
    h, s, lightness = rgb_to_hsl_numba(float(r), float(g), float(b))
    return float(h), float(s), float(lightness)


def hsl_to_rgb(h: float, s: float, lightness: float) -> tuple[float, float, float]:
    """Convert HSL to RGB.

    :returns: Tuple of (r, g, b)
    """
    r, g, b = hsl_to_rgb_numba(float(h), float(s), float(lightness))
    return float(r), float(g), float(b)


def smoothstep(edge0: float, edge1: float, x: float) -> float:
    """Cubic Hermite step used for the luminance masks."""
    return float(_smoothstep(float(edge0), float(edge1), float(x)))
