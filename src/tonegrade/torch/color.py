"""PyTorch implementation of the color transform pipeline.

Mirrors tonegrade.color.kernels stage for stage with vectorized tensor
ops, so a render on the torch backend matches the Numba backend to
within float rounding.
"""

from __future__ import annotations

import logging

import numpy as np
import torch

from tonegrade.color.apply import pack_parameters, white_balance_multiplier
from tonegrade.config.values import ParameterSet
from tonegrade.constants import (
    LUMA_601_B,
    LUMA_601_G,
    LUMA_601_R,
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
)

logger = logging.getLogger(__name__)


def _smoothstep(edge0: float, edge1: float, x: torch.Tensor) -> torch.Tensor:
    t = torch.clamp((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def rgb_to_hsl_tensor(rgb: torch.Tensor) -> torch.Tensor:
    """Vectorized RGB -> HSL.

    :param rgb: Tensor [..., 3]
    :returns: Tensor [..., 3] of (h, s, l)
    """
    r, g, b = rgb.unbind(-1)
    max_val = torch.maximum(r, torch.maximum(g, b))
    min_val = torch.minimum(r, torch.minimum(g, b))
    delta = max_val - min_val
    lightness = (max_val + min_val) / 2.0

    chromatic = delta != 0.0
    denom = torch.where(lightness < 0.5, max_val + min_val, 2.0 - max_val - min_val)
    safe_denom = torch.where(denom == 0.0, torch.ones_like(denom), denom)
    s = torch.where(chromatic & (denom != 0.0), delta / safe_denom, torch.zeros_like(delta))

    safe_delta = torch.where(chromatic, delta, torch.ones_like(delta))
    h_r = (g - b) / safe_delta + 6.0 * (g < b).to(rgb.dtype)
    h_g = (b - r) / safe_delta + 2.0
    h_b = (r - g) / safe_delta + 4.0
    h = torch.where(max_val == r, h_r, torch.where(max_val == g, h_g, h_b)) / 6.0
    h = torch.where(h >= 1.0, h - 1.0, h)
    h = torch.where(h < 0.0, h + 1.0, h)
    h = torch.where(chromatic, h, torch.zeros_like(h))

    return torch.stack([h, s, lightness], dim=-1)


def _hue_to_rgb(p: torch.Tensor, q: torch.Tensor, t: torch.Tensor) -> torch.Tensor:
    t = torch.where(t < 0.0, t + 1.0, t)
    t = torch.where(t > 1.0, t - 1.0, t)
    return torch.where(
        t < 1.0 / 6.0,
        p + (q - p) * 6.0 * t,
        torch.where(
            t < 0.5,
            q,
            torch.where(t < 2.0 / 3.0, p + (q - p) * (2.0 / 3.0 - t) * 6.0, p),
        ),
    )


def hsl_to_rgb_tensor(hsl: torch.Tensor) -> torch.Tensor:
    """Vectorized HSL -> RGB; zero saturation returns (L, L, L) exactly.

    :param hsl: Tensor [..., 3]
    :returns: Tensor [..., 3] of (r, g, b)
    """
    h, s, lightness = hsl.unbind(-1)
    q = torch.where(lightness < 0.5, lightness * (1.0 + s), lightness + s - lightness * s)
    p = 2.0 * lightness - q

    rgb = torch.stack(
        [
            _hue_to_rgb(p, q, h + 1.0 / 3.0),
            _hue_to_rgb(p, q, h),
            _hue_to_rgb(p, q, h - 1.0 / 3.0),
        ],
        dim=-1,
    )
    gray = (s == 0.0).unsqueeze(-1)
    return torch.where(gray, lightness.unsqueeze(-1).expand_as(rgb), rgb)


class ColorTransformGPU:
    """Color transform pipeline on PyTorch tensors.

    Parameters are clamped and packed once on the host; the white-balance
    multiplier is evaluated on the host too since it depends only on the
    temperature.

    Example:
        >>> from tonegrade.torch import ColorTransformGPU
        >>> pipeline = ColorTransformGPU(ParameterSet(exposure=1.0))
        >>> graded = pipeline(torch.rand(1024, 4, device="cuda"))
    """

    def __init__(self, params: ParameterSet | None = None):
        self.set_parameters(params)

    def set_parameters(self, params: ParameterSet | None) -> ColorTransformGPU:
        """Replace the parameters (clamped).

        :param params: New parameters (None = defaults)
        :returns: Self for chaining
        """
        self._packed = pack_parameters(params)
        self._wb = white_balance_multiplier(float(self._packed[P_TEMPERATURE]))
        return self

    @property
    def parameters(self) -> np.ndarray:
        """Packed, clamped parameters [10]."""
        return self._packed.copy()

    def __call__(self, colors: torch.Tensor) -> torch.Tensor:
        """Apply the pipeline to float colors.

        :param colors: Tensor [..., 3] or [..., 4]; alpha is passed through
        :returns: New tensor, same shape/dtype/device as colors
        :raises ValueError: If the last axis is not 3 or 4 channels
        """
        if colors.ndim == 0 or colors.shape[-1] not in (3, 4):
            raise ValueError(f"Expected colors with 3 or 4 channels, got shape {tuple(colors.shape)}")

        rgb = self._transform_rgb(colors[..., :3].to(self._compute_dtype(colors)))
        rgb = rgb.to(colors.dtype)
        if colors.shape[-1] == 4:
            return torch.cat([rgb, colors[..., 3:]], dim=-1)
        return rgb

    def apply_rgba8(self, pixels: torch.Tensor) -> torch.Tensor:
        """Apply the pipeline to 8-bit RGBA pixels.

        :param pixels: uint8 tensor [..., 4]
        :returns: New uint8 tensor; alpha copied through
        :raises ValueError: If the last axis is not 4 channels
        """
        if pixels.ndim == 0 or pixels.shape[-1] != 4:
            raise ValueError(f"Expected RGBA pixels [..., 4], got shape {tuple(pixels.shape)}")

        dtype = self._compute_dtype(pixels)
        rgb = self._transform_rgb(pixels[..., :3].to(dtype) / 255.0)
        encoded = torch.floor(rgb * 255.0 + 0.5).to(torch.uint8)
        return torch.cat([encoded, pixels[..., 3:]], dim=-1)

    @staticmethod
    def _compute_dtype(t: torch.Tensor) -> torch.dtype:
        # MPS has no float64
        if t.device.type == "mps":
            return torch.float32
        return torch.float64

    def _transform_rgb(self, rgb: torch.Tensor) -> torch.Tensor:
        p = [float(v) for v in self._packed]
        rgb = torch.nan_to_num(rgb, nan=0.0, posinf=1.0, neginf=0.0)

        # 1. White balance and tint
        tint = p[P_TINT] * 0.01
        scale = torch.tensor(
            [
                self._wb[0] * (1.0 - tint),
                self._wb[1] * (1.0 + tint),
                self._wb[2] * (1.0 - tint),
            ],
            dtype=rgb.dtype,
            device=rgb.device,
        )
        rgb = rgb * scale

        # 2. Exposure
        rgb = rgb * (2.0 ** p[P_EXPOSURE])

        # 3-4. Tone masks share one luminance
        lum = rgb[..., 0] * LUMA_601_R + rgb[..., 1] * LUMA_601_G + rgb[..., 2] * LUMA_601_B
        for amount, edge0, edge1 in (
            (p[P_HIGHLIGHTS], 0.5, 1.0),
            (p[P_SHADOWS], 0.5, 0.0),
            (p[P_WHITES], 0.75, 1.0),
            (p[P_BLACKS], 0.25, 0.0),
        ):
            k = 1.0 + amount * 0.01 * _smoothstep(edge0, edge1, lum)
            rgb = rgb * k.unsqueeze(-1)

        # 5. Contrast
        slope = 1.0 + (p[P_CONTRAST] - 50.0) / 50.0
        rgb = (rgb - 0.5) * slope + 0.5

        # 6. Saturation, then vibrance
        hsl = rgb_to_hsl_tensor(rgb)
        h, s, lightness = hsl.unbind(-1)
        s = s * (1.0 + p[P_SATURATION] * 0.01)
        s = s * (1.0 + p[P_VIBRANCE] * 0.01 * (1.0 - s))
        rgb = hsl_to_rgb_tensor(torch.stack([h, s, lightness], dim=-1))

        # 7. Clamp (NaN -> 0)
        return torch.nan_to_num(rgb, nan=0.0).clamp_(0.0, 1.0)


def apply_parameters_tensor(colors: torch.Tensor, params: ParameterSet | None = None) -> torch.Tensor:
    """Apply parameters to a float color tensor.

    :param colors: Tensor [..., 3] or [..., 4] in [0, 1]
    :param params: Parameters (None = defaults)
    :returns: Graded tensor on the same device
    """
    return ColorTransformGPU(params)(colors)


def apply_parameters_rgba8_tensor(pixels: torch.Tensor, params: ParameterSet | None = None) -> torch.Tensor:
    """Apply parameters to a uint8 RGBA tensor.

    :param pixels: uint8 tensor [..., 4]
    :param params: Parameters (None = defaults)
    :returns: Graded uint8 tensor on the same device
    """
    return ColorTransformGPU(params).apply_rgba8(pixels)
