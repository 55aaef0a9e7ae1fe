"""Color transform pipeline.

Pure per-pixel color grading (white balance, exposure, tone masks,
contrast, saturation/vibrance) compiled as Numba kernels, plus automatic
adjustment estimation from histograms.
"""

from tonegrade.color.apply import (
    apply_parameters,
    apply_parameters_rgba8,
    hsl_to_rgb,
    kelvin_to_rgb,
    pack_parameters,
    rgb_to_hsl,
    smoothstep,
    transform,
    white_balance_multiplier,
)
from tonegrade.color.auto import (
    PATCH_FIELDS,
    AutoAdjustResult,
    estimate,
    estimate_exposure,
    estimate_tone_range,
    estimate_white_balance,
)

__all__ = [
    # Pipeline
    "transform",
    "apply_parameters",
    "apply_parameters_rgba8",
    "pack_parameters",
    # Color math
    "kelvin_to_rgb",
    "white_balance_multiplier",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "smoothstep",
    # Auto adjust
    "AutoAdjustResult",
    "PATCH_FIELDS",
    "estimate",
    "estimate_exposure",
    "estimate_white_balance",
    "estimate_tone_range",
]
