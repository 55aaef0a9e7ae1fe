"""
tonegrade - Parameter-driven color grading

Real-time color grading for 8-bit RGBA images with Numba (CPU) and
PyTorch (GPU) backends.

Features:
- Ten adjustments: temperature, tint, exposure, highlights, shadows, whites,
  blacks, contrast, vibrance, saturation
- Fixed stage order, clamped parameters, output always in [0, 1]
- Tone-response curve measured through the same pipeline
- R, G, B and BT.709 luminance histograms
- Gray-world auto exposure, white balance and tone range
- Preset library with dict/JSON loading

Example - Session (Recommended):
    >>> from tonegrade import GradingSession
    >>>
    >>> session = GradingSession(pixels, width, height)
    >>> snap = session.update(exposure=0.5, contrast=60)
    >>> snap.image.shape, len(snap.curve)
    ((height, width, 4), 256)
    >>> snap = session.auto_adjust()

Example - Low-level:
    >>> from tonegrade import ParameterSet, transform, apply_parameters_rgba8, analyze
    >>>
    >>> params = ParameterSet(temperature=4500, vibrance=20)
    >>> transform((0.5, 0.4, 0.3), params)
    >>> graded = apply_parameters_rgba8(pixels, params)
    >>> hist = analyze(graded, width, height)
"""

__version__ = "0.1.0"

from tonegrade.color.apply import (
    apply_parameters,
    apply_parameters_rgba8,
    hsl_to_rgb,
    kelvin_to_rgb,
    rgb_to_hsl,
    smoothstep,
    transform,
    white_balance_multiplier,
)
from tonegrade.color.auto import (
    AutoAdjustResult,
    estimate,
    estimate_exposure,
    estimate_tone_range,
    estimate_white_balance,
)
from tonegrade.config import (
    CONFIG,
    NEUTRAL,
    PARAMETER_CONFIG,
    RENDER_CONFIG,
    ParameterSet,
    ParameterSpec,
    get_preset,
    list_presets,
    load_parameters_json,
    parameters_from_dict,
    save_parameters_json,
)
from tonegrade.curve import CurveSampler, curve_to_lut, sample_curve, tone_curve_series
from tonegrade.histogram import Histogram, analyze
from tonegrade.protocols import RenderBackend
from tonegrade.render import NumbaRenderBackend, RenderOrchestrator, get_backend
from tonegrade.session import GradingSession, SessionSnapshot
from tonegrade.types import Color, CurvePoint

__all__ = [
    # Version
    "__version__",
    # Session
    "GradingSession",
    "SessionSnapshot",
    # Parameters
    "ParameterSet",
    "ParameterSpec",
    "CONFIG",
    "PARAMETER_CONFIG",
    "RENDER_CONFIG",
    "NEUTRAL",
    "get_preset",
    "list_presets",
    "parameters_from_dict",
    "load_parameters_json",
    "save_parameters_json",
    # Color pipeline
    "Color",
    "transform",
    "apply_parameters",
    "apply_parameters_rgba8",
    "kelvin_to_rgb",
    "white_balance_multiplier",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "smoothstep",
    # Curve
    "CurvePoint",
    "CurveSampler",
    "sample_curve",
    "curve_to_lut",
    "tone_curve_series",
    # Histogram
    "Histogram",
    "analyze",
    # Auto adjust
    "AutoAdjustResult",
    "estimate",
    "estimate_exposure",
    "estimate_white_balance",
    "estimate_tone_range",
    # Rendering
    "RenderBackend",
    "RenderOrchestrator",
    "NumbaRenderBackend",
    "get_backend",
]
