"""Tone-response curve extraction.

Example:
    >>> from tonegrade.curve import sample_curve, curve_to_lut
    >>>
    >>> points = sample_curve(ParameterSet(exposure=0.5))
    >>> lut = curve_to_lut(points)
"""

from tonegrade.curve.sampler import (
    CurveSampler,
    build_gradient,
    curve_to_lut,
    gradient_levels,
    sample_curve,
    tone_curve_series,
)

__all__ = [
    "CurveSampler",
    "sample_curve",
    "build_gradient",
    "gradient_levels",
    "curve_to_lut",
    "tone_curve_series",
]
