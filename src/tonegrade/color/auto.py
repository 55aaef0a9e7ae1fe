"""Automatic adjustment estimation from histograms.

Implements simple auto-correction heuristics:
- Gray World average for exposure and white balance
- 0.5% percentile clipping for black and white points

These functions read a Histogram only; they never touch pixels, so the
estimate costs nothing beyond the histogram pass that already runs on
every settings commit.

References:
- Gray World white balance assumption
- Mid-gray (127.5 of 255) exposure target
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from tonegrade.config.parameters import PARAMETER_CONFIG
from tonegrade.config.values import ParameterSet
from tonegrade.constants import (
    AUTO_BLACKS_LIMIT,
    AUTO_CONTRAST_MAX,
    AUTO_CONTRAST_MIN,
    AUTO_EXPOSURE_LIMIT,
    AUTO_TEMPERATURE_GAIN,
    AUTO_WHITES_LIMIT,
    CLIP_FRACTION,
    MAX_LEVEL,
    MID_GRAY_LEVEL,
    REFERENCE_KELVIN,
)
from tonegrade.histogram.result import Histogram

logger = logging.getLogger(__name__)

PATCH_FIELDS = ("exposure", "contrast", "temperature", "blacks", "whites")


def _clip(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass
class AutoAdjustResult:
    """Result of automatic adjustment analysis.

    Contains the computed adjustments plus the statistics they were
    derived from. Only the PATCH_FIELDS are merged into a ParameterSet.
    """

    # Adjustments
    exposure: float = 0.0  # EV stops (-2 to +2)
    contrast: float = 50.0  # 40 to 100
    temperature: float = REFERENCE_KELVIN  # Kelvin
    blacks: float = 0.0  # -50 to 0
    whites: float = 0.0  # 0 to 50

    # Statistics (0-255 levels)
    avg_r: float = 0.0
    avg_g: float = 0.0
    avg_b: float = 0.0
    black_point: int = 0
    white_point: int = MAX_LEVEL

    def to_patch(self) -> dict[str, float]:
        """Partial parameter patch, clamped to the parameter ranges.

        :returns: Dict with exposure, contrast, temperature, blacks, whites
        """
        return {
            name: PARAMETER_CONFIG.get_spec(name).validate(getattr(self, name))
            for name in PATCH_FIELDS
        }

    def to_parameters(self, base: ParameterSet | None = None) -> ParameterSet:
        """Merge the patch into a ParameterSet.

        :param base: Parameters to update (None = defaults)
        :returns: New ParameterSet
        """
        if base is None:
            base = ParameterSet()
        return base.merge(self.to_patch())


def estimate_exposure(hist: Histogram) -> float:
    """Exposure that moves the gray-world average to mid-gray.

    exposure = log2(127.5 / mean(avg_r, avg_g, avg_b)), clamped to [-2, 2].
    A black image saturates at +2.

    :param hist: Histogram of the image
    :returns: Exposure in EV
    """
    if hist.is_empty:
        return 0.0

    avg_brightness = (hist.mean("red") + hist.mean("green") + hist.mean("blue")) / 3.0
    if avg_brightness <= 0.0:
        return AUTO_EXPOSURE_LIMIT

    exposure = math.log2(MID_GRAY_LEVEL / avg_brightness)
    return _clip(exposure, -AUTO_EXPOSURE_LIMIT, AUTO_EXPOSURE_LIMIT)


def estimate_white_balance(hist: Histogram) -> float:
    """Temperature from the blue/red imbalance of the gray-world average.

    temperature = 5500 + (avg_b - avg_r) * 25, clamped to the parameter range.

    :param hist: Histogram of the image
    :returns: Temperature in Kelvin
    """
    if hist.is_empty:
        return REFERENCE_KELVIN

    spec = PARAMETER_CONFIG.temperature
    temperature = REFERENCE_KELVIN + (hist.mean("blue") - hist.mean("red")) * AUTO_TEMPERATURE_GAIN
    return _clip(temperature, spec.min_value, spec.max_value)


def estimate_tone_range(
    hist: Histogram,
    clip_fraction: float = CLIP_FRACTION,
) -> tuple[float, float, float, int, int]:
    """Contrast, blacks and whites from the clipped luminance range.

    :param hist: Histogram of the image
    :param clip_fraction: Fraction of pixels clipped at each end
    :returns: Tuple of (contrast, blacks, whites, black_point, white_point)
    """
    if hist.is_empty:
        return 50.0, 0.0, 0.0, 0, MAX_LEVEL

    black_point = hist.black_point(clip_fraction)
    white_point = hist.white_point(clip_fraction)

    spread = (white_point - black_point) / MAX_LEVEL
    contrast = _clip(50.0 + (spread - 0.5) * 50.0, AUTO_CONTRAST_MIN, AUTO_CONTRAST_MAX)

    # Deeper blacks as the black point rises, brighter whites as the white point falls
    blacks = _clip(-black_point / 2.0, AUTO_BLACKS_LIMIT, 0.0)
    whites = _clip((MAX_LEVEL - white_point) / 2.0, 0.0, AUTO_WHITES_LIMIT)

    return contrast, blacks, whites, black_point, white_point


def estimate(hist: Histogram, clip_fraction: float = CLIP_FRACTION) -> AutoAdjustResult:
    """Compute automatic exposure, contrast, white balance and tone range.

    :param hist: Histogram of the (neutral) image
    :param clip_fraction: Fraction of pixels clipped when locating black/white points
    :returns: AutoAdjustResult; call to_patch() for the parameter patch

    Example:
        >>> result = estimate(analyze(pixels, width, height))
        >>> params = params.merge(result.to_patch())
    """
    if hist.is_empty:
        logger.warning("[Auto] Empty histogram, returning default adjustments")
        return AutoAdjustResult()

    contrast, blacks, whites, black_point, white_point = estimate_tone_range(hist, clip_fraction)

    result = AutoAdjustResult(
        exposure=estimate_exposure(hist),
        contrast=contrast,
        temperature=estimate_white_balance(hist),
        blacks=blacks,
        whites=whites,
        avg_r=hist.mean("red"),
        avg_g=hist.mean("green"),
        avg_b=hist.mean("blue"),
        black_point=black_point,
        white_point=white_point,
    )
    logger.debug(
        "[Auto] exposure=%.3f contrast=%.1f temperature=%.0f blacks=%.1f whites=%.1f",
        result.exposure,
        result.contrast,
        result.temperature,
        result.blacks,
        result.whites,
    )
    return result
