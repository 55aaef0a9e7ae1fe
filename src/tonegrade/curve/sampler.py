"""Tone-response curve sampling.

The curve is measured, not computed: a neutral 256-step gradient is
rendered through the same pipeline as the image and the red channel of
each output pixel is read back.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from tonegrade.config.render import RENDER_CONFIG
from tonegrade.config.values import ParameterSet
from tonegrade.constants import CURVE_SIZE, MAX_LEVEL
from tonegrade.protocols import RenderBackend
from tonegrade.render import RenderOrchestrator
from tonegrade.types import CurvePoint

logger = logging.getLogger(__name__)


def gradient_levels(size: int = CURVE_SIZE) -> np.ndarray:
    """Input levels of the gradient, evenly spread over 0-255.

    :param size: Number of steps (2 to 256)
    :returns: uint8 array [size]; equals arange(256) for the default size
    :raises ValueError: If size is outside [2, 256]
    """
    if not 2 <= size <= CURVE_SIZE:
        raise ValueError(f"Curve size must be in [2, {CURVE_SIZE}], got {size}")
    return np.round(np.linspace(0.0, MAX_LEVEL, size)).astype(np.uint8)


def build_gradient(size: int = CURVE_SIZE) -> np.ndarray:
    """Neutral gradient image, one row of R = G = B = level, A = 255.

    :param size: Number of steps
    :returns: uint8 array [1, size, 4]
    """
    levels = gradient_levels(size)
    gradient = np.empty((1, size, 4), dtype=np.uint8)
    gradient[0, :, 0] = levels
    gradient[0, :, 1] = levels
    gradient[0, :, 2] = levels
    gradient[0, :, 3] = MAX_LEVEL
    return gradient


class CurveSampler:
    """Samples the tone-response curve through its own render binding.

    Example:
        >>> sampler = CurveSampler()
        >>> points = sampler.sample(ParameterSet(contrast=70))
        >>> len(points), points[0].x, points[-1].x
        (256, 0, 255)
    """

    def __init__(
        self,
        backend: str | RenderBackend | None = None,
        size: int | None = None,
    ):
        self._size = size if size is not None else RENDER_CONFIG.curve_size
        self._levels = gradient_levels(self._size)
        self._renderer = RenderOrchestrator(
            build_gradient(self._size), self._size, 1, backend=backend
        )

    @property
    def size(self) -> int:
        return self._size

    @property
    def renderer(self) -> RenderOrchestrator:
        return self._renderer

    def sample(self, params: ParameterSet | None = None) -> list[CurvePoint]:
        """Render the gradient and read back the curve.

        :param params: Parameters (None = defaults)
        :returns: CurvePoints ordered by x
        """
        rendered = self._renderer.render(params or ParameterSet())
        out_levels = rendered[0, :, 0]
        points = [CurvePoint(int(x), int(y)) for x, y in zip(self._levels, out_levels)]
        logger.debug("[Curve] Sampled %d points", len(points))
        return points

    def lut(self, params: ParameterSet | None = None) -> np.ndarray:
        """Sample and return the curve as a lookup table.

        :param params: Parameters (None = defaults)
        :returns: uint8 array [256]
        """
        return curve_to_lut(self.sample(params))


def sample_curve(
    params: ParameterSet | None = None,
    backend: str | RenderBackend | None = None,
) -> list[CurvePoint]:
    """Sample the tone-response curve for a parameter set.

    :param params: Parameters (None = defaults)
    :param backend: Backend name or instance (None = RENDER_CONFIG.backend)
    :returns: 256 CurvePoints, x = 0..255 ascending

    Example:
        >>> points = sample_curve(ParameterSet())
        >>> all(p.x == p.y for p in points)
        True
    """
    return CurveSampler(backend=backend, size=CURVE_SIZE).sample(params)


def curve_to_lut(points: Sequence[CurvePoint]) -> np.ndarray:
    """Convert a full 256-point curve to a lookup table.

    :param points: Curve with one point per input level
    :returns: uint8 array [256] with lut[x] = y
    :raises ValueError: If the curve does not cover every level exactly once
    """
    if len(points) != CURVE_SIZE:
        raise ValueError(f"Expected {CURVE_SIZE} curve points, got {len(points)}")

    lut = np.zeros(CURVE_SIZE, dtype=np.uint8)
    seen = np.zeros(CURVE_SIZE, dtype=bool)
    for x, y in points:
        if not 0 <= x <= MAX_LEVEL or not 0 <= y <= MAX_LEVEL:
            raise ValueError(f"Curve point ({x}, {y}) is outside 0-{MAX_LEVEL}")
        lut[x] = y
        seen[x] = True
    if not seen.all():
        raise ValueError("Curve points do not cover every input level")
    return lut


def tone_curve_series(points: Sequence[CurvePoint]) -> list[dict[str, int]]:
    """Chart-ready curve series.

    :param points: Curve points
    :returns: List of {"x", "y"} dicts
    """
    return [{"x": int(x), "y": int(y)} for x, y in points]
