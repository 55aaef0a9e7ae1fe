"""
Grading session: the settings-commit loop.

A GradingSession owns the single live ParameterSet and three independent
render bindings:

- "original": the source rendered with neutral parameters (never changes
  until a new image is loaded)
- "processed": the source rendered with the live parameters
- "curve": the 256-step gradient rendered with the live parameters

Every commit re-renders "processed" and "curve" and recomputes the
processed histogram synchronously. Last write wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from tonegrade.color.auto import AutoAdjustResult, estimate
from tonegrade.config.presets import NEUTRAL, get_preset
from tonegrade.config.render import RENDER_CONFIG
from tonegrade.config.values import ParameterSet
from tonegrade.curve.sampler import CurveSampler
from tonegrade.histogram.result import Histogram
from tonegrade.protocols import RenderBackend
from tonegrade.render import RenderOrchestrator, get_backend
from tonegrade.types import CurvePoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a view needs after one settings commit.

    Attributes:
        parameters: Clamped parameters that produced this snapshot
        image: Processed image [height, width, 4] (empty if no image is loaded)
        curve: 256 tone-curve points
        histogram: Histogram of the processed image
        original_histogram: Histogram of the neutral original
    """

    parameters: ParameterSet
    image: np.ndarray
    curve: list[CurvePoint]
    histogram: Histogram
    original_histogram: Histogram


class GradingSession:
    """Orchestrates rendering, curve sampling and analysis for one image.

    Example:
        >>> session = GradingSession(pixels, width, height)
        >>> snap = session.update(exposure=0.5, contrast=60)
        >>> snap.histogram.mean("red")
        >>> snap = session.auto_adjust()
    """

    def __init__(
        self,
        source: np.ndarray | None = None,
        width: int = 0,
        height: int = 0,
        params: ParameterSet | None = None,
        backend: str | RenderBackend | None = None,
    ):
        if not isinstance(backend, RenderBackend):
            backend = get_backend(backend)
        self._backend = backend

        self._original = RenderOrchestrator(params=NEUTRAL, backend=backend)
        self._processed = RenderOrchestrator(backend=backend)
        self._curve = CurveSampler(backend=backend)

        self._params = (params or ParameterSet()).clamp()
        self._original_histogram = Histogram.empty()
        self._last_auto: AutoAdjustResult | None = None
        self._snapshot: SessionSnapshot | None = None

        if source is not None:
            self.load_image(source, width, height)

    # ========================================================================
    # State
    # ========================================================================

    @property
    def parameters(self) -> ParameterSet:
        return self._params

    @property
    def backend(self) -> RenderBackend:
        return self._backend

    @property
    def original(self) -> np.ndarray:
        """Neutral render of the source [height, width, 4]."""
        return self._original.output

    @property
    def processed(self) -> np.ndarray:
        """Processed image from the last commit [height, width, 4]."""
        return self._processed.output

    @property
    def original_histogram(self) -> Histogram:
        return self._original_histogram

    @property
    def last_auto_adjust(self) -> AutoAdjustResult | None:
        """Result of the most recent auto_adjust() call."""
        return self._last_auto

    @property
    def snapshot(self) -> SessionSnapshot:
        """Snapshot of the last commit (commits the current parameters if none exists)."""
        if self._snapshot is None:
            return self.commit()
        return self._snapshot

    # ========================================================================
    # Commands
    # ========================================================================

    def load_image(self, source: np.ndarray, width: int, height: int) -> SessionSnapshot:
        """Bind a new source image and commit the current parameters to it.

        An invalid buffer leaves the session without an image; renders and
        histograms are then empty.

        :param source: uint8 RGBA buffer
        :param width: Image width in pixels
        :param height: Image height in pixels
        :returns: Snapshot of the commit
        """
        self._original.bind(source, width, height)
        self._processed.bind(source, width, height)

        if self._original.is_bound:
            self._original.render(NEUTRAL)
            self._original_histogram = self._original.histogram()
        else:
            self._original_histogram = Histogram.empty()

        logger.debug("[Session] Loaded %dx%d image", width, height)
        return self.commit()

    def commit(self, params: ParameterSet | None = None) -> SessionSnapshot:
        """Commit parameters: re-render, re-sample the curve, recompute the histogram.

        :param params: New parameters (None = keep the current ones); clamped
        :returns: Snapshot of the result
        """
        if params is not None:
            self._params = params.clamp()

        if self._processed.is_bound:
            image = self._processed.render(self._params)
            histogram = self._processed.histogram()
        else:
            image = self._processed.output
            histogram = Histogram.empty()

        curve = self._curve.sample(self._params)

        self._snapshot = SessionSnapshot(
            parameters=self._params,
            image=image,
            curve=curve,
            histogram=histogram,
            original_histogram=self._original_histogram,
        )
        logger.debug("[Session] Committed %s", self._params)
        return self._snapshot

    def update(self, **changes: float) -> SessionSnapshot:
        """Change some parameters and commit.

        :param changes: Field values to change (clamped)
        :returns: Snapshot of the commit
        :raises ValueError: If a field name is unknown

        Example:
            >>> session.update(temperature=4500, tint=10)
        """
        return self.commit(self._params.merge(changes))

    def apply_preset(self, name: str) -> SessionSnapshot:
        """Replace the parameters with a named preset and commit.

        :param name: Preset name
        :returns: Snapshot of the commit
        """
        return self.commit(get_preset(name))

    def auto_adjust(self) -> SessionSnapshot:
        """Estimate corrections from the neutral original and merge them.

        The estimate always reads the original histogram, so repeated calls
        converge to the same patch instead of compounding.

        :returns: Snapshot of the commit
        """
        self._last_auto = estimate(self._original_histogram, RENDER_CONFIG.clip_fraction)
        patch = self._last_auto.to_patch()
        logger.debug("[Session] Auto adjust patch %s", patch)
        return self.commit(self._params.merge(patch))

    def reset(self) -> SessionSnapshot:
        """Restore default parameters and commit."""
        self._last_auto = None
        return self.commit(ParameterSet())

    def __repr__(self) -> str:
        return (
            f"GradingSession({self._processed.width}x{self._processed.height}, "
            f"backend={self._backend.name!r})"
        )
