"""
Render orchestration for RGBA8 images.

A RenderOrchestrator is one render binding: a bound source buffer, the
parameters last applied to it, and the rendered output. It dispatches the
pipeline to the CPU (Numba) or GPU (PyTorch) backend based on its
backend name.
"""

from __future__ import annotations

import logging

import numpy as np

from tonegrade.color.apply import apply_parameters_rgba8
from tonegrade.color.kernels import warmup_color_kernels
from tonegrade.config.render import BACKENDS, RENDER_CONFIG
from tonegrade.config.values import ParameterSet
from tonegrade.histogram.apply import analyze, as_pixel_rows
from tonegrade.histogram.result import Histogram
from tonegrade.protocols import RenderBackend

logger = logging.getLogger(__name__)


class NumbaRenderBackend:
    """CPU render backend using the parallel Numba kernels."""

    name = "cpu"

    def render_rgba8(self, pixels: np.ndarray, params: ParameterSet | None) -> np.ndarray:
        return apply_parameters_rgba8(pixels, params)

    def warmup(self) -> None:
        warmup_color_kernels()

    def __repr__(self) -> str:
        return "NumbaRenderBackend()"


def get_backend(name: str | None = None) -> RenderBackend:
    """Create a render backend by name.

    :param name: "cpu", "torch" or "cuda" (None = RENDER_CONFIG.backend)
    :returns: Backend instance
    :raises ValueError: If the name is unknown

    Example:
        >>> backend = get_backend("cpu")
        >>> isinstance(backend, RenderBackend)
        True
    """
    if name is None:
        name = RENDER_CONFIG.backend
    key = name.lower()
    if key not in BACKENDS:
        raise ValueError(f"Unknown backend: {name!r} (expected one of {BACKENDS})")

    if key == "cpu":
        return NumbaRenderBackend()

    # PyTorch is optional; import only when requested
    from tonegrade.torch.backend import TorchRenderBackend

    return TorchRenderBackend("cuda" if key == "cuda" else "cpu")


def _empty_output() -> np.ndarray:
    return np.zeros((0, 0, 4), dtype=np.uint8)


class RenderOrchestrator:
    """One render binding: source buffer, parameters and rendered output.

    The pipeline itself is stateless; each orchestrator only owns its
    buffers, so several bindings (original, processed, curve) can share
    one backend without affecting each other.

    Example:
        >>> renderer = RenderOrchestrator(pixels, width, height)
        >>> graded = renderer.render(ParameterSet(exposure=0.5))
        >>> graded.shape
        (height, width, 4)
        >>> hist = renderer.histogram()
    """

    def __init__(
        self,
        source: np.ndarray | None = None,
        width: int = 0,
        height: int = 0,
        params: ParameterSet | None = None,
        backend: str | RenderBackend | None = None,
    ):
        if isinstance(backend, RenderBackend):
            self._backend = backend
        else:
            self._backend = get_backend(backend)

        self._params = (params or ParameterSet()).clamp()
        self._source: np.ndarray | None = None
        self._width = 0
        self._height = 0
        self._output = _empty_output()

        if source is not None:
            self.bind(source, width, height)

    # ========================================================================
    # State
    # ========================================================================

    @property
    def backend(self) -> RenderBackend:
        return self._backend

    @property
    def parameters(self) -> ParameterSet:
        return self._params

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def is_bound(self) -> bool:
        return self._source is not None

    @property
    def output(self) -> np.ndarray:
        """Last rendered buffer [height, width, 4] (empty before the first render)."""
        return self._output

    # ========================================================================
    # Operations
    # ========================================================================

    def bind(self, source: np.ndarray, width: int, height: int) -> bool:
        """Bind a source RGBA8 buffer.

        The source is copied. A buffer inconsistent with width and height
        unbinds the orchestrator instead of raising.

        :param source: uint8 RGBA buffer (flat, [N, 4] or [H, W, 4])
        :param width: Image width in pixels
        :param height: Image height in pixels
        :returns: True if the buffer was bound
        """
        rows = as_pixel_rows(source, width, height)
        self._output = _empty_output()
        if rows is None:
            shape = None if source is None else np.asarray(source).shape
            logger.warning(
                "[Render] Buffer shape %s does not match %dx%d RGBA, binding cleared",
                shape,
                width,
                height,
            )
            self._source = None
            self._width = 0
            self._height = 0
            return False

        self._source = rows.copy()
        self._width = width
        self._height = height
        logger.debug("[Render] Bound %dx%d source", width, height)
        return True

    def set_parameters(self, params: ParameterSet | None) -> ParameterSet:
        """Replace the parameters used by render().

        :param params: New parameters (None = defaults); clamped on the way in
        :returns: The clamped parameters
        """
        self._params = (params or ParameterSet()).clamp()
        return self._params

    def render(self, params: ParameterSet | None = None) -> np.ndarray:
        """Render the bound source.

        :param params: Parameters to apply; None re-renders with the current ones
        :returns: uint8 array [height, width, 4], or an empty [0, 0, 4] array
            if nothing valid is bound
        """
        if params is not None:
            self.set_parameters(params)

        if self._source is None:
            logger.warning("[Render] No valid source bound, returning empty buffer")
            self._output = _empty_output()
            return self._output

        rendered = self._backend.render_rgba8(self._source, self._params)
        self._output = rendered.reshape(self._height, self._width, 4)
        logger.debug(
            "[Render] %dx%d on %s backend", self._width, self._height, self._backend.name
        )
        return self._output

    def histogram(self) -> Histogram:
        """Histogram of the last rendered buffer.

        :returns: Histogram (empty if nothing has been rendered)
        """
        if self._output.size == 0:
            return Histogram.empty()
        return analyze(self._output, self._width, self._height)

    def reset(self) -> None:
        """Reset parameters to defaults and drop the rendered output (the source stays bound)."""
        self._params = ParameterSet()
        self._output = _empty_output()

    def __repr__(self) -> str:
        return (
            f"RenderOrchestrator({self._width}x{self._height}, "
            f"backend={self._backend.name!r}, bound={self.is_bound})"
        )
