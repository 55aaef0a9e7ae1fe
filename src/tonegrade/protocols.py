"""
Protocol definitions for tonegrade render backends.

Defines the interface the render orchestrator dispatches to, shared by the
CPU (NumPy/Numba) and GPU (PyTorch) implementations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import numpy as np

    from tonegrade.config.values import ParameterSet


@runtime_checkable
class RenderBackend(Protocol):
    """
    Protocol for pipeline backends.

    A backend grades whole RGBA8 buffers. Input and output are host NumPy
    arrays; a GPU backend moves data to its device internally.
    """

    name: str

    def render_rgba8(self, pixels: np.ndarray, params: ParameterSet | None) -> np.ndarray:
        """
        Apply the color pipeline to RGBA8 pixels.

        :param pixels: Contiguous uint8 array [N, 4]
        :param params: Parameters (clamped by the backend)
        :returns: New uint8 array [N, 4]; alpha copied through
        """
        ...

    def warmup(self) -> None:
        """Compile or initialize whatever the first render would otherwise pay for."""
        ...
