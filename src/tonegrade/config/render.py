"""Render configuration.

This module defines the settings shared by the render orchestrator, the
curve sampler and the histogram/auto-adjust analysis.
"""

from __future__ import annotations

from dataclasses import dataclass

from tonegrade.constants import CLIP_FRACTION, CURVE_SIZE, N_LEVELS

BACKENDS = ("cpu", "torch", "cuda")


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for rendering and analysis passes.

    Attributes:
        backend: Default compute backend ("cpu" = Numba, "torch"/"cuda" = PyTorch)
        n_bins: Histogram bins per channel (8-bit levels)
        curve_size: Number of gradient steps sampled for the tone curve
        clip_fraction: Fraction of pixels clipped at each end when locating
            black and white points
    """

    backend: str = "cpu"
    n_bins: int = N_LEVELS
    curve_size: int = CURVE_SIZE
    clip_fraction: float = CLIP_FRACTION

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown backend: {self.backend!r} (expected one of {BACKENDS})")
        if not 0.0 <= self.clip_fraction < 0.5:
            raise ValueError(f"clip_fraction={self.clip_fraction} is outside valid range [0, 0.5)")


# Singleton instance for use throughout the codebase
RENDER_CONFIG = RenderConfig()
