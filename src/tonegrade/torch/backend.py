"""PyTorch render backend."""

from __future__ import annotations

import logging

import numpy as np
import torch

from tonegrade.config.values import ParameterSet
from tonegrade.torch.color import ColorTransformGPU

logger = logging.getLogger(__name__)


class TorchRenderBackend:
    """Render backend running the pipeline as PyTorch tensor ops.

    :param device: Torch device ("cpu", "cuda", "cuda:1", ...)
    :raises ValueError: If a CUDA device is requested but unavailable
    """

    def __init__(self, device: str = "cpu"):
        if device.startswith("cuda") and not torch.cuda.is_available():
            raise ValueError(f"Device {device!r} requested but CUDA is not available")
        self.device = torch.device(device)
        self.name = "cuda" if self.device.type == "cuda" else "torch"
        self._pipeline = ColorTransformGPU()

    def render_rgba8(self, pixels: np.ndarray, params: ParameterSet | None) -> np.ndarray:
        self._pipeline.set_parameters(params)
        tensor = torch.from_numpy(np.ascontiguousarray(pixels)).to(self.device)
        result = self._pipeline.apply_rgba8(tensor)
        return result.cpu().numpy()

    def warmup(self) -> None:
        pixels = np.zeros((1, 4), dtype=np.uint8)
        self.render_rgba8(pixels, None)
        logger.debug("[Torch] Backend warmed up on %s", self.device)

    def __repr__(self) -> str:
        return f"TorchRenderBackend(device={str(self.device)!r})"
