"""PyTorch backend for tonegrade.

Runs the color transform pipeline on tensors (CPU or CUDA) with the
same stage order and constants as the Numba kernels.

Example:
    >>> import torch
    >>> from tonegrade.torch import apply_parameters_tensor
    >>> from tonegrade import ParameterSet
    >>>
    >>> colors = torch.rand(1024, 4, device="cuda")
    >>> graded = apply_parameters_tensor(colors, ParameterSet(exposure=0.5))
"""

from tonegrade.torch.backend import TorchRenderBackend
from tonegrade.torch.color import (
    ColorTransformGPU,
    apply_parameters_rgba8_tensor,
    apply_parameters_tensor,
    hsl_to_rgb_tensor,
    rgb_to_hsl_tensor,
)

__all__ = [
    "ColorTransformGPU",
    "TorchRenderBackend",
    "apply_parameters_tensor",
    "apply_parameters_rgba8_tensor",
    "rgb_to_hsl_tensor",
    "hsl_to_rgb_tensor",
]
