"""Tests for the PyTorch backend in tonegrade.torch."""

import pytest

# Skip all tests if PyTorch is not available
pytest.importorskip("torch")

import numpy as np  # noqa: E402
import torch  # noqa: E402

from tonegrade.color import apply_parameters, apply_parameters_rgba8, rgb_to_hsl  # noqa: E402
from tonegrade.config import PARAMETER_CONFIG, ParameterSet  # noqa: E402
from tonegrade.constants import PARAMETER_ORDER  # noqa: E402
from tonegrade.protocols import RenderBackend  # noqa: E402
from tonegrade.render import RenderOrchestrator, get_backend  # noqa: E402
from tonegrade.torch import (  # noqa: E402
    ColorTransformGPU,
    TorchRenderBackend,
    apply_parameters_rgba8_tensor,
    apply_parameters_tensor,
    hsl_to_rgb_tensor,
    rgb_to_hsl_tensor,
)

DEVICE = "cuda" if torch.cuda.is_available() else "cpu"


@pytest.fixture
def colors():
    rng = np.random.default_rng(42)
    return rng.random((2000, 4))


@pytest.fixture
def param_sets():
    rng = np.random.default_rng(9)
    sets = [ParameterSet(), ParameterSet(exposure=1.0, contrast=70.0, vibrance=40.0)]
    for _ in range(8):
        values = {}
        for name in PARAMETER_ORDER:
            spec = PARAMETER_CONFIG.get_spec(name)
            values[name] = float(rng.uniform(spec.min_value, spec.max_value))
        sets.append(ParameterSet(**values))
    return sets


class TestTensorHsl:
    """Test vectorized HSL conversion."""

    def test_matches_scalar(self, colors):
        rgb = torch.from_numpy(colors[:200, :3])
        hsl = rgb_to_hsl_tensor(rgb).numpy()
        for (r, g, b), expected in zip(colors[:200, :3], hsl):
            np.testing.assert_allclose(rgb_to_hsl(r, g, b), expected, atol=1e-12)

    def test_round_trip(self, colors):
        rgb = torch.from_numpy(colors[:, :3])
        back = hsl_to_rgb_tensor(rgb_to_hsl_tensor(rgb))
        np.testing.assert_allclose(back.numpy(), colors[:, :3], atol=1e-4)

    def test_achromatic(self):
        rgb = torch.full((5, 3), 0.3, dtype=torch.float64)
        hsl = rgb_to_hsl_tensor(rgb)
        assert torch.all(hsl[:, 0] == 0.0)
        assert torch.all(hsl[:, 1] == 0.0)
        assert torch.equal(hsl_to_rgb_tensor(hsl), rgb)


class TestEquivalence:
    """The torch pipeline matches the Numba kernels."""

    def test_float(self, colors, param_sets):
        tensor = torch.from_numpy(colors).to(DEVICE)
        for params in param_sets:
            expected = apply_parameters(colors, params)
            result = apply_parameters_tensor(tensor, params).cpu().numpy()
            np.testing.assert_allclose(result, expected, atol=1e-4)

    def test_rgba8(self, param_sets):
        rng = np.random.default_rng(1)
        pixels = rng.integers(0, 256, size=(2000, 4), dtype=np.uint8)
        tensor = torch.from_numpy(pixels).to(DEVICE)
        for params in param_sets:
            expected = apply_parameters_rgba8(pixels, params).astype(int)
            result = apply_parameters_rgba8_tensor(tensor, params).cpu().numpy().astype(int)
            assert np.abs(result - expected).max() <= 1
            np.testing.assert_array_equal(result[:, 3], pixels[:, 3])

    def test_identity(self, colors):
        tensor = torch.from_numpy(colors)
        result = apply_parameters_tensor(tensor)
        np.testing.assert_allclose(result.numpy(), colors, atol=1e-4)

    def test_non_finite(self):
        tensor = torch.tensor([[float("nan"), float("inf"), float("-inf")]], dtype=torch.float64)
        result = apply_parameters_tensor(tensor)
        np.testing.assert_allclose(result.numpy(), [[0.0, 1.0, 0.0]], atol=1e-9)

    def test_output_range(self, colors, param_sets):
        tensor = torch.from_numpy(colors * 2.0 - 0.5).to(DEVICE)
        for params in param_sets:
            result = apply_parameters_tensor(tensor, params)
            assert torch.all(result[..., :3] >= 0.0)
            assert torch.all(result[..., :3] <= 1.0)

    def test_float32_input(self, colors):
        tensor = torch.from_numpy(colors).float()
        result = apply_parameters_tensor(tensor, ParameterSet(exposure=0.5))
        assert result.dtype == torch.float32
        assert result.shape == tensor.shape


class TestColorTransformGPU:
    """Test the tensor pipeline object."""

    def test_parameters_clamped(self):
        pipeline = ColorTransformGPU(ParameterSet(exposure=50.0))
        assert pipeline.parameters[2] == 5.0

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            ColorTransformGPU()(torch.zeros(4, 2))
        with pytest.raises(ValueError):
            ColorTransformGPU().apply_rgba8(torch.zeros(4, 3, dtype=torch.uint8))

    def test_set_parameters_chains(self):
        pipeline = ColorTransformGPU()
        assert pipeline.set_parameters(ParameterSet(tint=10.0)) is pipeline


class TestTorchRenderBackend:
    """Test the torch render backend."""

    def test_protocol(self):
        backend = TorchRenderBackend("cpu")
        assert isinstance(backend, RenderBackend)
        assert backend.name == "torch"

    def test_get_backend(self):
        assert isinstance(get_backend("torch"), TorchRenderBackend)

    def test_orchestrator_matches_cpu(self):
        rng = np.random.default_rng(2)
        image = rng.integers(0, 256, size=(16, 16, 4), dtype=np.uint8)
        params = ParameterSet(temperature=4000.0, shadows=40.0, saturation=20.0)

        cpu = RenderOrchestrator(image, 16, 16, backend="cpu").render(params).astype(int)
        gpu = RenderOrchestrator(image, 16, 16, backend="torch").render(params).astype(int)
        assert gpu.shape == (16, 16, 4)
        assert np.abs(cpu - gpu).max() <= 1

    @pytest.mark.skipif(not torch.cuda.is_available(), reason="CUDA not available")
    def test_cuda_backend(self):
        backend = get_backend("cuda")
        assert backend.name == "cuda"
        pixels = np.full((8, 4), 64, dtype=np.uint8)
        assert np.all(backend.render_rgba8(pixels, ParameterSet(exposure=1.0))[:, :3] == 128)
