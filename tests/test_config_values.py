"""Tests for parameter specifications, ParameterSet and presets.

Tests the clamping contract every entry point relies on:
- Out-of-range values clamp to the declared bounds
- +/-inf clamp to the bounds, NaN falls back to the default
- Clamping is idempotent
"""

import json
import math

import numpy as np
import pytest

from tonegrade.config import (
    CONFIG,
    DEFAULT,
    NEUTRAL,
    PARAMETER_CONFIG,
    WARM,
    ParameterSet,
    ParameterSpec,
    RenderConfig,
    get_preset,
    list_presets,
    load_parameters_json,
    parameters_from_dict,
    save_parameters_json,
)
from tonegrade.constants import PARAMETER_ORDER

EXTREME_VALUES = [-1e12, -150.0, -1.0, 0.0, 1.0, 150.0, 1e12, math.inf, -math.inf, math.nan]


class TestParameterSpec:
    """Test ParameterSpec validation."""

    def test_validate_in_range(self):
        """Values inside the range pass unchanged."""
        spec = ParameterSpec("x", 0.0, 10.0, 5.0, 5.0)
        assert spec.validate(3.5) == 3.5

    def test_validate_clamps(self):
        """Values outside the range clamp to the nearest bound."""
        spec = ParameterSpec("x", 0.0, 10.0, 5.0, 5.0)
        assert spec.validate(-3.0) == 0.0
        assert spec.validate(42.0) == 10.0

    def test_validate_infinity(self):
        """Infinite values clamp to the bounds."""
        spec = ParameterSpec("x", -1.0, 1.0, 0.0, 0.0)
        assert spec.validate(math.inf) == 1.0
        assert spec.validate(-math.inf) == -1.0

    def test_validate_nan_and_non_numeric(self):
        """NaN and non-numeric values fall back to the default."""
        spec = ParameterSpec("x", 0.0, 10.0, 5.0, 5.0)
        assert spec.validate(math.nan) == 5.0
        assert spec.validate("abc") == 5.0
        assert spec.validate(None) == 5.0

    def test_validate_numeric_strings_and_numpy(self):
        """Numeric strings and NumPy scalars are converted."""
        spec = ParameterSpec("x", 0.0, 10.0, 5.0, 5.0)
        assert spec.validate("2.5") == 2.5
        assert spec.validate(np.float32(4.0)) == 4.0

    def test_is_neutral(self):
        spec = PARAMETER_CONFIG.contrast
        assert spec.is_neutral(50.0)
        assert not spec.is_neutral(51.0)


class TestParameterConfig:
    """Test the declared parameter table."""

    def test_ranges_and_defaults(self):
        """Ranges and defaults match the documented table."""
        expected = {
            "temperature": (2000.0, 12000.0, 5500.0),
            "tint": (-150.0, 150.0, 0.0),
            "exposure": (-5.0, 5.0, 0.0),
            "highlights": (-100.0, 100.0, 0.0),
            "shadows": (-100.0, 100.0, 0.0),
            "whites": (-100.0, 100.0, 0.0),
            "blacks": (-100.0, 100.0, 0.0),
            "contrast": (0.0, 100.0, 50.0),
            "vibrance": (-100.0, 100.0, 0.0),
            "saturation": (-100.0, 100.0, 0.0),
        }
        for name, (lo, hi, default) in expected.items():
            spec = PARAMETER_CONFIG.get_spec(name)
            assert (spec.min_value, spec.max_value, spec.default) == (lo, hi, default)

    def test_all_specs_in_pipeline_order(self):
        assert tuple(PARAMETER_CONFIG.get_all_specs()) == PARAMETER_ORDER

    def test_unknown_spec(self):
        """Unknown names raise KeyError."""
        with pytest.raises(KeyError):
            PARAMETER_CONFIG.get_spec("gamma")

    def test_top_level_config(self):
        assert CONFIG.parameters is PARAMETER_CONFIG
        assert CONFIG.render.backend == "cpu"
        assert CONFIG.render.clip_fraction == 0.005

    def test_render_config_rejects_unknown_backend(self):
        with pytest.raises(ValueError):
            RenderConfig(backend="opengl")

    def test_render_config_rejects_bad_clip_fraction(self):
        with pytest.raises(ValueError):
            RenderConfig(clip_fraction=0.75)


class TestParameterSetClamp:
    """Test ParameterSet.clamp()."""

    @pytest.mark.parametrize("name", PARAMETER_ORDER)
    def test_clamp_idempotent(self, name):
        """clamp(clamp(p)) == clamp(p) for every field and extreme value."""
        for value in EXTREME_VALUES:
            once = ParameterSet(**{name: value}).clamp()
            assert once.clamp() == once
            assert once.is_clamped()

    @pytest.mark.parametrize("name", PARAMETER_ORDER)
    def test_clamp_bounds(self, name):
        """+inf and -inf clamp to the bounds, NaN to the default."""
        spec = PARAMETER_CONFIG.get_spec(name)
        assert getattr(ParameterSet(**{name: math.inf}).clamp(), name) == spec.max_value
        assert getattr(ParameterSet(**{name: -math.inf}).clamp(), name) == spec.min_value
        assert getattr(ParameterSet(**{name: math.nan}).clamp(), name) == spec.default

    def test_defaults_are_clamped_and_neutral(self):
        params = ParameterSet()
        assert params.is_clamped()
        assert params.is_neutral()
        assert params.clamp() == params

    def test_is_clamped_detects_out_of_range(self):
        assert not ParameterSet(exposure=9.0).is_clamped()
        assert ParameterSet(exposure=9.0).clamp().exposure == 5.0


class TestParameterSetOperations:
    """Test replace/merge/serialization helpers."""

    def test_frozen(self):
        params = ParameterSet()
        with pytest.raises(AttributeError):
            params.exposure = 1.0

    def test_replace(self):
        params = ParameterSet(exposure=0.5).replace(contrast=70.0)
        assert params.exposure == 0.5
        assert params.contrast == 70.0

    def test_merge_partial_patch(self):
        """Merging keeps unpatched fields and clamps patched ones."""
        base = ParameterSet(tint=10.0)
        merged = base.merge({"exposure": 7.0, "whites": 20.0})
        assert merged.tint == 10.0
        assert merged.exposure == 5.0
        assert merged.whites == 20.0

    def test_merge_empty_patch(self):
        base = ParameterSet(tint=10.0)
        assert base.merge({}) is base
        assert base.merge(None) is base

    def test_merge_unknown_field(self):
        with pytest.raises(ValueError, match="Unknown parameters"):
            ParameterSet().merge({"gamma": 1.2})

    def test_to_dict_from_dict(self):
        params = ParameterSet(temperature=4000.0, vibrance=25.0)
        data = params.to_dict()
        assert list(data) == list(PARAMETER_ORDER)
        assert ParameterSet.from_dict(data) == params

    def test_from_dict_clamps(self):
        params = ParameterSet.from_dict({"saturation": -500})
        assert params.saturation == -100.0

    def test_to_array_order(self):
        params = ParameterSet(temperature=3000.0, saturation=12.0)
        arr = params.to_array()
        assert arr.dtype == np.float64
        assert arr.shape == (10,)
        assert arr[0] == 3000.0
        assert arr[-1] == 12.0

    def test_field_names(self):
        assert ParameterSet.field_names() == PARAMETER_ORDER


class TestPresets:
    """Test preset lookup and loading."""

    def test_get_preset_case_insensitive(self):
        assert get_preset("Warm") == WARM
        assert get_preset("HIGH-CONTRAST") == get_preset("high_contrast")
        assert get_preset("golden hour") == get_preset("golden_hour")

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown preset"):
            get_preset("sepia")

    def test_presets_are_clamped(self):
        """Every shipped preset lies inside the declared ranges."""
        for name in list_presets():
            assert get_preset(name).is_clamped(), name

    def test_default_and_neutral(self):
        assert DEFAULT == ParameterSet()
        assert NEUTRAL.is_neutral()

    def test_from_dict_with_preset_base(self):
        params = parameters_from_dict({"preset": "warm", "exposure": 1.0})
        assert params.temperature == WARM.temperature
        assert params.exposure == 1.0

    def test_from_dict_unknown_key(self):
        with pytest.raises(ValueError):
            parameters_from_dict({"brightness": 1.2})

    def test_json_round_trip(self, tmp_path):
        """Saved parameters load back unchanged."""
        path = tmp_path / "look.json"
        params = ParameterSet(temperature=6500.0, tint=-12.0, contrast=65.0)
        save_parameters_json(params, path)

        assert json.loads(path.read_text())["tint"] == -12.0
        assert load_parameters_json(path) == params

    def test_json_partial_file(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"preset": "cool", "exposure": 99}))
        params = load_parameters_json(path)
        assert params.temperature == 8000.0
        assert params.exposure == 5.0
