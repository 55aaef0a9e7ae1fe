"""Preset library for tonegrade parameters.

Provides pre-configured ParameterSet objects for common looks,
with support for loading from dict and JSON.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from tonegrade.config.values import ParameterSet

logger = logging.getLogger(__name__)

# ============================================================================
# Reference settings
# ============================================================================

DEFAULT = ParameterSet()

# Settings used to render the untouched "original" view
NEUTRAL = ParameterSet(temperature=5500.0, contrast=50.0)

# ============================================================================
# Looks
# ============================================================================

WARM = ParameterSet(temperature=4200.0, tint=5.0)

COOL = ParameterSet(temperature=8000.0, tint=-5.0)

HIGH_CONTRAST = ParameterSet(contrast=70.0, whites=15.0, blacks=-15.0)

LOW_CONTRAST = ParameterSet(contrast=35.0, highlights=-20.0, shadows=20.0)

VIVID = ParameterSet(vibrance=40.0, saturation=15.0, contrast=55.0)

MUTED = ParameterSet(vibrance=-30.0, saturation=-20.0, contrast=45.0)

MONOCHROME = ParameterSet(saturation=-100.0, contrast=60.0)

HIGH_KEY = ParameterSet(exposure=0.7, shadows=30.0, highlights=-20.0, contrast=40.0)

LOW_KEY = ParameterSet(exposure=-0.7, blacks=-25.0, contrast=60.0)

RECOVER_HIGHLIGHTS = ParameterSet(highlights=-60.0, whites=-30.0)

LIFT_SHADOWS = ParameterSet(shadows=50.0, blacks=20.0)

GOLDEN_HOUR = ParameterSet(temperature=3800.0, exposure=0.2, vibrance=20.0)

_PRESETS: dict[str, ParameterSet] = {
    "default": DEFAULT,
    "neutral": NEUTRAL,
    "warm": WARM,
    "cool": COOL,
    "high_contrast": HIGH_CONTRAST,
    "low_contrast": LOW_CONTRAST,
    "vivid": VIVID,
    "muted": MUTED,
    "monochrome": MONOCHROME,
    "high_key": HIGH_KEY,
    "low_key": LOW_KEY,
    "recover_highlights": RECOVER_HIGHLIGHTS,
    "lift_shadows": LIFT_SHADOWS,
    "golden_hour": GOLDEN_HOUR,
}


def list_presets() -> list[str]:
    """List available preset names.

    :returns: Sorted preset names
    """
    return sorted(_PRESETS)


def get_preset(name: str) -> ParameterSet:
    """Get a preset by name (case-insensitive).

    :param name: Preset name
    :returns: ParameterSet for the preset
    :raises ValueError: If preset name is unknown
    """
    key = name.lower().replace("-", "_").replace(" ", "_")
    if key not in _PRESETS:
        raise ValueError(f"Unknown preset: {name!r}. Available: {', '.join(list_presets())}")
    return _PRESETS[key]


def parameters_from_dict(data: Mapping[str, float]) -> ParameterSet:
    """Create ParameterSet from a dictionary.

    A "preset" key, if present, selects the base preset that the remaining
    keys override.

    :param data: Dictionary with parameter values
    :returns: Clamped ParameterSet
    :raises ValueError: If the dictionary names an unknown parameter or preset
    """
    data = dict(data)
    base = get_preset(data.pop("preset")) if "preset" in data else DEFAULT
    return base.merge(data)


def load_parameters_json(path: str | Path) -> ParameterSet:
    """Load parameters from a JSON file.

    :param path: Path to JSON file
    :returns: Clamped ParameterSet
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    logger.debug("Loaded parameters from %s", path)
    return parameters_from_dict(data)


def save_parameters_json(params: ParameterSet, path: str | Path) -> None:
    """Save parameters to a JSON file.

    :param params: Parameters to save
    :param path: Destination path
    """
    path = Path(path)
    with path.open("w", encoding="utf-8") as f:
        json.dump(params.to_dict(), f, indent=2)
    logger.debug("Saved parameters to %s", path)
