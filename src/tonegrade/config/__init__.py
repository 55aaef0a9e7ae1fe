"""Configuration module for tonegrade.

This module provides the parameter specifications, the ParameterSet value
type, render settings and the preset library.

Usage:
    from tonegrade.config import CONFIG
    CONFIG.parameters.exposure.max_value  # 5.0
    CONFIG.render.clip_fraction  # 0.005

    from tonegrade.config import ParameterSet, get_preset
    params = get_preset("warm").replace(exposure=0.3)
"""

from tonegrade.config.config import (
    CONFIG,
    PARAMETER_CONFIG,
    RENDER_CONFIG,
    TonegradeConfig,
)
from tonegrade.config.operations import ParameterSpec
from tonegrade.config.parameters import ParameterConfig
from tonegrade.config.presets import (
    COOL,
    DEFAULT,
    GOLDEN_HOUR,
    HIGH_CONTRAST,
    HIGH_KEY,
    LIFT_SHADOWS,
    LOW_CONTRAST,
    LOW_KEY,
    MONOCHROME,
    MUTED,
    NEUTRAL,
    RECOVER_HIGHLIGHTS,
    VIVID,
    WARM,
    get_preset,
    list_presets,
    load_parameters_json,
    parameters_from_dict,
    save_parameters_json,
)
from tonegrade.config.render import BACKENDS, RenderConfig
from tonegrade.config.values import DEFAULT_PARAMETERS, ParameterSet

__all__ = [
    # Configuration
    "CONFIG",
    "PARAMETER_CONFIG",
    "RENDER_CONFIG",
    "TonegradeConfig",
    "ParameterConfig",
    "ParameterSpec",
    "RenderConfig",
    "BACKENDS",
    # Values
    "ParameterSet",
    "DEFAULT_PARAMETERS",
    # Presets
    "DEFAULT",
    "NEUTRAL",
    "WARM",
    "COOL",
    "HIGH_CONTRAST",
    "LOW_CONTRAST",
    "VIVID",
    "MUTED",
    "MONOCHROME",
    "HIGH_KEY",
    "LOW_KEY",
    "RECOVER_HIGHLIGHTS",
    "LIFT_SHADOWS",
    "GOLDEN_HOUR",
    "get_preset",
    "list_presets",
    "parameters_from_dict",
    "load_parameters_json",
    "save_parameters_json",
]
