"""Adjustment parameter configuration.

This module defines the standardized ranges and defaults of the ten
adjustment parameters, shared by the CPU and GPU pipelines.
"""

from __future__ import annotations

from dataclasses import dataclass

from tonegrade.config.operations import ParameterSpec
from tonegrade.constants import PARAMETER_ORDER


@dataclass(frozen=True)
class ParameterConfig:
    """Configuration for all adjustment parameters.

    Ranges match the editor sliders; defaults are the identity settings
    except for temperature, whose default is the 5500 K reference daylight.
    """

    temperature: ParameterSpec = ParameterSpec(
        name="temperature",
        min_value=2000.0,
        max_value=12000.0,
        default=5500.0,
        neutral=5500.0,
        unit="K",
        description="White balance color temperature in Kelvin",
    )

    tint: ParameterSpec = ParameterSpec(
        name="tint",
        min_value=-150.0,
        max_value=150.0,
        default=0.0,
        neutral=0.0,
        description="Green/magenta balance: >0 raises green, <0 raises red and blue",
    )

    exposure: ParameterSpec = ParameterSpec(
        name="exposure",
        min_value=-5.0,
        max_value=5.0,
        default=0.0,
        neutral=0.0,
        unit="EV",
        description="Exposure in stops: +1 doubles linear brightness",
    )

    highlights: ParameterSpec = ParameterSpec(
        name="highlights",
        min_value=-100.0,
        max_value=100.0,
        default=0.0,
        neutral=0.0,
        description="Recovery strength for bright tones",
    )

    shadows: ParameterSpec = ParameterSpec(
        name="shadows",
        min_value=-100.0,
        max_value=100.0,
        default=0.0,
        neutral=0.0,
        description="Recovery strength for dark tones",
    )

    whites: ParameterSpec = ParameterSpec(
        name="whites",
        min_value=-100.0,
        max_value=100.0,
        default=0.0,
        neutral=0.0,
        description="White point shift",
    )

    blacks: ParameterSpec = ParameterSpec(
        name="blacks",
        min_value=-100.0,
        max_value=100.0,
        default=0.0,
        neutral=0.0,
        description="Black point shift",
    )

    contrast: ParameterSpec = ParameterSpec(
        name="contrast",
        min_value=0.0,
        max_value=100.0,
        default=50.0,
        neutral=50.0,
        description="Mid-gray pivoted contrast: 50=no change, 0=flat, 100=double",
    )

    vibrance: ParameterSpec = ParameterSpec(
        name="vibrance",
        min_value=-100.0,
        max_value=100.0,
        default=0.0,
        neutral=0.0,
        description="Saturation boost weighted toward muted colors",
    )

    saturation: ParameterSpec = ParameterSpec(
        name="saturation",
        min_value=-100.0,
        max_value=100.0,
        default=0.0,
        neutral=0.0,
        description="Global saturation: -100=grayscale",
    )

    def get_spec(self, name: str) -> ParameterSpec:
        """Get parameter spec by name.

        :param name: Parameter name
        :return: ParameterSpec for the parameter
        :raises KeyError: If parameter not found
        """
        if name not in PARAMETER_ORDER:
            raise KeyError(f"Unknown parameter: {name!r}")
        return getattr(self, name)

    def get_all_specs(self) -> dict[str, ParameterSpec]:
        """Get all parameter specs as a dictionary, in pipeline order.

        :return: Dictionary mapping parameter names to specs
        """
        return {name: getattr(self, name) for name in PARAMETER_ORDER}


# Singleton instance for use throughout the codebase
PARAMETER_CONFIG = ParameterConfig()
