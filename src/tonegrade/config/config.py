"""Unified tonegrade configuration.

This module provides a top-level configuration dataclass that contains
the parameter specifications and the render settings as sub-attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tonegrade.config.parameters import ParameterConfig
from tonegrade.config.render import RenderConfig


@dataclass(frozen=True)
class TonegradeConfig:
    """Top-level configuration.

    Provides hierarchical access:
        CONFIG.parameters.exposure.max_value
        CONFIG.render.clip_fraction

    Attributes:
        parameters: Adjustment parameter specifications
        render: Render and analysis settings
    """

    parameters: ParameterConfig = ParameterConfig()
    render: RenderConfig = RenderConfig()

    def get_all_specs(self) -> dict[str, Any]:
        """Get all parameter specs and render settings.

        :return: Nested dictionary of all settings
        """
        return {
            "parameters": self.parameters.get_all_specs(),
            "render": self.render,
        }


# Main singleton instance
CONFIG = TonegradeConfig()

PARAMETER_CONFIG = CONFIG.parameters
RENDER_CONFIG = CONFIG.render
