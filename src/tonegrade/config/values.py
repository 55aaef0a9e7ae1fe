"""Adjustment parameter values.

This module provides the ParameterSet dataclass, the single flat set of
ten adjustment values that drives the color pipeline.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields, replace

import numpy as np

from tonegrade.config.parameters import PARAMETER_CONFIG
from tonegrade.constants import PARAMETER_ORDER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParameterSet:
    """Adjustment values for one render.

    Field ranges and defaults come from PARAMETER_CONFIG. Instances are
    immutable; use replace() or merge() to derive new settings.

    Example:
        >>> params = ParameterSet(exposure=0.5, contrast=60)
        >>> warmer = params.replace(temperature=4500)
        >>> warmer.merge({"whites": 20}).to_dict()["whites"]
        20.0
    """

    # White balance
    temperature: float = 5500.0  # Kelvin, 2000 to 12000
    tint: float = 0.0  # -150 (red/blue) to 150 (green)

    # Light
    exposure: float = 0.0  # EV, -5 to 5
    highlights: float = 0.0
    shadows: float = 0.0
    whites: float = 0.0
    blacks: float = 0.0

    # Color
    contrast: float = 50.0  # 0 to 100, 50 = no change
    vibrance: float = 0.0
    saturation: float = 0.0

    def clamp(self) -> ParameterSet:
        """Clamp all values to valid ranges.

        NaN values fall back to the field default.

        :returns: New ParameterSet with clamped values
        """
        values = {}
        for name, spec in PARAMETER_CONFIG.get_all_specs().items():
            raw = getattr(self, name)
            value = spec.validate(raw)
            if value != raw:
                logger.debug("[ParameterSet] Clamped %s=%r to %r", name, raw, value)
            values[name] = value
        return ParameterSet(**values)

    def is_clamped(self) -> bool:
        """Check if every value already lies inside its declared range.

        :returns: True if clamp() would return equal values
        """
        return all(
            spec.in_range(getattr(self, name))
            for name, spec in PARAMETER_CONFIG.get_all_specs().items()
        )

    def is_neutral(self) -> bool:
        """Check if all values are neutral (no-op).

        :returns: True if applying these values would have no effect
        """
        return all(
            spec.is_neutral(getattr(self, name))
            for name, spec in PARAMETER_CONFIG.get_all_specs().items()
        )

    def replace(self, **changes: float) -> ParameterSet:
        """Return a copy with the given fields replaced.

        :param changes: Field values to replace
        :returns: New ParameterSet
        :raises TypeError: If a field name is unknown
        """
        return replace(self, **changes)

    def merge(self, patch: Mapping[str, float] | None) -> ParameterSet:
        """Merge a partial patch (e.g. an auto-adjust result) into these values.

        Patch values are clamped to their ranges; fields missing from the
        patch keep their current values.

        :param patch: Mapping of field name to new value
        :returns: New ParameterSet
        :raises ValueError: If the patch names an unknown field
        """
        if not patch:
            return self

        unknown = set(patch) - set(PARAMETER_ORDER)
        if unknown:
            raise ValueError(f"Unknown parameters in patch: {sorted(unknown)}")

        clamped = {
            name: PARAMETER_CONFIG.get_spec(name).validate(value) for name, value in patch.items()
        }
        return replace(self, **clamped)

    def to_dict(self) -> dict[str, float]:
        """Convert to a plain dictionary.

        :returns: Dict mapping field name to float value
        """
        return {name: float(value) for name, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, float]) -> ParameterSet:
        """Create ParameterSet from a (possibly partial) dictionary.

        Missing fields take their defaults; values are clamped.

        :param data: Mapping of field name to value
        :returns: Clamped ParameterSet
        :raises ValueError: If the mapping names an unknown field
        """
        return cls().merge(data)

    def to_array(self) -> np.ndarray:
        """Pack values into a float64 vector in pipeline order.

        :returns: Array of shape [10]
        """
        return np.array([getattr(self, name) for name in PARAMETER_ORDER], dtype=np.float64)

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


DEFAULT_PARAMETERS = ParameterSet()
