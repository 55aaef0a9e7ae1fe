"""Parameter specifications for pipeline configuration.

This module defines the ParameterSpec dataclass that specifies the valid
range, default and identity value of each adjustment parameter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ParameterSpec:
    """Specification for one adjustment parameter.

    Attributes:
        name: Parameter name (e.g., "exposure", "temperature")
        min_value: Minimum allowed value
        max_value: Maximum allowed value
        default: Default value when not specified
        neutral: Value that causes no change (identity)
        unit: Display unit ("K", "EV" or "" for slider units)
        description: Human-readable description
    """

    name: str
    min_value: float
    max_value: float
    default: float
    neutral: float
    unit: str = ""
    description: str = ""

    def validate(self, value: float) -> float:
        """Clamp value to the allowed range.

        Infinite values clamp to the nearest bound; NaN and non-numeric
        values fall back to the default.

        :param value: Value to validate
        :returns: Clamped value within [min_value, max_value]
        """
        if isinstance(value, bool) or not isinstance(value, int | float):
            try:
                value = float(value)
            except (TypeError, ValueError):
                return self.default

        value = float(value)
        if math.isnan(value):
            return self.default

        return max(self.min_value, min(self.max_value, value))

    def in_range(self, value: float) -> bool:
        """Check if value already lies within the declared range.

        :param value: Value to check
        :returns: True if min_value <= value <= max_value
        """
        return self.min_value <= value <= self.max_value

    def is_neutral(self, value: float, tolerance: float = 1e-6) -> bool:
        """Check if value is effectively neutral (no change).

        :param value: Value to check
        :param tolerance: Tolerance for floating point comparison
        :returns: True if value is within tolerance of neutral
        """
        return abs(value - self.neutral) < tolerance

    def __repr__(self) -> str:
        return (
            f"ParameterSpec({self.name}, "
            f"range=[{self.min_value}, {self.max_value}], "
            f"default={self.default}, neutral={self.neutral})"
        )
