"""
Deviation Colorizer Service

Turns an angle deviation into a feedback color: the "good" color when the
measured angle matches, sliding linearly to the "bad" color as the
deviation approaches the tolerance.
"""

import math

import numpy as np

from ..domain.overlay import Color, GREEN, RED
from ..domain.errors import MalformedRuleConfiguration


class DeviationColorizer:
    """
    Per-channel linear blend between two colors.

    fraction = clamp(deviation / tolerance, 0, 1)

    Deviations past the tolerance saturate at the "bad" color.
    """

    def __init__(self, good: Color = GREEN, bad: Color = RED):
        self.good = good
        self.bad = bad
        self._good = np.array([good.r, good.g, good.b, good.a], dtype=float)
        self._bad = np.array([bad.r, bad.g, bad.b, bad.a], dtype=float)

    @staticmethod
    def fraction(deviation: float, tolerance: float) -> float:
        """
        Normalized deviation in [0, 1].

        Raises:
            MalformedRuleConfiguration: if tolerance is not a positive number
        """
        if math.isnan(tolerance) or tolerance <= 0:
            raise MalformedRuleConfiguration(f"tolerance must be positive, got {tolerance!r}")
        if math.isnan(deviation):
            raise ValueError("deviation is NaN")

        return min(max(abs(deviation) / tolerance, 0.0), 1.0)

    def color_for(self, deviation: float, tolerance: float) -> Color:
        """Blend between good and bad for this deviation."""
        fraction = self.fraction(deviation, tolerance)
        blended = self._good + fraction * (self._bad - self._good)
        r, g, b, a = (int(round(c)) for c in blended)
        return Color(r, g, b, a)
