"""
Overlay Errors

Exception types raised by the overlay core.

Per-frame errors (InvalidJointIndex, DegenerateViewport) are contained
inside the evaluator and renderer. Configuration errors
(MalformedRuleConfiguration, UnknownTechnique) are surfaced to the caller.
"""

from typing import Optional


class OverlayError(Exception):
    """Base class for all overlay errors."""


class InvalidJointIndex(OverlayError):
    """A rule references a landmark index not present in the frame."""

    def __init__(self, index: int, landmark_count: int):
        self.index = index
        self.landmark_count = landmark_count
        super().__init__(
            f"Joint index {index} out of range for frame with {landmark_count} landmarks"
        )


class DegenerateViewport(OverlayError):
    """Image or viewport has a zero/negative dimension."""


class MalformedRuleConfiguration(OverlayError):
    """A rule definition is invalid (bad tolerance, angle or joint index)."""


class UnknownTechnique(OverlayError, KeyError):
    """No rule set is registered for the requested (sport, technique)."""

    def __init__(self, sport: str, technique: Optional[str] = None):
        self.sport = sport
        self.technique = technique
        if technique is None:
            message = f"Unknown sport: {sport}"
        else:
            message = f"Unknown technique: {sport}/{technique}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]
