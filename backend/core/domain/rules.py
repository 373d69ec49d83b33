"""
Technique Rule Models

A technique is described by a flat list of joint rules. Each rule names
three landmarks (the angle is measured at the middle one) and the angle
a coach expects to see there.
"""

import math
from dataclasses import dataclass

from .errors import MalformedRuleConfiguration


@dataclass(frozen=True)
class TechniqueKey:
    """Identifies a technique inside a sport, e.g. ("Sprint", "Technique1")."""
    sport: str
    technique: str

    def __str__(self) -> str:
        return f"{self.sport}/{self.technique}"


@dataclass(frozen=True)
class JointRule:
    """
    A single evaluation unit.

    The angle is measured at `vertex` between the rays vertex -> joint_a
    and vertex -> joint_b.

    Attributes:
        joint_a: Landmark index of the first outer joint
        vertex: Landmark index of the joint where the angle is measured
        joint_b: Landmark index of the second outer joint
        expected_angle: Target angle in degrees (0-180)
        tolerance: Accepted deviation in degrees (> 0)

    Raises:
        MalformedRuleConfiguration: on construction with invalid values
    """
    joint_a: int
    vertex: int
    joint_b: int
    expected_angle: float
    tolerance: float

    def __post_init__(self):
        for name in ("joint_a", "vertex", "joint_b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise MalformedRuleConfiguration(
                    f"{name} must be a non-negative integer, got {value!r}"
                )

        if not _is_number(self.expected_angle) or not 0.0 <= self.expected_angle <= 180.0:
            raise MalformedRuleConfiguration(
                f"expected_angle must be within [0, 180], got {self.expected_angle!r}"
            )

        if not _is_number(self.tolerance) or self.tolerance <= 0.0:
            raise MalformedRuleConfiguration(
                f"tolerance must be a positive number of degrees, got {self.tolerance!r}"
            )

    @property
    def joints(self) -> tuple[int, int, int]:
        """The three landmark indices as (joint_a, vertex, joint_b)."""
        return (self.joint_a, self.vertex, self.joint_b)

    def governs(self, start: int, end: int) -> bool:
        """True if the connection start-end joins two of this rule's joints."""
        joints = self.joints
        return start != end and start in joints and end in joints


@dataclass(frozen=True)
class RuleSet:
    """
    Immutable snapshot of the rules for one technique.

    Rule sets are replaced wholesale when the technique changes.
    """
    key: TechniqueKey
    rules: tuple[JointRule, ...] = ()

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)


@dataclass(frozen=True)
class EvaluationResult:
    """
    Outcome of one rule on one frame.

    Attributes:
        rule: The rule that was evaluated
        rule_index: Position of the rule in the evaluated rule list
        angle: Measured angle at the vertex in degrees
        deviation: |angle - expected_angle|
        within_tolerance: deviation <= tolerance (inclusive)
    """
    rule: JointRule
    rule_index: int
    angle: float
    deviation: float
    within_tolerance: bool


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value) and not math.isinf(value)
