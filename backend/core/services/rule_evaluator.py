"""
Rule Evaluator Service

Measures each rule's joint angle on a frame and compares it with the
expected angle.
"""

import logging
import math
from typing import Iterable

from ..domain.pose import PoseFrame
from ..domain.rules import JointRule, EvaluationResult
from ..domain.errors import InvalidJointIndex
from .angle_calculator import AngleCalculator

logger = logging.getLogger(__name__)


class RuleEvaluator:
    """
    Evaluates a rule set against one frame of landmarks.

    Results come back in rule order. A rule that references a landmark
    the frame doesn't have, or whose landmarks give no finite angle, is
    skipped for that frame - it is left out of the results rather than
    reported as a zero angle.

    Usage:
        results = RuleEvaluator.evaluate(frame, rule_set.rules)
        for result in results:
            print(result.angle, result.within_tolerance)
    """

    @staticmethod
    def evaluate_rule(frame: PoseFrame, rule: JointRule, rule_index: int = 0) -> EvaluationResult:
        """
        Evaluate a single rule.

        Raises:
            InvalidJointIndex: if the frame lacks one of the rule's landmarks
        """
        angle = AngleCalculator.angle_for(
            frame.landmarks, rule.joint_a, rule.vertex, rule.joint_b
        )
        deviation = abs(angle - rule.expected_angle)

        return EvaluationResult(
            rule=rule,
            rule_index=rule_index,
            angle=angle,
            deviation=deviation,
            within_tolerance=deviation <= rule.tolerance,
        )

    @classmethod
    def evaluate(cls, frame: PoseFrame, rules: Iterable[JointRule]) -> list[EvaluationResult]:
        """
        Evaluate every rule that can be computed on this frame.

        Args:
            frame: Landmarks for the current frame
            rules: Active rules, in definition order

        Returns:
            One EvaluationResult per computable rule, in rule order
        """
        results = []

        for index, rule in enumerate(rules):
            try:
                result = cls.evaluate_rule(frame, rule, index)
            except InvalidJointIndex as e:
                logger.warning(f"Skipping rule {index} {rule.joints} for frame {frame.frame_number}: {e}")
                continue

            if not math.isfinite(result.angle):
                logger.warning(f"Skipping rule {index} {rule.joints} for frame {frame.frame_number}: angle is not finite")
                continue

            logger.debug(
                f"Rule {index} {rule.joints}: angle={result.angle:.1f} "
                f"expected={rule.expected_angle:.1f} deviation={result.deviation:.1f}"
            )
            results.append(result)

        return results
