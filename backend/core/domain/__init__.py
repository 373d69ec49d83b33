"""
Domain Models

Pure data structures for pose landmarks, technique rules and draw plans.
No external dependencies - just Python dataclasses and enums.
"""

from .pose import PoseLandmark, PoseFrame, BodyPart, RunningMode, POSE_CONNECTIONS
from .rules import TechniqueKey, JointRule, RuleSet, EvaluationResult
from .overlay import (
    Color,
    FitMode,
    Viewport,
    ScaleTransform,
    ScreenPoint,
    DrawLine,
    DrawLabel,
    DrawPlan,
)
from .errors import (
    OverlayError,
    InvalidJointIndex,
    DegenerateViewport,
    MalformedRuleConfiguration,
    UnknownTechnique,
)

__all__ = [
    "PoseLandmark",
    "PoseFrame",
    "BodyPart",
    "RunningMode",
    "POSE_CONNECTIONS",
    "TechniqueKey",
    "JointRule",
    "RuleSet",
    "EvaluationResult",
    "Color",
    "FitMode",
    "Viewport",
    "ScaleTransform",
    "ScreenPoint",
    "DrawLine",
    "DrawLabel",
    "DrawPlan",
    "OverlayError",
    "InvalidJointIndex",
    "DegenerateViewport",
    "MalformedRuleConfiguration",
    "UnknownTechnique",
]
