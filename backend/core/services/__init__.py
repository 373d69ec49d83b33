"""
Services Layer

Business logic for pose-angle evaluation and overlay rendering.
These services orchestrate domain models; none of them run pose detection.
"""

from .coordinate_mapper import CoordinateMapper
from .angle_calculator import AngleCalculator
from .rule_evaluator import RuleEvaluator
from .colorizer import DeviationColorizer
from .overlay_renderer import OverlayRenderer
from .technique_catalog import TechniqueCatalog, normalize_rule, normalize_rules
from .overlay_session import ActiveRuleSet, OverlaySession
from .plan_painter import PlanPainter

__all__ = [
    "CoordinateMapper",
    "AngleCalculator",
    "RuleEvaluator",
    "DeviationColorizer",
    "OverlayRenderer",
    "TechniqueCatalog",
    "normalize_rule",
    "normalize_rules",
    "ActiveRuleSet",
    "OverlaySession",
    "PlanPainter",
]
