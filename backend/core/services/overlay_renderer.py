"""
Overlay Renderer Service

Builds the draw plan for one frame: landmark points, skeleton lines and
angle labels, with rule-governed lines colored by how far the measured
angle is from the expected one.

This is the main entry point for turning landmarks into feedback.
"""

import logging
from typing import Iterable, Optional, Sequence

from ..config import OverlayConfig, get_config
from ..domain.pose import PoseFrame, POSE_CONNECTIONS
from ..domain.rules import JointRule, EvaluationResult
from ..domain.overlay import (
    Viewport,
    ScreenPoint,
    DrawLine,
    DrawLabel,
    DrawPlan,
)
from ..domain.errors import DegenerateViewport
from .coordinate_mapper import CoordinateMapper
from .rule_evaluator import RuleEvaluator
from .colorizer import DeviationColorizer

logger = logging.getLogger(__name__)


class OverlayRenderer:
    """
    Composes coordinate mapping, rule evaluation and coloring into a
    DrawPlan.

    The renderer holds only styling; it keeps no per-frame state. Every
    per-frame problem degrades to "draw less": a degenerate viewport gives
    an empty plan, a rule that can't be evaluated leaves its connections
    neutral and unlabeled.

    Usage:
        renderer = OverlayRenderer()
        plan = renderer.build_draw_plan(frame, rule_set.rules, Viewport(1080, 1920))
        for line in plan.lines:
            canvas.draw_line(line.start, line.end, line.color)
    """

    def __init__(self, config: Optional[OverlayConfig] = None):
        self.config = config or get_config()
        self.colorizer = DeviationColorizer(
            good=self.config.colors.good,
            bad=self.config.colors.bad,
        )

    def build_draw_plan(
        self,
        frame: PoseFrame,
        rules: Iterable[JointRule],
        viewport: Viewport,
        topology: Sequence[tuple[int, int]] = POSE_CONNECTIONS,
    ) -> DrawPlan:
        """
        Build the draw plan for one frame.

        Args:
            frame: Landmarks plus source image size and running mode
            rules: Active rules (a snapshot, read once)
            viewport: Destination size in pixels
            topology: Skeleton connections as (start, end) index pairs

        Returns:
            DrawPlan (empty if the image or viewport is degenerate)
        """
        try:
            transform = CoordinateMapper.transform_for(frame, viewport)
        except DegenerateViewport as e:
            logger.warning(f"Skipping frame {frame.frame_number}: {e}")
            return DrawPlan.empty()

        points = CoordinateMapper.map_all(frame, transform)
        results = RuleEvaluator.evaluate(frame, tuple(rules))

        lines = []
        labels = []
        style = self.config.style
        colors = self.config.colors

        for start, end in topology:
            if not (frame.has_index(start) and frame.has_index(end)):
                continue

            result = self._governing_result(results, start, end)
            if result is None:
                lines.append(DrawLine(
                    start_index=start,
                    end_index=end,
                    start=points[start],
                    end=points[end],
                    color=colors.neutral,
                    stroke_width=style.stroke_width,
                ))
                continue

            lines.append(DrawLine(
                start_index=start,
                end_index=end,
                start=points[start],
                end=points[end],
                color=self.colorizer.color_for(result.deviation, result.rule.tolerance),
                stroke_width=style.stroke_width,
                rule_index=result.rule_index,
            ))
            labels.append(DrawLabel(
                text=f"{result.angle:.1f}",
                anchor=ScreenPoint(points[start].x, points[start].y),
                color=colors.label,
                text_size=style.text_size,
                rule_index=result.rule_index,
            ))

        return DrawPlan(
            points=tuple(points),
            lines=tuple(lines),
            labels=tuple(labels),
            evaluations=tuple(results),
            point_color=colors.point,
            point_size=style.point_size,
            scale=transform,
        )

    @staticmethod
    def _governing_result(
        results: Sequence[EvaluationResult],
        start: int,
        end: int,
    ) -> Optional[EvaluationResult]:
        """First evaluated rule (in rule order) whose joints include both ends."""
        for result in results:
            if result.rule.governs(start, end):
                return result
        return None
