"""
Schema Converters

Conversions between API schemas and core domain models, shared by the
REST routes and the WebSocket handler.
"""

from core.domain.pose import PoseLandmark, PoseFrame, RunningMode
from core.domain.rules import JointRule, RuleSet, EvaluationResult
from core.domain.overlay import DrawPlan, ScreenPoint, Viewport
from core.services import normalize_rules

from .schemas import (
    PoseFrameSchema,
    ViewportSchema,
    RuleRecordSchema,
    TechniqueSchema,
    EvaluationResultSchema,
    PointSchema,
    DrawLineSchema,
    DrawLabelSchema,
    DrawPlanSchema,
)


def frame_from_schema(schema: PoseFrameSchema) -> PoseFrame:
    """Convert an API frame into the domain PoseFrame."""
    return PoseFrame(
        landmarks=tuple(
            PoseLandmark(x=lm.x, y=lm.y, z=lm.z, visibility=lm.visibility)
            for lm in schema.landmarks
        ),
        image_width=schema.image_width,
        image_height=schema.image_height,
        running_mode=RunningMode(schema.running_mode.value),
        frame_number=schema.frame_number,
        timestamp_ms=schema.timestamp_ms,
    )


def viewport_from_schema(schema: ViewportSchema) -> Viewport:
    return Viewport(width=schema.width, height=schema.height)


def rules_from_schema(records: list[RuleRecordSchema], default_tolerance: float) -> tuple[JointRule, ...]:
    """
    Normalize inline rule records.

    Raises:
        MalformedRuleConfiguration: on invalid indices, angles or tolerances
    """
    return normalize_rules(
        (record.model_dump(by_alias=True, exclude_none=True) for record in records),
        default_tolerance,
    )


def rule_to_schema(rule: JointRule) -> RuleRecordSchema:
    return RuleRecordSchema(
        joint1=rule.joint_a,
        joint2=rule.vertex,
        joint3=rule.joint_b,
        expected_angle=rule.expected_angle,
        tolerance=rule.tolerance,
    )


def rule_set_to_schema(rule_set: RuleSet) -> TechniqueSchema:
    return TechniqueSchema(
        sport=rule_set.key.sport,
        technique=rule_set.key.technique,
        rules=[rule_to_schema(rule) for rule in rule_set.rules],
    )


def result_to_schema(result: EvaluationResult) -> EvaluationResultSchema:
    rule = result.rule
    return EvaluationResultSchema(
        rule_index=result.rule_index,
        joint1=rule.joint_a,
        joint2=rule.vertex,
        joint3=rule.joint_b,
        expected_angle=rule.expected_angle,
        tolerance=rule.tolerance,
        angle=result.angle,
        deviation=result.deviation,
        within_tolerance=result.within_tolerance,
    )


def _point(point: ScreenPoint) -> PointSchema:
    return PointSchema(x=point.x, y=point.y)


def plan_to_schema(plan: DrawPlan, frame_number: int = 0) -> DrawPlanSchema:
    """Convert a domain DrawPlan to its JSON form."""
    return DrawPlanSchema(
        frame_number=frame_number,
        scale=plan.scale.scale if plan.scale else None,
        point_color=plan.point_color.hex,
        point_size=plan.point_size,
        points=[_point(p) for p in plan.points],
        lines=[
            DrawLineSchema(
                start_index=line.start_index,
                end_index=line.end_index,
                start=_point(line.start),
                end=_point(line.end),
                color=line.color.hex,
                stroke_width=line.stroke_width,
                rule_index=line.rule_index,
            )
            for line in plan.lines
        ],
        labels=[
            DrawLabelSchema(
                text=label.text,
                anchor=_point(label.anchor),
                color=label.color.hex,
                text_size=label.text_size,
                rule_index=label.rule_index,
            )
            for label in plan.labels
        ],
        evaluations=[result_to_schema(r) for r in plan.evaluations],
    )
