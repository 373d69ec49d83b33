"""
API Schemas

Pydantic models for request/response validation.
"""

from .pose import (
    RunningModeEnum,
    LandmarkSchema,
    PoseFrameSchema,
    ViewportSchema,
    WebSocketMessageType,
    WebSocketMessage,
    FrameMessage,
    SelectTechniqueMessage,
)

from .overlay import (
    RuleRecordSchema,
    TechniqueSchema,
    TechniqueListResponse,
    OverlayRequest,
    EvaluationResultSchema,
    EvaluationResponse,
    PointSchema,
    DrawLineSchema,
    DrawLabelSchema,
    DrawPlanSchema,
    HealthResponse,
)

__all__ = [
    # Pose schemas
    "RunningModeEnum",
    "LandmarkSchema",
    "PoseFrameSchema",
    "ViewportSchema",
    "WebSocketMessageType",
    "WebSocketMessage",
    "FrameMessage",
    "SelectTechniqueMessage",
    # Overlay schemas
    "RuleRecordSchema",
    "TechniqueSchema",
    "TechniqueListResponse",
    "OverlayRequest",
    "EvaluationResultSchema",
    "EvaluationResponse",
    "PointSchema",
    "DrawLineSchema",
    "DrawLabelSchema",
    "DrawPlanSchema",
    "HealthResponse",
]
