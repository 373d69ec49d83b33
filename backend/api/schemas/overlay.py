"""
Overlay API Schemas

Pydantic models for technique rules, evaluation results and draw plans.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, List

from .pose import PoseFrameSchema, ViewportSchema


class RuleRecordSchema(BaseModel):
    """
    Technique rule in catalog form.

    The angle is measured at joint2, between joint1 and joint3.
    """
    joint1: int = Field(..., description="First outer landmark index")
    joint2: int = Field(..., description="Vertex landmark index")
    joint3: int = Field(..., description="Second outer landmark index")
    expected_angle: float = Field(..., alias="expectedAngle", description="Expected angle (degrees)")
    tolerance: Optional[float] = Field(None, description="Accepted deviation (degrees)")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "joint1": 24,
                "joint2": 26,
                "joint3": 28,
                "expectedAngle": 90,
                "tolerance": 30
            }
        }


class TechniqueSchema(BaseModel):
    """All rules of one technique."""
    sport: str
    technique: str
    rules: List[RuleRecordSchema]


class TechniqueListResponse(BaseModel):
    """Names available at one level of the catalog."""
    sport: Optional[str] = Field(None, description="Sport the names belong to (null for the sport list)")
    names: List[str] = Field(..., description="Sport or technique names")


class OverlayRequest(BaseModel):
    """
    Request to evaluate a frame or build its draw plan.

    Rules come either from the catalog (sport + technique) or inline.
    """
    frame: PoseFrameSchema
    viewport: Optional[ViewportSchema] = Field(None, description="Required for draw plans")
    sport: Optional[str] = Field(None, description="Catalog sport")
    technique: Optional[str] = Field(None, description="Catalog technique")
    rules: Optional[List[RuleRecordSchema]] = Field(None, description="Inline rules (override catalog)")

    @model_validator(mode="after")
    def check_rule_source(self):
        if self.rules is None and not (self.sport and self.technique):
            raise ValueError("Provide either inline rules or both sport and technique")
        return self


class EvaluationResultSchema(BaseModel):
    """Outcome of one rule on one frame."""
    rule_index: int = Field(..., description="Position of the rule in the rule list")
    joint1: int
    joint2: int
    joint3: int
    expected_angle: float
    tolerance: float
    angle: float = Field(..., description="Measured angle at joint2 (degrees)")
    deviation: float = Field(..., description="|angle - expected_angle|")
    within_tolerance: bool


class EvaluationResponse(BaseModel):
    frame_number: int
    results: List[EvaluationResultSchema]


class PointSchema(BaseModel):
    x: float
    y: float


class DrawLineSchema(BaseModel):
    start_index: int
    end_index: int
    start: PointSchema
    end: PointSchema
    color: str = Field(..., description="#AARRGGBB")
    stroke_width: float
    rule_index: Optional[int] = Field(None, description="Governing rule, null for neutral lines")


class DrawLabelSchema(BaseModel):
    text: str
    anchor: PointSchema
    color: str = Field(..., description="#AARRGGBB")
    text_size: float
    rule_index: int


class DrawPlanSchema(BaseModel):
    """
    Everything the client needs to paint the overlay.

    Coordinates are viewport pixels.
    """
    frame_number: int = 0
    scale: Optional[float] = Field(None, description="Uniform scale factor, null for an empty plan")
    point_color: str
    point_size: float
    points: List[PointSchema] = Field(default_factory=list)
    lines: List[DrawLineSchema] = Field(default_factory=list)
    labels: List[DrawLabelSchema] = Field(default_factory=list)
    evaluations: List[EvaluationResultSchema] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """
    Health check response.
    """
    status: str = Field("healthy", description="Service status")
    version: str = Field(..., description="API version")
    techniques_loaded: int = Field(..., description="Number of techniques in the catalog")
