"""
REST API Routes

FastAPI routes for technique lookup, angle evaluation and overlay plans.
Landmarks arrive already detected; these routes never run pose detection.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from .schemas import (
    OverlayRequest,
    TechniqueSchema,
    TechniqueListResponse,
    EvaluationResponse,
    DrawPlanSchema,
    HealthResponse,
)
from .converters import (
    frame_from_schema,
    viewport_from_schema,
    rules_from_schema,
    rule_set_to_schema,
    result_to_schema,
    plan_to_schema,
)
from .deps import get_catalog, get_overlay_config
from core.config import OverlayConfig
from core.domain.rules import JointRule
from core.domain.errors import MalformedRuleConfiguration, UnknownTechnique
from core.services import TechniqueCatalog, RuleEvaluator, OverlayRenderer

# Configure logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

API_VERSION = "1.0.0"


# =============================================================================
# Health Check
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check endpoint"
)
async def health_check(catalog: TechniqueCatalog = Depends(get_catalog)) -> HealthResponse:
    """
    Check if the API is running and the technique catalog is loaded.
    """
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        techniques_loaded=len(catalog)
    )


# =============================================================================
# Technique Catalog
# =============================================================================

@router.get(
    "/techniques",
    response_model=TechniqueListResponse,
    tags=["Techniques"],
    summary="List sports"
)
async def list_sports(catalog: TechniqueCatalog = Depends(get_catalog)) -> TechniqueListResponse:
    return TechniqueListResponse(sport=None, names=catalog.sports())


@router.get(
    "/techniques/{sport}",
    response_model=TechniqueListResponse,
    tags=["Techniques"],
    summary="List techniques of a sport"
)
async def list_techniques(
    sport: str,
    catalog: TechniqueCatalog = Depends(get_catalog)
) -> TechniqueListResponse:
    try:
        names = catalog.techniques(sport)
    except UnknownTechnique as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TechniqueListResponse(sport=sport, names=names)


@router.get(
    "/techniques/{sport}/{technique}",
    response_model=TechniqueSchema,
    tags=["Techniques"],
    summary="Get the rules of a technique"
)
async def get_technique(
    sport: str,
    technique: str,
    catalog: TechniqueCatalog = Depends(get_catalog)
) -> TechniqueSchema:
    try:
        rule_set = catalog.rule_set(sport, technique)
    except UnknownTechnique as e:
        raise HTTPException(status_code=404, detail=str(e))
    return rule_set_to_schema(rule_set)


# =============================================================================
# Overlay
# =============================================================================

@router.post(
    "/overlay/evaluate",
    response_model=EvaluationResponse,
    tags=["Overlay"],
    summary="Measure rule angles on one frame"
)
async def evaluate_frame(
    request: OverlayRequest,
    catalog: TechniqueCatalog = Depends(get_catalog),
    config: OverlayConfig = Depends(get_overlay_config),
) -> EvaluationResponse:
    """
    Evaluate every rule on the frame.

    Rules the frame can't satisfy (missing landmarks) are left out.
    """
    rules = _resolve_rules(request, catalog, config)
    frame = frame_from_schema(request.frame)

    results = RuleEvaluator.evaluate(frame, rules)

    return EvaluationResponse(
        frame_number=frame.frame_number,
        results=[result_to_schema(r) for r in results]
    )


@router.post(
    "/overlay/plan",
    response_model=DrawPlanSchema,
    tags=["Overlay"],
    summary="Build the draw plan for one frame"
)
async def build_plan(
    request: OverlayRequest,
    catalog: TechniqueCatalog = Depends(get_catalog),
    config: OverlayConfig = Depends(get_overlay_config),
) -> DrawPlanSchema:
    """
    Build points, colored skeleton lines and angle labels for a frame.

    A zero-sized image or viewport gives an empty plan, not an error.
    """
    if request.viewport is None:
        raise HTTPException(status_code=422, detail="viewport is required to build a draw plan")

    rules = _resolve_rules(request, catalog, config)
    frame = frame_from_schema(request.frame)

    renderer = OverlayRenderer(config)
    plan = renderer.build_draw_plan(frame, rules, viewport_from_schema(request.viewport))

    return plan_to_schema(plan, frame.frame_number)


# =============================================================================
# Helper Functions
# =============================================================================

def _resolve_rules(
    request: OverlayRequest,
    catalog: TechniqueCatalog,
    config: OverlayConfig,
) -> tuple[JointRule, ...]:
    """Inline rules if given, catalog rules otherwise."""
    if request.rules is not None:
        try:
            return rules_from_schema(request.rules, config.rules.default_tolerance)
        except MalformedRuleConfiguration as e:
            logger.error(f"Rejected inline rules: {e}")
            raise HTTPException(status_code=422, detail=str(e))

    try:
        return catalog.rule_set(request.sport, request.technique).rules
    except UnknownTechnique as e:
        raise HTTPException(status_code=404, detail=str(e))
