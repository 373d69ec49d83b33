"""
Overlay Session Service

Session-scoped state for the overlay: which rule set is active and the
last scale transform that was computed. Everything else is recomputed
per frame.
"""

import logging
from typing import Awaitable, Callable, Optional

from ..config import OverlayConfig, get_config
from ..domain.pose import PoseFrame
from ..domain.rules import EvaluationResult, RuleSet, TechniqueKey
from ..domain.overlay import DrawPlan, ScaleTransform, Viewport
from .overlay_renderer import OverlayRenderer
from .rule_evaluator import RuleEvaluator
from .technique_catalog import TechniqueCatalog

logger = logging.getLogger(__name__)


class ActiveRuleSet:
    """
    Holder for the currently published rule set snapshot.

    Publishing swaps a single reference to an immutable RuleSet, so a
    reader that takes `snapshot` once sees either the old rules or the
    new ones, never a mix.
    """

    def __init__(self, initial: Optional[RuleSet] = None):
        self._snapshot = initial

    @property
    def snapshot(self) -> Optional[RuleSet]:
        return self._snapshot

    def publish(self, rule_set: Optional[RuleSet]) -> None:
        """Replace the active rule set (None clears it)."""
        self._snapshot = rule_set
        if rule_set is None:
            logger.info("Active rule set cleared")
        else:
            logger.info(f"Active rule set: {rule_set.key} ({len(rule_set)} rules)")

    async def publish_from(self, fetch: Callable[[], Awaitable[RuleSet]]) -> bool:
        """
        Await a one-shot producer and publish what it returns.

        On failure the previous snapshot stays active.

        Returns:
            True if a new rule set was published
        """
        try:
            rule_set = await fetch()
        except Exception as e:
            logger.error(f"Rule set fetch failed, keeping current rules: {e}")
            return False

        self.publish(rule_set)
        return True


class OverlaySession:
    """
    One viewer's overlay state.

    Usage:
        session = OverlaySession(TechniqueCatalog.default())
        session.select_technique("Sprint", "Technique1")
        plan = session.render(frame, Viewport(1080, 1920))
    """

    def __init__(
        self,
        catalog: TechniqueCatalog,
        config: Optional[OverlayConfig] = None,
    ):
        self.catalog = catalog
        self.config = config or get_config()
        self.renderer = OverlayRenderer(self.config)
        self.active_rules = ActiveRuleSet()
        self.last_scale: Optional[ScaleTransform] = None

    @property
    def technique(self) -> Optional[TechniqueKey]:
        snapshot = self.active_rules.snapshot
        return snapshot.key if snapshot is not None else None

    def select_technique(self, sport: str, technique: str) -> RuleSet:
        """
        Activate a catalog technique.

        Raises:
            UnknownTechnique: if the catalog has no such technique
        """
        rule_set = self.catalog.rule_set(sport, technique)
        self.active_rules.publish(rule_set)
        return rule_set

    async def load_technique(self, sport: str, technique: str) -> bool:
        """Activate a technique through the async producer path."""
        return await self.active_rules.publish_from(
            lambda: self.catalog.fetch(sport, technique)
        )

    def render(self, frame: PoseFrame, viewport: Viewport) -> DrawPlan:
        """Build the draw plan for a frame using the current rule snapshot."""
        snapshot = self.active_rules.snapshot
        rules = snapshot.rules if snapshot is not None else ()

        plan = self.renderer.build_draw_plan(frame, rules, viewport)
        if plan.scale is not None:
            self.last_scale = plan.scale
        return plan

    def evaluate(self, frame: PoseFrame) -> list[EvaluationResult]:
        """Evaluate the current rules without building a plan."""
        snapshot = self.active_rules.snapshot
        return RuleEvaluator.evaluate(frame, snapshot.rules if snapshot is not None else ())

    def clear(self) -> None:
        """Drop the active rules and the remembered scale."""
        self.active_rules.publish(None)
        self.last_scale = None
