import asyncio
import threading

import pytest

from core.domain.rules import JointRule, RuleSet, TechniqueKey
from core.domain.overlay import Viewport
from core.domain.errors import UnknownTechnique
from core.services import ActiveRuleSet, OverlaySession


def rule_set(name, expected):
    rules = tuple(
        JointRule(joint_a=a, vertex=v, joint_b=b, expected_angle=expected, tolerance=30)
        for a, v, b in [(24, 26, 28), (23, 25, 27), (12, 14, 16)]
    )
    return RuleSet(key=TechniqueKey("Test", name), rules=rules)


@pytest.fixture
def session(catalog, config):
    return OverlaySession(catalog, config)


def test_no_technique_renders_neutral_skeleton(session, sprint_frame):
    plan = session.render(sprint_frame, Viewport(640, 480))

    assert session.technique is None
    assert plan.evaluations == ()
    assert all(line.rule_index is None for line in plan.lines)


def test_select_technique(session, sprint_frame):
    session.select_technique("Sprint", "Technique1")
    plan = session.render(sprint_frame, Viewport(640, 480))

    assert session.technique == TechniqueKey("Sprint", "Technique1")
    assert len(plan.evaluations) == 3


def test_select_unknown_technique_keeps_current(session):
    session.select_technique("Sprint", "Technique1")
    with pytest.raises(UnknownTechnique):
        session.select_technique("Sprint", "Nope")
    assert session.technique == TechniqueKey("Sprint", "Technique1")


def test_load_technique_async(session):
    assert asyncio.run(session.load_technique("Sprint", "Technique1"))
    assert session.technique == TechniqueKey("Sprint", "Technique1")


def test_failed_fetch_keeps_previous_snapshot():
    holder = ActiveRuleSet(rule_set("old", 90))

    async def failing_fetch():
        raise ConnectionError("catalog offline")

    assert not asyncio.run(holder.publish_from(failing_fetch))
    assert holder.snapshot.key.technique == "old"


def test_last_scale_is_remembered(session, sprint_frame):
    session.render(sprint_frame, Viewport(1280, 960))
    assert session.last_scale.scale == pytest.approx(2.0)

    # Degenerate viewport gives an empty plan and keeps the last good scale
    plan = session.render(sprint_frame, Viewport(0, 0))
    assert plan.is_empty
    assert session.last_scale.scale == pytest.approx(2.0)


def test_clear(session, sprint_frame):
    session.select_technique("Sprint", "Technique1")
    session.render(sprint_frame, Viewport(640, 480))

    session.clear()

    assert session.technique is None
    assert session.last_scale is None


def test_evaluate_uses_active_rules(session, sprint_frame):
    assert session.evaluate(sprint_frame) == []
    session.select_technique("Sprint", "Technique1")
    assert len(session.evaluate(sprint_frame)) == 3


def test_replacing_rules_mid_stream_never_mixes_sets(session, sprint_frame):
    first = rule_set("first", 90)
    second = rule_set("second", 120)
    session.active_rules.publish(first)

    def swap_rules():
        current = second
        for _ in range(1000):
            session.active_rules.publish(current)
            current = first if current is second else second

    swapper = threading.Thread(target=swap_rules)
    swapper.start()
    try:
        rendered = 0
        while swapper.is_alive() or rendered < 50:
            rendered += 1
            plan = session.render(sprint_frame, Viewport(640, 480))
            expected = {r.rule.expected_angle for r in plan.evaluations}
            assert len(expected) == 1
            rules = {r.rule for r in plan.evaluations}
            assert rules <= set(first.rules) or rules <= set(second.rules)
    finally:
        swapper.join()
