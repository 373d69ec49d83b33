import logging
import math

import pytest

from core.domain.rules import JointRule
from core.domain.errors import MalformedRuleConfiguration
from core.services import RuleEvaluator

from conftest import make_frame


def rule(expected, tolerance=30.0, joints=(1, 0, 2)):
    joint_a, vertex, joint_b = joints
    return JointRule(joint_a=joint_a, vertex=vertex, joint_b=joint_b,
                     expected_angle=expected, tolerance=tolerance)


def test_matching_angle_has_zero_deviation(right_angle_frame):
    [result] = RuleEvaluator.evaluate(right_angle_frame, [rule(90)])

    assert result.angle == pytest.approx(90.0)
    assert result.deviation == pytest.approx(0.0)
    assert result.within_tolerance


def test_deviation_is_absolute(right_angle_frame):
    results = RuleEvaluator.evaluate(right_angle_frame, [rule(120), rule(60)])
    assert [r.deviation for r in results] == pytest.approx([30.0, 30.0])


def test_tolerance_boundary_is_inclusive(right_angle_frame):
    at_boundary, past_boundary = RuleEvaluator.evaluate(
        right_angle_frame, [rule(60, tolerance=30.0), rule(59, tolerance=30.0)]
    )
    assert at_boundary.within_tolerance
    assert not past_boundary.within_tolerance


def test_results_keep_rule_order(right_angle_frame):
    rules = [rule(10), rule(90), rule(170)]
    results = RuleEvaluator.evaluate(right_angle_frame, rules)

    assert [r.rule for r in results] == rules
    assert [r.rule_index for r in results] == [0, 1, 2]


def test_rule_beyond_frame_is_omitted(right_angle_frame, caplog):
    rules = [rule(90, joints=(24, 26, 28)), rule(90)]

    with caplog.at_level(logging.WARNING):
        results = RuleEvaluator.evaluate(right_angle_frame, rules)

    assert len(results) == 1
    assert results[0].rule_index == 1
    assert "Skipping rule 0" in caplog.text


def test_rule_with_nan_landmark_is_omitted(caplog):
    frame = make_frame([(0.0, 0.0), (math.nan, 0.0), (0.0, 1.0)])

    with caplog.at_level(logging.WARNING):
        results = RuleEvaluator.evaluate(frame, [rule(90)])

    assert results == []
    assert "angle is not finite" in caplog.text


def test_empty_frame_yields_no_results():
    assert RuleEvaluator.evaluate(make_frame([]), [rule(90)]) == []


def test_sprint_frame_knee_angles(sprint_frame, catalog):
    rules = catalog.rule_set("Sprint", "Technique1").rules
    results = RuleEvaluator.evaluate(sprint_frame, rules)

    assert [r.angle for r in results] == pytest.approx([90.0, 90.0, 180.0])
    assert [r.within_tolerance for r in results] == [True, True, False]


@pytest.mark.parametrize("kwargs", [
    {"expected_angle": -1.0},
    {"expected_angle": 181.0},
    {"expected_angle": math.nan},
    {"tolerance": 0.0},
    {"tolerance": -10.0},
    {"tolerance": math.nan},
    {"vertex": -1},
    {"joint_a": 1.5},
])
def test_malformed_rules_are_rejected(kwargs):
    values = {"joint_a": 1, "vertex": 0, "joint_b": 2, "expected_angle": 90.0, "tolerance": 30.0}
    values.update(kwargs)
    with pytest.raises(MalformedRuleConfiguration):
        JointRule(**values)


def test_rule_governs_edges_between_its_joints():
    r = rule(90, joints=(24, 26, 28))
    assert r.governs(24, 26)
    assert r.governs(26, 24)
    assert r.governs(28, 24)
    assert not r.governs(26, 30)
    assert not r.governs(26, 26)
