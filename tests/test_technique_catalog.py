import asyncio
import json

import pytest

from core.domain.rules import JointRule, TechniqueKey
from core.domain.errors import MalformedRuleConfiguration, UnknownTechnique
from core.services import TechniqueCatalog, normalize_rule, normalize_rules


def test_default_catalog_lists_sprint(catalog):
    assert catalog.sports() == ["Sprint"]
    assert catalog.techniques("Sprint") == ["Technique1"]
    assert len(catalog) == 1


def test_default_catalog_rules(catalog):
    rule_set = catalog.rule_set("Sprint", "Technique1")

    assert rule_set.key == TechniqueKey("Sprint", "Technique1")
    assert [r.joints for r in rule_set.rules] == [(24, 26, 28), (28, 26, 24), (23, 25, 27)]
    assert [r.expected_angle for r in rule_set.rules] == [90, 90, 120]
    assert all(r.tolerance == 30.0 for r in rule_set.rules)


def test_normalize_record_uses_middle_joint_as_vertex():
    rule = normalize_rule({"joint1": 11, "joint2": 13, "joint3": 15, "expectedAngle": 160})
    assert rule == JointRule(joint_a=11, vertex=13, joint_b=15, expected_angle=160, tolerance=30.0)


def test_normalize_tuple_records_and_tolerance():
    rules = normalize_rules([(23, 25, 27, 120), (24, 26, 28, 90, 15)], default_tolerance=20)
    assert [r.tolerance for r in rules] == [20, 15]
    assert rules[1].vertex == 26


def test_record_tolerance_overrides_default():
    rule = normalize_rule({"joint1": 1, "joint2": 2, "joint3": 3, "expectedAngle": 45, "tolerance": 5})
    assert rule.tolerance == 5


def test_whole_float_indices_are_accepted():
    rule = normalize_rule({"joint1": 24.0, "joint2": 26.0, "joint3": 28.0, "expectedAngle": 90})
    assert rule.joints == (24, 26, 28)


@pytest.mark.parametrize("record", [
    {"joint1": 1, "joint2": 2, "expectedAngle": 90},
    {"joint1": 1, "joint2": 2, "joint3": 3, "expectedAngle": 200},
    {"joint1": 1, "joint2": 2, "joint3": 3, "expectedAngle": 90, "tolerance": 0},
    {"joint1": "a", "joint2": 2, "joint3": 3, "expectedAngle": 90},
    (1, 2, 3),
    "24,26,28,90",
])
def test_malformed_records_are_rejected(record):
    with pytest.raises(MalformedRuleConfiguration):
        normalize_rule(record)


def test_unknown_lookups_raise(catalog):
    with pytest.raises(UnknownTechnique):
        catalog.rule_set("Sprint", "Technique9")
    with pytest.raises(UnknownTechnique):
        catalog.techniques("Swimming")


def test_from_json(tmp_path):
    path = tmp_path / "techniques.json"
    path.write_text(json.dumps({
        "Sprint": {
            "Start": [{"joint1": 24, "joint2": 26, "joint3": 28, "expectedAngle": 100}],
            "Finish": [],
        },
        "Jump": {
            "Takeoff": [{"joint1": 23, "joint2": 25, "joint3": 27, "expectedAngle": 150, "tolerance": 10}],
        },
    }))

    catalog = TechniqueCatalog.from_json(path, default_tolerance=25)

    assert catalog.sports() == ["Sprint", "Jump"]
    assert catalog.techniques("Sprint") == ["Start", "Finish"]
    assert catalog.rule_set("Sprint", "Start").rules[0].tolerance == 25
    assert catalog.rule_set("Jump", "Takeoff").rules[0].tolerance == 10
    assert len(catalog.rule_set("Sprint", "Finish")) == 0


def test_from_json_reports_bad_technique(tmp_path):
    path = tmp_path / "techniques.json"
    path.write_text(json.dumps({"Sprint": {"Start": [{"joint1": 1, "joint2": 2, "joint3": 3, "expectedAngle": -5}]}}))

    with pytest.raises(MalformedRuleConfiguration, match="Sprint/Start"):
        TechniqueCatalog.from_json(path)


@pytest.mark.parametrize("content", ["not json", "[1, 2]", '{"Sprint": []}'])
def test_from_json_rejects_bad_files(tmp_path, content):
    path = tmp_path / "techniques.json"
    path.write_text(content)
    with pytest.raises(MalformedRuleConfiguration):
        TechniqueCatalog.from_json(path)


def test_from_json_missing_file(tmp_path):
    with pytest.raises(MalformedRuleConfiguration):
        TechniqueCatalog.from_json(tmp_path / "missing.json")


def test_from_config_falls_back_to_default():
    assert TechniqueCatalog.from_config("").sports() == ["Sprint"]


def test_fetch_is_awaitable(catalog):
    rule_set = asyncio.run(catalog.fetch("Sprint", "Technique1"))
    assert rule_set is catalog.rule_set("Sprint", "Technique1")
