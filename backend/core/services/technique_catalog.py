"""
Technique Catalog Service

Static source of technique rules, keyed by (sport, technique).

Raw records use the coach-facing shape
    {"joint1": 24, "joint2": 26, "joint3": 28, "expectedAngle": 90}
where joint2 is the joint the angle is measured at. They are normalized
into JointRule values when the catalog is loaded, so a bad record fails
at load time instead of during rendering.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from ..domain.rules import JointRule, RuleSet, TechniqueKey
from ..domain.errors import MalformedRuleConfiguration, UnknownTechnique

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 30.0

# Built-in techniques, used when no catalog file is configured.
DEFAULT_TECHNIQUES: dict[str, dict[str, list[dict[str, Any]]]] = {
    "Sprint": {
        "Technique1": [
            {"joint1": 24, "joint2": 26, "joint3": 28, "expectedAngle": 90},
            {"joint1": 28, "joint2": 26, "joint3": 24, "expectedAngle": 90},
            {"joint1": 23, "joint2": 25, "joint3": 27, "expectedAngle": 120},
        ],
    },
}


def normalize_rule(record: Any, default_tolerance: float = DEFAULT_TOLERANCE) -> JointRule:
    """
    Convert one raw record into a JointRule.

    Accepts a mapping with joint1/joint2/joint3/expectedAngle (and an
    optional tolerance), or a (joint1, joint2, joint3, expectedAngle) tuple.

    Raises:
        MalformedRuleConfiguration: if the record is missing fields or
            carries invalid values
    """
    if isinstance(record, Mapping):
        try:
            joint1 = record["joint1"]
            joint2 = record["joint2"]
            joint3 = record["joint3"]
            expected = record["expectedAngle"]
        except KeyError as e:
            raise MalformedRuleConfiguration(f"Rule record missing field {e}") from e
        tolerance = record.get("tolerance", default_tolerance)
    elif isinstance(record, (list, tuple)) and len(record) in (4, 5):
        joint1, joint2, joint3, expected = record[:4]
        tolerance = record[4] if len(record) == 5 else default_tolerance
    else:
        raise MalformedRuleConfiguration(f"Unsupported rule record: {record!r}")

    return JointRule(
        joint_a=_as_index(joint1),
        vertex=_as_index(joint2),
        joint_b=_as_index(joint3),
        expected_angle=expected,
        tolerance=tolerance,
    )


def normalize_rules(
    records: Iterable[Any],
    default_tolerance: float = DEFAULT_TOLERANCE,
) -> tuple[JointRule, ...]:
    """Normalize a flat list of raw records, keeping their order."""
    return tuple(normalize_rule(record, default_tolerance) for record in records)


def _as_index(value: Any) -> Any:
    # JSON numbers such as 24.0 are accepted as long as they are whole.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class TechniqueCatalog:
    """
    Read-only catalog of rule sets.

    Usage:
        catalog = TechniqueCatalog.default()
        print(catalog.sports())                 # ["Sprint"]
        print(catalog.techniques("Sprint"))     # ["Technique1"]
        rule_set = catalog.rule_set("Sprint", "Technique1")
    """

    def __init__(self, rule_sets: Iterable[RuleSet] = ()):
        self._rule_sets: dict[TechniqueKey, RuleSet] = {}
        for rule_set in rule_sets:
            self._rule_sets[rule_set.key] = rule_set

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        default_tolerance: float = DEFAULT_TOLERANCE,
    ) -> "TechniqueCatalog":
        """
        Build a catalog from {sport: {technique: [records]}}.

        Raises:
            MalformedRuleConfiguration: on any malformed entry
        """
        if not isinstance(data, Mapping):
            raise MalformedRuleConfiguration("Catalog must be an object of sports")

        rule_sets = []
        for sport, techniques in data.items():
            if not isinstance(techniques, Mapping):
                raise MalformedRuleConfiguration(f"Sport {sport!r} must map technique names to rule lists")
            for technique, records in techniques.items():
                if not isinstance(records, list):
                    raise MalformedRuleConfiguration(f"Technique {sport}/{technique} must be a list of rules")
                key = TechniqueKey(str(sport), str(technique))
                try:
                    rules = normalize_rules(records, default_tolerance)
                except MalformedRuleConfiguration as e:
                    raise MalformedRuleConfiguration(f"{key}: {e}") from e
                rule_sets.append(RuleSet(key=key, rules=rules))

        return cls(rule_sets)

    @classmethod
    def from_json(
        cls,
        path: Union[str, Path],
        default_tolerance: float = DEFAULT_TOLERANCE,
    ) -> "TechniqueCatalog":
        """Load a catalog file. Unreadable or invalid JSON is a configuration error."""
        p = Path(path)
        try:
            raw = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise MalformedRuleConfiguration(f"Could not load technique catalog {p}: {e}") from e

        catalog = cls.from_mapping(raw, default_tolerance)
        logger.info(f"Loaded {len(catalog)} techniques from {p}")
        return catalog

    @classmethod
    def default(cls, default_tolerance: float = DEFAULT_TOLERANCE) -> "TechniqueCatalog":
        """The built-in catalog."""
        return cls.from_mapping(DEFAULT_TECHNIQUES, default_tolerance)

    @classmethod
    def from_config(cls, catalog_path: str = "", default_tolerance: float = DEFAULT_TOLERANCE) -> "TechniqueCatalog":
        """Catalog file if one is configured, built-in catalog otherwise."""
        if catalog_path:
            return cls.from_json(catalog_path, default_tolerance)
        return cls.default(default_tolerance)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._rule_sets)

    def sports(self) -> list[str]:
        """All sport names, in insertion order."""
        seen: dict[str, None] = {}
        for key in self._rule_sets:
            seen.setdefault(key.sport, None)
        return list(seen)

    def techniques(self, sport: str) -> list[str]:
        """
        Technique names for a sport.

        Raises:
            UnknownTechnique: if the sport has no techniques
        """
        names = [key.technique for key in self._rule_sets if key.sport == sport]
        if not names:
            raise UnknownTechnique(sport)
        return names

    def rule_set(self, sport: str, technique: str) -> RuleSet:
        """
        Rule set for (sport, technique).

        Raises:
            UnknownTechnique: if no such technique is registered
        """
        rule_set = self.get(TechniqueKey(sport, technique))
        if rule_set is None:
            raise UnknownTechnique(sport, technique)
        return rule_set

    def get(self, key: TechniqueKey) -> Optional[RuleSet]:
        return self._rule_sets.get(key)

    async def fetch(self, sport: str, technique: str) -> RuleSet:
        """Async lookup, for use as a one-shot rule producer."""
        return self.rule_set(sport, technique)
