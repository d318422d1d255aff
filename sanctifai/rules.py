"""
Rule Set — Weighted Discernment Criteria

Rules are data: an id, a human-readable title/description, a category,
a weight and the scripture anchors surfaced with every hit. The scorer
decides whether a rule matched by its id (see scorer.DEFAULT_EVALUATORS);
rules whose id it does not recognize are loaded fine and simply never
fire.

Rules come from external configuration (a JSON list of objects). The
built-in DEFAULT_RULES are used when no rule file is configured.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Union

from sanctifai.logging import get_logger

logger = get_logger("rules")


class RuleConfigError(ValueError):
    """Raised when rule configuration cannot be read or is malformed."""


@dataclass(frozen=True)
class Rule:
    """A single weighted discernment rule."""
    id: str
    title: str
    description: str
    category: str
    weight: float
    anchors: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Any) -> "Rule":
        if not isinstance(data, dict):
            raise RuleConfigError(f"Rule entry must be an object, got {type(data).__name__}")

        rule_id = data.get("id")
        if not isinstance(rule_id, str) or not rule_id.strip():
            raise RuleConfigError(f"Rule is missing a string 'id': {data!r}")

        weight = data.get("weight", 0)
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise RuleConfigError(f"Rule '{rule_id}' has non-numeric weight: {weight!r}")

        anchors = data.get("anchors") or []
        if not isinstance(anchors, list) or not all(isinstance(a, str) for a in anchors):
            raise RuleConfigError(f"Rule '{rule_id}' anchors must be a list of strings")

        return cls(
            id=rule_id.strip(),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            category=str(data.get("category", "")),
            weight=weight,
            anchors=tuple(anchors),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "weight": self.weight,
            "anchors": list(self.anchors),
        }


def rules_from_data(entries: Iterable[Any]) -> list[Rule]:
    """Build rules from parsed JSON. Order is preserved; ids must be unique."""
    if isinstance(entries, dict):
        # Accept {"rules": [...]} as well as a bare list
        entries = entries.get("rules", [])
    if not isinstance(entries, (list, tuple)):
        raise RuleConfigError("Rule configuration must be a list of rule objects")
    rules: list[Rule] = []
    seen: set[str] = set()
    for entry in entries:
        rule = Rule.from_dict(entry)
        if rule.id in seen:
            raise RuleConfigError(f"Duplicate rule id: '{rule.id}'")
        seen.add(rule.id)
        rules.append(rule)
    return rules


def load_rules(path: Union[str, Path]) -> list[Rule]:
    """Load a rule list from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise RuleConfigError(f"Rule file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise RuleConfigError(f"Rule file {path} is not valid JSON: {e}") from e

    rules = rules_from_data(data)
    logger.info(
        "Loaded rule set",
        extra={"rules_count": len(rules), "rules_source": str(path)},
    )
    return rules


# ============================================================
# BUILT-IN RULE SET
# ============================================================

DEFAULT_RULES: tuple[Rule, ...] = (
    # --- Lyrics rules ---
    Rule(
        id="explicit-language",
        title="Explicit Language",
        description="Profanity and crude language.",
        category="language",
        weight=-25,
        anchors=("eph-4-29", "col-3-8"),
    ),
    Rule(
        id="explicit-sexual",
        title="Sexual Content",
        description="Sexual references or sexualized imagery.",
        category="sexual",
        weight=-25,
        anchors=("1cor-6-18", "eph-5-3"),
    ),
    Rule(
        id="explicit-violence",
        title="Violence",
        description="Glorification or casual depiction of violence.",
        category="violence",
        weight=-20,
        anchors=("ps-11-5", "prov-3-31"),
    ),
    Rule(
        id="substance-abuse",
        title="Substance Abuse",
        description="Drug and alcohol references.",
        category="substances",
        weight=-15,
        anchors=("eph-5-18", "1cor-6-19"),
    ),
    Rule(
        id="blasphemy",
        title="Blasphemy",
        description="Irreverent use of God's name.",
        category="blasphemy",
        weight=-30,
        anchors=("ex-20-7",),
    ),
    Rule(
        id="self-harm",
        title="Self-Harm",
        description="Suicide or self-harm ideation.",
        category="selfharm",
        weight=-20,
        anchors=("ps-34-18", "1cor-6-19"),
    ),
    Rule(
        id="worship",
        title="Worship",
        description="Direct worship and praise of God.",
        category="worship",
        weight=30,
        anchors=("ps-95-6", "ps-150-6"),
    ),
    Rule(
        id="repentance-hope",
        title="Repentance & Hope",
        description="Repentance, confession and hope in Christ.",
        category="worship",
        weight=20,
        anchors=("1john-1-9", "acts-3-19"),
    ),
    # --- Movie / show / book rules ---
    Rule(
        id="occult-practices",
        title="Occult Practices",
        description="Witchcraft, divination and demonic themes.",
        category="occult",
        weight=-25,
        anchors=("deut-18-10",),
    ),
    Rule(
        id="sexual-purity",
        title="Sexual Purity",
        description="Content that undermines sexual purity.",
        category="sexual",
        weight=-15,
        anchors=("1cor-6-18",),
    ),
    Rule(
        id="violence-glorification",
        title="Violence Glorification",
        description="Graphic or extreme violence.",
        category="violence",
        weight=-15,
        anchors=("ps-11-5",),
    ),
    Rule(
        id="love-and-compassion",
        title="Love & Compassion",
        description="Themes of love, compassion, redemption and forgiveness.",
        category="virtue",
        weight=10,
        anchors=("1john-4-8", "col-3-13"),
    ),
    Rule(
        id="false-gospel",
        title="False Gospel",
        description="Universalist or works-based salvation framings.",
        category="doctrine",
        weight=-30,
        anchors=("gal-1-8", "eph-2-8", "john-14-6"),
    ),
    Rule(
        id="deity-of-christ",
        title="Deity of Christ",
        description="Denial of Christ's divinity.",
        category="doctrine",
        weight=-30,
        anchors=("john-1-1", "col-2-9"),
    ),
)
