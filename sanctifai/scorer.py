"""
Discernment Scorer

Converts Signals into a 0-100 score with an auditable hit list.
Separated from calibration.py for single-responsibility.

Score = 50 (neutral) plus the contribution of every rule that matched:
  - Concern rules (explicit content, occult, doctrine) subtract |weight|
  - Affirming rules (worship, repentance, love) add |weight|
  - Rules that do not match contribute nothing and leave no trace
  - Clamped to [0, 100]

Whether a rule matched is decided by an evaluator table keyed by rule id
(DEFAULT_EVALUATORS unless the caller passes its own). A rule id without
an entry never matches. The built-in table is read-only; to score a new
rule, build a new mapping:

    evaluators = {**DEFAULT_EVALUATORS, "gambling": RuleEvaluator(fn, -1)}
    score(signals, rules, evaluators=evaluators)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Sequence

from sanctifai.logging import get_logger
from sanctifai.rules import Rule
from sanctifai.signals import Signals

logger = get_logger("scorer")

NEUTRAL_BASELINE = 50
MAX_REASON_EXCERPTS = 3

# Claims that doctrinal rules treat as problematic
PROBLEMATIC_CLAIMS = (
    "all paths lead to god",
    "works-based salvation",
    "jesus is just a teacher",
)

POSITIVE_THEME_KEYWORDS = ("love", "compassion", "redemption", "forgiveness")


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class RuleMatch:
    """Outcome of evaluating one rule against Signals."""
    matched: bool
    excerpts: tuple[str, ...] = ()
    reason: str = ""


NO_MATCH = RuleMatch(matched=False)


@dataclass(frozen=True)
class Hit:
    """A rule that fired, with its scripture anchors and reason."""
    rule_id: str
    refs: tuple[str, ...]
    reason: str = ""

    def to_dict(self) -> dict:
        return {"rule_id": self.rule_id, "refs": list(self.refs), "reason": self.reason}


@dataclass(frozen=True)
class ScoreResult:
    total: int
    subscores: dict[str, float] = field(default_factory=dict)
    hits: tuple[Hit, ...] = ()

    @property
    def hit_ids(self) -> list[str]:
        return [h.rule_id for h in self.hits]

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "subscores": dict(self.subscores),
            "hits": [h.to_dict() for h in self.hits],
        }


@dataclass(frozen=True)
class RuleEvaluator:
    """Signal lookup for one rule id, plus the direction of its weight."""
    evaluate: Callable[[Signals], RuleMatch]
    polarity: int  # -1 concern, +1 affirming

    def contribution(self, weight: float) -> float:
        return self.polarity * abs(weight)


# ============================================================
# RULE EVALUATORS
# ============================================================

_BUILTIN_EVALUATORS: dict[str, RuleEvaluator] = {}


def _builtin(rule_id: str, polarity: int):
    def decorator(fn: Callable[[Signals], RuleMatch]):
        _BUILTIN_EVALUATORS[rule_id] = RuleEvaluator(evaluate=fn, polarity=polarity)
        return fn
    return decorator


def summarize(label: str, excerpts: Sequence[str]) -> str:
    """'Label: a, b, c...' using at most the first three excerpts."""
    shown = ", ".join(excerpts[:MAX_REASON_EXCERPTS])
    suffix = "..." if len(excerpts) > MAX_REASON_EXCERPTS else ""
    return f"{label}: {shown}{suffix}"


def _excerpt_rule(label: str, lookup: Callable[[Signals], list[str]]):
    def evaluate(signals: Signals) -> RuleMatch:
        excerpts = lookup(signals)
        if not excerpts:
            return NO_MATCH
        return RuleMatch(True, tuple(excerpts), summarize(label, excerpts))
    return evaluate


def _theme_rule(theme: str, reason: str):
    def evaluate(signals: Signals) -> RuleMatch:
        if signals.has_theme(theme):
            return RuleMatch(True, (theme,), reason)
        return NO_MATCH
    return evaluate


_EXCERPT_RULES = (
    ("explicit-language", "Profanity detected", lambda s: s.explicit_for("language")),
    ("explicit-sexual", "Sexual content", lambda s: s.explicit_for("sexual")),
    ("explicit-violence", "Violence glorification", lambda s: s.explicit_for("violence")),
    ("substance-abuse", "Substance references", lambda s: s.explicit_for("substances")),
    ("blasphemy", "Irreverent use of God's name", lambda s: s.blasphemy),
    ("self-harm", "Self-harm themes", lambda s: s.selfharm),
    ("occult-practices", "Occult elements", lambda s: s.explicit_for("occult")),
    ("sexual-purity", "Sexual content", lambda s: s.explicit_for("sexual")),
)

for _rule_id, _label, _lookup in _EXCERPT_RULES:
    _builtin(_rule_id, polarity=-1)(_excerpt_rule(_label, _lookup))

_builtin("worship", polarity=+1)(
    _theme_rule("worship", "Direct worship and praise of God")
)
_builtin("repentance-hope", polarity=+1)(
    _theme_rule("repentance-hope", "Themes of repentance and hope in Christ")
)


@_builtin("violence-glorification", polarity=-1)
def _violence_glorification(signals: Signals) -> RuleMatch:
    extreme = [
        v for v in signals.explicit_for("violence")
        if "graphic" in v or "extreme" in v
    ]
    if not extreme:
        return NO_MATCH
    return RuleMatch(True, tuple(extreme), "Extreme violence detected")


@_builtin("love-and-compassion", polarity=+1)
def _love_and_compassion(signals: Signals) -> RuleMatch:
    positive = [
        t for t in signals.themes or ()
        if any(k in t.lower() for k in POSITIVE_THEME_KEYWORDS)
    ]
    if not positive:
        return NO_MATCH
    return RuleMatch(True, tuple(positive), summarize("Positive themes", positive))


def _doctrinal_concern(signals: Signals) -> RuleMatch:
    concerning = [
        c for c in signals.claims or ()
        if any(p in c.lower() for p in PROBLEMATIC_CLAIMS)
    ]
    if not concerning:
        return NO_MATCH
    return RuleMatch(True, tuple(concerning), f"Theological concern: {concerning[0]}")


_builtin("false-gospel", polarity=-1)(_doctrinal_concern)
_builtin("deity-of-christ", polarity=-1)(_doctrinal_concern)

# Read-only; callers extend it with {**DEFAULT_EVALUATORS, ...}
DEFAULT_EVALUATORS: Mapping[str, RuleEvaluator] = MappingProxyType(dict(_BUILTIN_EVALUATORS))


# ============================================================
# SCORING
# ============================================================

def clamp(value: float, low: int = 0, high: int = 100) -> float:
    return max(low, min(high, value))


def score(
    signals: Signals,
    rules: Iterable[Rule],
    evaluators: Mapping[str, RuleEvaluator] = DEFAULT_EVALUATORS,
) -> ScoreResult:
    """
    Score Signals against a rule list.

    Rules are evaluated in list order; hits keep that order. Several rules
    may read the same signal and all of them apply. Rule ids missing from
    evaluators are inert.

    Returns:
        ScoreResult with total in [0, 100], a subscore per fired rule and
        one hit per fired rule.
    """
    total: float = NEUTRAL_BASELINE
    subscores: dict[str, float] = {}
    hits: list[Hit] = []

    for rule in rules:
        evaluator = evaluators.get(rule.id)
        if evaluator is None:
            continue

        match = evaluator.evaluate(signals)
        if not match.matched:
            continue

        rule_score = evaluator.contribution(rule.weight)
        hits.append(Hit(rule_id=rule.id, refs=tuple(rule.anchors), reason=match.reason))
        subscores[rule.id] = rule_score
        total += rule_score
        logger.debug(
            "Rule fired", extra={"rule_id": rule.id, "total": total},
        )

    return ScoreResult(
        total=int(round(clamp(total))),
        subscores=subscores,
        hits=tuple(hits),
    )
