"""
Score Calibration

Raw additive scores drift: a song with profanity and one line of praise
can land in the middle of the range. Calibration applies hard bands:

  - Any strong-negative hit caps the score at 30 ("Concern")
  - Otherwise, any worship/affirming hit floors the score at 80 ("Faith-Safe")
  - Otherwise the raw score stands

The cap always wins over the floor.
"""

from __future__ import annotations

from typing import Iterable, Union

from sanctifai.scorer import Hit, clamp

STRONG_NEGATIVE_RULES = frozenset({
    "explicit-language",
    "explicit-sexual",
    "explicit-violence",
    "substance-abuse",
    "occult-practices",
    "blasphemy",
    "self-harm",
    "false-gospel",
})

WORSHIP_RULES = frozenset({
    "worship",
    "repentance-hope",
})

CONCERN_CAP = 30
FAITH_SAFE_FLOOR = 80

# Band thresholds, highest first
BANDS = (
    (80, "Faith-Safe"),
    (50, "Caution"),
    (0, "Concern"),
)


def _rule_id(hit: Union[Hit, dict, str]) -> str:
    if isinstance(hit, Hit):
        return hit.rule_id
    if isinstance(hit, dict):
        return str(hit.get("rule_id", hit.get("ruleId", "")))
    return str(hit)


def calibrate(raw_total: float, hits: Iterable[Union[Hit, dict, str]]) -> int:
    """
    Apply cap/floor bands to a raw score.

    Args:
        raw_total: Score from scorer.score (any number; clamped here).
        hits: Hits from the same scoring run. Hit objects, hit dicts or
            bare rule ids are accepted.

    Returns:
        Calibrated score in [0, 100].
    """
    fired = {_rule_id(h) for h in hits}

    if fired & STRONG_NEGATIVE_RULES:
        final = min(raw_total, CONCERN_CAP)
    elif fired & WORSHIP_RULES:
        final = max(raw_total, FAITH_SAFE_FLOOR)
    else:
        final = raw_total

    return int(round(clamp(final)))


def band(total: float) -> str:
    """Human label for a score: Faith-Safe, Caution or Concern."""
    for threshold, label in BANDS:
        if total >= threshold:
            return label
    return BANDS[-1][1]
