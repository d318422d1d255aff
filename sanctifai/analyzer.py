"""
Analyzer — Discernment Pipeline Orchestrator

Two entry points:
  - analyze_text:  Pattern-based scoring of raw text (lyrics, synopses).
                   Deterministic, synchronous, zero API cost.
  - analyze_media: LLM narrative analysis of a movie, show or book title.
                   Never raises; falls back to a neutral result.

analyze_text pipeline:
  raw text → normalize → extract signals → score → calibrate
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Sequence

from sanctifai.anchors import Anchor, resolve_anchors
from sanctifai.calibration import band, calibrate
from sanctifai.lexicon import LEXICON_VERSION, Lexicon, lyrics_lexicon, normalize
from sanctifai.llm import LLMProvider
from sanctifai.rules import DEFAULT_RULES, Rule
from sanctifai.scorer import DEFAULT_EVALUATORS, Hit, RuleEvaluator, score
from sanctifai.signals import Signals, extract

logger = logging.getLogger(__name__)


# ============================================================
# TEXT ANALYSIS
# ============================================================

@dataclass(frozen=True)
class AnalysisResult:
    """Calibrated discernment result for one piece of text."""
    total: int
    raw_total: int
    band: str
    subscores: dict[str, float]
    hits: tuple[Hit, ...]
    signals: Signals
    verses: dict[str, Anchor] = field(default_factory=dict)
    lexicon_version: str = LEXICON_VERSION

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "raw_total": self.raw_total,
            "band": self.band,
            "subscores": dict(self.subscores),
            "hits": [h.to_dict() for h in self.hits],
            "signals": self.signals.to_dict(),
            "verses": {k: a.to_dict() for k, a in self.verses.items()},
            "lexicon_version": self.lexicon_version,
        }


def analyze_text(
    raw_text: str,
    rules: Optional[Sequence[Rule]] = None,
    lexicon: Lexicon = lyrics_lexicon,
    extra_themes: Optional[Iterable[str]] = None,
    evaluators: Mapping[str, RuleEvaluator] = DEFAULT_EVALUATORS,
) -> AnalysisResult:
    """
    Score raw text against a rule list.

    Args:
        raw_text: Text as pasted or fetched; normalized here.
        rules: Rule list; the built-in DEFAULT_RULES when omitted.
        lexicon: Pattern library used for signal extraction.
        extra_themes: Caller-supplied theme tags merged into Signals.
        evaluators: Rule id -> evaluator table used by the scorer.

    Returns:
        AnalysisResult with the calibrated total, the raw pre-calibration
        total, hits, subscores and the supporting scripture verses.
    """
    rules = DEFAULT_RULES if rules is None else rules

    text = normalize(raw_text)
    signals = extract(text, lexicon=lexicon, extra_themes=extra_themes)
    raw = score(signals, rules, evaluators=evaluators)
    total = calibrate(raw.total, raw.hits)
    verses = resolve_anchors(ref for hit in raw.hits for ref in hit.refs)

    logger.debug(
        "Text analyzed",
        extra={"total": total, "raw_total": raw.total, "hits_count": len(raw.hits)},
    )

    return AnalysisResult(
        total=total,
        raw_total=raw.total,
        band=band(total),
        subscores=raw.subscores,
        hits=raw.hits,
        signals=signals,
        verses=verses,
        lexicon_version=lexicon.version,
    )


# ============================================================
# MEDIA NARRATIVE ANALYSIS (LLM collaborator)
# ============================================================

SYSTEM_INSTRUCTION = (
    "You are a careful, concise Christian media discernment assistant. "
    "You speak with truth and grace."
)

MEDIA_ANALYSIS_PROMPT = """You are a Christian media discernment expert. Analyze {context} and provide
a concise assessment from a biblical worldview.

Return your answer as valid JSON ONLY, with this exact shape:

{{
  "discernmentScore": <number 0-100>,
  "faithAnalysis": "<2 short paragraphs, max 4-5 sentences total>",
  "tags": ["<short tag>", "..."],
  "verseText": "<Bible verse text>",
  "verseReference": "<Book chapter:verse (translation)>",
  "alternatives": [
    {{ "title": "<title>", "reason": "<1 short sentence (max 15 words)>" }},
    {{ "title": "<title>", "reason": "<1 short sentence (max 15 words)>" }},
    {{ "title": "<title>", "reason": "<1 short sentence (max 15 words)>" }}
  ]
}}

Scoring guide:
- 85-100: Faith-safe / uplifting / aligns with Christian values
- 65-84: Mixed / some concerns / use caution
- 0-64: Significant concern / not recommended for believers

In "faithAnalysis":
- Briefly highlight any occult, sexual, violent, or anti-biblical content.
- Then give clear, pastoral guidance for Christians (no fear-mongering)."""

FALLBACK_ANALYSIS = (
    "We encountered an issue while generating a full discernment analysis for "
    "this title. Please try again later, or use prayerful wisdom and biblical "
    "principles as you decide whether to watch or read this content."
)


@dataclass
class Alternative:
    title: str
    reason: str


@dataclass
class DiscernmentAnalysis:
    """Narrative analysis produced by the LLM collaborator."""
    discernment_score: int
    faith_analysis: str
    tags: list[str] = field(default_factory=list)
    verse_text: str = ""
    verse_reference: str = ""
    alternatives: list[Alternative] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "discernment_score": self.discernment_score,
            "faith_analysis": self.faith_analysis,
            "tags": list(self.tags),
            "verse_text": self.verse_text,
            "verse_reference": self.verse_reference,
            "alternatives": [
                {"title": a.title, "reason": a.reason} for a in self.alternatives
            ],
        }


def fallback_analysis() -> DiscernmentAnalysis:
    """Neutral result returned when the LLM call or its JSON fails."""
    return DiscernmentAnalysis(
        discernment_score=50,
        faith_analysis=FALLBACK_ANALYSIS,
        tags=["analysis-error"],
    )


def build_media_prompt(
    title: str,
    media_type: str = "movie",
    release_year: Optional[str] = None,
    overview: Optional[str] = None,
) -> str:
    """Build the LLM prompt from media metadata."""
    is_book = media_type == "book"
    context = f'"{title}" (a {media_type}'
    if release_year:
        context += f", {'published' if is_book else 'released'} {release_year}"
    context += ")"
    if overview:
        context += f"\n\n{'Synopsis' if is_book else 'Plot Summary'}: {overview}"
    return MEDIA_ANALYSIS_PROMPT.format(context=context)


def _coerce_score(value: Any) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 50
    if number != number:  # NaN
        return 50
    return int(round(max(0.0, min(100.0, number))))


def parse_media_analysis(data: dict) -> DiscernmentAnalysis:
    """Coerce the LLM's JSON into a DiscernmentAnalysis, field by field."""
    score_value = data.get("discernmentScore")
    tags = data.get("tags")
    alternatives = data.get("alternatives")

    return DiscernmentAnalysis(
        discernment_score=_coerce_score(50 if score_value is None else score_value),
        faith_analysis=str(data.get("faithAnalysis") or "No analysis was provided."),
        tags=[str(t) for t in tags] if isinstance(tags, list) else [],
        verse_text=str(data.get("verseText") or ""),
        verse_reference=str(data.get("verseReference") or ""),
        alternatives=[
            Alternative(
                title=str(alt.get("title") or ""),
                reason=str(alt.get("reason") or ""),
            )
            for alt in alternatives
            if isinstance(alt, dict)
        ] if isinstance(alternatives, list) else [],
    )


async def analyze_media(
    title: str,
    llm: LLMProvider,
    media_type: str = "movie",
    release_year: Optional[str] = None,
    overview: Optional[str] = None,
) -> DiscernmentAnalysis:
    """
    Ask the LLM for a narrative discernment analysis of a title.

    Any provider or JSON failure is logged and answered with
    fallback_analysis(); callers never need to catch errors here.
    """
    prompt = build_media_prompt(title, media_type, release_year, overview)
    logger.info(
        "Analyzing media",
        extra={"title": title, "media_type": media_type},
    )

    try:
        data = await llm.generate_json(
            prompt, system_instruction=SYSTEM_INSTRUCTION, temperature=0.3,
        )
    except Exception as e:
        logger.warning(
            "Media analysis failed, returning neutral fallback",
            extra={"title": title, "error": str(e), "error_type": type(e).__name__},
        )
        return fallback_analysis()

    return parse_media_analysis(data)
