"""
SanctifAi — Media Discernment Scoring Engine

Detects content signals (profanity, violence, occult references, worship
themes, ...) in lyrics and narrative text and turns weighted rule matches
into a calibrated 0-100 discernment score with supporting scripture.

Public API:
  - normalize:     Text normalizer (lowercase, strip [annotations], quotes)
  - lyrics_lexicon: Default compiled pattern library
  - extract:       Signal extraction from normalized text
  - score:         Weighted rule scoring from Signals
  - calibrate:     Hard cap/floor bands on a raw score
  - analyze_text:  Full pipeline, raw text → calibrated result
  - analyze_media: LLM narrative analysis of a title (never raises)

Usage:
    from sanctifai import analyze_text
    result = analyze_text("I praise you Lord, holy holy")
    result.total, result.band, result.hits
"""

__version__ = "1.0.0"

from sanctifai.lexicon import (
    normalize,
    Lexicon,
    LexiconPattern,
    lyrics_lexicon,
    LEXICON_VERSION,
)
from sanctifai.signals import Signals, extract
from sanctifai.rules import Rule, RuleConfigError, DEFAULT_RULES, load_rules
from sanctifai.scorer import (
    DEFAULT_EVALUATORS,
    Hit,
    RuleEvaluator,
    ScoreResult,
    score,
)
from sanctifai.calibration import calibrate, band
from sanctifai.analyzer import (
    AnalysisResult,
    DiscernmentAnalysis,
    analyze_text,
    analyze_media,
)
from sanctifai.llm import LLMProvider
from sanctifai.llm.factory import get_provider

__all__ = [
    "normalize",
    "Lexicon",
    "LexiconPattern",
    "lyrics_lexicon",
    "LEXICON_VERSION",
    "Signals",
    "extract",
    "Rule",
    "RuleConfigError",
    "DEFAULT_RULES",
    "load_rules",
    "DEFAULT_EVALUATORS",
    "RuleEvaluator",
    "Hit",
    "ScoreResult",
    "score",
    "calibrate",
    "band",
    "AnalysisResult",
    "DiscernmentAnalysis",
    "analyze_text",
    "analyze_media",
    "LLMProvider",
    "get_provider",
]
