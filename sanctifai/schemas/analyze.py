"""
API Schemas — Request and Response Models

Pydantic models for the SanctifAi API.
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


# ============================================================
# TEXT ANALYSIS
# ============================================================

class TextAnalyzeRequest(BaseModel):
    """POST /analyze/text request body."""
    text: str = Field(..., max_length=50_000,
                      description="Lyrics or narrative text to analyze (may be empty).")
    title: Optional[str] = Field(None, max_length=300)
    artist: Optional[str] = Field(None, max_length=300)
    themes: list[str] = Field(default_factory=list, max_length=50,
                              description="Extra theme tags to merge into signals.")

    model_config = {"json_schema_extra": {"examples": [
        {"text": "[Chorus]\nI praise you Lord, holy holy", "title": "Holy", "artist": "Unknown"},
    ]}}


class HitResponse(BaseModel):
    rule_id: str
    refs: list[str]
    reason: str = ""


class VerseResponse(BaseModel):
    key: str
    reference: str
    text: str
    translation: str


class SignalsResponse(BaseModel):
    themes: list[str]
    explicit: dict[str, list[str]]
    blasphemy: list[str]
    selfharm: list[str]
    claims: list[str]
    bible_refs: list[str]


class TextAnalyzeResponse(BaseModel):
    """POST /analyze/text response body."""
    title: Optional[str] = None
    artist: Optional[str] = None
    total: int
    raw_total: int
    band: str
    subscores: dict[str, float]
    hits: list[HitResponse]
    signals: SignalsResponse
    verses: dict[str, VerseResponse]
    lexicon_version: str


# ============================================================
# MEDIA ANALYSIS
# ============================================================

class MediaAnalyzeRequest(BaseModel):
    """POST /analyze/media request body."""
    title: str = Field(..., min_length=1, max_length=300)
    media_type: str = Field("movie", pattern="^(movie|show|book|game)$")
    release_year: Optional[str] = Field(None, max_length=10)
    overview: Optional[str] = Field(None, max_length=10_000)


class AlternativeResponse(BaseModel):
    title: str
    reason: str


class MediaAnalyzeResponse(BaseModel):
    """POST /analyze/media response body."""
    title: str
    media_type: str
    discernment_score: int
    band: str
    faith_analysis: str
    tags: list[str]
    verse_text: str
    verse_reference: str
    alternatives: list[AlternativeResponse]
    cached: bool = False


# ============================================================
# RULES / HEALTH
# ============================================================

class RuleResponse(BaseModel):
    id: str
    title: str
    description: str
    category: str
    weight: float
    anchors: list[str]


class RulesResponse(BaseModel):
    rules: list[RuleResponse]
    total: int


class HealthResponse(BaseModel):
    status: str
    version: str
    lexicon_version: str
    llm_provider: str
    rules_loaded: int
    media_cache: dict
