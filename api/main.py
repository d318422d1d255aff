"""
SanctifAi API — Main Application

POST /analyze/text  — Score lyrics or narrative text (pattern engine)
POST /analyze/media — LLM narrative analysis of a movie, show or book
GET  /rules         — Active rule set
GET  /lexicon       — Detection categories and patterns
GET  /health        — Health check
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request

from sanctifai import __version__
from sanctifai.analyzer import analyze_media, analyze_text
from sanctifai.cache import media_cache
from sanctifai.calibration import band
from sanctifai.config import settings
from sanctifai.lexicon import LEXICON_VERSION, lyrics_lexicon
from sanctifai.llm import LLMProvider
from sanctifai.llm.factory import get_provider
from sanctifai.logging import setup_logging, get_logger
from sanctifai.rules import DEFAULT_RULES, Rule, load_rules
from sanctifai.schemas.analyze import (
    TextAnalyzeRequest,
    TextAnalyzeResponse,
    MediaAnalyzeRequest,
    MediaAnalyzeResponse,
    RulesResponse,
    HealthResponse,
)

logger = get_logger("api")

# Active rule set, loaded once at startup
_rules: list[Rule] = list(DEFAULT_RULES)


# ============================================================
# STARTUP / SHUTDOWN
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and load the rule set on startup."""
    global _rules
    setup_logging()

    if settings.RULES_PATH:
        _rules = load_rules(settings.RULES_PATH)
    else:
        _rules = list(DEFAULT_RULES)

    logger.info(
        "SanctifAi API starting",
        extra={"rules_count": len(_rules), "rules_source": settings.RULES_PATH or "default"},
    )
    yield
    logger.info("SanctifAi API shutting down")


app = FastAPI(
    title="SanctifAi API",
    description="Faith-based media discernment scoring",
    version=f"{__version__} (lexicon {LEXICON_VERSION})",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=False,
)


# ============================================================
# GLOBAL ERROR HANDLER
# ============================================================

@app.exception_handler(Exception)
async def global_error_handler(request: Request, exc: Exception):
    """Return a structured 500 without leaking internals."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"error": str(exc), "path": request.url.path, "method": request.method},
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. The analysis could not be completed."},
    )


# Lazy LLM provider
_llm: Optional[LLMProvider] = None


def _get_llm() -> LLMProvider:
    global _llm
    if _llm is None:
        _llm = get_provider(settings)
    return _llm


# ============================================================
# ROUTES
# ============================================================

@app.post("/analyze/text", response_model=TextAnalyzeResponse)
async def analyze_text_route(request: TextAnalyzeRequest):
    """Score pasted lyrics or narrative text."""
    start = time.time()
    # Pattern matching is CPU-bound; keep it off the event loop
    result = await run_in_threadpool(
        analyze_text, request.text, rules=_rules, extra_themes=request.themes,
    )

    duration = int((time.time() - start) * 1000)
    logger.info(
        f"Text analysis complete: total={result.total}",
        extra={
            "total": result.total,
            "raw_total": result.raw_total,
            "band": result.band,
            "hits_count": len(result.hits),
            "duration_ms": duration,
        },
    )

    return {"title": request.title, "artist": request.artist, **result.to_dict()}


@app.post("/analyze/media", response_model=MediaAnalyzeResponse)
async def analyze_media_route(request: MediaAnalyzeRequest):
    """LLM narrative analysis of a title. Falls back to a neutral result."""
    cached = await media_cache.get(request.title, request.media_type, request.release_year)
    if cached:
        logger.info(
            "Media analysis served from cache",
            extra={"title": request.title, "media_type": request.media_type, "cached": True},
        )
        return cached

    analysis = await analyze_media(
        request.title,
        llm=_get_llm(),
        media_type=request.media_type,
        release_year=request.release_year,
        overview=request.overview,
    )
    result = {
        "title": request.title,
        "media_type": request.media_type,
        "band": band(analysis.discernment_score),
        **analysis.to_dict(),
        "cached": False,
    }

    # Fallback results are not cached so the next request retries the LLM
    if "analysis-error" not in analysis.tags:
        await media_cache.put(request.title, request.media_type, request.release_year, result)

    return result


@app.get("/rules", response_model=RulesResponse)
async def get_rules():
    """The rule set used by /analyze/text."""
    return {"rules": [r.to_dict() for r in _rules], "total": len(_rules)}


@app.get("/lexicon")
async def get_lexicon():
    """Detection categories and their patterns."""
    categories = lyrics_lexicon.describe()
    return {
        "version": lyrics_lexicon.version,
        "categories": categories,
        "total": len(categories),
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check."""
    return {
        "status": "operational",
        "version": __version__,
        "lexicon_version": LEXICON_VERSION,
        "llm_provider": settings.LLM_PROVIDER,
        "rules_loaded": len(_rules),
        "media_cache": media_cache.stats,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=settings.HOST, port=settings.PORT)
