"""
SanctifAi Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    # --- Versioning ---
    API_VERSION: str = "1"

    # --- LLM Provider (media narrative analysis) ---
    LLM_PROVIDER: str = os.getenv("SANCTIFAI_LLM_PROVIDER", "gemini")
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # --- Rules ---
    # Empty = built-in default rule set
    RULES_PATH: str = os.getenv("SANCTIFAI_RULES_PATH", "")

    # --- Media analysis cache ---
    MEDIA_CACHE_TTL: int = int(os.getenv("SANCTIFAI_MEDIA_CACHE_TTL", "3600"))
    MEDIA_CACHE_MAX: int = int(os.getenv("SANCTIFAI_MEDIA_CACHE_MAX", "500"))

    # --- Server ---
    HOST: str = os.getenv("SANCTIFAI_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("SANCTIFAI_PORT", "8000"))

    # --- CORS ---
    CORS_ORIGINS: str = os.getenv("SANCTIFAI_CORS_ORIGINS", "*")

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("SANCTIFAI_LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv("SANCTIFAI_LOG_FORMAT", "json")  # "json" or "text"


settings = Settings()
