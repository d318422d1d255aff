"""
LLM Provider factory.

Providers receive their credentials explicitly; nothing here reads the
process environment.
"""

from __future__ import annotations

from sanctifai.config import Settings
from sanctifai.llm import LLMProvider


def get_provider(config: Settings) -> LLMProvider:
    """Build the LLM provider named by config.LLM_PROVIDER."""
    if config.LLM_PROVIDER == "gemini":
        from sanctifai.llm.gemini import GeminiProvider
        return GeminiProvider(api_key=config.GEMINI_API_KEY, model=config.GEMINI_MODEL)
    raise ValueError(f"Unknown LLM provider: {config.LLM_PROVIDER}")
