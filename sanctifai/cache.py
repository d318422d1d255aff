"""
Media Analysis Cache

In-memory TTL cache for AI media analyses.
Key = SHA-256(title + media_type + release_year), title case-folded.

Prevents repeated LLM calls when the same title is looked up again.
Guarded by an asyncio lock. Nothing is written to disk; a restart
starts empty.

Usage:
    from sanctifai.cache import media_cache
    cached = await media_cache.get(title, media_type, release_year)
    if cached:
        return cached
    result = await analyze_media(...)
    await media_cache.put(title, media_type, release_year, result)
"""

from __future__ import annotations

import asyncio
import hashlib
import time
from typing import Optional

from sanctifai.config import settings


class MediaCache:
    """In-memory cache with TTL eviction and a size bound."""

    def __init__(self, ttl_seconds: int = 3600, max_entries: int = 500):
        self._cache: dict[str, tuple[float, dict]] = {}
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def _make_key(title: str, media_type: str, release_year: Optional[str]) -> str:
        raw = f"{title.strip().casefold()}||{media_type}||{release_year or ''}"
        return hashlib.sha256(raw.encode()).hexdigest()

    async def get(
        self, title: str, media_type: str, release_year: Optional[str] = None,
    ) -> Optional[dict]:
        """Return the cached analysis if present and not expired."""
        key = self._make_key(title, media_type, release_year)
        async with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return None

            ts, result = entry
            if time.monotonic() - ts > self._ttl:
                del self._cache[key]
                self._misses += 1
                return None

            self._hits += 1
            return {**result, "cached": True}

    async def put(
        self,
        title: str,
        media_type: str,
        release_year: Optional[str],
        result: dict,
    ) -> None:
        """Store an analysis. Evicts the oldest entry when full."""
        key = self._make_key(title, media_type, release_year)
        async with self._lock:
            if key not in self._cache and len(self._cache) >= self._max_entries:
                oldest_key = min(self._cache, key=lambda k: self._cache[k][0])
                del self._cache[oldest_key]
            self._cache[key] = (time.monotonic(), result)

    async def clear(self) -> None:
        async with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    @property
    def stats(self) -> dict:
        """Cache hit/miss statistics."""
        total = self._hits + self._misses
        return {
            "entries": len(self._cache),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total, 3) if total > 0 else 0.0,
        }


# Singleton, shared across the application
media_cache = MediaCache(
    ttl_seconds=settings.MEDIA_CACHE_TTL,
    max_entries=settings.MEDIA_CACHE_MAX,
)
