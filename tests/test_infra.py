"""
Tests for infrastructure: media cache, structured logging, config,
LLM provider factory and the Gemini circuit breaker.
"""

import io
import json
import logging

import pytest

from sanctifai.anchors import ANCHORS, resolve_anchors
from sanctifai.cache import MediaCache
from sanctifai.config import Settings
from sanctifai.llm.factory import get_provider
from sanctifai.llm.gemini import FALLBACK_MODEL, CircuitBreaker, GeminiProvider
from sanctifai.logging import JSONFormatter, TextFormatter, get_logger, setup_logging


class TestMediaCache:
    @pytest.mark.asyncio
    async def test_miss_then_hit(self):
        cache = MediaCache()
        assert await cache.get("Film", "movie", "2020") is None
        await cache.put("Film", "movie", "2020", {"discernment_score": 70})
        hit = await cache.get("film ", "movie", "2020")
        assert hit == {"discernment_score": 70, "cached": True}
        assert cache.stats["hits"] == 1
        assert cache.stats["misses"] == 1

    @pytest.mark.asyncio
    async def test_key_includes_type_and_year(self):
        cache = MediaCache()
        await cache.put("Dune", "book", "1965", {"x": 1})
        assert await cache.get("Dune", "movie", "1965") is None
        assert await cache.get("Dune", "book", "2021") is None

    @pytest.mark.asyncio
    async def test_expired_entry(self):
        cache = MediaCache(ttl_seconds=-1)
        await cache.put("Film", "movie", None, {"x": 1})
        assert await cache.get("Film", "movie", None) is None
        assert cache.stats["entries"] == 0

    @pytest.mark.asyncio
    async def test_eviction(self):
        cache = MediaCache(max_entries=1)
        await cache.put("A", "movie", None, {"x": 1})
        await cache.put("B", "movie", None, {"x": 2})
        assert cache.stats["entries"] == 1
        assert await cache.get("A", "movie", None) is None
        assert await cache.get("B", "movie", None) is not None

    @pytest.mark.asyncio
    async def test_clear(self):
        cache = MediaCache()
        await cache.put("A", "movie", None, {"x": 1})
        await cache.clear()
        assert cache.stats == {"entries": 0, "hits": 0, "misses": 0, "hit_rate": 0.0}


class TestLogging:
    def test_json_formatter_includes_extras(self):
        record = logging.makeLogRecord({
            "name": "sanctifai.api",
            "levelname": "INFO",
            "msg": "Text analysis complete",
            "total": 30,
            "hits_count": 2,
            "unrelated": "dropped",
        })
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "Text analysis complete"
        assert entry["logger"] == "sanctifai.api"
        assert entry["total"] == 30
        assert entry["hits_count"] == 2
        assert "unrelated" not in entry

    def test_setup_logging_text(self):
        root = setup_logging(fmt="text", level="debug")
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, TextFormatter)
        setup_logging()

    def test_json_formatter_custom_fields(self):
        record = logging.makeLogRecord({"msg": "x", "total": 30, "band": "Concern"})
        entry = json.loads(JSONFormatter(fields=("band",)).format(record))
        assert entry["band"] == "Concern"
        assert "total" not in entry

    def test_error_records_carry_location(self):
        record = logging.makeLogRecord({
            "msg": "boom", "levelno": logging.ERROR, "levelname": "ERROR",
            "module": "main", "lineno": 42,
        })
        entry = json.loads(JSONFormatter().format(record))
        assert entry["location"] == "main:42"

    def test_setup_logging_writes_json_to_stream(self):
        stream = io.StringIO()
        setup_logging(fmt="json", level="info", stream=stream)
        get_logger("api").info("started", extra={"rules_count": 14})
        entry = json.loads(stream.getvalue().splitlines()[-1])
        assert entry["logger"] == "sanctifai.api"
        assert entry["rules_count"] == 14
        setup_logging()

    def test_setup_logging_replaces_handlers(self):
        setup_logging(fmt="text")
        root = setup_logging(fmt="text")
        assert len(root.handlers) == 1
        assert logging.getLogger("httpx").level == logging.WARNING
        setup_logging()

    def test_get_logger_namespace(self):
        assert get_logger("scorer").name == "sanctifai.scorer"


class TestProviderFactory:
    def test_gemini(self):
        provider = get_provider(Settings(LLM_PROVIDER="gemini", GEMINI_API_KEY="k"))
        assert isinstance(provider, GeminiProvider)

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            get_provider(Settings(LLM_PROVIDER="nope"))

    @pytest.mark.asyncio
    async def test_missing_key_fails_on_call(self):
        provider = GeminiProvider(api_key="", model=FALLBACK_MODEL)
        with pytest.raises(RuntimeError, match="GEMINI_API_KEY"):
            await provider.generate("hello")


class TestCircuitBreaker:
    def test_opens_after_threshold(self):
        cb = CircuitBreaker(failure_threshold=2, recovery_timeout=60)
        cb.record_failure()
        assert cb.state == "closed"
        cb.record_failure()
        assert cb.is_open

    def test_half_open_after_timeout(self):
        cb = CircuitBreaker(failure_threshold=1, recovery_timeout=0)
        cb.record_failure()
        assert cb.state == "half-open"

    def test_success_closes(self):
        cb = CircuitBreaker(failure_threshold=1, recovery_timeout=60)
        cb.record_failure()
        cb.record_success()
        assert cb.state == "closed"


class TestAnchors:
    def test_resolve_in_order_skipping_unknown(self):
        resolved = resolve_anchors(["ex-20-7", "unknown-1", "eph-4-29", "ex-20-7"])
        assert list(resolved) == ["ex-20-7", "eph-4-29"]
        assert resolved["ex-20-7"].reference == "Exodus 20:7"

    def test_default_rule_anchors_known(self):
        from sanctifai.rules import DEFAULT_RULES
        for rule in DEFAULT_RULES:
            for key in rule.anchors:
                assert key in ANCHORS, key
