"""
Tests for FallbackProvider
==========================
"""

import asyncio
import json

import httpx
import pytest
from unittest.mock import AsyncMock

from coach_ai.config import ProviderSettings
from coach_ai.errors import AIProviderError
from coach_ai.fallback import FallbackProvider
from coach_ai.factory import AIProviderFactory


OPERATIONS = [
    ("generate_program", ({"id": "u1"}, {"name": "Meet"}, None)),
    ("generate_challenge", ({"id": "u1"}, "general")),
    ("adapt_workout", ({"id": "w1"}, {"location_type": "home"})),
    ("generate_deload_options", ({"id": "w1"}, "fatigue")),
    ("analyze_performance", ({"id": "u1"}, {}, {"name": "P"})),
]


def run(coro):
    return asyncio.run(coro)


def failing(operation, error):
    provider = AsyncMock()
    getattr(provider, operation).side_effect = error
    return provider


def succeeding(operation, result):
    provider = AsyncMock()
    getattr(provider, operation).return_value = result
    return provider


class TestFallbackProvider:

    @pytest.mark.parametrize("operation,args", OPERATIONS)
    def test_secondary_result_when_primary_fails(self, operation, args):
        primary = failing(operation, AIProviderError("openai", operation, "503 Service Unavailable", 503))
        secondary = succeeding(operation, {"from": "secondary"})
        provider = FallbackProvider(primary, secondary)

        result = run(getattr(provider, operation)(*args))

        assert result == {"from": "secondary"}
        getattr(primary, operation).assert_awaited_once_with(*args)
        getattr(secondary, operation).assert_awaited_once_with(*args)

    @pytest.mark.parametrize("operation,args", OPERATIONS)
    def test_secondary_error_when_both_fail(self, operation, args):
        primary_error = AIProviderError("openai", operation, "primary down")
        secondary_error = AIProviderError("anthropic", operation, "secondary down")
        provider = FallbackProvider(failing(operation, primary_error), failing(operation, secondary_error))

        with pytest.raises(AIProviderError) as exc:
            run(getattr(provider, operation)(*args))

        assert exc.value is secondary_error

    @pytest.mark.parametrize("operation,args", OPERATIONS)
    def test_secondary_untouched_when_primary_succeeds(self, operation, args):
        primary = succeeding(operation, {"from": "primary"})
        secondary = succeeding(operation, {"from": "secondary"})
        provider = FallbackProvider(primary, secondary)

        result = run(getattr(provider, operation)(*args))

        assert result == {"from": "primary"}
        assert getattr(secondary, operation).await_count == 0

    def test_any_exception_triggers_fallback(self):
        primary = failing("generate_challenge", RuntimeError("socket closed"))
        secondary = succeeding("generate_challenge", {"name": "ok"})

        result = run(FallbackProvider(primary, secondary).generate_challenge({"id": "u1"}))

        assert result == {"name": "ok"}

    def test_failure_is_logged(self, caplog):
        primary = failing("generate_program", AIProviderError("openai", "generate program", "timeout"))
        secondary = succeeding("generate_program", {"id": "p1"})

        with caplog.at_level("WARNING", logger="coach_ai.fallback"):
            run(FallbackProvider(primary, secondary).generate_program({"id": "u1"}, {}))

        assert "trying fallback" in caplog.text
        assert "timeout" in caplog.text

    def test_only_one_hop(self):
        """A fallback wrapping a fallback is still only asked once per layer."""
        inner_primary = failing("generate_challenge", AIProviderError("a", "generate challenge", "x"))
        inner_secondary = failing("generate_challenge", AIProviderError("b", "generate challenge", "y"))
        outer_secondary = succeeding("generate_challenge", {"name": "c"})
        inner = FallbackProvider(inner_primary, inner_secondary)

        result = run(FallbackProvider(inner, outer_secondary).generate_challenge({"id": "u1"}))

        assert result == {"name": "c"}
        assert inner_primary.generate_challenge.await_count == 1
        assert inner_secondary.generate_challenge.await_count == 1


class TestFallbackOverHttp:
    """Factory-built fallback with real backends against a stubbed network."""

    def test_openai_outage_served_by_ollama(self):
        seen = []

        def upstream(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.host)
            if request.url.host == "api.openai.com":
                return httpx.Response(503)
            content = json.dumps({"insights": ["Consistent"], "recommendations": ["Add a test week"]})
            return httpx.Response(200, json={"message": {"role": "assistant", "content": content}})

        factory = AIProviderFactory(
            ProviderSettings(openai_api_key="sk-test"),
            transport=httpx.MockTransport(upstream),
        )
        provider = factory.create_with_fallback("openai", "ollama")

        analysis = run(provider.analyze_performance({"id": "u1"}, {}, {"name": "P"}))

        assert seen == ["api.openai.com", "localhost"]
        assert analysis.insights == ["Consistent"]
        assert analysis.program_adjustments is None

    def test_both_backends_down(self):
        factory = AIProviderFactory(
            ProviderSettings(openai_api_key="sk-test", anthropic_api_key="sk-ant-test"),
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )
        provider = factory.create_with_fallback("openai", "anthropic")

        with pytest.raises(AIProviderError) as exc:
            run(provider.generate_deload_options({"current_prescription": {}}, "fatigue"))

        assert exc.value.provider == "anthropic"
