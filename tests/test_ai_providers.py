"""
Tests for AI Providers - Base classes and the Gemini provider.

This module tests:
- TokenUsage dataclass
- AIResponse dataclass
- Provider type enum
- GeminiProvider with a mocked SDK client (no network)

We mock LLM calls to ensure tests are:
- Fast (no network calls)
- Reliable (no API flakiness)
- Free (no token costs)
"""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import types

from app.ai.providers.base import (
    AIResponse,
    TokenUsage,
    ProviderType,
)
from app.ai.providers.gemini import GeminiProvider


class TestTokenUsage:
    """Tests for TokenUsage dataclass."""

    def test_create_basic_usage(self):
        usage = TokenUsage(prompt_tokens=100, completion_tokens=50, total_tokens=150)

        assert usage.prompt_tokens == 100
        assert usage.completion_tokens == 50
        assert usage.total_tokens == 150

    def test_auto_calculate_total(self):
        """Test that total is auto-calculated if not provided."""
        usage = TokenUsage(prompt_tokens=100, completion_tokens=50)

        assert usage.total_tokens == 150

    def test_default_values(self):
        usage = TokenUsage()

        assert usage.prompt_tokens == 0
        assert usage.completion_tokens == 0
        assert usage.total_tokens == 0

    def test_total_overrides_calculation(self):
        """Test that explicit total is not recalculated when it's non-zero."""
        usage = TokenUsage(prompt_tokens=100, completion_tokens=50, total_tokens=200)

        assert usage.total_tokens == 200


class TestAIResponse:
    """Tests for AIResponse dataclass."""

    def test_create_success_response(self):
        response = AIResponse(
            content="<!DOCTYPE html><html></html>",
            provider=ProviderType.GEMINI,
            model="gemini-2.5-flash",
        )

        assert response.content.startswith("<!DOCTYPE html>")
        assert response.provider == ProviderType.GEMINI
        assert response.success is True
        assert response.error is None

    def test_create_error_response(self):
        response = AIResponse(
            content="",
            provider=ProviderType.GEMINI,
            model="gemini-2.5-flash",
            success=False,
            error="Rate limit exceeded",
        )

        assert response.content == ""
        assert response.success is False
        assert response.error == "Rate limit exceeded"

    def test_failure_constructor(self):
        response = AIResponse.failure(ProviderType.GEMINI, "gemini-2.5-flash", "API key missing", latency_ms=3.0)

        assert response.success is False
        assert response.content == ""
        assert response.error == "API key missing"
        assert response.latency_ms == 3.0

    def test_response_is_immutable(self):
        response = AIResponse(content="x", provider=ProviderType.GEMINI, model="m")

        with pytest.raises(Exception):
            response.content = "y"

    def test_to_dict(self):
        response = AIResponse(
            content="Test content",
            provider=ProviderType.GEMINI,
            model="gemini-2.5-flash",
            usage=TokenUsage(prompt_tokens=100, completion_tokens=50),
            latency_ms=200.0,
        )

        result = response.to_dict()

        assert result["content"] == "Test content"
        assert result["provider"] == "gemini"
        assert result["tokens"] == {"prompt": 100, "completion": 50, "total": 150}
        assert result["latency_ms"] == 200.0
        assert result["success"] is True
        assert result["error"] is None

    def test_to_dict_truncates_long_content(self):
        response = AIResponse(content="x" * 200, provider=ProviderType.GEMINI, model="m")

        result = response.to_dict()

        assert len(result["content"]) == 103  # 100 chars + "..."
        assert result["content"].endswith("...")

    def test_created_at_timestamp(self):
        before = datetime.now(timezone.utc)
        response = AIResponse(content="Test", provider=ProviderType.GEMINI, model="m")
        after = datetime.now(timezone.utc)

        assert before <= response.created_at <= after


class TestProviderType:
    """Tests for ProviderType enum."""

    def test_gemini_exists(self):
        assert ProviderType.GEMINI.value == "gemini"

    def test_provider_type_count(self):
        assert len(ProviderType) == 1


# ---------------------------------------------------------------------------
# GEMINI PROVIDER
# ---------------------------------------------------------------------------

def _sdk_response(text, prompt_tokens=10, completion_tokens=20, finish_reason="STOP"):
    response = MagicMock()
    response.text = text
    response.usage_metadata.prompt_token_count = prompt_tokens
    response.usage_metadata.candidates_token_count = completion_tokens
    candidate = MagicMock()
    candidate.finish_reason = finish_reason
    response.candidates = [candidate]
    return response


@pytest.fixture
def gemini():
    """GeminiProvider with a mocked SDK client in place of google.genai.Client."""
    provider = GeminiProvider(model="gemini-2.5-flash", api_key="", timeout=5)
    provider._client = MagicMock()
    provider._client.aio.models.generate_content = AsyncMock(
        return_value=_sdk_response("<!DOCTYPE html><html>ok</html>")
    )
    return provider


class TestGeminiProvider:
    """GeminiProvider.generate never raises; failures come back in AIResponse."""

    @pytest.mark.asyncio
    async def test_success(self, gemini):
        response = await gemini.generate("user prompt", system_prompt="system prompt")

        assert response.success is True
        assert response.content == "<!DOCTYPE html><html>ok</html>"
        assert response.usage.total_tokens == 30
        assert response.finish_reason == "STOP"
        assert response.model == "gemini-2.5-flash"

    @pytest.mark.asyncio
    async def test_passes_system_prompt_as_instruction(self, gemini):
        await gemini.generate("user prompt", system_prompt="system prompt")

        kwargs = gemini._client.aio.models.generate_content.call_args.kwargs
        assert kwargs["contents"] == "user prompt"
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["config"].system_instruction == "system prompt"

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        provider = GeminiProvider(api_key="")
        provider._client = None

        response = await provider.generate("hello")

        assert provider.is_configured is False
        assert response.success is False
        assert "API key" in response.error

    @pytest.mark.asyncio
    async def test_empty_text_is_a_failure(self, gemini):
        gemini._client.aio.models.generate_content.return_value = _sdk_response(
            "", finish_reason="SAFETY"
        )

        response = await gemini.generate("hello")

        assert response.success is False
        assert "SAFETY" in response.error

    @pytest.mark.asyncio
    async def test_sdk_finish_reason_enum_uses_its_name(self, gemini):
        gemini._client.aio.models.generate_content.return_value = _sdk_response(
            "", finish_reason=types.FinishReason.MAX_TOKENS
        )

        response = await gemini.generate("hello")

        assert response.error == "Empty response (finish reason: MAX_TOKENS)"
        assert "FinishReason." not in response.error

    @pytest.mark.asyncio
    async def test_sdk_exception_is_captured(self, gemini):
        gemini._client.aio.models.generate_content.side_effect = RuntimeError("429 quota")

        response = await gemini.generate("hello")

        assert response.success is False
        assert "429 quota" in response.error

    @pytest.mark.asyncio
    async def test_timeout(self, gemini):
        async def slow(**kwargs):
            await asyncio.sleep(1)

        gemini.timeout = 0.01
        gemini._client.aio.models.generate_content = slow

        response = await gemini.generate("hello")

        assert response.success is False
        assert "timed out" in response.error

    @pytest.mark.asyncio
    async def test_missing_usage_metadata(self, gemini):
        sdk_response = _sdk_response("<html></html>")
        sdk_response.usage_metadata = None
        gemini._client.aio.models.generate_content.return_value = sdk_response

        response = await gemini.generate("hello")

        assert response.success is True
        assert response.usage.total_tokens == 0
