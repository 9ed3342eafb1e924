"""
Gemini Provider - Google's GenAI SDK.

Uses the SDK's async surface (client.aio) so a slow generation never
blocks the event loop, and bounds every call with AI_REQUEST_TIMEOUT.
"""

import asyncio
import time
import logging
from typing import Optional

from google import genai
from google.genai import types

from app.core.config import settings
from app.ai.providers.base import (
    AIProvider,
    AIResponse,
    ProviderType,
    TokenUsage
)

logger = logging.getLogger("pabrik.ai.gemini")


class GeminiProvider(AIProvider):
    provider_type = ProviderType.GEMINI

    def __init__(self, model: str = None, api_key: str = None, timeout: float = None):
        self.model = model or settings.GEMINI_MODEL
        self.api_key = api_key or settings.GEMINI_API_KEY
        self.timeout = timeout or settings.AI_REQUEST_TIMEOUT

        if self.api_key:
            self._client = genai.Client(api_key=self.api_key)
            logger.info(f"Gemini provider initialized with model: {self.model}")
        else:
            self._client = None
            logger.warning("Gemini API key not configured. Generation endpoints will fail.")

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> AIResponse:
        started = time.monotonic()

        if not self._client:
            return self._error("API key missing", started)

        try:
            config = types.GenerateContentConfig(
                temperature=settings.GEMINI_TEMPERATURE if temperature is None else temperature,
                max_output_tokens=max_tokens or settings.GEMINI_MAX_OUTPUT_TOKENS,
                system_instruction=system_prompt,
            )

            response = await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=self.model,
                    contents=prompt,
                    config=config,
                ),
                timeout=self.timeout,
            )

            latency_ms = self._elapsed_ms(started)
            text = response.text or ""
            if not text.strip():
                return self._error(
                    f"Empty response (finish reason: {self._finish_reason(response)})",
                    started,
                )

            return AIResponse(
                content=text,
                provider=self.provider_type,
                model=self.model,
                usage=self._extract_usage(response),
                latency_ms=latency_ms,
                success=True,
                finish_reason=self._finish_reason(response),
            )

        except asyncio.TimeoutError:
            return self._error(f"Request timed out after {self.timeout:.0f}s", started)
        except Exception as e:  # SDK raises its own APIError types plus transport errors
            return self._error(str(e), started)

    # --- private helpers ---

    def _extract_usage(self, response):
        # usage_metadata is None when the API reports no usage
        prompt_t = response.usage_metadata.prompt_token_count if response.usage_metadata else 0
        comp_t = response.usage_metadata.candidates_token_count if response.usage_metadata else 0
        return TokenUsage(prompt_tokens=prompt_t or 0, completion_tokens=comp_t or 0)

    def _finish_reason(self, response) -> str:
        if response.candidates and response.candidates[0].finish_reason:
            reason = response.candidates[0].finish_reason
            return getattr(reason, "name", None) or str(reason)
        return "unknown"

    def _error(self, msg, started):
        return self._create_error_response(
            msg, latency_ms=self._elapsed_ms(started)
        )


# Singleton instance
gemini_provider = GeminiProvider()
