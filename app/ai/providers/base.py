"""
Base AI Provider - What the generation service needs from a text model.

A provider takes one (system_prompt, prompt) pair and answers with an
AIResponse. It never raises for model or transport failures: those come
back as AIResponse(success=False, error=...), and the generation service
decides what they mean for the HTTP caller.

Design Pattern: Strategy Pattern
================================
GenerationService holds an AIProvider and calls generate(); which SDK
sits behind it is the provider's business.

    provider = GeminiProvider()
    response = await provider.generate(user_prompt, system_prompt=system_prompt)
    if response.success:
        html = response.content
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger("pabrik.ai")

# Characters of generated content kept in log lines
PREVIEW_CHARS = 100


class ProviderType(str, Enum):
    GEMINI = "gemini"


@dataclass
class TokenUsage:
    """Prompt/completion token counts; total is derived when not reported."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        if self.total_tokens == 0:
            self.total_tokens = self.prompt_tokens + self.completion_tokens


@dataclass(frozen=True)
class AIResponse:
    """
    One generation result. Immutable once produced.

    Attributes:
        content: Generated text (a full HTML document when successful)
        provider: Provider that answered
        model: Model name the request was sent to
        usage: Token counts reported by the provider
        latency_ms: Wall time of the call
        success: False when the call failed or produced no text
        error: Why it failed (failure only)
        finish_reason: Provider's stop reason, when reported
        created_at: When the result was produced (UTC)
    """
    content: str
    provider: ProviderType
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    latency_ms: float = 0.0
    success: bool = True
    error: Optional[str] = None
    finish_reason: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def failure(
        cls,
        provider: ProviderType,
        model: str,
        error: str,
        latency_ms: float = 0.0,
    ) -> "AIResponse":
        return cls(
            content="",
            provider=provider,
            model=model,
            latency_ms=latency_ms,
            success=False,
            error=error,
        )

    @property
    def preview(self) -> str:
        if len(self.content) > PREVIEW_CHARS:
            return self.content[:PREVIEW_CHARS] + "..."
        return self.content

    def to_dict(self) -> Dict[str, Any]:
        """Log-friendly view; content is cut to a preview."""
        return {
            "content": self.preview,
            "provider": self.provider.value,
            "model": self.model,
            "tokens": {
                "prompt": self.usage.prompt_tokens,
                "completion": self.usage.completion_tokens,
                "total": self.usage.total_tokens,
            },
            "latency_ms": self.latency_ms,
            "success": self.success,
            "error": self.error,
            "finish_reason": self.finish_reason,
            "created_at": self.created_at.isoformat(),
        }


class AIProvider(ABC):
    """
    A text-generation backend.

    Subclasses set provider_type and model and implement generate().
    """

    provider_type: ProviderType
    model: str

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> AIResponse:
        """
        Send one prompt pair to the model.

        Args:
            prompt: The user prompt
            system_prompt: Instructions sent as the model's system turn
            temperature: Provider default when None
            max_tokens: Output cap, provider default when None

        Returns:
            AIResponse; failures are reported in it, never raised
        """
        pass

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        """Milliseconds since a time.monotonic() reading."""
        return (time.monotonic() - started) * 1000

    def _create_error_response(self, error: str, latency_ms: float = 0.0) -> AIResponse:
        logger.error(f"{self.provider_type.value} generation failed: {error}")
        return AIResponse.failure(self.provider_type, self.model, error, latency_ms)
