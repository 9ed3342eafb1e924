"""
AI Providers Module - Clients for text-generation services.

Every provider has the same interface:
    response = await provider.generate(prompt, system_prompt=...)

Only Gemini is wired in; a new provider subclasses AIProvider and the
generation service takes it without changes.
"""

from app.ai.providers.base import AIProvider, AIResponse, ProviderType, TokenUsage
from app.ai.providers.gemini import GeminiProvider, gemini_provider

__all__ = [
    "AIProvider",
    "AIResponse",
    "ProviderType",
    "TokenUsage",
    "GeminiProvider",
    "gemini_provider",
]
