"""
Prompts Module - Centralized prompt templates for AI interactions.

Keeping prompts centralized makes them:
- Easy to update and iterate
- Testable without a network call
"""

from app.ai.prompts.landing_prompts import (
    DEFAULTS,
    PLACEHOLDER_IMAGE_URL,
    build_edit_prompt,
    build_generation_prompt,
)

__all__ = [
    "DEFAULTS",
    "PLACEHOLDER_IMAGE_URL",
    "build_edit_prompt",
    "build_generation_prompt",
]
