"""
Generation Service - Business logic for producing and editing landing pages.

Responsibilities:
=================
- Turn a brief or an edit instruction into prompts
- Make exactly one call to the text-generation provider
- Convert a failed provider response into a GenerationError

NOT Responsible For:
====================
- HTTP request/response handling (router's job)
- Retrying, caching or post-processing the generated HTML

Usage:
======
```python
from app.services.generation_service import generation_service

html = await generation_service.generate_page(brief)
html = await generation_service.edit_page(current_code, "Make the CTA red")
```
"""

import logging
import uuid as uuid_module
from typing import Optional

from app.ai.monitoring import ai_logger
from app.ai.prompts import build_edit_prompt, build_generation_prompt
from app.ai.providers import AIProvider, gemini_provider
from app.core.errors import GenerationError
from app.schemas.landing import Brief


logger = logging.getLogger("pabrik.services.generation")


class GenerationService:
    """
    Wraps a single call to the text-generation service.

    The provider never raises; it reports failure in AIResponse.error.
    This class is where that becomes an exception the router can map.
    """

    def __init__(self, provider: Optional[AIProvider] = None):
        self.provider = provider or gemini_provider

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        operation: str = "generate",
    ) -> str:
        """
        Send one (system_prompt, user_prompt) pair and return the text.

        Raises:
            GenerationError: On transport failure, timeout, non-success
                status or an empty answer
        """
        request_id = str(uuid_module.uuid4())
        ai_logger.log_request(
            request_id=request_id,
            prompt=user_prompt,
            provider=self.provider.provider_type.value,
            model=getattr(self.provider, "model", "unknown"),
            metadata={"operation": operation},
        )

        response = await self.provider.generate(
            prompt=user_prompt,
            system_prompt=system_prompt,
        )

        ai_logger.log_response(
            request_id=request_id,
            response=response,
            metadata={"operation": operation},
        )

        if not response.success:
            raise GenerationError(response.error or "Unknown provider error")
        return response.content

    async def generate_page(self, brief: Brief) -> str:
        """Generate a complete landing page from a brief."""
        system_prompt, user_prompt = build_generation_prompt(brief)
        logger.info(f"Generating landing page for '{brief.product_name}'")
        return await self.generate(system_prompt, user_prompt, operation="generate")

    async def edit_page(self, current_code: str, edit_instruction: str) -> str:
        """Apply a free-text edit instruction to an existing page."""
        system_prompt, user_prompt = build_edit_prompt(current_code, edit_instruction)
        logger.info(f"Editing landing page ({len(current_code)} chars)")
        return await self.generate(system_prompt, user_prompt, operation="edit")


generation_service = GenerationService()
