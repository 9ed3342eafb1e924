"""
Landing Router - Generate and edit landing pages with the AI service.

Endpoints:
==========
- POST /api/generate → full HTML page from a brief
- POST /api/edit     → updated HTML page from current code + instruction

Both answer in the Gemini response envelope:
    {"candidates": [{"content": {"parts": [{"text": "<!DOCTYPE html>..."}]}}]}

All business logic lives in GenerationService; this file only validates
input and shapes the response. Errors are raised as AppError subclasses
and rendered by the handler in app.main.
"""

import logging

import pydantic
from fastapi import APIRouter, Depends

from app.core.errors import MissingFieldError, ValidationError
from app.deps import get_generation_service
from app.schemas.landing import Brief, EditRequest, GenerateRequest, GenerationEnvelope
from app.services.generation_service import GenerationService


logger = logging.getLogger("pabrik.routers.landing")


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/api", tags=["landing"])


@router.post("/generate", response_model=GenerationEnvelope)
async def generate_landing_page(
    request: GenerateRequest,
    service: GenerationService = Depends(get_generation_service),
):
    """
    Generate a landing page from a brief.

    Returns 400 when the brief is absent or lacks a required field,
    502 when the AI service fails.
    """
    logger.info("Received /api/generate request")

    if not request.brief:
        raise ValidationError("Brief (form data) is incomplete.")

    try:
        brief = Brief.model_validate(request.brief)
    except pydantic.ValidationError as e:
        raise ValidationError("Brief (form data) is malformed.", details=str(e))

    missing = brief.missing_fields()
    if missing:
        raise MissingFieldError(missing[0])

    html = await service.generate_page(brief)
    logger.info(f"Generated page for '{brief.product_name}' ({len(html)} chars)")
    return GenerationEnvelope.from_text(html)


@router.post("/edit", response_model=GenerationEnvelope)
async def edit_landing_page(
    request: EditRequest,
    service: GenerationService = Depends(get_generation_service),
):
    """
    Apply a free-text edit instruction to the current page.

    The whole document is sent to the AI service unchanged.
    """
    logger.info("Received /api/edit request")

    if not request.current_code or not request.edit_instruction:
        raise ValidationError("Payload (currentCode or editInstruction) is incomplete.")

    html = await service.edit_page(request.current_code, request.edit_instruction)
    logger.info(f"Edited page ({len(html)} chars)")
    return GenerationEnvelope.from_text(html)
