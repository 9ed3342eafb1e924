"""
Landing schemas - Pydantic models for the generate and edit endpoints.
These define the request/response formats the frontend talks in.
"""

from typing import Any, ClassVar, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _alias(camel: str, kebab: Optional[str] = None) -> AliasChoices:
    # The first frontend posted kebab-case keys; the current one posts camelCase
    choices = [camel] + ([kebab] if kebab else [])
    return AliasChoices(*choices)


# ---------------------------------------------------------------------------
# BRIEF
# ---------------------------------------------------------------------------

class Brief(BaseModel):
    """
    A landing-page brief as filled in on the frontend form.

    Every field is optional at parse time so a missing one can be reported
    by name (MissingFieldError) instead of as a generic schema error. Blank
    strings count as missing. REQUIRED_FIELDS lists the ones the prompt
    builder cannot do without.

    Example request body (inside {"brief": ...}):
    {
        "productName": "Acme",
        "productDescription": "Widgets",
        "targetAudience": "Devs",
        "ctaLink": "https://x.test"
    }
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    # Python attribute name -> public (camelCase) key, used in error messages
    REQUIRED_FIELDS: ClassVar[Dict[str, str]] = {
        "product_name": "productName",
        "product_description": "productDescription",
        "target_audience": "targetAudience",
        "cta_link": "ctaLink",
    }

    product_name: Optional[str] = Field(None, validation_alias=_alias("productName", "product-name"))
    product_description: Optional[str] = Field(
        None, validation_alias=_alias("productDescription", "product-description")
    )
    target_audience: Optional[str] = Field(None, validation_alias=_alias("targetAudience", "target-audience"))
    product_usp: Optional[str] = Field(None, validation_alias=_alias("productUsp", "product-usp"))
    product_price: Optional[str] = Field(None, validation_alias=_alias("productPrice", "product-price"))
    product_slashed_price: Optional[str] = Field(
        None, validation_alias=_alias("productSlashedPrice", "product-slashed-price")
    )
    final_goal: Optional[str] = Field(None, validation_alias=_alias("finalGoal"))
    cta_link: Optional[str] = Field(None, validation_alias=_alias("ctaLink", "cta-link"))
    product_offer: Optional[str] = Field(None, validation_alias=_alias("productOffer", "product-offer"))
    color_scheme: Optional[str] = Field(None, validation_alias=_alias("colorScheme", "color-scheme"))
    mood: Optional[str] = Field(None, validation_alias=_alias("mood"))
    language_style: Optional[str] = Field(None, validation_alias=_alias("languageStyle", "language-style"))
    required_sections: Optional[str] = Field(None, validation_alias=_alias("requiredSections"))
    reference_link: Optional[str] = Field(None, validation_alias=_alias("referenceLink", "reference-link"))
    hero_image: Optional[str] = Field(None, validation_alias=_alias("heroImage"))
    feature_images: Optional[str] = Field(None, validation_alias=_alias("featureImages"))
    feature_slider: bool = Field(False, validation_alias=_alias("featureSlider"))
    testimonial_images: Optional[str] = Field(None, validation_alias=_alias("testimonialImages"))
    additional_details: Optional[str] = Field(
        None, validation_alias=_alias("additionalDetails", "additional-details")
    )

    @field_validator("*", mode="before")
    @classmethod
    def _normalize(cls, value: Any, info) -> Any:
        if info.field_name == "feature_slider":
            if isinstance(value, str):
                return value.strip().lower() in ("true", "1", "yes", "on", "slider")
            return bool(value)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            # Image fields may arrive as a list of URLs
            value = "\n".join(str(item).strip() for item in value if str(item).strip())
        elif isinstance(value, (int, float)):
            value = str(value)
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    def missing_fields(self) -> List[str]:
        """Public names of the required fields that are absent, in form order."""
        return [
            public for attr, public in self.REQUIRED_FIELDS.items()
            if getattr(self, attr) is None
        ]


# ---------------------------------------------------------------------------
# REQUEST SCHEMAS (what the client sends)
# ---------------------------------------------------------------------------

class GenerateRequest(BaseModel):
    """
    Schema for POST /api/generate.

    brief stays a plain dict here; the route turns it into a Brief so
    missing fields are reported by name.
    """
    brief: Optional[Dict[str, Any]] = None


class EditRequest(BaseModel):
    """
    Schema for POST /api/edit.

    Example request body:
    {
        "currentCode": "<!DOCTYPE html>...",
        "editInstruction": "Make the hero button green"
    }
    """
    model_config = ConfigDict(populate_by_name=True)

    current_code: Optional[str] = Field(None, alias="currentCode")
    edit_instruction: Optional[str] = Field(None, alias="editInstruction")


# ---------------------------------------------------------------------------
# RESPONSE SCHEMAS (what the server returns)
# ---------------------------------------------------------------------------
# Mirrors the Gemini REST envelope so a frontend written against the raw
# API keeps working: {"candidates": [{"content": {"parts": [{"text": ...}]}}]}

class Part(BaseModel):
    text: str


class Content(BaseModel):
    parts: List[Part]


class Candidate(BaseModel):
    content: Content


class GenerationEnvelope(BaseModel):
    """Response of /api/generate and /api/edit."""
    candidates: List[Candidate]

    @classmethod
    def from_text(cls, text: str) -> "GenerationEnvelope":
        return cls(candidates=[Candidate(content=Content(parts=[Part(text=text)]))])
