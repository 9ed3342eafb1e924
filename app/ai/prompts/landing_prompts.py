"""
Landing Page Prompts - system and user prompts for generating and editing pages.

Two pure builders:
- build_generation_prompt(brief) -> (system_prompt, user_prompt)
- build_edit_prompt(current_code, edit_instruction) -> (system_prompt, user_prompt)

Both are deterministic string templates with no I/O. Validation of the
HTTP payload belongs to the router; the builders only refuse input that
lacks a required field, raising MissingFieldError with the field's name.

Every brief field becomes one labelled line in the user prompt. An
omitted optional field is rendered with the phrase from DEFAULTS so the
model is told explicitly what to do instead of seeing an empty value.
"""

from typing import Any, Mapping, Optional, Tuple, Union

from app.core.config import settings
from app.core.errors import MissingFieldError
from app.schemas.landing import Brief


PLACEHOLDER_IMAGE_URL = "https://placehold.co/600x400"

# Substituted for optional brief fields the user left empty
DEFAULTS = {
    "product_usp": "Not specified. Derive it from the product description.",
    "product_price": "Not specified (focus on collecting leads).",
    "product_slashed_price": "None.",
    "final_goal": "Sell the product.",
    "product_offer": "No special offer.",
    "color_scheme": "Pick a palette that suits the product.",
    "mood": "Modern and clean.",
    "language_style": "Persuasive and friendly.",
    "required_sections": "Hero, benefits, features, testimonials, call to action.",
    "reference_link": "None.",
    "hero_image": "Use the standard placeholder.",
    "feature_images": "Use the standard placeholder.",
    "testimonial_images": "Use the standard placeholder.",
    "additional_details": "Focus on sales conversion.",
}


# ---------------------------------------------------------------------------
# GENERATION
# ---------------------------------------------------------------------------

GENERATION_SYSTEM_PROMPT = """You are an elite direct-response marketer and frontend developer. Your main mission is to SELL the user's product.

Hard technical rules:
1. ALWAYS use Tailwind CSS classes. Do NOT use custom <style> tags.
2. Build a mobile-first, fully responsive design.
3. Do NOT wrap the answer in ```html markdown. Return ONLY the complete HTML document, starting with `<!DOCTYPE html>`.
4. If the user supplies image links you MUST use them. Otherwise use the placeholder `{placeholder}`.
5. Show the 'Testimonial image assets' as FULL images (screenshot proof), not as profile pictures.
6. ALWAYS use the 'Call-to-action (CTA) link' for EVERY primary call-to-action button.
7. For *every* meaningful HTML element (div, h1, p, button, a, img, section) add a unique 'data-id' attribute in the format `data-id="lp-el-{{uuid}}"`, replacing {{uuid}} with 8 random characters (e.g. `data-id="lp-el-a1b2c3d4"`). The visual editor depends on it.
8. Write all visible page copy in {language}."""


GENERATION_USER_TEMPLATE = """
### Client Brief ###
* Brand/Product name: {product_name}
* Product description: {product_description}
* Target audience: {target_audience}
* Unique selling proposition: {product_usp}
* Selling price: {product_price}
* Slashed (normal) price: {product_slashed_price}
* Main goal: {final_goal}
* Call-to-action (CTA) link: {cta_link}
* Offer/Urgency: {product_offer}
* Brand colors: {color_scheme}
* Visual style (mood): {mood}
* Language style (tone): {language_style}
* Required sections: {required_sections}
* Inspiration: {reference_link}
* Hero image asset: {hero_image}
* Feature image assets (one per line): {feature_images} (Display as: {feature_layout})
* Testimonial image assets (one per line): {testimonial_images}
* Additional notes: {additional_details}

Produce one complete HTML document. Do not forget the main mission: make this page **sell**, and put a **data-id** on every element."""


def _coerce_brief(brief: Union[Brief, Mapping[str, Any]]) -> Brief:
    if isinstance(brief, Brief):
        return brief
    return Brief.model_validate(dict(brief))


def build_generation_prompt(
    brief: Union[Brief, Mapping[str, Any]],
    language: Optional[str] = None,
) -> Tuple[str, str]:
    """
    Build the prompts that turn a brief into a landing page.

    Args:
        brief: A Brief, or a raw mapping in either camelCase or kebab-case keys
        language: Language for the page copy (defaults to settings.COPY_LANGUAGE)

    Returns:
        (system_prompt, user_prompt)

    Raises:
        MissingFieldError: If a required brief field is absent or blank

    Example:
        >>> _, user = build_generation_prompt({"productName": "Acme", ...})
        >>> "Acme" in user
        True
    """
    brief = _coerce_brief(brief)

    missing = brief.missing_fields()
    if missing:
        raise MissingFieldError(missing[0])

    values = {
        name: getattr(brief, name) if getattr(brief, name) is not None else default
        for name, default in DEFAULTS.items()
    }
    values.update(
        product_name=brief.product_name,
        product_description=brief.product_description,
        target_audience=brief.target_audience,
        cta_link=brief.cta_link,
        feature_layout="Slider" if brief.feature_slider else "Grid",
    )

    system_prompt = GENERATION_SYSTEM_PROMPT.format(
        placeholder=PLACEHOLDER_IMAGE_URL,
        language=language or settings.COPY_LANGUAGE,
    )
    # str.format does not re-scan substituted values, so braces in user text are safe
    user_prompt = GENERATION_USER_TEMPLATE.format(**values)
    return system_prompt, user_prompt


# ---------------------------------------------------------------------------
# EDIT
# ---------------------------------------------------------------------------

EDIT_SYSTEM_PROMPT = """You are an HTML/Tailwind CSS code editor focused on conversion optimization.

Hard rules:
1. Return ONLY the complete, modified HTML document.
2. Do NOT wrap the answer in ```html markdown.
3. Do NOT add explanations outside the HTML.
4. You MUST keep every existing `data-id` attribute in the code. Give every new element a new `data-id`. NEVER remove an existing data-id."""


EDIT_USER_TEMPLATE = """
### CURRENT HTML CODE:
{current_code}

### EDIT INSTRUCTION:
{edit_instruction}

Return the updated HTML code. Remember to keep every existing 'data-id' attribute."""


def build_edit_prompt(current_code: str, edit_instruction: str) -> Tuple[str, str]:
    """
    Build the prompts that apply a free-text edit to an existing page.

    The document and the instruction are embedded verbatim: no truncation,
    no escaping. The whole page makes the round trip through the model.

    Raises:
        MissingFieldError: If either argument is empty
    """
    if not current_code:
        raise MissingFieldError("currentCode")
    if not edit_instruction:
        raise MissingFieldError("editInstruction")

    user_prompt = EDIT_USER_TEMPLATE.format(
        current_code=current_code,
        edit_instruction=edit_instruction,
    )
    return EDIT_SYSTEM_PROMPT, user_prompt
