"""
Tests for the landing-page prompt builders and the Brief schema.

The builders are pure, so these tests only look at the strings they
return: every brief value must appear, omitted fields get their default
phrase, and the edit prompt carries the document through unchanged.
"""

import pytest

from app.ai.prompts import DEFAULTS, PLACEHOLDER_IMAGE_URL, build_edit_prompt, build_generation_prompt
from app.core.errors import MissingFieldError
from app.schemas.landing import Brief


class TestBrief:
    """Tests for Brief parsing and normalization."""

    def test_camel_case_keys(self, minimal_brief):
        brief = Brief.model_validate(minimal_brief)

        assert brief.product_name == "Acme"
        assert brief.cta_link == "https://x.test"
        assert brief.missing_fields() == []

    def test_kebab_case_keys(self):
        brief = Brief.model_validate({
            "product-name": "Acme",
            "product-description": "Widgets",
            "target-audience": "Devs",
            "cta-link": "https://x.test",
            "product-usp": "Fast",
        })

        assert brief.product_name == "Acme"
        assert brief.product_usp == "Fast"
        assert brief.missing_fields() == []

    def test_blank_string_counts_as_missing(self, minimal_brief):
        brief = Brief.model_validate({**minimal_brief, "targetAudience": "   "})

        assert brief.missing_fields() == ["targetAudience"]

    def test_missing_fields_in_form_order(self):
        brief = Brief.model_validate({"targetAudience": "Devs"})

        assert brief.missing_fields() == ["productName", "productDescription", "ctaLink"]

    def test_unknown_keys_are_ignored(self, minimal_brief):
        brief = Brief.model_validate({**minimal_brief, "somethingElse": 1})

        assert not hasattr(brief, "somethingElse")

    def test_image_list_joined_by_newline(self, minimal_brief):
        brief = Brief.model_validate({
            **minimal_brief,
            "featureImages": ["https://a.test/1.png", " ", "https://a.test/2.png"],
        })

        assert brief.feature_images == "https://a.test/1.png\nhttps://a.test/2.png"

    def test_numeric_price_becomes_text(self, minimal_brief):
        brief = Brief.model_validate({**minimal_brief, "productPrice": 99000})

        assert brief.product_price == "99000"

    @pytest.mark.parametrize("raw, expected", [
        (True, True),
        (False, False),
        ("true", True),
        ("false", False),
        ("slider", True),
        ("grid", False),
        (None, False),
    ])
    def test_feature_slider_flag(self, minimal_brief, raw, expected):
        brief = Brief.model_validate({**minimal_brief, "featureSlider": raw})

        assert brief.feature_slider is expected


class TestBuildGenerationPrompt:
    """Tests for build_generation_prompt()."""

    def test_minimal_brief_scenario(self, minimal_brief):
        system, user = build_generation_prompt(minimal_brief, language="Indonesian")

        for value in ("Acme", "Widgets", "Devs", "https://x.test"):
            assert value in user
        assert DEFAULTS["product_usp"] in user
        assert DEFAULTS["product_price"] in user
        assert DEFAULTS["product_offer"] in user
        assert "data-id" in system
        assert "Indonesian" in system

    def test_every_omitted_field_gets_its_default(self, minimal_brief):
        _, user = build_generation_prompt(minimal_brief)

        for name, phrase in DEFAULTS.items():
            assert phrase in user, name

    def test_every_provided_field_appears(self, full_brief):
        _, user = build_generation_prompt(full_brief)

        for key, value in full_brief.items():
            if isinstance(value, str):
                assert value in user, key

    def test_provided_fields_replace_defaults(self, full_brief):
        _, user = build_generation_prompt(full_brief)

        for phrase in DEFAULTS.values():
            assert phrase not in user

    def test_placeholder_image_in_system_prompt(self, minimal_brief):
        system, _ = build_generation_prompt(minimal_brief)

        assert PLACEHOLDER_IMAGE_URL in system

    def test_feature_layout(self, minimal_brief):
        _, grid = build_generation_prompt(minimal_brief)
        _, slider = build_generation_prompt({**minimal_brief, "featureSlider": True})

        assert "(Display as: Grid)" in grid
        assert "(Display as: Slider)" in slider

    def test_kebab_and_camel_give_same_prompt(self, minimal_brief):
        kebab = {
            "product-name": "Acme",
            "product-description": "Widgets",
            "target-audience": "Devs",
            "cta-link": "https://x.test",
        }

        assert build_generation_prompt(kebab) == build_generation_prompt(minimal_brief)

    def test_accepts_brief_instance(self, minimal_brief):
        brief = Brief.model_validate(minimal_brief)

        assert build_generation_prompt(brief) == build_generation_prompt(minimal_brief)

    def test_deterministic(self, full_brief):
        assert build_generation_prompt(full_brief) == build_generation_prompt(full_brief)

    def test_braces_in_user_text_are_kept(self, minimal_brief):
        _, user = build_generation_prompt({**minimal_brief, "additionalDetails": "Use {curly} text"})

        assert "Use {curly} text" in user

    @pytest.mark.parametrize("field", ["productName", "productDescription", "targetAudience", "ctaLink"])
    def test_missing_required_field(self, minimal_brief, field):
        brief = {k: v for k, v in minimal_brief.items() if k != field}

        with pytest.raises(MissingFieldError) as exc_info:
            build_generation_prompt(brief)

        assert exc_info.value.field == field
        assert field in exc_info.value.message

    def test_product_usp_is_optional(self, minimal_brief):
        _, user = build_generation_prompt(minimal_brief)

        assert "Unique selling proposition" in user


class TestBuildEditPrompt:
    """Tests for build_edit_prompt()."""

    def test_embeds_code_and_instruction_verbatim(self):
        code = '<!DOCTYPE html>\n<div data-id="lp-el-a1b2c3d4">{"json": true}</div>\n'
        instruction = "Make the CTA button red"

        system, user = build_edit_prompt(code, instruction)

        assert code in user
        assert instruction in user
        assert "data-id" in system

    def test_large_document_is_not_truncated(self):
        code = "<!DOCTYPE html>" + "<p>Harga spesial ✓</p>" * 20000

        _, user = build_edit_prompt(code, "Tighten the copy")

        assert code in user

    @pytest.mark.parametrize("code, instruction, field", [
        ("", "Do something", "currentCode"),
        ("<html></html>", "", "editInstruction"),
    ])
    def test_empty_input(self, code, instruction, field):
        with pytest.raises(MissingFieldError) as exc_info:
            build_edit_prompt(code, instruction)

        assert exc_info.value.field == field
