"""Tests for message generation, preview, and polish pre-checks."""

import pytest

from kolmessage.domain.errors import (
    FanOfferTooShortError,
    MissingRequiredFieldsError,
    MissingTemplateError,
)
from kolmessage.domain.models import KOLFormData, TemplatePreset
from kolmessage.generator import (
    check_fan_offer_for_polish,
    generate_message,
    missing_required_fields,
    preview_template,
)


@pytest.fixture
def short_template() -> TemplatePreset:
    return TemplatePreset(
        id="t1",
        name="short",
        template="HI {contactPerson}[if: bonusAmount|，加碼 {bonusAmount}]",
    )


class TestGenerateMessage:
    def test_renders_with_form(self, short_template: TemplatePreset):
        form = KOLFormData(contact_person="Amy", kol_name="阿明", bonus_amount="10000")
        assert generate_message(form, short_template) == "HI Amy，加碼 10,000"

    @pytest.mark.parametrize(
        ("contact", "kol", "missing"),
        [
            ("", "阿明", ["contactPerson"]),
            ("Amy", "  ", ["kolName"]),
            ("", "", ["contactPerson", "kolName"]),
        ],
    )
    def test_blank_required_fields_raise(
        self, short_template: TemplatePreset, contact: str, kol: str, missing: list[str]
    ):
        form = KOLFormData(contact_person=contact, kol_name=kol)
        with pytest.raises(MissingRequiredFieldsError, match="請填寫所有必填欄位") as exc_info:
            generate_message(form, short_template)
        assert exc_info.value.fields == missing

    def test_missing_template_raises(self, sample_form: KOLFormData):
        with pytest.raises(MissingTemplateError, match="沒有可用的訊息範本"):
            generate_message(sample_form, None)

    def test_required_fields_checked_before_template(self):
        with pytest.raises(MissingRequiredFieldsError):
            generate_message(KOLFormData(), None)


class TestPreview:
    def test_preview_skips_validation(self):
        assert preview_template("HI {contactPerson}!", KOLFormData()) == "HI !"

    def test_missing_required_fields_helper(self, sample_form: KOLFormData):
        assert missing_required_fields(sample_form) == []


class TestCheckFanOffer:
    @pytest.mark.parametrize("text", ["", "   ", "無", " 無 ", "抽免單"])
    def test_too_short(self, text: str):
        with pytest.raises(FanOfferTooShortError, match="請至少輸入 5 個字"):
            check_fan_offer_for_polish(text)

    def test_returns_trimmed_text(self):
        assert check_fan_offer_for_polish("  抽免單三名  ") == "抽免單三名"
