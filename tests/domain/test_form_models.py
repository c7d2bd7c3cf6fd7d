"""Tests for the deal form and preset models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from kolmessage.domain.models import KOLFormData, Preset
from kolmessage.domain.types import NONE_VALUE, SendHandle, is_blank


class TestKOLFormData:
    """Defaults, camelCase records, and preset terms."""

    def test_defaults(self):
        form = KOLFormData()
        assert form.contact_person == ""
        assert form.kol_name == ""
        assert form.profit_share == "15"
        assert form.guaranteed_minimum == NONE_VALUE
        assert form.bonus_amount == NONE_VALUE
        assert form.performance_threshold == NONE_VALUE
        assert form.profit_share_bonus == NONE_VALUE
        assert form.fan_offer == NONE_VALUE
        assert form.send_handle is SendHandle.YES
        assert form.end_date == datetime.now(tz=UTC).date().isoformat()

    def test_to_record_uses_template_keys(self, sample_form: KOLFormData):
        record = sample_form.to_record()
        assert list(record) == [
            "contactPerson",
            "kolName",
            "profitShare",
            "guaranteedMinimum",
            "bonusAmount",
            "performanceThreshold",
            "profitShareBonus",
            "fanOffer",
            "endDate",
            "sendHandle",
        ]
        assert record["sendHandle"] == "是"
        assert record["guaranteedMinimum"] == "25000"

    def test_from_record_accepts_camel_case_and_ignores_unknown(self):
        form = KOLFormData.from_record(
            {"kolName": "阿明", "sendHandle": "否", "somethingElse": "x", "bonusAmount": None}
        )
        assert form.kol_name == "阿明"
        assert form.send_handle is SendHandle.NO
        assert form.bonus_amount == NONE_VALUE

    def test_send_handle_restricted(self):
        with pytest.raises(ValidationError):
            KOLFormData(send_handle="maybe")

    def test_preset_terms_exclude_contact_details(self, sample_form: KOLFormData):
        terms = sample_form.preset_terms()
        assert "contactPerson" not in terms
        assert "kolName" not in terms
        assert terms["guaranteedMinimum"] == "25000"
        assert terms["sendHandle"] == "是"


class TestPreset:
    """Preset name validation."""

    def test_name_is_trimmed(self):
        assert Preset(id="x", name="  方案X ").name == "方案X"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name must not be empty"):
            Preset(id="x", name="   ")


class TestIsBlank:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, True), ("", True), ("  ", True), ("無", True), (" 無 ", True), ("0", False)],
    )
    def test_is_blank(self, value, expected):
        assert is_blank(value) is expected
