"""Built-in deal presets and template presets."""

from __future__ import annotations

from datetime import UTC, datetime

from kolmessage.domain.models import Preset, TemplatePreset
from kolmessage.template.defaults import (
    DEFAULT_MESSAGE_TEMPLATE,
    DEFAULT_TEMPLATE_ID,
    DEFAULT_TEMPLATE_NAME,
)

FAN_OFFER_COMBO_TEXT = (
    "🔹抽免單（3 名）\n"
    "🔹單品售價 1,649（優於官網）\n"
    "🔹手把 + DOCK 充電轉接組獨家組 2,790（官網原價 3,180）\n"
    "🔺補充：組合的充電轉接器支援 NS1 代主機，本次調查發現各通路購買 ZA 的客群有 "
    "60-70% 使用 Switch 1 代主機，所以推出此組合，目前反應很不錯"
)


def default_presets(year: int | None = None) -> list[Preset]:
    """Return the built-in deal presets, ending on November 30 of *year*.

    Args:
        year: Campaign year.  Defaults to the current UTC year.
    """
    if year is None:
        year = datetime.now(tz=UTC).year
    end_date = f"{year}-11-30"
    return [
        Preset(
            id="A",
            name="方案A：分潤20%",
            data={
                "profitShare": "20",
                "guaranteedMinimum": "無",
                "bonusAmount": "無",
                "performanceThreshold": "無",
                "profitShareBonus": "25",
                "endDate": end_date,
                "fanOffer": "無",
            },
        ),
        Preset(
            id="B",
            name="方案B：分潤15%+保底25000",
            data={
                "profitShare": "15",
                "guaranteedMinimum": "25000",
                "bonusAmount": "無",
                "performanceThreshold": "無",
                "profitShareBonus": "20",
                "endDate": end_date,
                "fanOffer": "無",
            },
        ),
        Preset(
            id="C",
            name="方案C：分潤10%+加碼10000",
            data={
                "profitShare": "10",
                "guaranteedMinimum": "無",
                "bonusAmount": "10000",
                "performanceThreshold": "150000",
                "profitShareBonus": "15",
                "endDate": end_date,
                "fanOffer": "無",
            },
        ),
        Preset(
            id="THRESHOLD_TEMPLATE",
            name="門檻達標模板",
            data={
                "profitShare": "15",
                "performanceThreshold": "200000",
                "profitShareBonus": "20",
                "endDate": end_date,
            },
        ),
        Preset(
            id="FAN_OFFER_COMBO",
            name="粉絲優惠模板：組合優惠",
            data={"endDate": end_date, "fanOffer": FAN_OFFER_COMBO_TEXT},
        ),
    ]


def default_template_presets() -> list[TemplatePreset]:
    """Return the built-in template presets."""
    return [
        TemplatePreset(
            id=DEFAULT_TEMPLATE_ID,
            name=DEFAULT_TEMPLATE_NAME,
            template=DEFAULT_MESSAGE_TEMPLATE,
        )
    ]
