"""Form field names, the "none" sentinel, and field groupings for the deal form."""

from enum import StrEnum

# Sentinel meaning "field intentionally left blank"
NONE_VALUE = "無"


class SendHandle(StrEnum):
    """Whether a controller is sent to the KOL along with the offer."""

    YES = "是"
    NO = "否"


class FormField(StrEnum):
    """Template keys for every deal-form field."""

    CONTACT_PERSON = "contactPerson"
    KOL_NAME = "kolName"
    PROFIT_SHARE = "profitShare"
    GUARANTEED_MINIMUM = "guaranteedMinimum"
    BONUS_AMOUNT = "bonusAmount"
    PERFORMANCE_THRESHOLD = "performanceThreshold"
    PROFIT_SHARE_BONUS = "profitShareBonus"
    FAN_OFFER = "fanOffer"
    END_DATE = "endDate"
    SEND_HANDLE = "sendHandle"


REQUIRED_FIELDS: tuple[FormField, ...] = (
    FormField.CONTACT_PERSON,
    FormField.KOL_NAME,
)

NUMBER_FIELDS: tuple[FormField, ...] = (
    FormField.GUARANTEED_MINIMUM,
    FormField.BONUS_AMOUNT,
    FormField.PERFORMANCE_THRESHOLD,
)

PERCENT_FIELDS: tuple[FormField, ...] = (
    FormField.PROFIT_SHARE,
    FormField.PROFIT_SHARE_BONUS,
)

# Deal terms saved with a preset (contact details are per-message)
PRESET_FIELDS: tuple[FormField, ...] = (
    FormField.PROFIT_SHARE,
    FormField.GUARANTEED_MINIMUM,
    FormField.BONUS_AMOUNT,
    FormField.PERFORMANCE_THRESHOLD,
    FormField.PROFIT_SHARE_BONUS,
    FormField.END_DATE,
    FormField.FAN_OFFER,
    FormField.SEND_HANDLE,
)


def is_blank(value: str | None) -> bool:
    """Return ``True`` when *value* is empty, whitespace-only, or the sentinel."""
    if value is None:
        return True
    stripped = value.strip()
    return stripped == "" or stripped == NONE_VALUE
