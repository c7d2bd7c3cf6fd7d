"""Domain types, models, and errors for the message generator."""

from kolmessage.domain.errors import (
    FanOfferTooShortError,
    KOLMessageError,
    MissingRequiredFieldsError,
    MissingTemplateError,
    PresetError,
    PresetNotFoundError,
    TemplatePresetError,
)
from kolmessage.domain.models import KOLFormData, Preset, TemplatePreset
from kolmessage.domain.types import (
    NONE_VALUE,
    NUMBER_FIELDS,
    PERCENT_FIELDS,
    PRESET_FIELDS,
    REQUIRED_FIELDS,
    FormField,
    SendHandle,
    is_blank,
)

__all__ = [
    "NONE_VALUE",
    "NUMBER_FIELDS",
    "PERCENT_FIELDS",
    "PRESET_FIELDS",
    "REQUIRED_FIELDS",
    "FanOfferTooShortError",
    "FormField",
    "KOLFormData",
    "KOLMessageError",
    "MissingRequiredFieldsError",
    "MissingTemplateError",
    "Preset",
    "PresetError",
    "PresetNotFoundError",
    "SendHandle",
    "TemplatePreset",
    "TemplatePresetError",
    "is_blank",
]
