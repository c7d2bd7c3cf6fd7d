"""Pydantic v2 models for the deal form and saved presets."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from kolmessage.domain.types import NONE_VALUE, PRESET_FIELDS, SendHandle


def _today() -> str:
    return datetime.now(tz=UTC).date().isoformat()


class KOLFormData(BaseModel):
    """Deal terms entered for a single outreach message.

    Attributes are snake_case; serialized keys are the camelCase template keys
    (``profit_share`` renders as ``{profitShare}``).  Amounts and percentages
    are kept as the strings the user typed, so the ``"無"`` sentinel survives
    untouched.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    contact_person: str = ""
    kol_name: str = ""
    profit_share: str = "15"
    guaranteed_minimum: str = NONE_VALUE
    bonus_amount: str = NONE_VALUE
    performance_threshold: str = NONE_VALUE
    profit_share_bonus: str = NONE_VALUE
    fan_offer: str = NONE_VALUE
    end_date: str = Field(default_factory=_today)
    send_handle: SendHandle = SendHandle.YES

    @classmethod
    def from_record(cls, record: Mapping[str, str | None]) -> KOLFormData:
        """Build a form from a camelCase record, ignoring unknown keys.

        ``None`` values fall back to the field default.
        """
        return cls.model_validate({k: v for k, v in record.items() if v is not None})

    def to_record(self) -> dict[str, str]:
        """Return the renderer input record keyed by template key."""
        return self.model_dump(mode="json", by_alias=True)

    def preset_terms(self) -> dict[str, str]:
        """Return only the deal terms that a preset stores."""
        record = self.to_record()
        return {field.value: record[field.value] for field in PRESET_FIELDS}


class Preset(BaseModel):
    """A named, partial set of deal terms applied over the current form."""

    id: str
    name: str
    data: dict[str, str] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        """Ensure the preset name is not empty or whitespace-only."""
        if not v.strip():
            raise ValueError("name must not be empty")
        return v.strip()


class TemplatePreset(BaseModel):
    """A named message template."""

    id: str
    name: str
    template: str
