"""Message generation entry points used by the API and CLI.

Required-field validation happens here, before the renderer is called; the
renderer itself never rejects input.
"""

from __future__ import annotations

import structlog

from kolmessage.domain.errors import (
    FanOfferTooShortError,
    MissingRequiredFieldsError,
    MissingTemplateError,
)
from kolmessage.domain.models import KOLFormData, TemplatePreset
from kolmessage.domain.types import REQUIRED_FIELDS, is_blank
from kolmessage.template.renderer import render

logger = structlog.get_logger()

FAN_OFFER_MIN_LENGTH = 5


def missing_required_fields(form: KOLFormData) -> list[str]:
    """Return the template keys of required fields that are blank."""
    record = form.to_record()
    return [field.value for field in REQUIRED_FIELDS if not record[field.value].strip()]


def generate_message(form: KOLFormData, template: TemplatePreset | None) -> str:
    """Validate *form* and render it with *template*.

    Args:
        form: The filled deal form.
        template: The selected template preset.

    Returns:
        The rendered message text.

    Raises:
        MissingRequiredFieldsError: If contact person or KOL name is blank.
        MissingTemplateError: If no template is available.
    """
    missing = missing_required_fields(form)
    if missing:
        raise MissingRequiredFieldsError(missing)
    if template is None:
        raise MissingTemplateError()

    message = render(template.template, form.to_record())
    logger.info(
        "message_generated",
        template_id=template.id,
        kol_name=form.kol_name,
        message_length=len(message),
    )
    return message


def preview_template(template_text: str, form: KOLFormData) -> str:
    """Render *template_text* with *form* without required-field checks."""
    return render(template_text, form.to_record())


def check_fan_offer_for_polish(fan_offer: str) -> str:
    """Return the trimmed fan offer if it is long enough to polish.

    Raises:
        FanOfferTooShortError: If the text is empty, the sentinel, or shorter
            than ``FAN_OFFER_MIN_LENGTH`` characters.
    """
    text = fan_offer.strip()
    if is_blank(text) or len(text) < FAN_OFFER_MIN_LENGTH:
        raise FanOfferTooShortError(FAN_OFFER_MIN_LENGTH)
    return text
