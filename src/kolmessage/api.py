"""HTTP routes for message generation, presets, and templates.

Service objects are read from ``request.app.state.services`` (see
``kolmessage.app.initialize_services``).  Domain errors map to 400, unknown
ids to 404.  Form bodies use the camelCase template keys.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from kolmessage.domain.errors import KOLMessageError, PresetNotFoundError
from kolmessage.domain.models import KOLFormData
from kolmessage.generator import check_fan_offer_for_polish, generate_message, preview_template
from kolmessage.llm.client import POLISH_MODEL
from kolmessage.llm.polisher import polish_fan_offer
from kolmessage.presets.store import PresetStore, TemplatePresetStore

logger = structlog.get_logger()

router = APIRouter()


class MessageRequest(BaseModel):
    form: KOLFormData
    template_id: str | None = None


class PreviewRequest(BaseModel):
    template: str
    form: KOLFormData = Field(default_factory=KOLFormData)


class PolishRequest(BaseModel):
    fan_offer: str


class PresetCreateRequest(BaseModel):
    name: str
    form: KOLFormData


class PresetApplyRequest(BaseModel):
    form: KOLFormData = Field(default_factory=KOLFormData)


class TemplateCreateRequest(BaseModel):
    name: str
    template: str


class TemplateUpdateRequest(BaseModel):
    template: str


def _services(request: Request) -> dict[str, Any]:
    return request.app.state.services


def _preset_store(request: Request) -> PresetStore:
    return _services(request)["preset_store"]


def _template_store(request: Request) -> TemplatePresetStore:
    return _services(request)["template_store"]


@contextmanager
def _domain_errors() -> Iterator[None]:
    """Translate domain errors raised inside the block into HTTP errors."""
    try:
        yield
    except PresetNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except KOLMessageError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _templates_payload(store: TemplatePresetStore) -> dict[str, Any]:
    return {
        "active_id": store.active_id,
        "templates": [t.model_dump() for t in store.list_templates()],
    }


# ----------------------------------------------------------------------
# Messages
# ----------------------------------------------------------------------


@router.get("/form/defaults")
def form_defaults() -> dict[str, str]:
    """Return a fresh form with default deal terms."""
    return KOLFormData().to_record()


@router.post("/messages")
def create_message(body: MessageRequest, request: Request) -> dict[str, str]:
    """Render a message with the requested or active template."""
    store = _template_store(request)
    template = store.get(body.template_id) if body.template_id else store.active
    with _domain_errors():
        message = generate_message(body.form, template)
    return {"message": message}


@router.post("/templates/preview")
def preview(body: PreviewRequest) -> dict[str, str]:
    """Render template text as typed in the editor."""
    return {"message": preview_template(body.template, body.form)}


@router.post("/fan-offer/polish")
async def polish(body: PolishRequest, request: Request) -> dict[str, str]:
    """Polish the fan-offer text, falling back to a fixed sentence on failure."""
    with _domain_errors():
        check_fan_offer_for_polish(body.fan_offer)
    services = _services(request)
    model = services.get("polish_model", POLISH_MODEL)
    polished = await asyncio.to_thread(
        polish_fan_offer,
        body.fan_offer,
        services.get("anthropic_client"),
        model,
    )
    return {"fan_offer": polished}


# ----------------------------------------------------------------------
# Deal presets
# ----------------------------------------------------------------------


@router.get("/presets")
def list_presets(request: Request) -> list[dict[str, Any]]:
    """List saved deal presets."""
    return [p.model_dump() for p in _preset_store(request).list_presets()]


@router.post("/presets", status_code=201)
def add_preset(body: PresetCreateRequest, request: Request) -> dict[str, Any]:
    """Save the deal terms of the submitted form as a preset."""
    with _services(request)["store_lock"], _domain_errors():
        preset = _preset_store(request).add(body.name, body.form)
    return preset.model_dump()


@router.delete("/presets/{preset_id}")
def delete_preset(preset_id: str, request: Request) -> dict[str, str]:
    """Delete a deal preset."""
    with _services(request)["store_lock"], _domain_errors():
        _preset_store(request).delete(preset_id)
    return {"status": "deleted"}


@router.post("/presets/{preset_id}/apply")
def apply_preset(preset_id: str, body: PresetApplyRequest, request: Request) -> dict[str, str]:
    """Return the submitted form with the preset's terms applied."""
    with _domain_errors():
        form = _preset_store(request).apply(preset_id, body.form)
    return form.to_record()


# ----------------------------------------------------------------------
# Templates
# ----------------------------------------------------------------------


@router.get("/templates")
def list_templates(request: Request) -> dict[str, Any]:
    """List template presets and the active selection."""
    return _templates_payload(_template_store(request))


@router.post("/templates", status_code=201)
def add_template(body: TemplateCreateRequest, request: Request) -> dict[str, Any]:
    """Save a new template and make it active."""
    with _services(request)["store_lock"], _domain_errors():
        preset = _template_store(request).add(body.name, body.template)
    return preset.model_dump()


@router.put("/templates/{template_id}")
def update_template(
    template_id: str, body: TemplateUpdateRequest, request: Request
) -> dict[str, Any]:
    """Replace a template's content."""
    with _services(request)["store_lock"], _domain_errors():
        preset = _template_store(request).update(template_id, body.template)
    return preset.model_dump()


@router.delete("/templates/{template_id}")
def delete_template(template_id: str, request: Request) -> dict[str, Any]:
    """Delete a template; the response carries the new active id."""
    store = _template_store(request)
    with _services(request)["store_lock"], _domain_errors():
        store.delete(template_id)
    return _templates_payload(store)


@router.post("/templates/{template_id}/select")
def select_template(template_id: str, request: Request) -> dict[str, Any]:
    """Make a template the active one."""
    store = _template_store(request)
    if store.get(template_id) is None:
        raise HTTPException(status_code=404, detail=str(PresetNotFoundError(template_id)))
    store.select(template_id)
    return _templates_payload(store)


@router.post("/templates/{template_id}/reset")
def reset_template(template_id: str, request: Request) -> dict[str, Any]:
    """Restore a template's content to the built-in default."""
    with _services(request)["store_lock"], _domain_errors():
        preset = _template_store(request).reset(template_id)
    logger.info("template_reset", template_id=template_id)
    return preset.model_dump()
