"""SQLite-backed stores for deal presets and message templates.

Both stores keep their whole collection as one JSON document under a fixed
storage key, load it once at construction, and write it back after every
change.  A missing or unreadable document falls back to the built-in
defaults.
"""

from __future__ import annotations

import sqlite3
import time
from datetime import UTC, datetime

import structlog
from pydantic import TypeAdapter, ValidationError

from kolmessage.domain.errors import PresetError, PresetNotFoundError, TemplatePresetError
from kolmessage.domain.models import KOLFormData, Preset, TemplatePreset
from kolmessage.presets.defaults import default_presets, default_template_presets
from kolmessage.template.defaults import DEFAULT_MESSAGE_TEMPLATE

logger = structlog.get_logger()

PRESETS_STORAGE_KEY = "kol-message-presets-v2"
TEMPLATE_PRESETS_STORAGE_KEY = "kol-message-templates-v1"

_PRESET_LIST = TypeAdapter(list[Preset])
_TEMPLATE_PRESET_LIST = TypeAdapter(list[TemplatePreset])


def _new_id(existing: set[str]) -> str:
    """Return an epoch-millisecond id not already in *existing*."""
    millis = time.time_ns() // 1_000_000
    while str(millis) in existing:
        millis += 1
    return str(millis)


class KeyValueStore:
    """String key-value storage on the ``kv_store`` table.

    Uses parameterized queries exclusively and commits after every write.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize with an open database connection.

        Args:
            conn: An open sqlite3.Connection whose database already has the
                  ``kv_store`` table (see ``init_presets_db``).
        """
        self._conn = conn

    def get(self, key: str) -> str | None:
        """Return the stored value for *key*, or ``None`` if unset."""
        row = self._conn.execute(
            "SELECT value_json FROM kv_store WHERE storage_key = ?",
            (key,),
        ).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        now = datetime.now(tz=UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        self._conn.execute(
            "INSERT OR REPLACE INTO kv_store (storage_key, value_json, updated_at) VALUES (?, ?, ?)",
            (key, value, now),
        )
        self._conn.commit()


class PresetStore:
    """Saved deal presets.

    A preset holds a partial set of deal terms; applying it overlays those
    terms on the current form.
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv
        self._presets = self._load()

    def _load(self) -> list[Preset]:
        raw = self._kv.get(PRESETS_STORAGE_KEY)
        if raw is None:
            return default_presets()
        try:
            return _PRESET_LIST.validate_json(raw)
        except ValidationError:
            logger.warning("presets_unreadable_using_defaults", storage_key=PRESETS_STORAGE_KEY)
            return default_presets()

    def _save(self) -> None:
        self._kv.set(PRESETS_STORAGE_KEY, _PRESET_LIST.dump_json(self._presets).decode())

    def list_presets(self) -> list[Preset]:
        """Return all presets in insertion order."""
        return list(self._presets)

    def get(self, preset_id: str) -> Preset | None:
        """Return the preset with *preset_id*, or ``None``."""
        return next((p for p in self._presets if p.id == preset_id), None)

    def add(self, name: str, form: KOLFormData) -> Preset:
        """Save the deal terms of *form* as a new preset.

        Args:
            name: Display name for the preset.
            form: The form whose deal terms are saved.  Contact person and
                  KOL name are not stored.

        Returns:
            The newly created preset.

        Raises:
            PresetError: If *name* is blank.
        """
        if not name or not name.strip():
            raise PresetError("方案名稱不能為空！")
        preset = Preset(
            id=_new_id({p.id for p in self._presets}),
            name=name,
            data=form.preset_terms(),
        )
        self._presets.append(preset)
        self._save()
        logger.info("preset_added", preset_id=preset.id, name=preset.name)
        return preset

    def delete(self, preset_id: str) -> None:
        """Delete the preset with *preset_id*.

        Raises:
            PresetNotFoundError: If no preset has that id.
        """
        if self.get(preset_id) is None:
            raise PresetNotFoundError(preset_id, "刪除失敗，找不到對應的方案。")
        self._presets = [p for p in self._presets if p.id != preset_id]
        self._save()
        logger.info("preset_deleted", preset_id=preset_id)

    def apply(self, preset_id: str, current: KOLFormData) -> KOLFormData:
        """Overlay a preset's terms on *current*.

        Precedence, lowest first: form defaults, *current*, preset data.
        An empty *preset_id* returns *current* unchanged.

        Raises:
            PresetNotFoundError: If *preset_id* is set but unknown.
            PresetError: If the saved preset holds values the form rejects.
        """
        if not preset_id:
            return current
        preset = self.get(preset_id)
        if preset is None:
            raise PresetNotFoundError(preset_id)
        merged = {**KOLFormData().to_record(), **current.to_record(), **preset.data}
        try:
            return KOLFormData.from_record(merged)
        except ValidationError as exc:
            logger.warning("preset_data_invalid", preset_id=preset_id, errors=exc.error_count())
            raise PresetError("方案內容無效，無法套用。") from exc


class TemplatePresetStore:
    """Saved message templates with an active selection.

    The active selection lives for the lifetime of the store; only the
    templates themselves are persisted.
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv
        self._templates = self._load()
        self.active_id = self._templates[0].id if self._templates else ""

    def _load(self) -> list[TemplatePreset]:
        raw = self._kv.get(TEMPLATE_PRESETS_STORAGE_KEY)
        if raw is None:
            return default_template_presets()
        try:
            return _TEMPLATE_PRESET_LIST.validate_json(raw)
        except ValidationError:
            logger.warning(
                "template_presets_unreadable_using_defaults",
                storage_key=TEMPLATE_PRESETS_STORAGE_KEY,
            )
            return default_template_presets()

    def _save(self) -> None:
        self._kv.set(
            TEMPLATE_PRESETS_STORAGE_KEY,
            _TEMPLATE_PRESET_LIST.dump_json(self._templates).decode(),
        )

    def _index_of(self, template_id: str) -> int:
        for index, preset in enumerate(self._templates):
            if preset.id == template_id:
                return index
        raise PresetNotFoundError(template_id)

    def list_templates(self) -> list[TemplatePreset]:
        """Return all template presets in insertion order."""
        return list(self._templates)

    def get(self, template_id: str) -> TemplatePreset | None:
        """Return the template preset with *template_id*, or ``None``."""
        return next((p for p in self._templates if p.id == template_id), None)

    @property
    def active(self) -> TemplatePreset | None:
        """The selected template, or the first one if the selection is gone."""
        selected = self.get(self.active_id)
        if selected is not None:
            return selected
        return self._templates[0] if self._templates else None

    def select(self, template_id: str) -> None:
        """Make *template_id* the active template."""
        self.active_id = template_id

    def add(self, name: str, content: str) -> TemplatePreset:
        """Save *content* as a new template and make it active.

        Raises:
            TemplatePresetError: If *name* is blank or *content* is empty.
        """
        if not name or not name.strip():
            raise TemplatePresetError("範本名稱不能為空！")
        if not content:
            raise TemplatePresetError("沒有可用的範本內容來儲存。")
        preset = TemplatePreset(
            id=_new_id({p.id for p in self._templates}),
            name=name.strip(),
            template=content,
        )
        self._templates.append(preset)
        self.active_id = preset.id
        self._save()
        logger.info("template_preset_added", template_id=preset.id, name=preset.name)
        return preset

    def delete(self, template_id: str) -> str:
        """Delete a template and return the active id afterwards.

        When the active template is deleted, the template that moves into
        its position becomes active, or the previous one if it was last.

        Raises:
            TemplatePresetError: If only one template remains.
            PresetNotFoundError: If no template has that id.
        """
        if len(self._templates) <= 1:
            raise TemplatePresetError("無法刪除最後一個範本。")
        deleted_index = self._index_of(template_id)
        self._templates.pop(deleted_index)

        if self.active_id == template_id:
            if deleted_index < len(self._templates):
                self.active_id = self._templates[deleted_index].id
            elif deleted_index > 0:
                self.active_id = self._templates[deleted_index - 1].id
            else:
                self.active_id = self._templates[0].id if self._templates else ""

        self._save()
        logger.info("template_preset_deleted", template_id=template_id, active_id=self.active_id)
        return self.active_id

    def update(self, template_id: str, content: str) -> TemplatePreset:
        """Replace the content of a template.

        Raises:
            PresetNotFoundError: If no template has that id.
        """
        index = self._index_of(template_id)
        updated = self._templates[index].model_copy(update={"template": content})
        self._templates[index] = updated
        self._save()
        return updated

    def reset(self, template_id: str) -> TemplatePreset:
        """Restore a template's content to the built-in default message."""
        return self.update(template_id, DEFAULT_MESSAGE_TEMPLATE)
