"""Preset persistence package.

Provides SQLite key-value storage for saved deal presets and message
templates, plus the built-in defaults used when nothing is saved yet.
"""

from kolmessage.presets.defaults import default_presets, default_template_presets
from kolmessage.presets.schema import close_presets_db, init_presets_db
from kolmessage.presets.store import (
    PRESETS_STORAGE_KEY,
    TEMPLATE_PRESETS_STORAGE_KEY,
    KeyValueStore,
    PresetStore,
    TemplatePresetStore,
)

__all__ = [
    "PRESETS_STORAGE_KEY",
    "TEMPLATE_PRESETS_STORAGE_KEY",
    "KeyValueStore",
    "PresetStore",
    "TemplatePresetStore",
    "close_presets_db",
    "default_presets",
    "default_template_presets",
    "init_presets_db",
]
