"""Shared pytest fixtures for the message generator test suite."""

import sqlite3

import pytest

from kolmessage.domain.models import KOLFormData
from kolmessage.presets.schema import init_presets_db
from kolmessage.presets.store import KeyValueStore


@pytest.fixture
def sample_form() -> KOLFormData:
    """A filled form with a guaranteed minimum and the handle bonus."""
    return KOLFormData(
        contact_person="Amy",
        kol_name="阿明",
        profit_share="15",
        guaranteed_minimum="25000",
        end_date="2026-11-30",
    )


@pytest.fixture
def presets_conn() -> sqlite3.Connection:
    """In-memory presets database."""
    conn = init_presets_db(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def kv(presets_conn: sqlite3.Connection) -> KeyValueStore:
    """Key-value store backed by the in-memory database."""
    return KeyValueStore(presets_conn)
