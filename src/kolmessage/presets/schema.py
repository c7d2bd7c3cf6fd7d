"""SQLite schema for the preset key-value store."""

from __future__ import annotations

import sqlite3
from pathlib import Path


def init_presets_db(db_path: Path | str) -> sqlite3.Connection:
    """Open the presets database and create the ``kv_store`` table.

    Args:
        db_path: Path to the SQLite database file, or ``":memory:"``.

    Returns:
        An open sqlite3.Connection usable from worker threads.
    """
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.execute("""
        CREATE TABLE IF NOT EXISTS kv_store (
            storage_key TEXT PRIMARY KEY,
            value_json TEXT NOT NULL,
            updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
        )
    """)
    conn.commit()
    return conn


def close_presets_db(conn: sqlite3.Connection) -> None:
    """Close the presets database connection."""
    conn.close()
