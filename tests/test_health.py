"""Tests for /health and /ready endpoints.

Uses FastAPI TestClient with in-memory SQLite connections.
"""

from __future__ import annotations

import sqlite3

from fastapi import FastAPI
from fastapi.testclient import TestClient

from kolmessage.health import register_health_routes


def _make_app(services: dict | None = None) -> FastAPI:
    """Create a minimal FastAPI app with health routes and given services."""
    app = FastAPI()
    app.state.services = services or {}
    register_health_routes(app)
    return app


class TestHealthEndpoint:
    def test_health_returns_200(self) -> None:
        client = TestClient(_make_app())

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestReadyEndpoint:
    def test_ready_when_db_ok(self) -> None:
        conn = sqlite3.connect(":memory:", check_same_thread=False)
        client = TestClient(_make_app({"presets_conn": conn, "anthropic_client": object()}))

        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ready",
            "checks": {"presets_db": "ok", "llm": "ok"},
        }
        conn.close()

    def test_ready_without_llm_client(self) -> None:
        conn = sqlite3.connect(":memory:", check_same_thread=False)
        client = TestClient(_make_app({"presets_conn": conn, "anthropic_client": None}))

        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["checks"]["llm"] == "disabled"
        conn.close()

    def test_not_ready_when_db_missing(self) -> None:
        client = TestClient(_make_app({"presets_conn": None}))

        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"
        assert response.json()["checks"]["presets_db"] == "fail"

    def test_not_ready_when_db_closed(self) -> None:
        conn = sqlite3.connect(":memory:", check_same_thread=False)
        conn.close()
        client = TestClient(_make_app({"presets_conn": conn}))

        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json()["checks"]["presets_db"] == "fail"
