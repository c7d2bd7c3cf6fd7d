"""Tests for application entry point: structlog config, services, and app creation."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import structlog
from fastapi import FastAPI
from fastapi.testclient import TestClient

from kolmessage.app import configure_logging, create_app, initialize_services
from kolmessage.config import Settings
from kolmessage.presets.store import PresetStore, TemplatePresetStore


def _reset_structlog() -> None:
    """Reset structlog so cached loggers don't leak between tests."""
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


def _settings(tmp_path: Path, **overrides) -> Settings:
    defaults = {"presets_db_path": tmp_path / "data" / "presets.db", "anthropic_api_key": ""}
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)  # type: ignore[call-arg]


class TestConfigureLogging:
    def test_development_mode_uses_console_renderer(self) -> None:
        _reset_structlog()
        configure_logging(production=False)
        processors = structlog.get_config()["processors"]
        assert any(isinstance(p, structlog.dev.ConsoleRenderer) for p in processors)
        _reset_structlog()

    def test_production_mode_uses_json_renderer(self) -> None:
        _reset_structlog()
        configure_logging(production=True)
        processors = structlog.get_config()["processors"]
        assert any(isinstance(p, structlog.processors.JSONRenderer) for p in processors)
        _reset_structlog()

    def test_level_filters_and_writes_unescaped_json_to_stderr(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _reset_structlog()
        configure_logging(production=True, level=logging.WARNING)
        log = structlog.get_logger()
        log.info("template_rendered")
        log.warning("preset_data_invalid", name="方案B")
        _reset_structlog()

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "template_rendered" not in captured.err
        assert "\"name\": \"方案B\"" in captured.err
        assert "\"service\": \"kol-message-generator\"" in captured.err


class TestInitializeServices:
    def test_creates_stores_and_db(self, tmp_path: Path) -> None:
        services = initialize_services(_settings(tmp_path))

        assert (tmp_path / "data" / "presets.db").exists()
        assert isinstance(services["preset_store"], PresetStore)
        assert isinstance(services["template_store"], TemplatePresetStore)
        assert services["anthropic_client"] is None
        services["presets_conn"].close()

    def test_creates_anthropic_client_with_key(self, tmp_path: Path) -> None:
        services = initialize_services(
            _settings(tmp_path, anthropic_api_key="sk-test", polish_model="claude-test")
        )

        assert services["anthropic_client"] is not None
        assert services["polish_model"] == "claude-test"
        services["presets_conn"].close()


class TestCreateApp:
    def test_routes_registered(self, tmp_path: Path) -> None:
        services = initialize_services(_settings(tmp_path))
        app = create_app(services)

        assert isinstance(app, FastAPI)
        paths = {route.path for route in app.routes}
        assert {"/messages", "/presets", "/templates", "/health", "/ready"} <= paths

    def test_lifespan_closes_db(self, tmp_path: Path) -> None:
        services = initialize_services(_settings(tmp_path))
        app = create_app(services)

        with TestClient(app) as client:
            assert client.get("/ready").status_code == 200

        assert TestClient(app).get("/ready").status_code == 503
