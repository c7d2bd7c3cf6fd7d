"""Centralized, typed configuration using pydantic-settings.

Provides a single ``Settings`` class backed by ``.env`` file and environment
variables, a cached ``get_settings()`` accessor, and a ``validate_credentials()``
startup gate.

This module has no imports from the ``kolmessage`` package so it can be
loaded first by every entry point.
"""

from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path

import structlog
from pydantic import SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Application settings loaded from environment variables and ``.env`` file.

    ``SecretStr`` fields prevent accidental leaks in logs or error output.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- General ---------------------------------------------------------------
    production: bool = False
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # -- Presets ---------------------------------------------------------------
    presets_db_path: Path = Path("data/presets.db")

    # -- LLM / Anthropic -------------------------------------------------------
    anthropic_api_key: SecretStr = SecretStr("")
    polish_model: str = "claude-haiku-4-5-20251001"


@lru_cache
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    try:
        return Settings()
    except ValidationError as exc:
        # Structured errors only; the exception text may contain secrets
        logger.error("settings_validation_failed", errors=exc.errors())
        sys.exit(1)


def validate_credentials(settings: Settings) -> None:
    """Check credential presence at startup.

    Fan-offer polishing needs ``ANTHROPIC_API_KEY``.  In production a missing
    key stops startup; in development it is logged and polishing falls back
    to the local sentence.

    Args:
        settings: The loaded application settings.
    """
    if settings.anthropic_api_key.get_secret_value():
        logger.info("credential_validation_passed")
        return

    detail = "ANTHROPIC_API_KEY is empty or not set"
    if settings.production:
        logger.error("credential_missing", detail=detail)
        print("\n=== STARTUP FAILED ===", file=sys.stderr)
        print(f"  - {detail}", file=sys.stderr)
        print("======================\n", file=sys.stderr)
        sys.exit(1)
    logger.warning("credential_missing_dev", detail=detail)
