"""Application entry point serving the message generator API.

Configures:
- **structlog** with JSON rendering (production) or colored console (development)
- **Presets DB** (SQLite) with the deal preset and template preset stores
- **Anthropic client** for fan-offer polishing, when an API key is set
- **FastAPI** routes for messages, presets, templates, and health probes
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI

from kolmessage.api import router as api_router
from kolmessage.config import Settings, get_settings, validate_credentials
from kolmessage.health import register_health_routes
from kolmessage.presets.schema import close_presets_db, init_presets_db
from kolmessage.presets.store import KeyValueStore, PresetStore, TemplatePresetStore

logger = structlog.get_logger()


def configure_logging(production: bool = False, level: int | None = None) -> None:
    """Point structlog at stderr, as JSON in production or console text otherwise.

    Chinese field values are written as-is in both renderers.  The server
    logs at INFO (production) or DEBUG; the CLI passes ``WARNING`` so only
    problems reach the terminal.

    Args:
        production: Render JSON lines instead of console text.
        level: Minimum level to emit; defaults by mode.
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if production:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    if level is None:
        level = logging.INFO if production else logging.DEBUG

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=production,
    )
    structlog.contextvars.bind_contextvars(service="kol-message-generator")


def initialize_services(settings: Settings | None = None) -> dict[str, Any]:
    """Set up all shared services for the application.

    Opens the presets database, builds the preset and template stores, and
    creates the Anthropic client when an API key is configured.

    Args:
        settings: Application settings.  If ``None``, ``get_settings()`` is used.

    Returns:
        A dict of initialized service instances keyed by name.
    """
    if settings is None:
        settings = get_settings()

    services: dict[str, Any] = {"_settings": settings}

    db_path = settings.presets_db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    presets_conn = init_presets_db(db_path)
    services["presets_conn"] = presets_conn

    kv = KeyValueStore(presets_conn)
    services["preset_store"] = PresetStore(kv)
    services["template_store"] = TemplatePresetStore(kv)
    services["store_lock"] = threading.Lock()

    anthropic_client = None
    api_key = settings.anthropic_api_key.get_secret_value()
    if api_key:
        from kolmessage.llm.client import get_anthropic_client

        anthropic_client = get_anthropic_client(api_key)
        logger.info("Anthropic client initialized", model=settings.polish_model)
    else:
        logger.info("ANTHROPIC_API_KEY not set, fan-offer polishing uses fallback text")
    services["anthropic_client"] = anthropic_client
    services["polish_model"] = settings.polish_model

    return services


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Close the presets database when the server shuts down."""
    yield
    presets_conn = app.state.services.get("presets_conn")
    if presets_conn is not None:
        close_presets_db(presets_conn)
        logger.info("Presets database connection closed on shutdown")


def create_app(services: dict[str, Any]) -> FastAPI:
    """Create the FastAPI app with lifespan, API routes, and health probes.

    Args:
        services: The initialized services dict from ``initialize_services``.

    Returns:
        The configured FastAPI application.
    """
    fastapi_app = FastAPI(title="KOL Message Generator", lifespan=lifespan)
    fastapi_app.state.services = services
    fastapi_app.state.settings = services.get("_settings") or get_settings()
    fastapi_app.include_router(api_router)
    register_health_routes(fastapi_app)
    return fastapi_app


def main() -> None:
    """Configure logging, initialize services, and serve the API with uvicorn."""
    settings = get_settings()
    configure_logging(production=settings.production)
    logger.info("Application starting")

    validate_credentials(settings)

    services = initialize_services(settings)
    fastapi_app = create_app(services)

    uvicorn.run(
        fastapi_app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
