"""Health and readiness endpoints for container orchestration.

- ``GET /health`` -- Liveness probe.  Returns 200 if the process is alive.
- ``GET /ready``  -- Readiness probe.  Returns 200 only when the presets DB
  connection is functional.  The LLM client is reported but optional, since
  polishing falls back without it.
"""

from __future__ import annotations

import asyncio
import sqlite3
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


def register_health_routes(app: FastAPI) -> None:
    """Register ``/health`` and ``/ready`` endpoints on *app*.

    Args:
        app: The FastAPI application instance.
    """

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe -- always returns 200 if the process is running."""
        return {"status": "healthy"}

    @app.get("/ready")
    async def ready(request: Request) -> JSONResponse:
        """Readiness probe -- checks the presets DB connection."""
        services: dict[str, Any] = request.app.state.services
        checks: dict[str, str] = {}

        presets_conn = services.get("presets_conn")
        if presets_conn is not None:
            try:
                await asyncio.to_thread(presets_conn.execute, "SELECT 1")
                checks["presets_db"] = "ok"
            except sqlite3.Error:
                checks["presets_db"] = "fail"
        else:
            checks["presets_db"] = "fail"

        all_ok = all(v == "ok" for v in checks.values())
        checks["llm"] = "ok" if services.get("anthropic_client") is not None else "disabled"

        status = "ready" if all_ok else "not_ready"
        code = 200 if all_ok else 503
        return JSONResponse(content={"status": status, "checks": checks}, status_code=code)
