"""FastAPI application factory.

Lifespan
--------
On startup the app opens a single :class:`HttpClient` (shared across all
requests and all link probes via ``request.app.state.http_client``).  On
shutdown it closes the client cleanly.

Routes
------
    /api/analyze  — page analysis (POST)
    /             — static browser front-end
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from pageanalyzer.clients.http_client import HttpClient
from pageanalyzer.config import Settings, settings as default_settings

from pageanalyzer.api.routers import analyze as analyze_router


async def _invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": "Invalid JSON request body"})


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    config = config or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Open the shared HTTP client on startup and close it on shutdown."""
        client = HttpClient(
            timeout=config.request_timeout,
            max_redirects=config.max_redirects,
            user_agent=config.user_agent,
        )
        app.state.http_client = client
        try:
            yield
        finally:
            client.close()

    app = FastAPI(
        title="Web Page Analyzer",
        description=(
            "Fetches a web page and reports its HTML version, title, heading "
            "counts, login-form presence and internal/external/inaccessible "
            "link counts."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.add_exception_handler(RequestValidationError, _invalid_body_handler)

    app.include_router(analyze_router.router, prefix="/api", tags=["analyze"])

    # Mounted last so it never shadows the API routes.
    if config.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=config.static_dir, html=True), name="static")

    return app


# Module-level instance used by uvicorn:
#   uvicorn pageanalyzer.api.app:app --port 8080
# Logging is configured by the caller (see ``pageanalyzer serve``).
app = create_app()
