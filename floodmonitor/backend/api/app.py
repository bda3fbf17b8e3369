"""FastAPI application factory.

Instantiate with:
    uvicorn floodmonitor.backend.api.app:build_app --factory --reload --port 5000
or through the CLI:
    floodmonitor serve
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from floodmonitor import __version__
from floodmonitor.backend.api import auth
from floodmonitor.backend.api.errors import install_error_handlers
from floodmonitor.backend.api.router import router
from floodmonitor.backend.core.db.session import Database
from floodmonitor.backend.core.utils.config import is_production, resolve_config
from floodmonitor.backend.core.utils.logging_setup import setup_logging
from floodmonitor.backend.core.weather.cache import WeatherCache
from floodmonitor.backend.core.weather.open_meteo import OpenMeteoClient, WeatherSnapshot

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release connections on shutdown."""
    app.state.database.init_database()
    logger.info("Flood monitor API ready (environment: %s)", app.state.config["server"]["environment"])
    yield
    app.state.database.dispose()


class SPAStaticFiles(StaticFiles):
    """Static files with ``index.html`` fallback for client-side routes."""

    async def get_response(self, path: str, scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404 or path.startswith("api"):
                raise
            return await super().get_response("index.html", scope)


def create_app(
    config: dict[str, Any] | None = None,
    weather_fetcher: Callable[[], WeatherSnapshot] | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Full configuration dict (see ``configs/default_config.yaml``).
            Loaded from disk when omitted.
        weather_fetcher: Replacement for the Open-Meteo client, mainly
            for tests.
    """
    if config is None:
        config = resolve_config()

    application = FastAPI(
        title="Sri Lanka Flood Monitor API",
        version=__version__,
        description="River levels, flood-risk zones, hazard alerts and weather for Sri Lanka",
        lifespan=lifespan,
    )

    weather_cfg = config["weather"]
    if weather_fetcher is None:
        weather_fetcher = OpenMeteoClient.from_config(weather_cfg).fetch

    application.state.config = config
    application.state.database = Database(config["database"]["url"], echo=config["database"].get("echo", False))
    application.state.weather_cache = WeatherCache(
        weather_fetcher,
        latitude=weather_cfg["latitude"],
        longitude=weather_cfg["longitude"],
        ttl_seconds=weather_cfg.get("cache_seconds", 600),
    )

    # ── Sessions ───────────────────────────────────────────────────────────
    session_cfg = config["session"]
    application.add_middleware(
        SessionMiddleware,
        secret_key=session_cfg["secret"],
        session_cookie=session_cfg.get("cookie_name", "session"),
        max_age=session_cfg.get("max_age", 24 * 60 * 60),
        same_site="lax",
        https_only=is_production(config),
    )

    # ── CORS ───────────────────────────────────────────────────────────────
    application.add_middleware(
        CORSMiddleware,
        allow_origins=config["cors"]["origins"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.middleware("http")(_log_api_requests)
    install_error_handlers(application)

    # ── Register all API routes under /api ─────────────────────────────────
    application.include_router(router, prefix="/api")
    application.include_router(auth.router, prefix="/api")

    # ── Serve the built dashboard, if present, after the API ───────────────
    static_dir = config.get("static", {}).get("dir")
    if static_dir and Path(static_dir).is_dir():
        application.mount("/", SPAStaticFiles(directory=static_dir, html=True), name="dashboard")
        logger.info("Serving dashboard from %s", static_dir)

    _install_access_log_filter()

    return application


async def _log_api_requests(request: Request, call_next):
    """Log ``METHOD /api/path STATUS in Nms`` for API calls."""
    start = time.perf_counter()
    response = await call_next(request)
    path = request.url.path
    if path.startswith("/api") and path != "/api/health":
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s %d in %.0fms", request.method, path, response.status_code, duration_ms)
    return response


class _QuietPollFilter(logging.Filter):
    """Drop uvicorn access-log records for /api/health."""

    _NOISY = ("/api/health",)

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        return not any(path in msg for path in self._NOISY)


def _install_access_log_filter() -> None:
    """Attach the filter to uvicorn's access logger (if it exists)."""
    uvicorn_access = logging.getLogger("uvicorn.access")
    if not any(isinstance(f, _QuietPollFilter) for f in uvicorn_access.filters):
        uvicorn_access.addFilter(_QuietPollFilter())


def build_app() -> FastAPI:
    """App factory for uvicorn's ``--factory`` mode.

    Each worker process reads its configuration from ``$FLOODMONITOR_CONFIG``
    (or the default file) and sets up its own logging.
    """
    config = resolve_config()
    setup_logging(config["logging"].get("level", "INFO"), config["logging"].get("file"))
    return create_app(config)
