"""FastAPI application entry point for the cricket API proxy."""

import logging
import sys
import time
from typing import Callable

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, settings as default_settings
from errors import register_error_handlers
from services.cache import AggregateCache
from services.endpoints import aggregate_path, configure_endpoints
from services.proxy import PassThroughProxy
from services.upstream import UpstreamClient

# Structured logging: JSON for production, human-readable for local
if default_settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title="Cricket API Proxy", version="1.0.0")

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    # One pooled client shared by the cache and the pass-through routes
    http = httpx.AsyncClient(timeout=settings.upstream_timeout, transport=transport)
    upstream = UpstreamClient(http, settings)
    home_path = aggregate_path(settings.upstream_paths)

    app.state.settings = settings
    app.state.proxy = PassThroughProxy(upstream)
    app.state.cache = AggregateCache(
        fetch=lambda: upstream.get_json(home_path),
        ttl_seconds=settings.cache_ttl_seconds,
        clock=clock,
    )

    from routes.cricket import build_proxy_router, router as cricket_router
    from routes.health import router as health_router

    app.include_router(health_router)
    app.include_router(cricket_router)
    app.include_router(build_proxy_router(configure_endpoints(settings.upstream_paths)))

    @app.on_event("startup")
    async def _validate_config() -> None:
        missing = settings.validate()
        if missing:
            logger.warning("Missing env vars (upstream requests will fail): %s", ", ".join(missing))

    @app.on_event("shutdown")
    async def _close_http() -> None:
        await http.aclose()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("Cricket API proxy running on http://localhost:%d", default_settings.port)
    uvicorn.run(app, host="0.0.0.0", port=default_settings.port)
