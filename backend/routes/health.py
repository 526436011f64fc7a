"""Health and readiness check routes."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "cricket-api-proxy"


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Cricket API Proxy is running."


@router.get("/ready")
async def ready(request: Request) -> dict:
    """Lightweight readiness check: no external calls."""
    return {"status": "ok", "service": SERVICE_NAME, "commit": request.app.state.settings.git_sha}


@router.get("/health")
async def health(request: Request) -> dict:
    """Health check with config and cache state. Never calls the upstream."""
    settings = request.app.state.settings
    token_configured = bool(settings.api_token)
    if not token_configured:
        logger.warning("Health check: upstream token is not configured")
    return {
        "status": "ok" if token_configured else "degraded",
        "service": SERVICE_NAME,
        "commit": settings.git_sha,
        "token_configured": token_configured,
        "cache": request.app.state.cache.status(),
    }
