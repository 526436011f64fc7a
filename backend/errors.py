"""Custom exceptions and centralized FastAPI error handlers."""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CricketProxyError(Exception):
    """Base exception with HTTP status code and optional error details."""

    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class ConfigurationError(CricketProxyError):
    """A required setting (usually the upstream token) is missing."""

    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class MissingParameterError(CricketProxyError):
    def __init__(self, name: str):
        super().__init__(f"Missing required parameter: {name}", status_code=400)
        self.name = name


class AggregateFetchError(CricketProxyError):
    """The aggregate document could not be fetched and nothing is cached."""

    def __init__(self, reason: str, details: Any = None):
        super().__init__(f"Failed to fetch aggregate data. Reason: {reason}", details=details)


class UpstreamError(CricketProxyError):
    """Base for failures talking to the upstream cricket API."""


class UpstreamHTTPError(UpstreamError):
    """Upstream answered with a non-2xx status; the status is forwarded."""

    def __init__(self, status_code: int, reason: str, details: Any = None):
        super().__init__(
            f"Upstream API error: {status_code} {reason}".rstrip(),
            status_code=status_code,
            details=details,
        )


class UpstreamSoftError(UpstreamError):
    """Upstream answered 2xx but flagged a failure inside the body."""

    def __init__(self, body: Any):
        msg = body.get("msg") if isinstance(body, dict) else None
        super().__init__(
            f"Upstream reported a failure: {msg}",
            status_code=502,
            details=body,
        )


class TransportError(UpstreamError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to fetch data from {path}. Reason: {reason}", status_code=500)


def error_payload(exc: CricketProxyError) -> dict:
    payload = {"error": str(exc)}
    if exc.details is not None:
        payload["details"] = exc.details
    return payload


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(CricketProxyError)
    async def handle_proxy_error(_request: Request, exc: CricketProxyError):
        return JSONResponse(error_payload(exc), status_code=exc.status_code)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
