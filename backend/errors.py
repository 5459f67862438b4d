"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SiteError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class StoreError(SiteError):
    """Visitor database failure. The message never carries driver details."""

    def __init__(self):
        super().__init__("Database error", status_code=500)


class UpstreamError(SiteError):
    def __init__(self, message: str = "GitHub API error"):
        super().__init__(message, status_code=500)


class GeoLookupError(SiteError):
    """Raised inside the geolocation client only; callers never see it."""


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(SiteError)
    async def handle_site_error(_request: Request, exc: SiteError):
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

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
