"""
JSON error responses.

Every error leaves the API as
    {"success": false, "error": ..., "timestamp": ..., "path": ..., "method": ...}
Request validation failures add "details" and use status 400.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ValidationFailed(Exception):
    """Raised by routes for semantic input problems (unsafe code, bad edit set)."""

    def __init__(self, details: list[dict[str, Any]]):
        self.details = details
        super().__init__("Validation failed")


def error_body(request: Request, error: str, **extra: Any) -> dict[str, Any]:
    return {
        "success": False,
        "error": error,
        **extra,
        "timestamp": datetime.now(UTC).isoformat(),
        "path": request.url.path,
        "method": request.method,
    }


def _validation_details(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [
        {
            "msg": err.get("msg", ""),
            "loc": [str(part) for part in err.get("loc", ())],
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Not Found - {request.url.path}"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, message),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(request, "Validation failed", details=_validation_details(exc)),
    )


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(request, "Validation failed", details=exc.details),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(request, "Internal server error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
