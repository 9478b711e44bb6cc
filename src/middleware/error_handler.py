"""
Translate exceptions raised by route handlers into JSON error responses.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..services.cache import CacheError, KeyNotFoundError
from ..services.html import TemplateError

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Internal Server Error"


def error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Build a ``{"error": ...}`` response for ``exc``."""
    if isinstance(exc, KeyNotFoundError):
        return JSONResponse({"error": str(exc)}, status_code=404)

    if isinstance(exc, StarletteHTTPException):
        message = exc.detail if exc.status_code < 500 else GENERIC_ERROR
        return JSONResponse(
            {"error": message},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    if isinstance(exc, (CacheError, TemplateError)):
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
    else:
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
    return JSONResponse({"error": GENERIC_ERROR}, status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CacheError, error_handler)
    app.add_exception_handler(TemplateError, error_handler)
    app.add_exception_handler(StarletteHTTPException, error_handler)
    app.add_exception_handler(Exception, error_handler)
