"""
API Error Handling

Converts ``ServiceError`` and framework HTTP errors (unrouted methods,
unknown paths) into the uniform ``{"error": message}`` body.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from smart_tasks.api.cors import CORS_HEADERS
from smart_tasks.core.errors import MethodNotAllowedError, ServiceError
from smart_tasks.schemas.search import ErrorResponse


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=CORS_HEADERS,
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """FastAPI exception handler registered for ``ServiceError``."""
    return _error_response(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    FastAPI exception handler for errors raised by routing itself.

    A 405 carries the same message as a method rejected by a route.
    """
    if exc.status_code == MethodNotAllowedError.status_code:
        message = MethodNotAllowedError.default_message
    else:
        message = str(exc.detail)
    return _error_response(exc.status_code, message)
