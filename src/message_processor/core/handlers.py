from __future__ import annotations

"""
Global exception handlers for the FastAPI application.

This module contains centralized handlers for custom application exceptions,
translating them into appropriate HTTP responses. The middleware reuses the
authentication and rate limit handlers for rejections it issues itself, and
falls back to the unhandled exception handler for anything that escapes a
route.
"""

from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status
from structlog import get_logger

from message_processor.core.config.settings import settings
from message_processor.core.exceptions import AuthenticationError, RateLimitExceededError

__all__ = [
    "authentication_error_handler",
    "rate_limit_exceeded_error_handler",
    "unhandled_exception_handler",
    "error_body",
    "register_exception_handlers",
]

logger = get_logger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


def _client_host(request: Request) -> str | None:
    return request.client.host if request.client else None


def error_body(request: Request, message: str, exc: BaseException | None = None) -> Dict[str, Any]:
    """Standard failure payload; exception detail is only exposed in debug mode."""
    body: Dict[str, Any] = {
        "success": False,
        "message": message,
        "correlationId": getattr(request.state, "correlation_id", None),
    }
    if settings.DEBUG and exc is not None:
        body["detail"] = repr(exc)
    return body


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    """Handles `AuthenticationError`, returning a `401 Unauthorized`.

    Args:
        request: The incoming `Request` object.
        exc: The `AuthenticationError` instance.

    Returns:
        A `JSONResponse` with a 401 status code and error message.
    """
    logger.warning(
        "Authentication failure",
        error=exc.code,
        client_ip=_client_host(request),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"status": status.HTTP_401_UNAUTHORIZED, "message": exc.message},
    )


async def rate_limit_exceeded_error_handler(request: Request, exc: RateLimitExceededError) -> JSONResponse:
    """Handles `RateLimitExceededError`, returning a `429` with ``Retry-After``.

    Args:
        request: The incoming `Request` object.
        exc: The `RateLimitExceededError` instance.

    Returns:
        A `JSONResponse` with a 429 status code.
    """
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "status": status.HTTP_429_TOO_MANY_REQUESTS,
            "message": exc.message,
            "retryAfter": exc.reset_seconds,
        },
        headers={"Retry-After": str(exc.reset_seconds)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for exceptions nothing else recognised."""
    logger.error(
        "Unhandled exception",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(request, UNEXPECTED_ERROR_MESSAGE, exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registers all custom exception handlers with the FastAPI application.

    Args:
        app: The `FastAPI` application instance.
    """
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(RateLimitExceededError, rate_limit_exceeded_error_handler)
