"""Middleware configuration for the FastAPI application.

This module handles the configuration and registration of all middleware
components. From the outside in, a request passes through:

1. CORS
2. request context: correlation id, request metrics, last-resort error handling
3. rate limiting (health checks exempt)
4. API key authentication (health checks, docs and CORS preflight exempt)
"""

import secrets
import time
import uuid
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from structlog import get_logger

from message_processor.core.config.settings import settings
from message_processor.core.exceptions import (
    AuthenticationError,
    InvalidApiKeyError,
    MissingApiKeyError,
    RateLimitExceededError,
)
from message_processor.core.handlers import (
    authentication_error_handler,
    rate_limit_exceeded_error_handler,
    unhandled_exception_handler,
)
from message_processor.core.metrics import metrics_collector
from message_processor.core.rate_limiting import resolve_client_id

logger = get_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"
_DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")
UNMATCHED_ROUTE = "unmatched"


def configure_middleware(app: FastAPI) -> None:
    """Configure all middleware for the FastAPI application.

    Starlette runs the middleware registered last first, so registration
    goes from the innermost layer outwards.

    Args:
        app (FastAPI): The FastAPI application instance
    """
    app.middleware("http")(api_key_middleware)
    app.middleware("http")(rate_limit_middleware)
    app.middleware("http")(request_context_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            CORRELATION_ID_HEADER,
            "X-Rate-Limit-Limit",
            "X-Rate-Limit-Remaining",
            "X-Rate-Limit-Reset",
            "Retry-After",
        ],
    )


def is_health_check_path(path: str) -> bool:
    return path.lower().startswith(f"{settings.API_PREFIX}/health")


def _is_docs_path(path: str) -> bool:
    return path in _DOCS_PATHS or path.startswith("/docs/")


def _route_template(request: Request) -> str:
    """Path template of the matched route; unmatched paths share one key."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


async def request_context_middleware(request: Request, call_next):
    """Assigns the correlation id and turns escaped exceptions into a 500.

    An incoming ``X-Correlation-ID`` is reused; otherwise a new UUID is
    generated. The id is stored on ``request.state``, bound into the
    structlog context and echoed on the response.
    """
    correlation_id = request.headers.get(CORRELATION_ID_HEADER) or str(uuid.uuid4())
    request.state.correlation_id = correlation_id
    started = time.perf_counter()

    with structlog.contextvars.bound_contextvars(correlation_id=correlation_id):
        try:
            response = await call_next(request)
        except Exception as exc:
            response = await unhandled_exception_handler(request, exc)

        duration = time.perf_counter() - started
        if response.status_code >= 400:
            logger.warning(
                "request_failed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration=duration,
            )
        metrics_collector.record_request_metric(
            _route_template(request), request.method, response.status_code, duration
        )

    response.headers[CORRELATION_ID_HEADER] = correlation_id
    return response


async def rate_limit_middleware(request: Request, call_next):
    """Applies the per-client fixed-window limit and adds the rate headers."""
    if not settings.RATE_LIMIT_ENABLED or is_health_check_path(request.url.path):
        return await call_next(request)

    client_id = resolve_client_id(request)
    decision = await request.app.state.rate_limiter.admit(client_id)

    if not decision.allowed:
        metrics_collector.record_rate_limit_rejection(client_id)
        response = await rate_limit_exceeded_error_handler(
            request, RateLimitExceededError(decision.reset_seconds, decision.limit)
        )
    else:
        response = await call_next(request)

    response.headers.update(decision.headers())
    return response


def _extract_api_key(request: Request) -> Optional[str]:
    header_value = request.headers.get(settings.API_KEY_HEADER)
    if header_value is not None:
        return header_value
    return request.query_params.get(settings.API_KEY_QUERY_PARAM)


def verify_api_key(request: Request) -> None:
    """Checks the request's API key against the configured one.

    Raises:
        MissingApiKeyError: No key was presented.
        InvalidApiKeyError: The key differs from the configured key, or no
            key is configured.
    """
    provided = _extract_api_key(request)
    if not provided:
        raise MissingApiKeyError()

    expected = settings.API_KEY.get_secret_value() if settings.API_KEY else ""
    if not expected:
        logger.error("api_key_not_configured")
        raise InvalidApiKeyError()

    if not secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        raise InvalidApiKeyError()


async def api_key_middleware(request: Request, call_next):
    """Rejects requests without a valid API key with a 401."""
    path = request.url.path
    if request.method == "OPTIONS" or is_health_check_path(path) or _is_docs_path(path):
        return await call_next(request)

    try:
        verify_api_key(request)
    except AuthenticationError as exc:
        return await authentication_error_handler(request, exc)

    logger.debug("API key authentication successful")
    return await call_next(request)
