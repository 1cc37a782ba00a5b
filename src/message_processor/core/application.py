"""Application factory for creating and configuring the FastAPI application.

This module provides a factory function to create a properly configured FastAPI application
with all necessary middleware, exception handlers, and routers registered.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from message_processor.adapters.api.v1 import api_router
from message_processor.core.config.settings import settings
from message_processor.core.handlers import register_exception_handlers
from message_processor.core.lifecycle import create_lifespan_manager
from message_processor.core.middleware import configure_middleware
from message_processor.core.rate_limiting import RateLimiter


def create_application(rate_limiter: Optional[RateLimiter] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        rate_limiter: Limiter shared by every request of this application;
            a limiter built from settings is used when omitted.

    Returns:
        FastAPI: The configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Routes JSON business messages to transactional company and device handlers.",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=create_lifespan_manager(),
        default_response_class=JSONResponse,
    )

    app.state.rate_limiter = rate_limiter or RateLimiter()

    configure_middleware(app)

    register_exception_handlers(app)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    return app
