"""Application lifecycle management.

This module handles application startup and shutdown events, ensuring proper
initialization and cleanup of application resources.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from message_processor.core.config.settings import settings
from message_processor.core.logging import logger
from message_processor.infrastructure.database import check_database_health, engine


def create_lifespan_manager():
    """Create the application lifespan manager.

    Returns:
        AsyncContextManager: The lifespan manager for the FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Verifies the database on startup and disposes the pool on shutdown.

        The schema itself is managed by Alembic migrations.

        Raises:
            RuntimeError: If the database is unavailable during startup
        """
        database = await check_database_health()
        if database["status"] != "healthy":
            logger.error("database_unavailable_on_startup", error=database.get("error"))
            raise RuntimeError("Database unavailable")
        logger.info("application_startup", env=settings.APP_ENV, version=settings.VERSION)

        yield

        await engine.dispose()
        logger.info("application_shutdown", env=settings.APP_ENV)

    return lifespan
