"""
Asynchronous Database Utilities Module

This module provides the asynchronous SQLAlchemy engine and session factory
used by every request. All store calls are awaited so a request cancelled by
its client stops at the next database round trip.

**Security Note**: Ensure that the database connection URL (DATABASE_URL) is
configured for SSL/TLS when connecting over untrusted networks. Avoid logging
connection details.

Key Components:
    - engine: The asynchronous SQLAlchemy engine.
    - AsyncSessionFactory: A factory for creating asynchronous database sessions.
    - get_async_db: A FastAPI dependency yielding one session per request.
    - create_async_db_and_tables: Utility to create tables using the async engine.
    - check_database_health: Connectivity probe used by the health endpoint.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from structlog import get_logger

from message_processor.core.config.settings import settings

logger = get_logger(__name__)


def _engine_options(url: str) -> Dict[str, Any]:
    """Pool options for server databases; SQLite uses its own pool."""
    if make_url(url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": settings.POSTGRES_POOL_SIZE,
        "max_overflow": settings.POSTGRES_MAX_OVERFLOW,
        "pool_timeout": settings.POSTGRES_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    **_engine_options(settings.DATABASE_URL),
)

AsyncSessionFactory: sessionmaker[AsyncSession] = sessionmaker(  # type: ignore[type-arg]
    bind=engine, class_=AsyncSession, expire_on_commit=False
)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields an AsyncSession.

    Rolls back whatever is still open if the request fails, and always closes
    the session.

    Yields:
        AsyncSession: An asynchronous database session for the current request.
    """
    async with AsyncSessionFactory() as session:
        logger.debug("Async database session created")
        try:
            yield session
        except Exception:  # noqa: BLE001 - any error must trigger rollback
            await session.rollback()
            logger.error("Async database session rollback due to error")
            raise
        finally:
            await session.close()
            logger.debug("Async database session closed")


async def create_async_db_and_tables(bind: AsyncEngine = engine) -> None:
    """
    Create tables using the async engine (mainly for test suites and local runs).

    Production schemas are managed with Alembic.
    """
    # Register the table classes on SQLModel.metadata
    from message_processor.domain import entities  # noqa: F401

    logger.info("Creating async database tables")
    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Async database tables created")


async def check_database_health(bind: AsyncEngine = engine) -> Dict[str, Any]:
    """
    Runs ``SELECT 1`` against the store.

    Returns:
        A report with ``status`` ("healthy" or "unhealthy") and, on failure,
        the error text.
    """
    try:
        async with bind.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return {"status": "healthy"}
    except Exception as e:
        logger.error("database_health_check_failed", error=str(e))
        return {"status": "unhealthy", "error": str(e)}
