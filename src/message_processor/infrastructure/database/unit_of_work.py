"""
SQLAlchemy Implementation of Unit of Work

Binds the company, location and device repositories to one async session and
runs groups of their calls inside explicit transactions.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from message_processor.core.config.settings import settings
from message_processor.domain.interfaces.repositories import IUnitOfWork
from message_processor.infrastructure.repositories import (
    CompanyRepository,
    DeviceRepository,
    LocationRepository,
)

logger = get_logger(__name__)

_DEFAULT = object()


class SQLAlchemyUnitOfWork(IUnitOfWork):
    """
    SQLAlchemy-based Unit of Work implementation.

    Reads issued outside ``transaction()`` (such as the duplicate company
    check) run in the session's implicit transaction; ``transaction()`` closes
    that one first so the isolation level can be applied to a fresh
    connection.

    Attributes:
        session: Async SQLAlchemy session shared by the repositories
        isolation_level: Default isolation for ``transaction()``; ``None``
            keeps the driver default
    """

    def __init__(self, session: AsyncSession, isolation_level=_DEFAULT) -> None:
        self.session = session
        self.isolation_level: Optional[str] = (
            settings.DATABASE_ISOLATION_LEVEL if isolation_level is _DEFAULT else isolation_level
        )
        self.companies = CompanyRepository(session)
        self.locations = LocationRepository(session)
        self.devices = DeviceRepository(session)

    @asynccontextmanager
    async def transaction(self, isolation_level: Optional[str] = None) -> AsyncIterator[SQLAlchemyUnitOfWork]:
        """
        Run the enclosed block atomically.

        Commits when the block exits normally. Rolls back and re-raises on any
        exception, ``asyncio.CancelledError`` included.

        Args:
            isolation_level: Overrides the unit of work default for this
                transaction only
        """
        level = isolation_level or self.isolation_level
        if self.session.in_transaction():
            await self.session.commit()

        if level:
            await self.session.connection(execution_options={"isolation_level": level})
        logger.debug("UnitOfWork transaction started", isolation_level=level)

        try:
            yield self
        except BaseException as e:
            await self.rollback()
            logger.warning(
                "UnitOfWork rolled back due to exception",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        await self.commit()

    async def commit(self) -> None:
        try:
            await self.session.commit()
            logger.debug("UnitOfWork transaction committed")
        except Exception as e:
            await self.rollback()
            logger.error("UnitOfWork commit failed", error=str(e))
            raise

    async def rollback(self) -> None:
        try:
            await self.session.rollback()
            logger.debug("UnitOfWork transaction rolled back")
        except Exception as e:
            logger.error("UnitOfWork rollback failed", error=str(e))
            raise
