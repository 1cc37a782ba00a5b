from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from message_processor.domain.interfaces.repositories import IUnitOfWork
from message_processor.domain.services import (
    DeleteDevicesHandler,
    MessageProcessor,
    NewCompanyHandler,
)
from message_processor.infrastructure.database import SQLAlchemyUnitOfWork, get_async_db

__all__ = [
    "get_unit_of_work",
    "get_message_processor",
]


# ---------------------------------------------------------------------------
# Type-annotated dependency shortcuts
# ---------------------------------------------------------------------------


DBSession = Annotated[AsyncSession, Depends(get_async_db)]


def get_unit_of_work(db_session: DBSession) -> IUnitOfWork:
    """One unit of work per request, bound to the request's session."""
    return SQLAlchemyUnitOfWork(db_session)


UnitOfWork = Annotated[IUnitOfWork, Depends(get_unit_of_work)]


def get_message_processor(uow: UnitOfWork) -> MessageProcessor:
    """Dispatcher wired with every handler, all sharing the request's unit of work."""
    return MessageProcessor(
        handlers=[
            NewCompanyHandler(uow),
            DeleteDevicesHandler(uow),
        ]
    )
