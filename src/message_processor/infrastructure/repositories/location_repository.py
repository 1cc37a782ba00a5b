from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from message_processor.core.exceptions import DatabaseError
from message_processor.domain.entities import Location
from message_processor.domain.interfaces.repositories import ILocationRepository

logger = get_logger(__name__)


class LocationRepository(ILocationRepository):
    """SQLAlchemy implementation of `ILocationRepository`."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def create_location(self, name: str, address: Optional[str], parent_id: int) -> int:
        location = Location(name=name, address=address, parent_id=parent_id)
        try:
            self.db_session.add(location)
            await self.db_session.flush()
        except SQLAlchemyError as e:
            logger.error("Error creating location", company_id=parent_id, error=str(e))
            raise DatabaseError(f"Failed to create location for company {parent_id}") from e

        logger.debug("Location created", location_id=location.id, company_id=parent_id)
        return location.id
