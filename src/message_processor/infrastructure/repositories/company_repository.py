"""Company repository implementation using SQLAlchemy.

Implements `ICompanyRepository` on an async session. Store failures are
logged and re-raised as `DatabaseError`; the unit of work decides whether the
surrounding transaction is rolled back.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from message_processor.core.exceptions import DatabaseError
from message_processor.domain.entities import Company, LicensingType
from message_processor.domain.interfaces.repositories import ICompanyRepository

logger = get_logger(__name__)


class CompanyRepository(ICompanyRepository):
    """SQLAlchemy implementation of `ICompanyRepository`."""

    def __init__(self, db_session: AsyncSession):
        """Initialize repository with database session.

        Args:
            db_session: SQLAlchemy async session shared with the unit of work
        """
        self.db_session = db_session

    async def create_company(self, name: str, code: str, licensing: LicensingType) -> int:
        """Insert a company row and flush to obtain its id.

        The unique constraint on ``code`` is checked at flush time, so a
        concurrent insert of the same code surfaces here as `DatabaseError`.
        """
        company = Company(name=name, code=code, licensing=int(licensing))
        try:
            self.db_session.add(company)
            await self.db_session.flush()
        except SQLAlchemyError as e:
            logger.error("Error creating company", company_code=code, error=str(e))
            raise DatabaseError(f"Failed to create company {code}") from e

        logger.info("Company created", company_id=company.id, company_code=code)
        return company.id

    async def get_company_by_code(self, code: str) -> Optional[Company]:
        try:
            statement = select(Company).where(Company.code == code)
            result = await self.db_session.execute(statement)
            company = result.scalars().first()
        except SQLAlchemyError as e:
            logger.error("Error retrieving company by code", company_code=code, error=str(e))
            raise DatabaseError(f"Failed to look up company {code}") from e

        logger.debug("Company lookup by code completed", company_code=code, found=company is not None)
        return company
