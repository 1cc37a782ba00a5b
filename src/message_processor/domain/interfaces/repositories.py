"""Repository interfaces for abstracting data persistence in the domain layer.

This module defines the abstract base classes (interfaces) for repositories
and for the unit of work that groups them into one transaction. The message
handlers depend only on these interfaces; the SQLAlchemy implementations live
in ``message_processor.infrastructure``.
"""

from abc import ABC, abstractmethod
from typing import AsyncContextManager, List, Optional

from message_processor.domain.entities import Company, DeviceType, LicensingType


class ICompanyRepository(ABC):
    """Persistence operations for companies."""

    @abstractmethod
    async def create_company(self, name: str, code: str, licensing: LicensingType) -> int:
        """Inserts a company and returns its generated id.

        Raises:
            DatabaseError: If the insert fails, including a duplicate ``code``.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_company_by_code(self, code: str) -> Optional[Company]:
        """Retrieves a company by its exact code.

        Returns:
            The `Company`, or ``None`` if no company uses this code.
        """
        raise NotImplementedError


class ILocationRepository(ABC):
    """Persistence operations for locations."""

    @abstractmethod
    async def create_location(self, name: str, address: Optional[str], parent_id: int) -> int:
        """Inserts a location under the company ``parent_id`` and returns its id."""
        raise NotImplementedError


class IDeviceRepository(ABC):
    """Persistence operations for devices."""

    @abstractmethod
    async def create_device(
        self, serial_number: str, device_type: DeviceType, location_id: int
    ) -> int:
        """Inserts a device at ``location_id`` and returns its id."""
        raise NotImplementedError

    @abstractmethod
    async def delete_devices_by_serial_numbers(self, serial_numbers: List[str]) -> int:
        """Deletes every device whose serial number is in the list.

        Returns:
            The number of rows removed, which may be lower than the number of
            serials requested.
        """
        raise NotImplementedError

    @abstractmethod
    async def serial_number_exists(self, serial_number: str) -> bool:
        """Checks whether a device already uses ``serial_number``."""
        raise NotImplementedError


class IUnitOfWork(ABC):
    """Groups the repositories of one request around explicit transactions.

    Usage:
        async with uow.transaction():
            company_id = await uow.companies.create_company(...)
            await uow.locations.create_location(..., parent_id=company_id)

    Leaving the block normally commits; any exception, cancellation included,
    rolls back and propagates.
    """

    companies: ICompanyRepository
    locations: ILocationRepository
    devices: IDeviceRepository

    @abstractmethod
    def transaction(self, isolation_level: Optional[str] = None) -> AsyncContextManager["IUnitOfWork"]:
        """Opens a transaction, optionally at a specific isolation level."""
        raise NotImplementedError
