"""Device repository implementation using SQLAlchemy."""

from typing import List

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from message_processor.core.exceptions import DatabaseError
from message_processor.domain.entities import Device, DeviceType
from message_processor.domain.interfaces.repositories import IDeviceRepository

logger = get_logger(__name__)


class DeviceRepository(IDeviceRepository):
    """SQLAlchemy implementation of `IDeviceRepository`.

    Deletion is a single set-based ``DELETE ... WHERE serial_number IN (...)``
    per call; callers are expected to bound the list size.
    """

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def create_device(
        self, serial_number: str, device_type: DeviceType, location_id: int
    ) -> int:
        device = Device(serial_number=serial_number, type=int(device_type), location_id=location_id)
        try:
            self.db_session.add(device)
            await self.db_session.flush()
        except SQLAlchemyError as e:
            logger.error("Error creating device", serial_number=serial_number, error=str(e))
            raise DatabaseError(f"Failed to create device {serial_number}") from e

        logger.debug("Device created", device_id=device.id, serial_number=serial_number)
        return device.id

    async def delete_devices_by_serial_numbers(self, serial_numbers: List[str]) -> int:
        if not serial_numbers:
            return 0

        statement = delete(Device).where(Device.serial_number.in_(serial_numbers))
        try:
            result = await self.db_session.execute(
                statement, execution_options={"synchronize_session": False}
            )
        except SQLAlchemyError as e:
            logger.error("Error deleting devices", requested=len(serial_numbers), error=str(e))
            raise DatabaseError("Failed to delete devices") from e

        deleted = result.rowcount or 0
        logger.info("Devices deleted", requested=len(serial_numbers), deleted=deleted)
        return deleted

    async def serial_number_exists(self, serial_number: str) -> bool:
        statement = select(exists().where(Device.serial_number == serial_number))
        try:
            result = await self.db_session.execute(statement)
        except SQLAlchemyError as e:
            logger.error("Error checking serial number", serial_number=serial_number, error=str(e))
            raise DatabaseError(f"Failed to check serial number {serial_number}") from e
        return bool(result.scalar())
