"""Handler deleting devices by serial number in bounded batches."""

import asyncio
from typing import List, Optional

from structlog import get_logger

from message_processor.core.config.settings import settings
from message_processor.domain.interfaces.repositories import IUnitOfWork
from message_processor.domain.messages import DeleteDevicesMessage, MessageType

from .base import MessageHandler

logger = get_logger(__name__)


class DeleteDevicesHandler(MessageHandler[DeleteDevicesMessage]):
    """Deletes the devices named in a DeleteDevices message.

    An empty list is a successful no-op. A list containing a blank or a
    repeated serial number is rejected before any deletion. Each batch is
    committed on its own, so batches deleted before a failure or a
    cancellation stay deleted.
    """

    message_type = MessageType.DELETE_DEVICES
    message_model = DeleteDevicesMessage

    def __init__(self, uow: IUnitOfWork, batch_size: Optional[int] = None):
        self.uow = uow
        self.batch_size = batch_size or settings.DELETE_BATCH_SIZE

    async def handle(self, message: DeleteDevicesMessage) -> bool:
        if message is None:
            raise ValueError("message must not be None")

        serial_numbers = message.serial_numbers
        if not serial_numbers:
            logger.info("DeleteDevices message contains no serial numbers")
            return True

        if any(serial is None or not serial.strip() for serial in serial_numbers):
            logger.warning("DeleteDevices message rejected", reason="blank serial number")
            return False
        if len(set(serial_numbers)) != len(serial_numbers):
            logger.warning("DeleteDevices message rejected", reason="duplicate serial numbers")
            return False

        logger.info("Processing DeleteDevices message", requested=len(serial_numbers))
        total_deleted = 0
        try:
            for batch in self._batches(serial_numbers):
                async with self.uow.transaction():
                    deleted = await self.uow.devices.delete_devices_by_serial_numbers(batch)
                total_deleted += deleted
                logger.info("Deleted device batch", deleted=deleted, batch_size=len(batch))
        except asyncio.CancelledError:
            logger.warning("DeleteDevices processing cancelled", deleted_so_far=total_deleted)
            raise
        except Exception as e:
            logger.error(
                "Error processing DeleteDevices message",
                deleted_so_far=total_deleted,
                error=str(e),
            )
            return False

        logger.info(
            "Successfully processed DeleteDevices message",
            deleted=total_deleted,
            requested=len(serial_numbers),
        )
        return True

    def _batches(self, serial_numbers: List[str]):
        for start in range(0, len(serial_numbers), self.batch_size):
            yield serial_numbers[start:start + self.batch_size]
