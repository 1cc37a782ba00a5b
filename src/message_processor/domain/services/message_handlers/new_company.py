"""Handler creating a company with its locations and devices."""

from typing import Optional

from structlog import get_logger

from message_processor.core.exceptions import DuplicateCompanyError, InvalidMessageError, ValidationError
from message_processor.domain.entities import DeviceType, LicensingType
from message_processor.domain.interfaces.repositories import IUnitOfWork
from message_processor.domain.messages import DeviceInfo, MessageType, NewCompanyMessage
from message_processor.domain.services.serial_number_generator import SerialNumberGenerator

from .base import MessageHandler

logger = get_logger(__name__)

NO_ADDRESS = "No address provided"


class NewCompanyHandler(MessageHandler[NewCompanyMessage]):
    """Creates a company, then one location and one device per device entry.

    All rows are written in a single transaction: an invalid licensing or
    device type, an exhausted serial number generator or any store error
    leaves nothing behind.
    """

    message_type = MessageType.NEW_COMPANY
    message_model = NewCompanyMessage

    def __init__(
        self,
        uow: IUnitOfWork,
        serial_number_generator: Optional[SerialNumberGenerator] = None,
    ):
        self.uow = uow
        self.serial_number_generator = serial_number_generator or SerialNumberGenerator(uow.devices)

    async def handle(self, message: NewCompanyMessage) -> bool:
        if message is None:
            raise ValueError("message must not be None")

        try:
            await self._validate(message)
        except ValidationError as e:
            logger.warning("NewCompany message rejected", reason=e.message, error_code=e.code)
            return False
        except Exception as e:
            logger.error("Error validating NewCompany message", error=str(e))
            return False

        logger.info(
            "Processing NewCompany message",
            company_name=message.company_name,
            company_code=message.company_code,
            device_count=len(message.devices),
        )
        try:
            async with self.uow.transaction():
                await self._create_company(message)
        except Exception as e:
            logger.error(
                "Error processing NewCompany message",
                company_code=message.company_code,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        logger.info("Successfully processed NewCompany message", company_name=message.company_name)
        return True

    async def _validate(self, message: NewCompanyMessage) -> None:
        if not message.company_name or not message.company_name.strip():
            raise InvalidMessageError("Company name is required")
        if not message.company_code or not message.company_code.strip():
            raise InvalidMessageError("Company code is required")
        if not message.devices:
            raise InvalidMessageError("At least one device is required")
        if await self.uow.companies.get_company_by_code(message.company_code) is not None:
            raise DuplicateCompanyError(message.company_code)

    async def _create_company(self, message: NewCompanyMessage) -> None:
        licensing = LicensingType.parse(message.licensing)
        company_id = await self.uow.companies.create_company(
            message.company_name, message.company_code, licensing
        )
        logger.info("Created company", company_name=message.company_name, company_id=company_id)

        for index, device in enumerate(message.devices, start=1):
            await self._create_device(company_id, index, device)

    async def _create_device(self, company_id: int, index: int, device: DeviceInfo) -> None:
        device_type = DeviceType.parse(device.type)

        location_name = f"Location {index}"
        location_id = await self.uow.locations.create_location(
            location_name, NO_ADDRESS if device.address is None else device.address, company_id
        )
        logger.info(
            "Created location",
            location_name=location_name,
            location_id=location_id,
            company_id=company_id,
        )

        serial_number = await self.serial_number_generator.generate()
        device_id = await self.uow.devices.create_device(serial_number, device_type, location_id)
        logger.info(
            "Created device",
            device_id=device_id,
            serial_number=serial_number,
            order_no=device.order_no,
            location_id=location_id,
        )
