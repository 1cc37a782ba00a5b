"""Unique device serial number generation.

Serial numbers look like ``SN-1718000000000-4821``: the current Unix time in
milliseconds followed by a random four digit suffix. Uniqueness is confirmed
against the device repository of the caller's unit of work, so a candidate
inserted earlier in the same transaction is already visible.
"""

import asyncio
import random
import time
from typing import Awaitable, Callable, Optional

from structlog import get_logger

from message_processor.core.config.settings import settings
from message_processor.core.exceptions import (
    DuplicateSerialNumberError,
    RetryExhaustedError,
    SerialNumberGenerationError,
)
from message_processor.core.retry import retry_async
from message_processor.domain.interfaces.repositories import IDeviceRepository

logger = get_logger(__name__)

MIN_RANDOM_SUFFIX = 1000
MAX_RANDOM_SUFFIX = 9999


def _unix_millis() -> int:
    return time.time_ns() // 1_000_000


class SerialNumberGenerator:
    """Generates serial numbers not yet used by any device.

    A candidate that already exists, or a failing existence check, consumes
    one attempt. After ``max_attempts`` failures `SerialNumberGenerationError`
    is raised.

    Args:
        device_repository: Repository used for the existence check.
        max_attempts: Total attempts, the first one included.
        base_delay_ms: Backoff base; retry n waits base_delay_ms * 2 ** n.
        clock: Returns the current Unix time in milliseconds.
        rng: Source of the random suffix.
        sleep: Awaitable sleep used between attempts.
    """

    def __init__(
        self,
        device_repository: IDeviceRepository,
        max_attempts: Optional[int] = None,
        base_delay_ms: Optional[float] = None,
        clock: Callable[[], int] = _unix_millis,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.device_repository = device_repository
        self.max_attempts = max_attempts or settings.SERIAL_NUMBER_MAX_ATTEMPTS
        self.base_delay_ms = (
            settings.SERIAL_NUMBER_RETRY_BASE_DELAY_MS if base_delay_ms is None else base_delay_ms
        )
        self._clock = clock
        self._rng = rng or random.Random()
        self._sleep = sleep

    def _candidate(self) -> str:
        suffix = self._rng.randint(MIN_RANDOM_SUFFIX, MAX_RANDOM_SUFFIX)
        return f"SN-{self._clock()}-{suffix}"

    async def _try_generate(self) -> str:
        """One attempt: returns the candidate if free."""
        candidate = self._candidate()
        try:
            exists = await self.device_repository.serial_number_exists(candidate)
        except Exception as e:
            logger.error(
                "Error checking serial number existence",
                serial_number=candidate,
                error=str(e),
            )
            raise

        if exists:
            logger.debug("Generated serial number already exists", serial_number=candidate)
            raise DuplicateSerialNumberError(candidate)
        return candidate

    async def generate(self) -> str:
        """Returns a serial number that no device currently uses.

        Raises:
            SerialNumberGenerationError: All attempts produced a taken
                candidate or a failed existence check.
        """
        try:
            serial_number = await retry_async(
                self._try_generate,
                attempts=self.max_attempts,
                base_delay_ms=self.base_delay_ms,
                operation_name="serial_number_generation",
                sleep=self._sleep,
            )
        except RetryExhaustedError as e:
            raise SerialNumberGenerationError(self.max_attempts) from e

        logger.info("Successfully generated unique serial number", serial_number=serial_number)
        return serial_number
