"""Unit tests for SerialNumberGenerator."""

import asyncio
import random
import re
from unittest.mock import AsyncMock

import pytest

from message_processor.core.exceptions import DuplicateSerialNumberError, SerialNumberGenerationError
from message_processor.domain.interfaces.repositories import IDeviceRepository
from message_processor.domain.services import SerialNumberGenerator

SERIAL_PATTERN = re.compile(r"^SN-\d+-\d{4}$")


@pytest.fixture
def device_repository():
    repository = AsyncMock(spec=IDeviceRepository)
    repository.serial_number_exists.return_value = False
    return repository


@pytest.fixture
def sleep():
    return AsyncMock()


def _generator(repository, sleep, **kwargs):
    return SerialNumberGenerator(
        repository,
        max_attempts=3,
        base_delay_ms=100,
        clock=lambda: 1718000000000,
        rng=random.Random(7),
        sleep=sleep,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_generates_serial_on_first_attempt(device_repository, sleep):
    serial = await _generator(device_repository, sleep).generate()

    assert SERIAL_PATTERN.match(serial)
    assert serial.startswith("SN-1718000000000-")
    assert 1000 <= int(serial.rsplit("-", 1)[1]) <= 9999
    device_repository.serial_number_exists.assert_awaited_once_with(serial)
    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_retries_when_candidate_exists(device_repository, sleep):
    device_repository.serial_number_exists.side_effect = [True, False]

    serial = await _generator(device_repository, sleep).generate()

    assert device_repository.serial_number_exists.await_count == 2
    assert device_repository.serial_number_exists.await_args_list[-1].args == (serial,)
    sleep.assert_awaited_once()
    assert sleep.await_args.args[0] == pytest.approx(0.2)


@pytest.mark.asyncio
async def test_succeeds_on_third_attempt(device_repository, sleep):
    device_repository.serial_number_exists.side_effect = [True, True, False]

    serial = await _generator(device_repository, sleep).generate()

    assert SERIAL_PATTERN.match(serial)
    assert device_repository.serial_number_exists.await_count == 3
    assert [c.args[0] for c in sleep.await_args_list] == [pytest.approx(0.2), pytest.approx(0.4)]


@pytest.mark.asyncio
async def test_raises_after_three_duplicates(device_repository, sleep):
    device_repository.serial_number_exists.return_value = True

    with pytest.raises(SerialNumberGenerationError) as exc_info:
        await _generator(device_repository, sleep).generate()

    assert device_repository.serial_number_exists.await_count == 3
    assert isinstance(exc_info.value.__cause__.last_error, DuplicateSerialNumberError)


@pytest.mark.asyncio
async def test_existence_check_errors_consume_attempts(device_repository, sleep):
    device_repository.serial_number_exists.side_effect = [RuntimeError("boom"), False]

    serial = await _generator(device_repository, sleep).generate()

    assert SERIAL_PATTERN.match(serial)
    assert device_repository.serial_number_exists.await_count == 2


@pytest.mark.asyncio
async def test_persistent_existence_check_errors_exhaust(device_repository, sleep):
    device_repository.serial_number_exists.side_effect = RuntimeError("boom")

    with pytest.raises(SerialNumberGenerationError) as exc_info:
        await _generator(device_repository, sleep).generate()

    assert exc_info.value.attempts == 3
    assert device_repository.serial_number_exists.await_count == 3


@pytest.mark.asyncio
async def test_cancellation_propagates(device_repository, sleep):
    device_repository.serial_number_exists.side_effect = asyncio.CancelledError()

    with pytest.raises(asyncio.CancelledError):
        await _generator(device_repository, sleep).generate()

    assert device_repository.serial_number_exists.await_count == 1


@pytest.mark.asyncio
async def test_uses_configured_attempts(device_repository, sleep):
    device_repository.serial_number_exists.return_value = True
    generator = SerialNumberGenerator(device_repository, max_attempts=5, base_delay_ms=0, sleep=sleep)

    with pytest.raises(SerialNumberGenerationError):
        await generator.generate()

    assert device_repository.serial_number_exists.await_count == 5
