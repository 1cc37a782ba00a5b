"""Unit tests for DeleteDevicesHandler."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from message_processor.domain.messages import DeleteDevicesMessage
from message_processor.domain.services import DeleteDevicesHandler


def _message(serial_numbers) -> DeleteDevicesMessage:
    return DeleteDevicesMessage.model_validate(
        {"messageType": "DeleteDevices", "serialNumbers": serial_numbers}
    )


@pytest.fixture
def handler(uow):
    return DeleteDevicesHandler(uow, batch_size=1000)


@pytest.mark.asyncio
async def test_deletes_requested_devices(handler, uow):
    uow.devices.seed("SN-1", "SN-2", "SN-3")

    assert await handler.handle(_message(["SN-1", "SN-3"])) is True

    assert [d.serial_number for d in uow.store.devices.values()] == ["SN-2"]
    assert uow.devices.delete_calls == [["SN-1", "SN-3"]]
    assert uow.commits == 1


@pytest.mark.asyncio
async def test_large_request_is_split_into_batches(handler, uow):
    serials = [f"SN-{i}" for i in range(1500)]
    uow.devices.seed(*serials)

    assert await handler.handle(_message(serials)) is True

    assert [len(call) for call in uow.devices.delete_calls] == [1000, 500]
    assert uow.devices.delete_calls[0] + uow.devices.delete_calls[1] == serials
    assert uow.commits == 2
    assert uow.store.devices == {}


@pytest.mark.asyncio
async def test_missing_devices_are_not_an_error(handler, uow):
    assert await handler.handle(_message(["SN-unknown"])) is True
    assert uow.devices.delete_calls == [["SN-unknown"]]


@pytest.mark.parametrize("serial_numbers", [[], None])
@pytest.mark.asyncio
async def test_empty_list_succeeds_without_calls(handler, uow, serial_numbers):
    assert await handler.handle(_message(serial_numbers)) is True

    assert uow.devices.delete_calls == []
    assert uow.isolation_levels == []


@pytest.mark.asyncio
async def test_duplicate_serial_numbers_are_rejected(handler, uow):
    assert await handler.handle(_message(["SN-1", "SN-2", "SN-1"])) is False
    assert uow.devices.delete_calls == []


@pytest.mark.parametrize("blank", ["", "   ", None])
@pytest.mark.asyncio
async def test_blank_serial_numbers_are_rejected(handler, uow, blank):
    assert await handler.handle(_message(["SN-1", blank])) is False
    assert uow.devices.delete_calls == []


@pytest.mark.asyncio
async def test_repository_failure_returns_false(handler, uow, mocker):
    mocker.patch.object(
        uow.devices,
        "delete_devices_by_serial_numbers",
        AsyncMock(side_effect=RuntimeError("db down")),
    )

    assert await handler.handle(_message(["SN-1"])) is False
    assert uow.rollbacks == 1


@pytest.mark.asyncio
async def test_cancellation_keeps_completed_batches(uow, mocker):
    handler = DeleteDevicesHandler(uow, batch_size=2)
    uow.devices.seed("SN-1", "SN-2", "SN-3", "SN-4", "SN-5")
    real_delete = uow.devices.delete_devices_by_serial_numbers
    calls = []

    async def delete_then_cancel(serials):
        calls.append(list(serials))
        if len(calls) == 2:
            raise asyncio.CancelledError()
        return await real_delete(serials)

    mocker.patch.object(uow.devices, "delete_devices_by_serial_numbers", delete_then_cancel)

    with pytest.raises(asyncio.CancelledError):
        await handler.handle(_message(["SN-1", "SN-2", "SN-3", "SN-4", "SN-5"]))

    remaining = sorted(d.serial_number for d in uow.store.devices.values())
    assert remaining == ["SN-3", "SN-4", "SN-5"]
    assert calls == [["SN-1", "SN-2"], ["SN-3", "SN-4"]]
    assert uow.commits == 1
    assert uow.rollbacks == 1


@pytest.mark.asyncio
async def test_none_message_is_a_caller_error(handler):
    with pytest.raises(ValueError):
        await handler.handle(None)
