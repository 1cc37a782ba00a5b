"""Repository and unit of work behaviour against a real SQLAlchemy session."""

import pytest
from sqlalchemy import func, select

from message_processor.core.exceptions import DatabaseError
from message_processor.domain.entities import Company, Device, DeviceType, LicensingType, Location

pytestmark = pytest.mark.integration


async def _count(session, model) -> int:
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


@pytest.mark.asyncio
async def test_company_round_trip(sql_uow):
    async with sql_uow.transaction():
        company_id = await sql_uow.companies.create_company("Acme", "ACME", LicensingType.ENTERPRISE)

    company = await sql_uow.companies.get_company_by_code("ACME")

    assert company.id == company_id
    assert company.licensing == 3
    assert await sql_uow.companies.get_company_by_code("acme") is None


@pytest.mark.asyncio
async def test_duplicate_company_code_raises_database_error(sql_uow, db_session):
    async with sql_uow.transaction():
        await sql_uow.companies.create_company("Acme", "ACME", LicensingType.STANDARD)

    with pytest.raises(DatabaseError):
        async with sql_uow.transaction():
            await sql_uow.companies.create_company("Acme 2", "ACME", LicensingType.STANDARD)

    assert await _count(db_session, Company) == 1


@pytest.mark.asyncio
async def test_failed_transaction_leaves_nothing(sql_uow, db_session):
    with pytest.raises(RuntimeError):
        async with sql_uow.transaction():
            company_id = await sql_uow.companies.create_company("Acme", "ACME", LicensingType.STANDARD)
            await sql_uow.locations.create_location("Location 1", "Main St", company_id)
            raise RuntimeError("abort")

    assert await _count(db_session, Company) == 0
    assert await _count(db_session, Location) == 0


@pytest.mark.asyncio
async def test_device_creation_existence_and_batch_delete(sql_uow, db_session):
    async with sql_uow.transaction():
        company_id = await sql_uow.companies.create_company("Acme", "ACME", LicensingType.STANDARD)
        location_id = await sql_uow.locations.create_location("Location 1", None, company_id)
        for serial in ("SN-1", "SN-2", "SN-3"):
            await sql_uow.devices.create_device(serial, DeviceType.CUSTOM, location_id)

    assert await sql_uow.devices.serial_number_exists("SN-2") is True
    assert await sql_uow.devices.serial_number_exists("SN-9") is False

    async with sql_uow.transaction():
        deleted = await sql_uow.devices.delete_devices_by_serial_numbers(["SN-1", "SN-3", "SN-9"])

    assert deleted == 2
    remaining = (await db_session.execute(select(Device.serial_number))).scalars().all()
    assert remaining == ["SN-2"]


@pytest.mark.asyncio
async def test_serial_created_in_open_transaction_is_visible_to_existence_check(sql_uow):
    async with sql_uow.transaction():
        company_id = await sql_uow.companies.create_company("Acme", "ACME", LicensingType.STANDARD)
        location_id = await sql_uow.locations.create_location("Location 1", None, company_id)
        await sql_uow.devices.create_device("SN-1", DeviceType.STANDARD, location_id)

        assert await sql_uow.devices.serial_number_exists("SN-1") is True


@pytest.mark.asyncio
async def test_empty_delete_is_a_no_op(sql_uow):
    assert await sql_uow.devices.delete_devices_by_serial_numbers([]) == 0
