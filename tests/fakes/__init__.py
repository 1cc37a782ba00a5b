"""In-memory repositories and unit of work for handler tests.

The unit of work snapshots the store when a transaction opens and restores
the snapshot when the transaction exits with an exception, so tests can
observe exactly what a committed transaction leaves behind.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from message_processor.domain.entities import Company, Device, DeviceType, LicensingType, Location
from message_processor.domain.interfaces.repositories import (
    ICompanyRepository,
    IDeviceRepository,
    ILocationRepository,
    IUnitOfWork,
)


@dataclass
class InMemoryStore:
    companies: Dict[int, Company] = field(default_factory=dict)
    locations: Dict[int, Location] = field(default_factory=dict)
    devices: Dict[int, Device] = field(default_factory=dict)
    next_id: int = 1

    def snapshot(self) -> "InMemoryStore":
        return InMemoryStore(dict(self.companies), dict(self.locations), dict(self.devices), self.next_id)

    def allocate_id(self) -> int:
        new_id = self.next_id
        self.next_id += 1
        return new_id


class InMemoryCompanyRepository(ICompanyRepository):
    def __init__(self, uow: "InMemoryUnitOfWork"):
        self._uow = uow
        self.created: List[str] = []
        self.lookups: List[str] = []

    async def create_company(self, name: str, code: str, licensing: LicensingType) -> int:
        store = self._uow.store
        if any(company.code == code for company in store.companies.values()):
            raise ValueError(f"duplicate company code {code}")
        company_id = store.allocate_id()
        store.companies[company_id] = Company(id=company_id, name=name, code=code, licensing=int(licensing))
        self.created.append(code)
        return company_id

    async def get_company_by_code(self, code: str) -> Optional[Company]:
        self.lookups.append(code)
        for company in self._uow.store.companies.values():
            if company.code == code:
                return company
        return None


class InMemoryLocationRepository(ILocationRepository):
    def __init__(self, uow: "InMemoryUnitOfWork"):
        self._uow = uow
        self.created: List[Location] = []

    async def create_location(self, name: str, address: Optional[str], parent_id: int) -> int:
        store = self._uow.store
        location_id = store.allocate_id()
        location = Location(id=location_id, name=name, address=address, parent_id=parent_id)
        store.locations[location_id] = location
        self.created.append(location)
        return location_id


class InMemoryDeviceRepository(IDeviceRepository):
    def __init__(self, uow: "InMemoryUnitOfWork"):
        self._uow = uow
        self.created: List[Device] = []
        self.delete_calls: List[List[str]] = []
        self.exists_calls: List[str] = []

    async def create_device(self, serial_number: str, device_type: DeviceType, location_id: int) -> int:
        store = self._uow.store
        if any(device.serial_number == serial_number for device in store.devices.values()):
            raise ValueError(f"duplicate serial number {serial_number}")
        device_id = store.allocate_id()
        device = Device(id=device_id, serial_number=serial_number, type=int(device_type), location_id=location_id)
        store.devices[device_id] = device
        self.created.append(device)
        return device_id

    async def delete_devices_by_serial_numbers(self, serial_numbers: List[str]) -> int:
        self.delete_calls.append(list(serial_numbers))
        store = self._uow.store
        doomed = [device_id for device_id, device in store.devices.items() if device.serial_number in serial_numbers]
        for device_id in doomed:
            del store.devices[device_id]
        return len(doomed)

    async def serial_number_exists(self, serial_number: str) -> bool:
        self.exists_calls.append(serial_number)
        return any(device.serial_number == serial_number for device in self._uow.store.devices.values())

    def seed(self, *serial_numbers: str, location_id: int = 0) -> None:
        for serial_number in serial_numbers:
            device_id = self._uow.store.allocate_id()
            self._uow.store.devices[device_id] = Device(
                id=device_id, serial_number=serial_number, type=int(DeviceType.STANDARD), location_id=location_id
            )


class InMemoryUnitOfWork(IUnitOfWork):
    def __init__(self):
        self.store = InMemoryStore()
        self.companies = InMemoryCompanyRepository(self)
        self.locations = InMemoryLocationRepository(self)
        self.devices = InMemoryDeviceRepository(self)
        self.commits = 0
        self.rollbacks = 0
        self.isolation_levels: List[Optional[str]] = []

    @asynccontextmanager
    async def transaction(self, isolation_level: Optional[str] = None):
        self.isolation_levels.append(isolation_level)
        snapshot = self.store.snapshot()
        try:
            yield self
        except BaseException:
            self.store = snapshot
            self.rollbacks += 1
            raise
        self.commits += 1
