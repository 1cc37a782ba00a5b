from .company_repository import CompanyRepository
from .device_repository import DeviceRepository
from .location_repository import LocationRepository

__all__ = ["CompanyRepository", "DeviceRepository", "LocationRepository"]
