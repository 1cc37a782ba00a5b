from .repositories import (
    ICompanyRepository,
    IDeviceRepository,
    ILocationRepository,
    IUnitOfWork,
)

__all__ = ["ICompanyRepository", "IDeviceRepository", "ILocationRepository", "IUnitOfWork"]
