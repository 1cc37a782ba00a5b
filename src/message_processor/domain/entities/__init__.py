from .company import Company
from .device import Device
from .enums import DeviceType, LicensingType
from .location import Location

__all__ = ["Company", "Device", "DeviceType", "LicensingType", "Location"]
