from .base import MessageEnvelope, MessageType, WireModel
from .delete_devices import DeleteDevicesMessage
from .new_company import DeviceInfo, NewCompanyMessage

__all__ = [
    "DeleteDevicesMessage",
    "DeviceInfo",
    "MessageEnvelope",
    "MessageType",
    "NewCompanyMessage",
    "WireModel",
]
