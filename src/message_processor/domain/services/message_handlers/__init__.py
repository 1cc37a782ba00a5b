from .base import MessageHandler
from .delete_devices import DeleteDevicesHandler
from .new_company import NewCompanyHandler

__all__ = ["DeleteDevicesHandler", "MessageHandler", "NewCompanyHandler"]
