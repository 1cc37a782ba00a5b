from .message_handlers import DeleteDevicesHandler, MessageHandler, NewCompanyHandler
from .message_processor import MessageProcessor
from .serial_number_generator import SerialNumberGenerator

__all__ = [
    "DeleteDevicesHandler",
    "MessageHandler",
    "MessageProcessor",
    "NewCompanyHandler",
    "SerialNumberGenerator",
]
