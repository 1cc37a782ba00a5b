from .message_processing import get_message_processor, get_unit_of_work

__all__ = ["get_message_processor", "get_unit_of_work"]
