from typing import List, Optional

from pydantic import Field

from .base import MessageEnvelope


class DeleteDevicesMessage(MessageEnvelope):
    """Deletes devices by exact serial number match."""

    serial_numbers: Optional[List[Optional[str]]] = Field(default=None, alias="serialNumbers")
