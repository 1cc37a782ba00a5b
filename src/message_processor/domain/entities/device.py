from typing import Optional

from sqlmodel import Field, SQLModel


class Device(SQLModel, table=True):
    """A device installed at a location, identified by a unique serial number.

    Attributes:
        id: Store-assigned primary key.
        serial_number: Generated ``SN-<millis>-<nnnn>`` identifier; unique.
        type: Integer value of a ``DeviceType`` member.
        location_id: The location hosting the device.
    """

    __tablename__ = "devices"

    id: Optional[int] = Field(default=None, primary_key=True)
    serial_number: str = Field(max_length=255, nullable=False, unique=True, index=True)
    type: int = Field(nullable=False)
    location_id: int = Field(foreign_key="locations.id", nullable=False, index=True)
