"""Wire envelope shared by every message type."""

from enum import Enum
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MessageType(str, Enum):
    """Closed set of routable message types, matched exactly."""

    NEW_COMPANY = "NewCompany"
    DELETE_DEVICES = "DeleteDevices"

    @classmethod
    def lookup(cls, value: str) -> Optional["MessageType"]:
        try:
            return cls(value)
        except ValueError:
            return None


class WireModel(BaseModel):
    """Base model that matches incoming JSON keys case-insensitively.

    ``{"MESSAGETYPE": "NewCompany"}`` and ``{"messageType": "NewCompany"}``
    populate the same field. Unknown keys are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _match_keys_case_insensitively(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known = {}
        for name, field in cls.model_fields.items():
            known[name.lower()] = field.alias or name
            if field.alias:
                known[field.alias.lower()] = field.alias
        return {
            known.get(key.lower(), key) if isinstance(key, str) else key: value
            for key, value in data.items()
        }


class MessageEnvelope(WireModel):
    """The routing header every message carries.

    Attributes:
        id: Correlation identifier supplied by the sender; not persisted.
        message_type: Discriminator selecting the handler.
    """

    id: Optional[UUID] = None
    message_type: Optional[str] = Field(default=None, alias="messageType")
