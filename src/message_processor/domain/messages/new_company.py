from typing import List, Optional

from pydantic import Field

from .base import MessageEnvelope, WireModel


class DeviceInfo(WireModel):
    """One device entry of a NewCompany message."""

    order_no: Optional[str] = Field(default=None, alias="orderNo")
    type: Optional[str] = None
    address: Optional[str] = None


class NewCompanyMessage(MessageEnvelope):
    """Creates a company together with one location and device per entry.

    ``licensing`` and each device ``type`` travel as enum member names and are
    parsed by the handler, so an unknown name fails the workflow instead of
    the decoding step.
    """

    company_name: Optional[str] = Field(default=None, alias="companyName")
    company_code: Optional[str] = Field(default=None, alias="companyCode")
    licensing: Optional[str] = None
    devices: List[DeviceInfo] = Field(default_factory=list)
