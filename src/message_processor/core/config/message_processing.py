"""
Message processing settings.
"""
from pydantic import Field
from pydantic_settings import BaseSettings


class MessageProcessingSettings(BaseSettings):
    """
    Tunables for the message handlers.

    SERIAL_NUMBER_MAX_ATTEMPTS counts every attempt, including the first one.
    The delay before retry ``n`` (1-based) is
    ``SERIAL_NUMBER_RETRY_BASE_DELAY_MS * 2 ** n`` milliseconds.
    """
    SERIAL_NUMBER_MAX_ATTEMPTS: int = Field(ge=1, default=3)
    SERIAL_NUMBER_RETRY_BASE_DELAY_MS: int = Field(ge=0, default=100)
    DELETE_BATCH_SIZE: int = Field(ge=1, default=1000)
