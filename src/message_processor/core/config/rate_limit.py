"""
Rate limiting settings.
"""
from pydantic import Field
from pydantic_settings import BaseSettings


class RateLimitSettings(BaseSettings):
    """
    Fixed-window throttling applied per client at the HTTP ingress.

    A client may issue RATE_LIMIT_REQUEST_LIMIT requests inside each window of
    RATE_LIMIT_WINDOW_SECONDS; the window restarts on the first request after
    it has elapsed.
    """
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_REQUEST_LIMIT: int = Field(ge=1, default=100)
    RATE_LIMIT_WINDOW_SECONDS: int = Field(ge=1, default=60)
