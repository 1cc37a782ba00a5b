"""
Authentication settings.
"""
from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings


class AuthSettings(BaseSettings):
    """
    Defines settings for API key authentication.

    Every request other than health checks, docs and CORS preflight must
    present this key in the ``X-API-Key`` header or the ``api_key`` query
    parameter.

    Security Note:
        - API_KEY must be a long random string, stored outside version control.
    """
    API_KEY: Optional[SecretStr] = None
    API_KEY_HEADER: str = "X-API-Key"
    API_KEY_QUERY_PARAM: str = "api_key"
