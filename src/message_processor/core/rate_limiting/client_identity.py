"""Resolution of the identity a request is rate limited under."""

from starlette.requests import Request

from message_processor.core.config.settings import settings

UNKNOWN_CLIENT = "unknown"


def resolve_client_id(request: Request) -> str:
    """Identify the caller, most specific source first.

    1. first address of ``X-Forwarded-For``
    2. ``api:<key>`` from the API key header
    3. the transport peer address
    4. ``"unknown"``
    """
    forwarded_for = request.headers.get("X-Forwarded-For", "")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first

    api_key = request.headers.get(settings.API_KEY_HEADER)
    if api_key:
        return f"api:{api_key}"

    if request.client and request.client.host:
        return request.client.host

    return UNKNOWN_CLIENT
