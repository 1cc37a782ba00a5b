from .client_identity import resolve_client_id
from .entities import ClientCounter, RateLimitDecision
from .limiter import RateLimiter

__all__ = ["ClientCounter", "RateLimitDecision", "RateLimiter", "resolve_client_id"]
