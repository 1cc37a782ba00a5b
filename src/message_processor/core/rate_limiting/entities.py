"""Rate Limiting Entities

- ClientCounter: fixed-window request counter of one client
- RateLimitDecision: outcome of one admission check
"""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass, field


@dataclass
class ClientCounter:
    """Fixed-window counter owned by a single client.

    ``lock`` serializes the reset-and-increment of this record only; checks
    for other clients never wait on it.
    """

    window_start: float
    limit: int
    window_seconds: float
    count: int = 0
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    @property
    def window_end(self) -> float:
        return self.window_start + self.window_seconds

    def is_expired(self, now: float) -> bool:
        return now >= self.window_end

    def reset(self, now: float) -> None:
        self.count = 0
        self.window_start = now

    def seconds_until_reset(self, now: float) -> int:
        return max(0, math.ceil(self.window_end - now))


@dataclass(frozen=True)
class RateLimitDecision:
    """Result of admitting (or rejecting) one request."""

    allowed: bool
    limit: int
    remaining: int
    reset_seconds: int

    def headers(self) -> dict:
        return {
            "X-Rate-Limit-Limit": str(self.limit),
            "X-Rate-Limit-Remaining": str(self.remaining),
            "X-Rate-Limit-Reset": str(self.reset_seconds),
        }
