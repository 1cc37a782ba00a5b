"""In-process fixed-window rate limiter keyed by client identity."""

import time
from typing import Callable, Dict, Optional

from structlog import get_logger

from message_processor.core.config.settings import settings

from .entities import ClientCounter, RateLimitDecision

logger = get_logger(__name__)


class RateLimiter:
    """Admits at most ``limit`` requests per client in each fixed window.

    The first request after a window has elapsed starts a new window with a
    zero count. Counters live in process memory and are not shared between
    workers. Once per window, counters whose window has ended are dropped, so
    the map only holds clients seen during roughly the last two windows.

    Args:
        limit: Requests allowed per window.
        window_seconds: Window length.
        clock: Monotonic clock in seconds, replaceable in tests.
    """

    def __init__(
        self,
        limit: Optional[int] = None,
        window_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = settings.RATE_LIMIT_REQUEST_LIMIT if limit is None else limit
        self.window_seconds = (
            settings.RATE_LIMIT_WINDOW_SECONDS if window_seconds is None else window_seconds
        )
        self._clock = clock
        self._counters: Dict[str, ClientCounter] = {}
        self._last_sweep = clock()

    @property
    def tracked_clients(self) -> int:
        return len(self._counters)

    def _evict_expired(self, now: float) -> None:
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        expired = [
            client_id
            for client_id, counter in self._counters.items()
            if counter.is_expired(now) and not counter.lock.locked()
        ]
        for client_id in expired:
            del self._counters[client_id]
        if expired:
            logger.debug("rate_limit_counters_evicted", evicted=len(expired), tracked=len(self._counters))

    def _counter_for(self, client_id: str, now: float) -> ClientCounter:
        counter = self._counters.get(client_id)
        if counter is None:
            counter = self._counters.setdefault(
                client_id,
                ClientCounter(window_start=now, limit=self.limit, window_seconds=self.window_seconds),
            )
        return counter

    async def admit(self, client_id: str) -> RateLimitDecision:
        """Count one request for ``client_id`` and decide whether it may proceed."""
        now = self._clock()
        self._evict_expired(now)
        counter = self._counter_for(client_id, now)

        async with counter.lock:
            now = self._clock()
            if counter.is_expired(now):
                counter.reset(now)

            allowed = counter.count < counter.limit
            if allowed:
                counter.count += 1

            decision = RateLimitDecision(
                allowed=allowed,
                limit=counter.limit,
                remaining=max(0, counter.limit - counter.count),
                reset_seconds=counter.seconds_until_reset(now),
            )

        if not allowed:
            logger.warning(
                "rate_limit_exceeded",
                client_id=client_id,
                limit=decision.limit,
                reset_seconds=decision.reset_seconds,
            )
        return decision

    def reset(self) -> None:
        """Forget every counter."""
        self._counters.clear()
