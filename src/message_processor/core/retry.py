"""
Bounded retry with exponential backoff for async operations.

Thin wrapper over tenacity used where an operation can fail either by raising
or by returning a value the caller rejects (for example a generated
identifier that turns out to be taken).
"""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from structlog import get_logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from message_processor.core.exceptions import RetryExhaustedError

logger = get_logger(__name__)

T = TypeVar("T")


def _never(_: object) -> bool:
    return False


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    *,
    attempts: int,
    base_delay_ms: float,
    retry_on_result: Callable[[T], bool] = _never,
    operation_name: str = "operation",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Run ``operation`` up to ``attempts`` times in total.

    An attempt fails when it raises an `Exception` or when ``retry_on_result``
    returns true for its result. Before retry ``n`` (1-based) the call waits
    ``base_delay_ms * 2 ** n`` milliseconds. ``asyncio.CancelledError`` is not
    an `Exception` and propagates immediately.

    Args:
        operation: Zero-argument coroutine function to attempt.
        attempts: Total number of attempts, the first one included.
        base_delay_ms: Base of the backoff; the first retry waits twice this,
            in milliseconds.
        retry_on_result: Predicate marking a returned value as a failure.
        operation_name: Label used in logs and in the raised error.
        sleep: Awaitable sleep, replaceable in tests.

    Returns:
        The first accepted result.

    Raises:
        RetryExhaustedError: Every attempt failed. ``last_error`` holds the
            exception of the final attempt, or ``None`` if it returned a
            rejected value.
    """

    def _log_retry(retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        logger.warning(
            "retrying_operation",
            operation=operation_name,
            attempt=retry_state.attempt_number,
            max_attempts=attempts,
            delay_seconds=retry_state.next_action.sleep if retry_state.next_action else 0,
            error=str(outcome.exception()) if outcome and outcome.failed else None,
        )

    retrying = AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=2 * base_delay_ms / 1000.0, exp_base=2),
        retry=retry_if_exception_type(Exception) | retry_if_result(retry_on_result),
        before_sleep=_log_retry,
        sleep=sleep,
    )

    try:
        return await retrying(operation)
    except RetryError as e:
        last_error: Optional[BaseException] = e.last_attempt.exception()
        logger.error(
            "retry_exhausted",
            operation=operation_name,
            attempts=attempts,
            error=str(last_error) if last_error else None,
        )
        raise RetryExhaustedError(operation_name, attempts, last_error) from last_error
