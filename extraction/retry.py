"""
Retry with exponential backoff for remote extraction calls.

Only transient API failures are retried: timeouts, rate limits, server errors
and network errors. Anything else is raised on the spot.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Dict, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from promo_extractor.utils.errors import ApiError
from promo_extractor.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry settings. Delays are in seconds."""

    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 10.0
    backoff_multiplier: float = 2.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must be non-negative")


@dataclass(frozen=True)
class RetryAttempt:
    """A failed attempt that is about to be retried."""

    attempt: int
    delay: float
    error: BaseException


class RetryPreset(str, Enum):
    """Named retry policies."""

    FAST = "fast"
    STANDARD = "standard"
    AGGRESSIVE = "aggressive"


RETRY_PRESETS: Dict[RetryPreset, RetryPolicy] = {
    # 3 attempts: 0.5s, 1s between them
    RetryPreset.FAST: RetryPolicy(max_attempts=3, initial_delay=0.5, max_delay=5.0, backoff_multiplier=2.0),
    # 3 attempts: 1s, 2s between them
    RetryPreset.STANDARD: RetryPolicy(max_attempts=3, initial_delay=1.0, max_delay=10.0, backoff_multiplier=2.0),
    # 5 attempts: 1s, 2s, 4s, 8s between them
    RetryPreset.AGGRESSIVE: RetryPolicy(max_attempts=5, initial_delay=1.0, max_delay=16.0, backoff_multiplier=2.0),
}


def is_retryable_error(error: BaseException) -> bool:
    """
    Check whether an error is temporary.

    Retryable: ApiError with 408 (timeout), 429 (rate limit), any 5xx, or 0
    (network failure). Everything else, including other 4xx responses and
    parsing errors, is final.
    """
    if not isinstance(error, ApiError):
        return False

    status = error.status_code
    if status in (0, 408, 429):
        return True
    return 500 <= status < 600


def _report_retry(
    policy: RetryPolicy,
    on_retry: Optional[Callable[[RetryAttempt], None]],
) -> Callable[[RetryCallState], None]:
    def before_sleep(retry_state: RetryCallState) -> None:
        retry = RetryAttempt(
            attempt=retry_state.attempt_number,
            delay=retry_state.next_action.sleep,
            error=retry_state.outcome.exception(),
        )
        logger.info(
            f"Retry {retry.attempt}/{policy.max_attempts} after {retry.delay}s",
            extra={"attempt": retry.attempt, "delay_seconds": retry.delay, "error": str(retry.error)},
        )
        if on_retry is not None:
            on_retry(retry)

    return before_sleep


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy = RETRY_PRESETS[RetryPreset.STANDARD],
    is_retryable: Callable[[BaseException], bool] = is_retryable_error,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    on_retry: Optional[Callable[[RetryAttempt], None]] = None,
) -> T:
    """
    Run an async operation, retrying transient failures with backoff.

    The delay after attempt n is initial_delay * backoff_multiplier ** (n - 1),
    capped at max_delay.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        policy: Attempt count and delay schedule
        is_retryable: Classifies an error as temporary
        sleep: Awaitable delay, asyncio.sleep unless overridden
        on_retry: Called with each attempt that is about to be retried

    Returns:
        Result of the first successful attempt

    Raises:
        The first non-retryable error, or the last error once attempts run out
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_exponential(
            multiplier=policy.initial_delay,
            exp_base=policy.backoff_multiplier,
            max=policy.max_delay,
        ),
        retry=retry_if_exception(is_retryable),
        before_sleep=_report_retry(policy, on_retry),
        sleep=sleep,
        reraise=True,
    )
    return await retrying(operation)
