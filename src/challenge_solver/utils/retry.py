"""Retry-with-backoff for async operations.

Each attempt calls the operation factory again, so no state leaks from a
failed attempt into the next one.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

STRATEGIES = ("fixed", "linear", "exponential")


@dataclass(frozen=True)
class BackoffPolicy:
    """Delay schedule between retry attempts.

    Attributes:
        strategy: "fixed", "linear" or "exponential"
        base_delay: Delay in seconds after the first failed attempt
        max_delay: Ceiling applied to every computed delay
    """

    strategy: str = "linear"
    base_delay: float = 1.0
    max_delay: float = 20.0

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Unknown backoff strategy: {self.strategy}")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("Backoff delays must not be negative")

    def delay_for(self, attempt: int) -> float:
        """Return the delay to wait after failed attempt number ``attempt`` (1-based)."""
        if self.strategy == "fixed":
            delay = self.base_delay
        elif self.strategy == "linear":
            delay = self.base_delay * attempt
        else:
            delay = self.base_delay * 2 ** (attempt - 1)
        return min(delay, self.max_delay)

    @classmethod
    def from_settings(cls) -> "BackoffPolicy":
        """Build the policy configured through environment variables."""
        from challenge_solver.config import settings

        return cls(
            strategy=settings.retry_backoff,
            base_delay=settings.retry_delay,
            max_delay=settings.retry_max_delay,
        )


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    backoff: BackoffPolicy | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run ``operation`` until it succeeds or ``max_attempts`` is reached.

    Args:
        operation: Zero-argument callable returning a fresh awaitable per call
        max_attempts: Total number of attempts, including the first one
        backoff: Delay policy between attempts. Defaults to linear, 1s base
        sleep: Awaitable sleep function (injected by tests)

    Returns:
        The value of the first successful attempt

    Raises:
        ValueError: If max_attempts is lower than 1
        Exception: The last failure, once all attempts are used up
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    policy = backoff or BackoffPolicy()

    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except Exception as e:
            if attempt == max_attempts:
                logger.error("Giving up after %d attempts: %s", attempt, e)
                raise
            delay = policy.delay_for(attempt)
            logger.warning(
                "Attempt %d/%d failed (%s), retrying in %.2fs", attempt, max_attempts, e, delay
            )
            await sleep(delay)
