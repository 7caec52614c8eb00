"""
Bounded retry policy for storage operations.

Exponential backoff with jitter and a retryable-error predicate, shared by
every batch write so retry behaviour is configured in one place.

Dependencies: sqlalchemy (transient error types)
System role: Transient failure handling for persistence
"""

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_transient_error(error: BaseException) -> bool:
    """
    Whether an error is worth retrying.

    Connection drops, timeouts and operational database errors are
    transient; integrity, programming and domain errors are not.
    """
    if isinstance(error, OperationalError):
        return True
    if isinstance(error, DBAPIError) and error.connection_invalidated:
        return True
    return isinstance(error, (TimeoutError, ConnectionError))


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry configuration.

    Attributes:
        max_attempts: Total attempts including the first one
        base_delay: Delay before the first retry, in seconds
        max_delay: Upper bound on any single delay, in seconds
        jitter: Fraction of each delay randomized (0 disables jitter)
        retryable: Predicate deciding whether an error may be retried
    """

    max_attempts: int = 3
    base_delay: float = 0.5
    max_delay: float = 8.0
    jitter: float = 0.1
    retryable: Callable[[BaseException], bool] = field(default=is_transient_error)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must not be negative")

    def delay_for(self, attempt: int) -> float:
        """Backoff before retry number `attempt` (1-based), jitter applied."""
        delay = min(self.base_delay * (2 ** (attempt - 1)), self.max_delay)
        if self.jitter:
            delay *= 1 + random.uniform(-self.jitter, self.jitter)
        return max(delay, 0.0)

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        description: str = "operation",
    ) -> T:
        """
        Run an async operation, retrying transient failures.

        Args:
            operation: Zero-argument coroutine factory (called once per attempt)
            description: Label used in log lines

        Returns:
            The operation's result

        Raises:
            The last error once attempts are exhausted, or immediately when
            the error is not retryable
        """
        attempt = 1
        while True:
            try:
                return await operation()
            except Exception as e:
                if attempt >= self.max_attempts or not self.retryable(e):
                    raise
                delay = self.delay_for(attempt)
                logger.warning(
                    f"{__name__}:run - {description} failed, retrying",
                    extra={
                        "attempt": attempt,
                        "max_attempts": self.max_attempts,
                        "delay_seconds": round(delay, 3),
                        "error": f"{type(e).__name__}: {e}",
                    },
                )
                await asyncio.sleep(delay)
                attempt += 1
