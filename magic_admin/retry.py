"""
Retry mechanism for calls to the Magic API.
"""

import time
from typing import Any, Callable, Optional, Tuple, Type

from magic_admin.logging import get_logger


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(self,
                 max_attempts: int = 4,
                 base_delay: float = 0.02,
                 max_delay: float = 120.0,
                 exponential_base: float = 2.0):
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base

    @classmethod
    def from_retries(cls, retries: int, backoff: float) -> "RetryConfig":
        """Build a config from a retry count and backoff factor.

        ``retries`` counts retries, not attempts, so zero means a single try.
        """
        return cls(max_attempts=retries + 1, base_delay=backoff)


class RetryError(Exception):
    """Exception raised when all retry attempts are exhausted."""
    def __init__(self, message: str, last_exception: Exception, attempts: int):
        super().__init__(message)
        self.last_exception = last_exception
        self.attempts = attempts


def call_with_retry(func: Callable[[], Any],
                    exceptions: Tuple[Type[BaseException], ...],
                    config: RetryConfig,
                    name: str = "call",
                    sleep: Optional[Callable[[float], None]] = None) -> Any:
    """Call ``func`` until it succeeds or ``config.max_attempts`` is reached.

    Only ``exceptions`` trigger a retry; anything else propagates at once.
    Raises ``RetryError`` wrapping the last exception once attempts run out.
    """
    logger = get_logger(f"magic_admin.retry.{name}")
    sleep = sleep or time.sleep

    for attempt in range(1, config.max_attempts + 1):
        try:
            result = func()

            if attempt > 1:
                logger.info("Retry succeeded", attempt=attempt, function=name)

            return result

        except exceptions as e:
            if attempt == config.max_attempts:
                logger.error(
                    "All retry attempts exhausted",
                    attempt=attempt,
                    max_attempts=config.max_attempts,
                    function=name,
                    error=str(e)
                )
                raise RetryError(
                    f"{name} failed after {config.max_attempts} attempts",
                    last_exception=e,
                    attempts=config.max_attempts
                ) from e

            delay = calculate_delay(attempt, config)

            logger.warning(
                "Retry attempt failed, waiting before next attempt",
                attempt=attempt,
                delay=delay,
                function=name,
                error=str(e)
            )

            sleep(delay)

    raise ValueError("RetryConfig.max_attempts must be at least 1")


def calculate_delay(attempt: int, config: RetryConfig) -> float:
    """Exponential delay before the retry following ``attempt``, capped at ``max_delay``."""
    delay = config.base_delay * (config.exponential_base ** (attempt - 1))
    return min(delay, config.max_delay)
