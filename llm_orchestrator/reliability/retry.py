from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Type, TypeVar

from ..config.constants import DEFAULT_BACKOFF_BASE, DEFAULT_MAX_RETRIES

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    max_attempts: int = DEFAULT_MAX_RETRIES
    backoff_base: float = DEFAULT_BACKOFF_BASE
    retryable_errors: Iterable[Type[Exception]] = ()


class RetryManager:
    """
    Bounded, sequential retry with exponential backoff.

    The delay before retry ``n`` (0-based) is ``backoff_base ** n`` seconds,
    so the defaults wait 1s then 2s between three attempts. Errors carrying
    ``is_retryable = True`` (see ProviderError) or matching
    ``retryable_errors`` are retried; anything else propagates immediately.
    """

    async def execute_with_retry(
        self,
        func: Callable[[], Awaitable[T]],
        config: RetryConfig
    ) -> T:
        """
        Execute a function with retry logic.

        Args:
            func: Async function to execute
            config: Retry configuration

        Returns:
            Result from successful function execution

        Raises:
            The last exception if all retries are exhausted
        """
        attempt = 0

        while True:
            try:
                return await func()
            except Exception as e:  # noqa: BLE001
                if not self._should_retry(e, attempt + 1, config):
                    raise

                delay = self._calculate_delay(attempt, config)
                logger.debug(
                    "Retrying after %s (attempt %d/%d, waiting %.1fs)",
                    type(e).__name__, attempt + 1, config.max_attempts, delay
                )
                await asyncio.sleep(delay)
                attempt += 1

    def _should_retry(self, error: Exception, attempts_made: int, config: RetryConfig) -> bool:
        """Determine if an error should be retried."""
        if attempts_made >= config.max_attempts:
            return False

        if getattr(error, "is_retryable", False):
            return True

        return any(isinstance(error, error_type) for error_type in config.retryable_errors)

    def _calculate_delay(self, attempt: int, config: RetryConfig) -> float:
        """Exponential delay in seconds for the given 0-based attempt."""
        return float(config.backoff_base ** attempt)
