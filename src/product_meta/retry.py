"""Bounded retry with exponential backoff for flaky remote calls."""

import asyncio
import logging
import time
from typing import Awaitable, Callable, TypeVar

from .errors import HttpStatusError, RetryExhausted

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _default_should_retry(error: BaseException) -> bool:
    if isinstance(error, HttpStatusError):
        return error.retryable
    return True


class RetryPolicy:
    """Retry an operation up to max_attempts times, sleeping 1s, 2s, 4s... in between."""

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        retry_on: tuple[type[BaseException], ...] = (Exception,),
        should_retry: Callable[[BaseException], bool] = _default_should_retry,
        sleep: Callable[[float], None] = time.sleep,
        async_sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.retry_on = retry_on
        self.should_retry = should_retry
        self._sleep = sleep
        self._async_sleep = async_sleep

    def _attempts(self, max_attempts: int | None) -> int:
        if max_attempts is None:
            return self.max_attempts
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        return max_attempts

    def delay_for(self, attempt: int) -> float:
        """Delay after the given failed attempt (1-based): base * 2^(attempt-1)."""
        return self.base_delay * (2 ** (attempt - 1))

    def execute(self, operation: Callable[[], T], name: str, max_attempts: int | None = None) -> T:
        """
        Run operation, retrying on failure.

        Args:
            operation: Zero-argument callable doing the remote work
            name: Operation name used in logs and in RetryExhausted
            max_attempts: Override the policy's attempt cap for this call

        Returns:
            The first successful result

        Raises:
            RetryExhausted: every attempt failed (wraps the last error).
            Errors rejected by should_retry are re-raised unchanged.
        """
        attempts = self._attempts(max_attempts)
        for attempt in range(1, attempts + 1):
            try:
                return operation()
            except self.retry_on as e:
                if not self.should_retry(e):
                    raise
                if attempt == attempts:
                    logger.warning(f"{name} failed after {attempts} attempts: {e}")
                    raise RetryExhausted(name, attempts, e) from e
                wait_time = self.delay_for(attempt)
                logger.info(f"{name} error (attempt {attempt}/{attempts}), retrying in {wait_time:g}s: {e}")
                self._sleep(wait_time)

        raise AssertionError("unreachable")

    async def execute_async(
        self,
        operation: Callable[[], Awaitable[T]],
        name: str,
        max_attempts: int | None = None,
    ) -> T:
        """Async variant of execute(); yields to the event loop during backoff."""
        attempts = self._attempts(max_attempts)
        for attempt in range(1, attempts + 1):
            try:
                return await operation()
            except self.retry_on as e:
                if not self.should_retry(e):
                    raise
                if attempt == attempts:
                    logger.warning(f"{name} failed after {attempts} attempts: {e}")
                    raise RetryExhausted(name, attempts, e) from e
                wait_time = self.delay_for(attempt)
                logger.info(f"{name} error (attempt {attempt}/{attempts}), retrying in {wait_time:g}s: {e}")
                await self._async_sleep(wait_time)

        raise AssertionError("unreachable")
