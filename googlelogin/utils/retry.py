"""Retry with exponential backoff for calls to Google's APIs."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_retries: int = 2
    base_delay: float = 0.5  # seconds
    max_delay: float = 8.0  # seconds
    exponential_base: float = 2.0
    retryable_exceptions: tuple = (
        httpx.TimeoutException,
        httpx.ConnectError,
        httpx.ReadError,
        ConnectionError,
        TimeoutError,
    )
    retryable_status_codes: tuple = (429, 500, 502, 503, 504)

    def delay_for(self, attempt: int) -> float:
        """Backoff before retrying after the given zero-based attempt."""
        return min(self.base_delay * (self.exponential_base**attempt), self.max_delay)

    @property
    def attempts(self) -> int:
        return self.max_retries + 1


DEFAULT_RETRY_CONFIG = RetryConfig()


async def retry_async(
    func: Callable[..., Awaitable[httpx.Response]],
    *args: Any,
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    operation_name: str = "operation",
    **kwargs: Any,
) -> httpx.Response | None:
    """Run an HTTP call, retrying transient failures.

    Args:
        func: Async callable returning an httpx.Response
        *args: Positional arguments for the callable
        config: Retry configuration
        operation_name: Name of the operation for logging
        **kwargs: Keyword arguments for the callable

    Returns:
        The last response, or None when every attempt hit a retryable
        status code or a retryable exception.
    """
    for attempt in range(config.attempts):
        last_attempt = attempt == config.max_retries
        try:
            response = await func(*args, **kwargs)
        except config.retryable_exceptions as e:
            if last_attempt:
                logger.error(f"{operation_name}: Failed after {config.attempts} attempts: {e}")
                return None
            delay = config.delay_for(attempt)
            logger.warning(
                f"{operation_name}: {type(e).__name__}, "
                f"retrying in {delay:.1f}s (attempt {attempt + 1}/{config.attempts})"
            )
            await asyncio.sleep(delay)
            continue

        if response.status_code not in config.retryable_status_codes:
            return response

        if last_attempt:
            logger.error(
                f"{operation_name}: Failed after {config.attempts} attempts "
                f"with status {response.status_code}"
            )
            return None

        delay = config.delay_for(attempt)
        logger.warning(
            f"{operation_name}: Got status {response.status_code}, "
            f"retrying in {delay:.1f}s (attempt {attempt + 1}/{config.attempts})"
        )
        await asyncio.sleep(delay)

    return None
