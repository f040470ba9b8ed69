"""
Retry mechanisms for async operations.

This module provides retry logic for quota-exhausted responses, honouring
the server's retry-after hint and falling back to exponential backoff.
"""

import asyncio
from typing import Any, Callable, Coroutine, Optional, TypeVar

from ...core.errors import RateLimitError
from ...core.logging import get_logger


T = TypeVar("T")

logger = get_logger(__name__)


def backoff_delay(attempt: int, base_delay: float, retry_after: Optional[float] = None) -> float:
    """
    Delay before retry number ``attempt + 1``.

    Args:
        attempt: Zero-based count of retries already performed
        base_delay: Backoff base in seconds
        retry_after: Server provided delay in seconds, if any

    Returns:
        Delay in seconds
    """
    if retry_after is not None:
        return retry_after
    return base_delay * (2**attempt)


async def retry_on_rate_limit(
    func: Callable[..., Coroutine[Any, Any, T]],
    *args,
    max_retries: int = 3,
    base_delay: float = 1.0,
    before_attempt: Optional[Callable[[], Coroutine[Any, Any, Any]]] = None,
    **kwargs,
) -> T:
    """
    Call ``func`` and retry it while it raises RateLimitError.

    The function is called at most ``max_retries + 1`` times. Any other
    exception propagates immediately.

    Args:
        func: Async function to call
        *args: Positional arguments for function
        max_retries: Maximum number of retries after the first call
        base_delay: Backoff base in seconds
        before_attempt: Coroutine factory awaited before every call
        **kwargs: Keyword arguments for function

    Returns:
        Result of the function

    Raises:
        RateLimitError: If the quota is still exhausted after all retries
    """
    attempt = 0
    while True:
        if before_attempt is not None:
            await before_attempt()
        try:
            return await func(*args, **kwargs)
        except RateLimitError as e:
            if attempt >= max_retries:
                logger.error(f"Rate limit persisted after {max_retries} retries")
                raise

            delay = backoff_delay(attempt, base_delay, e.retry_after)
            attempt += 1
            logger.warning(
                f"Rate limited, retry {attempt}/{max_retries} in {delay:.2f}s"
            )
            await asyncio.sleep(delay)
