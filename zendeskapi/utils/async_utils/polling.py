"""
Polling helper for asynchronous server side operations.
"""

import asyncio
import time
from typing import Any, Callable, Coroutine, Optional, TypeVar

from ...core.errors import TimeoutError
from ...core.logging import get_logger


T = TypeVar("T")

logger = get_logger(__name__)


async def poll_until(
    fetch: Callable[[], Coroutine[Any, Any, T]],
    is_done: Callable[[T], bool],
    interval: float = 1.0,
    timeout: float = 300.0,
    on_timeout: Optional[Callable[[], Exception]] = None,
) -> T:
    """
    Call ``fetch`` every ``interval`` seconds until ``is_done`` accepts a result.

    Errors raised by ``fetch`` propagate immediately.

    Args:
        fetch: Coroutine factory returning the current state
        is_done: Predicate marking a state as final
        interval: Seconds between polls
        timeout: Overall deadline in seconds
        on_timeout: Factory for the exception raised at the deadline

    Returns:
        The first accepted result

    Raises:
        TimeoutError: If no accepted result is seen before the deadline
    """
    deadline = time.monotonic() + timeout
    polls = 0

    while True:
        result = await fetch()
        polls += 1
        if is_done(result):
            logger.debug(f"Polling finished after {polls} checks")
            return result

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break
        await asyncio.sleep(min(interval, remaining))
        if time.monotonic() >= deadline:
            break

    if on_timeout is not None:
        raise on_timeout()
    raise TimeoutError(f"Operation did not complete within {timeout}s", timeout=timeout)
