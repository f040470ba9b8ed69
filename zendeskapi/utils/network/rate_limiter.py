"""
Quota tracking driven by response headers.

The tracker holds the last reported quota as an immutable snapshot. Only the
transport writes it, immediately after a response; everything else reads.
"""

import asyncio
import time
from typing import Mapping, Optional, Sequence

from ...core.config.rate_limiting import RateLimitConfig
from ...core.logging import get_logger
from ...core.types import RateLimitState


logger = get_logger(__name__)


def _first_header(headers: Mapping[str, str], names: Sequence[str]) -> Optional[str]:
    for name in names:
        value = headers.get(name)
        if value is not None:
            return value
    return None


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def _to_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class RateLimitTracker:
    """
    Tracks server reported quota and suspends callers when it runs low.

    Attributes:
        config: Rate limit settings (buffer, header names)
        state: Last known quota snapshot, ``None`` until headers are seen
    """

    def __init__(self, config: Optional[RateLimitConfig] = None):
        self.config = config or RateLimitConfig()
        self.state: Optional[RateLimitState] = None

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        """
        Replace the snapshot with values from a response.

        Headers that are absent keep their previous value; a response without
        any quota header leaves the state untouched.
        """
        limit = _to_int(_first_header(headers, self.config.limit_headers))
        remaining = _to_int(_first_header(headers, self.config.remaining_headers))
        reset_at = _to_float(_first_header(headers, self.config.reset_headers))

        if limit is None and remaining is None and reset_at is None:
            return

        previous = self.state or RateLimitState()
        self.state = RateLimitState(
            limit=limit if limit is not None else previous.limit,
            remaining=remaining if remaining is not None else previous.remaining,
            reset_at=reset_at if reset_at is not None else previous.reset_at,
        )

    def seconds_until_reset(self, now: Optional[float] = None) -> float:
        """
        How long to wait before the next call, 0.0 when no wait is needed.

        A wait is only needed when remaining quota is at or below the buffer
        and the reset time lies in the future.
        """
        state = self.state
        if state is None or state.remaining is None or state.reset_at is None:
            return 0.0
        if state.remaining > self.config.quota_buffer:
            return 0.0

        now = time.time() if now is None else now
        return max(0.0, state.reset_at - now)

    def is_low(self, threshold: Optional[int] = None) -> bool:
        """Whether remaining quota is at or below ``threshold``."""
        if threshold is None:
            threshold = self.config.courtesy_threshold
        state = self.state
        return state is not None and state.remaining is not None and state.remaining <= threshold

    async def wait_if_needed(self) -> float:
        """
        Suspend until the quota window resets if the buffer is reached.

        Returns:
            Seconds waited
        """
        delay = self.seconds_until_reset()
        if delay > 0:
            logger.info(
                f"Quota low ({self.state.remaining} remaining), waiting {delay:.2f}s for reset"
            )
            await asyncio.sleep(delay)
        return delay
