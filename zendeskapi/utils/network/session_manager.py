"""
Session manager with connection pooling for Zendesk API requests.

Each client owns one manager, which lazily creates a pooled aiohttp session
carrying the auth headers and recreates it when it has been closed.
"""

import asyncio
from typing import Dict, Optional

import aiohttp

from ...core.config.rate_limiting import RateLimitConfig
from ...core.errors import NetworkError
from ...core.logging import get_logger


logger = get_logger(__name__)


class SessionManager:
    """
    Owner of a single pooled HTTP session.

    Attributes:
        headers: Default headers sent with every request
        rate_limit: Connection pool and timeout settings
    """

    def __init__(
        self,
        headers: Optional[Dict[str, str]] = None,
        rate_limit: Optional[RateLimitConfig] = None,
        user_agent: Optional[str] = None,
    ):
        self.headers = dict(headers or {})
        if user_agent:
            self.headers.setdefault("User-Agent", user_agent)
        self.rate_limit = rate_limit or RateLimitConfig()

        self._session: Optional[aiohttp.ClientSession] = None
        self._session_lock = asyncio.Lock()
        self._session_count = 0

    @property
    def closed(self) -> bool:
        return self._session is None or self._session.closed

    async def get_session(self) -> aiohttp.ClientSession:
        """
        Get or create the pooled HTTP session.

        Returns:
            aiohttp.ClientSession: Session with auth headers applied

        Raises:
            NetworkError: If session creation fails
        """
        async with self._session_lock:
            if self._session is None or self._session.closed:
                if self._session is not None:
                    logger.warning("Session was closed, creating new session")
                self._session = self._create_session()
            return self._session

    def _create_session(self) -> aiohttp.ClientSession:
        try:
            connector = aiohttp.TCPConnector(
                limit=self.rate_limit.max_total_connections,
                limit_per_host=self.rate_limit.max_connections_per_host,
                keepalive_timeout=self.rate_limit.keepalive_timeout,
                enable_cleanup_closed=True,
                force_close=False,
            )

            timeout = aiohttp.ClientTimeout(
                total=self.rate_limit.api_timeout,
                connect=self.rate_limit.connect_timeout,
                sock_read=self.rate_limit.api_timeout,
            )

            session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
                headers=self.headers,
                raise_for_status=False,  # Handle status codes manually
            )
        except (aiohttp.ClientError, ValueError) as e:
            logger.error(f"Failed to create HTTP session: {str(e)}")
            raise NetworkError(f"Session creation failed: {str(e)}") from e

        self._session_count += 1
        logger.debug(
            f"Created HTTP session #{self._session_count}: "
            f"max_total={self.rate_limit.max_total_connections}, "
            f"max_per_host={self.rate_limit.max_connections_per_host}"
        )
        return session

    async def close(self) -> None:
        """Close the session if one is open."""
        async with self._session_lock:
            if self._session is not None and not self._session.closed:
                await self._session.close()
                logger.debug("Closed HTTP session")
            self._session = None
