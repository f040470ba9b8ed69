"""
Rate limited HTTP transport for the Zendesk API.

Every request passes through the quota tracker: callers are suspended when
the last reported quota is at or below the buffer, 429 responses are
retried with server directed or exponential backoff, and all other failures
are classified into the package error hierarchy.
"""

import asyncio
import json
from typing import Any, Dict, Mapping, Optional

import aiohttp

from ..core.auth import ApiTokenAuth
from ..core.config.rate_limiting import RateLimitConfig
from ..core.errors import APIError, NetworkError, classify_http_error
from ..core.logging import get_logger
from ..core.types import RateLimitState
from ..utils.async_utils.retry import retry_on_rate_limit
from ..utils.network.rate_limiter import RateLimitTracker
from ..utils.network.session_manager import SessionManager


logger = get_logger(__name__)


def prepare_params(params: Optional[Mapping[str, Any]]) -> Optional[Dict[str, str]]:
    """
    Convert a parameter map into query string values.

    ``None`` values are dropped, booleans become ``true``/``false`` and
    lists or tuples are comma joined.
    """
    if not params:
        return None

    prepared: Dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            prepared[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            prepared[key] = ",".join(str(v) for v in value)
        else:
            prepared[key] = str(value)
    return prepared


def _decode_body(text: str) -> Any:
    if not text or not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


class HttpClient:
    """
    Executes API requests against one account.

    Attributes:
        auth: Request signer producing headers and the base URL
        rate_limit: Retry, buffer and connection settings
        rate_limiter: Quota tracker updated from every response
    """

    def __init__(
        self,
        auth: ApiTokenAuth,
        rate_limit: Optional[RateLimitConfig] = None,
        session_manager: Optional[SessionManager] = None,
        user_agent: Optional[str] = None,
    ):
        self.auth = auth
        self.base_url = auth.get_base_url()
        self.rate_limit = rate_limit or RateLimitConfig()
        self.rate_limiter = RateLimitTracker(self.rate_limit)
        self.session_manager = session_manager or SessionManager(
            headers=auth.get_auth_headers(),
            rate_limit=self.rate_limit,
            user_agent=user_agent,
        )

    def get_rate_limit_state(self) -> Optional[RateLimitState]:
        """Last quota snapshot, ``None`` before any quota headers were seen."""
        return self.rate_limiter.state

    def build_url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """
        Execute a request and return the decoded body.

        Args:
            method: HTTP verb
            path: Path relative to the API base URL
            params: Query parameters
            json: JSON request body

        Returns:
            Decoded JSON body, or None for an empty response

        Raises:
            AuthenticationError: On 401, without retrying
            RateLimitError: When 429 persists after all retries
            NetworkError: When no response was received
            APIError: On any other non-2xx response
        """
        return await retry_on_rate_limit(
            self._send,
            method.upper(),
            path,
            prepare_params(params),
            json,
            max_retries=self.rate_limit.max_retries,
            base_delay=self.rate_limit.backoff_base,
            before_attempt=self.rate_limiter.wait_if_needed,
        )

    async def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]],
        body: Any,
    ) -> Any:
        url = self.build_url(path)
        session = await self.session_manager.get_session()
        logger.debug(f"{method} {path} params={params}")

        try:
            async with session.request(method, url, params=params, json=body) as response:
                self.rate_limiter.update_from_headers(response.headers)
                status = response.status
                reason = response.reason or ""
                headers = response.headers
                try:
                    text = await response.text()
                except UnicodeDecodeError as e:
                    logger.warning(f"Undecodable body on {method} {path}: {e}")
                    raise APIError(
                        f"Could not decode response to {method} {path}", status, reason
                    ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Network error on {method} {path}: {e}")
            raise NetworkError(f"Network error while requesting {path}: {str(e) or type(e).__name__}") from e

        decoded = _decode_body(text)
        if 200 <= status < 300:
            if decoded is None and text.strip():
                raise APIError(
                    f"Invalid JSON in response to {method} {path}", status, reason
                )
            return decoded

        error = classify_http_error(status, reason, decoded, headers)
        logger.debug(f"{method} {path} failed: {status} {reason}")
        raise error

    async def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("POST", path, params=params, json=json)

    async def put(self, path: str, json: Any = None, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("PUT", path, params=params, json=json)

    async def delete(self, path: str, params: Optional[Mapping[str, Any]] = None, json: Any = None) -> Any:
        return await self.request("DELETE", path, params=params, json=json)

    async def close(self) -> None:
        await self.session_manager.close()
