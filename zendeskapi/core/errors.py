"""
Error handling module for Zendesk API access.

This module defines a comprehensive exception hierarchy for error handling,
ensuring consistent error handling throughout the package.
"""

from typing import Any, Dict, Mapping, Optional


class ZendeskError(Exception):
    """
    Base class for all Zendesk client related errors.

    This class provides a consistent interface for error handling and logging.
    All exceptions raised by the package should inherit from this class.

    Attributes:
        message: Error message
        details: Additional error details
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize a ZendeskError.

        Args:
            message: Error message
            details: Additional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """
        Get string representation of the error.

        Returns:
            String representation of the error
        """
        if not self.details:
            return self.message

        detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({detail_str})"


class APIError(ZendeskError):
    """
    Error related to API requests.

    This class represents errors that occur during API requests,
    including network errors, rate limiting, and server errors.

    Attributes:
        message: Error message
        status: HTTP status code (0 when no response was received)
        status_text: HTTP reason phrase
        details: Parsed error detail payload
    """

    def __init__(
        self,
        message: str,
        status: int = 0,
        status_text: str = "",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.status = status
        self.status_text = status_text
        super().__init__(message, details)


class AuthenticationError(APIError):
    """Error raised when the API rejects the credentials (401)."""

    def __init__(self, message: str = "Authentication failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, 401, "Unauthorized", details)


class RateLimitError(APIError):
    """
    Error related to rate limiting.

    This class represents errors that occur when an API rate limit is reached.

    Attributes:
        message: Error message
        retry_after: Suggested retry delay in seconds
        details: Additional error details
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize a RateLimitError.

        Args:
            message: Error message
            retry_after: Suggested retry delay in seconds
            details: Additional error details
        """
        self.retry_after = retry_after
        super().__init__(message, 429, "Too Many Requests", details)

    def __str__(self) -> str:
        base_str = super().__str__()
        if self.retry_after is not None:
            return f"{base_str} (retry after {self.retry_after} seconds)"
        return base_str


class NetworkError(APIError):
    """Error raised when no response was received at all."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, 0, "Network Error", details)


class SearchError(ZendeskError):
    """
    Error raised when a page or partition of a search fails.

    Attributes:
        query: The query string that was being executed
        page: Page (or partition) number at which the failure occurred
        cause: The underlying exception
    """

    def __init__(
        self,
        message: str,
        query: str,
        page: Optional[int] = None,
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.query = query
        self.page = page
        self.cause = cause
        super().__init__(message, details)


class TimeoutError(ZendeskError):
    """
    Error raised when a background job does not reach a terminal state in time.

    Attributes:
        job_id: Identifier of the job being polled
        timeout: Timeout in seconds that was exceeded
    """

    def __init__(self, message: str, job_id: Optional[str] = None, timeout: Optional[float] = None):
        self.job_id = job_id
        self.timeout = timeout
        super().__init__(message)


class ValidationError(ZendeskError):
    """
    Error related to validation.

    This class represents errors that occur during validation,
    such as invalid search criteria or conflicting parameters.
    """

    pass


class ConfigError(ZendeskError):
    """Error related to configuration issues."""

    pass


def format_error_details(error: Exception) -> str:
    """
    Format error details for logging.

    Args:
        error: Exception object

    Returns:
        Formatted error details string
    """
    if isinstance(error, APIError) and error.status:
        return f"{error.__class__.__name__}[{error.status}]: {error}"
    if isinstance(error, ZendeskError):
        return f"{error.__class__.__name__}: {error}"

    return f"{error.__class__.__name__}: {str(error)}"


def _parse_retry_after(headers: Optional[Mapping[str, str]]) -> Optional[float]:
    if not headers:
        return None
    value = headers.get("Retry-After") or headers.get("retry-after")
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def classify_http_error(
    status: int,
    status_text: str,
    body: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> APIError:
    """
    Classify a non-2xx response based on status code and body.

    Two structured error shapes are recognised:
    ``{"error": {"title": ..., "message": ..., "details": {...}}}`` and
    ``{"error": "RecordNotFound", "description": ..., "details": {...}}``.

    Args:
        status: HTTP status code
        status_text: HTTP reason phrase
        body: Decoded response body, if any
        headers: Response headers

    Returns:
        Appropriate APIError subclass instance
    """
    if status == 401:
        return AuthenticationError()

    if status == 429:
        return RateLimitError(retry_after=_parse_retry_after(headers))

    message = f"Request failed with status {status}"
    details: Optional[Dict[str, Any]] = None

    if isinstance(body, dict) and "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            message = error.get("message") or error.get("title") or message
            details = error.get("details")
        else:
            message = body.get("description") or str(error)
            details = body.get("details")

    if details is not None and not isinstance(details, dict):
        details = {"details": details}

    return APIError(message, status, status_text or "", details)
