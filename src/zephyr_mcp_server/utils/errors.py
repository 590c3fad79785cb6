"""Zephyr MCP Server Error Handling Utilities

Exception classes for Zephyr Scale API operations with standardized error details.
"""

from typing import Optional, Dict, Any


class ZephyrError(Exception):
    """Base exception for all Zephyr-related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize Zephyr error.

        Args:
            message: Human-readable error message
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Return the error detail block included in error envelopes."""
        return dict(self.details)


class ValidationError(ZephyrError):
    """Raised when a tool argument fails a presence, format or range check.

    Always raised before any remote call is made.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class ConfigurationError(ZephyrError):
    """Raised when required configuration is missing or malformed."""

    pass


class UnknownToolError(ZephyrError):
    """Raised when a tool name has no registered handler."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}", details={"tool": name})
        self.name = name


class RemoteCallError(ZephyrError):
    """Raised when a Zephyr API call fails (non-2xx status or transport failure).

    Carries the full request/response context so callers can diagnose the
    failure without server-side logs.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        status_text: Optional[str] = None,
        url: Optional[str] = None,
        method: Optional[str] = None,
        request_data: Any = None,
        params: Optional[Dict[str, Any]] = None,
        response_data: Any = None,
    ):
        self.status = status
        self.status_text = status_text
        self.url = url
        self.method = method
        self.request_data = request_data
        self.params = params
        self.response_data = response_data

        details = {
            "status": status,
            "statusText": status_text,
            "url": url,
            "method": method,
            "message": message,
            "requestData": request_data,
            "params": params,
        }
        if response_data is not None:
            details["responseData"] = response_data
        super().__init__(message, details=details)


class AuthenticationError(RemoteCallError):
    """Raised when the API token is missing, expired or invalid (HTTP 401)."""

    pass


class PermissionDeniedError(RemoteCallError):
    """Raised when the token lacks permission for an operation (HTTP 403)."""

    pass


class NotFoundError(RemoteCallError):
    """Raised when the requested resource doesn't exist (HTTP 404)."""

    pass


class ConflictError(RemoteCallError):
    """Raised when an operation conflicts with current resource state (HTTP 409)."""

    pass


class RateLimitError(RemoteCallError):
    """Raised when the Zephyr API rate limit is exceeded (HTTP 429)."""

    pass


class ServerError(RemoteCallError):
    """Raised when the Zephyr server returns an error (HTTP 5xx)."""

    pass


def remote_error_for_status(status: Optional[int], message: str, **context: Any) -> RemoteCallError:
    """Convert a failed response into the matching RemoteCallError subclass.

    Args:
        status: HTTP status code, or None for transport failures
        message: Human-readable error message
        **context: Remaining RemoteCallError fields (url, method, params, ...)

    Returns:
        Appropriate RemoteCallError subclass instance
    """
    error_map = {
        401: AuthenticationError,
        403: PermissionDeniedError,
        404: NotFoundError,
        409: ConflictError,
        429: RateLimitError,
    }

    if status in error_map:
        return error_map[status](message, status=status, **context)

    if status is not None and 500 <= status < 600:
        return ServerError(message, status=status, **context)

    return RemoteCallError(message, status=status, **context)
