"""
Custom exception classes for the ieltsmock client.

Provides structured error handling with domain-specific exceptions
for configuration, transport, and API response failures.
"""

from typing import Any, Optional


class IeltsMockException(Exception):
    """Base exception class for all ieltsmock exceptions."""

    pass


class ConfigError(IeltsMockException):
    """Raised when client configuration cannot be loaded or is invalid."""

    pass


class TransportError(IeltsMockException):
    """Raised when the HTTP request could not be completed (DNS, timeout, connection reset)."""

    pass


class ApiError(IeltsMockException):
    """
    Raised when the API answers with an error.

    Carries the HTTP status code, the server-provided ``reason`` (when the
    body is a ``ResponseDto``) and the decoded payload for inspection.

    Example:
        >>> raise ApiError("Test not found", status_code=404, reason="Test not found")
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        payload: Any = None,
    ):
        self.status_code = status_code
        self.reason = reason
        self.payload = payload
        super().__init__(message)


class AuthenticationError(ApiError):
    """Raised on HTTP 401. The stored token has already been cleared when this is raised."""

    pass


class UnsuccessfulResponseError(ApiError):
    """Raised when the HTTP call succeeded but the envelope reports ``success: false``."""

    pass


class ResponseParseError(IeltsMockException):
    """Raised when a response body cannot be decoded into the expected shape."""

    pass


class TokenNotFoundError(ResponseParseError):
    """Raised when an authentication response carries no token."""

    pass


class TokenParseError(ResponseParseError):
    """Raised when a JWT cannot be decoded."""

    pass
