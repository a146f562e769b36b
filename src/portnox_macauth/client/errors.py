"""Custom exceptions for the portnox-macauth HTTP client."""

from __future__ import annotations

from dataclasses import dataclass

# Portnox InternalErrorCode values
CODE_ACCOUNT_NOT_FOUND: int = 5357

HTTP_TOO_MANY_REQUESTS: int = 429
HTTP_NOT_FOUND: int = 404


class PortnoxError(Exception):
    """Base exception for all portnox-macauth errors."""


class PortnoxTransportError(PortnoxError):
    """Raised when a network-level error occurs (DNS, connection refused, timeout, etc.)."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Request to {url!r} failed: {cause}")


class PortnoxRequestError(PortnoxError):
    """Raised when the API returns an HTTP status of 400 or above.

    Attributes:
        status_code: Numeric HTTP status.
        reason: Reason phrase from the status line (may be empty).
        url: Full request URL.
        body: Raw response body, kept so callers can inspect vendor error codes.
    """

    def __init__(
        self,
        status_code: int,
        url: str,
        reason: str = "",
        body: bytes = b"",
    ) -> None:
        self.status_code = status_code
        self.url = url
        self.reason = reason
        self.body = body
        status = f"{status_code} {reason}".strip()
        super().__init__(f"API request failed with status: {status} for {url!r}")


class PortnoxRateLimitError(PortnoxRequestError):
    """Raised on HTTP 429 Too Many Requests; the only status the session retries."""


class PortnoxParseError(PortnoxError):
    """Raised when a response body is not the JSON object we expect."""


class PortnoxNotFoundError(PortnoxError):
    """Raised when an account or MAC entry does not exist on the remote side."""


@dataclass
class PortnoxValidationError(PortnoxError):
    """Raised when declared input fails local validation, before any API call.

    Attributes:
        field: Name of the offending attribute (e.g. ``"mac_address"``).
        value: The rejected value.
        message: Human-readable reason.
    """

    field: str
    value: str
    message: str

    def __post_init__(self) -> None:
        super().__init__(f"Invalid {self.field} {self.value!r}: {self.message}")
