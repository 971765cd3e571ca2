"""Error taxonomy for the tenant HTTP client.

Every failure surfaces to callers as a single ``TransportError`` shape.
Only ``code`` and ``http_status`` say why it happened.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"
    INVALID_RESPONSE = "invalid_response"
    HTTP_ERROR = "http_error"
    REFRESH_FAILED = "refresh_failed"


class TransportError(Exception):
    """Raised for any failed request after the retry policy is exhausted.

    Attributes:
        message: Upstream or locally generated description.
        code: Failure class, see ``ErrorCode``.
        http_status: Response status, when a response was received.
        errors: Structured error list from the response body, or
            ``[message]`` when the body carries none.
    """

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        http_status: int | None = None,
        errors: list[str] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.http_status = http_status
        self.errors = errors if errors is not None else [message]
        super().__init__(message)

    @property
    def is_session_invalid(self) -> bool:
        """True when credentials were dropped and a new login is required."""
        return self.code == ErrorCode.REFRESH_FAILED

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "code": str(self.code),
            "http_status": self.http_status,
            "errors": list(self.errors),
        }

    def __repr__(self) -> str:
        return (
            f"TransportError(code={self.code!s}, "
            f"http_status={self.http_status}, message={self.message!r})"
        )


_STATUS_MESSAGES: dict[int, str] = {
    401: "Your session has expired. Please log in again.",
    403: "You do not have permission to perform this action.",
    404: "The requested resource was not found.",
}

_GENERIC_MESSAGE = "An unexpected error occurred. Please try again."


def user_message(error: TransportError) -> str:
    """Map an error to a sentence that can be shown to an end user."""
    if error.code == ErrorCode.NETWORK_ERROR:
        return "Network error. Please check your connection and try again."
    if error.code == ErrorCode.TIMEOUT:
        return "Request timed out. Please try again."
    if error.code == ErrorCode.REFRESH_FAILED:
        return _STATUS_MESSAGES[401]
    if error.http_status is not None:
        if error.http_status >= 500:
            return "Server error. Please try again later."
        return _STATUS_MESSAGES.get(error.http_status, _GENERIC_MESSAGE)
    return _GENERIC_MESSAGE
