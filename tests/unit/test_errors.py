"""Tests for TransportError and user-facing messages."""

import pytest

from tenant_client.errors import ErrorCode, TransportError, user_message


class TestTransportError:
    def test_errors_default_to_message(self) -> None:
        err = TransportError("boom", code=ErrorCode.HTTP_ERROR, http_status=500)
        assert err.errors == ["boom"]
        assert str(err) == "boom"

    def test_to_dict(self) -> None:
        err = TransportError(
            "Invalid", code=ErrorCode.HTTP_ERROR, http_status=422, errors=["a", "b"]
        )
        assert err.to_dict() == {
            "message": "Invalid",
            "code": "http_error",
            "http_status": 422,
            "errors": ["a", "b"],
        }

    def test_session_invalid(self) -> None:
        assert TransportError("x", code=ErrorCode.REFRESH_FAILED).is_session_invalid
        assert not TransportError("x", code=ErrorCode.TIMEOUT).is_session_invalid


class TestUserMessage:
    @pytest.mark.parametrize(
        ("code", "status", "expected"),
        [
            (ErrorCode.NETWORK_ERROR, None, "Network error"),
            (ErrorCode.TIMEOUT, None, "timed out"),
            (ErrorCode.REFRESH_FAILED, None, "session has expired"),
            (ErrorCode.HTTP_ERROR, 401, "session has expired"),
            (ErrorCode.HTTP_ERROR, 403, "permission"),
            (ErrorCode.HTTP_ERROR, 404, "not found"),
            (ErrorCode.HTTP_ERROR, 502, "Server error"),
            (ErrorCode.HTTP_ERROR, 409, "unexpected error"),
            (ErrorCode.INVALID_RESPONSE, None, "unexpected error"),
        ],
    )
    def test_mapping(self, code: ErrorCode, status: int | None, expected: str) -> None:
        err = TransportError("raw", code=code, http_status=status)
        assert expected in user_message(err)
