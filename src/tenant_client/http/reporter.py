"""Crash-reporting capability injected into the client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from tenant_client.errors import TransportError


class Reporter(Protocol):
    """Receives every ``TransportError`` the client raises to callers.

    Implementations forward to an error tracker. The client logs and
    ignores failures raised by the reporter itself.
    """

    def capture_error(self, error: TransportError, context: dict[str, Any]) -> None:
        ...
