"""Session credentials held by the client for the process lifetime."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SessionCredentials:
    """Access/refresh token pair. Either may be absent."""

    access_token: str | None = None
    refresh_token: str | None = None

    @property
    def authorization(self) -> str | None:
        """Value for the ``Authorization`` header, if authenticated."""
        if not self.access_token:
            return None
        return f"Bearer {self.access_token}"


class CredentialStore:
    """Owner of the current ``SessionCredentials`` reference.

    Every mutation swaps in a new immutable snapshot, so a request that
    captured a snapshot before a clear keeps sending its own token.
    """

    def __init__(self) -> None:
        self._credentials = SessionCredentials()

    def snapshot(self) -> SessionCredentials:
        return self._credentials

    def set(self, access_token: str | None, refresh_token: str | None) -> None:
        self._credentials = SessionCredentials(access_token, refresh_token)

    def replace_access_token(self, access_token: str, *, refresh_token: str) -> bool:
        """Store a refreshed access token.

        Only applies if ``refresh_token`` is still the stored one; a
        logout or new login during the refresh wins.

        Returns:
            True if the token was stored.
        """
        if self._credentials.refresh_token != refresh_token:
            return False
        self._credentials = replace(self._credentials, access_token=access_token)
        return True

    def clear(self) -> None:
        self._credentials = SessionCredentials()
