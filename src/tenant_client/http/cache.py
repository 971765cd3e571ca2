"""In-memory TTL cache for successful GET responses."""

import time
from typing import Any


class ResponseCache:
    """Maps a request key to a cached response until its TTL expires.

    Single event loop only; no locking. Expired entries are pruned on
    every write, so keys that are never read again do not accumulate.
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> tuple[bool, Any]:
        """Return ``(hit, value)``. Expired entries are dropped on read."""
        entry = self._entries.get(key)
        if entry is None:
            return False, None
        expires_at, value = entry
        if expires_at <= time.monotonic():
            del self._entries[key]
            return False, None
        return True, value

    def set(self, key: str, value: Any, ttl_ms: int) -> None:
        self.cleanup()
        if ttl_ms <= 0:
            return
        self._entries[key] = (time.monotonic() + ttl_ms / 1000, value)

    def cleanup(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed.
        """
        now = time.monotonic()
        expired = [key for key, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
