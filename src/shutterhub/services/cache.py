"""TTL cache with pull-through reads."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Expiring key-value store shared by services."""

    def get(self, key: str) -> object | None:
        """Return the live value for ``key``, or None."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store ``value`` for ``ttl_seconds``."""

    def get_or_fetch(
        self, key: str, fetch: Callable[[], object], ttl_seconds: int
    ) -> object:
        """Return the cached value, loading and storing it on a miss."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


class InMemoryCache:
    """Process-local cache keyed by string."""

    def __init__(self) -> None:
        self._entries: dict[str, _CacheEntry] = {}

    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)

    def get_or_fetch(
        self, key: str, fetch: Callable[[], object], ttl_seconds: int
    ) -> object:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = fetch()
        self.set(key, value, ttl_seconds)
        return value

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)
