"""In-memory role -> grants cache with per-entry expiry."""

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from courseguard.domain.value_objects import Grant


@dataclass(frozen=True)
class CacheEntry:
    """Grants of one role, valid until expires_at (clock seconds)."""

    role: str
    grants: tuple[Grant, ...]
    fetched_at: float
    expires_at: float


class GrantCache:
    """Role-keyed cache; entries are replaced wholesale, never patched."""

    def __init__(
        self,
        timeout: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if timeout <= 0:
            raise ValueError("Cache timeout must be positive")
        self._timeout = timeout
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, role: str) -> CacheEntry | None:
        """Return the live entry for role, dropping it if expired."""
        entry = self._entries.get(role)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            self._entries.pop(role, None)
            return None
        return entry

    def put(self, role: str, grants: Iterable[Grant]) -> CacheEntry:
        now = self._clock()
        entry = CacheEntry(
            role=role,
            grants=tuple(grants),
            fetched_at=now,
            expires_at=now + self._timeout,
        )
        self._entries[role] = entry
        return entry

    def invalidate(self, role: str) -> None:
        self._entries.pop(role, None)

    def invalidate_all(self) -> None:
        self._entries.clear()
