"""TTL cache for prompt directory listings."""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from time import monotonic

Listing = tuple[str, ...]


@dataclass(frozen=True)
class CachedListing:
    names: Listing
    expires_at: float


class TTLCache:
    """Thread-safe listing cache keyed by ``"all"`` or ``"bank:<name>"``.

    A TTL of 0 disables caching: ``set`` becomes a no-op. Writers drop the
    keys they touch with ``invalidate``; expiry only bounds staleness against
    edits made outside the store.
    """

    def __init__(self, ttl_s: float) -> None:
        self._ttl_s = max(ttl_s, 0.0)
        self._listings: dict[str, CachedListing] = {}
        self._lock = Lock()

    @property
    def enabled(self) -> bool:
        return self._ttl_s > 0

    def get(self, key: str) -> Listing | None:
        now = monotonic()
        with self._lock:
            cached = self._listings.get(key)
            if cached is None:
                return None
            if cached.expires_at <= now:
                del self._listings[key]
                return None
            return cached.names

    def set(self, key: str, names: Listing) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._listings[key] = CachedListing(names=names, expires_at=monotonic() + self._ttl_s)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._listings.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._listings)
