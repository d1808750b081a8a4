"""Time-bounded in-memory cache of financial summaries per link."""

from datetime import datetime, timedelta
from typing import Callable, Optional

from coach.core.rwlock import ReadWriteLock
from coach.core.timezone import now_utc
from coach.domain.views import CacheEntry, FinancialSummary

DEFAULT_TTL_SECONDS = 24 * 60 * 60


class ContextCache:
    """
    Process-local map from link id to its most recent summary.

    - `put` always overwrites (last write wins) and restarts the TTL.
    - An entry past its expiry is never returned; it is evicted by the
      lookup that notices it.
    - Lookups share a reader/writer lock; stores and evictions are exclusive.

    Nothing is persisted: a restart starts empty.
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = ReadWriteLock()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def put(self, link_id: str, summary: FinancialSummary, owner_name: str) -> CacheEntry:
        """Store a summary for a link, replacing any previous entry."""
        now = self._clock()
        entry = CacheEntry(
            link_id=link_id,
            summary=summary,
            owner_name=owner_name,
            cached_at=now,
            expires_at=now + self._ttl,
        )
        with self._lock.write_locked():
            self._entries[link_id] = entry
        return entry

    def get_entry(self, link_id: str) -> Optional[CacheEntry]:
        """Return the fresh entry for a link, or None if absent or expired."""
        with self._lock.read_locked():
            entry = self._entries.get(link_id)
            now = self._clock()
            if entry is None:
                return None
            if not entry.is_expired(now):
                return entry

        # Eviction needs the exclusive lock; re-check since a writer may have
        # stored a fresh entry in between.
        with self._lock.write_locked():
            current = self._entries.get(link_id)
            if current is not None and current.is_expired(self._clock()):
                del self._entries[link_id]
                return None
            return current

    def get(self, link_id: str) -> Optional[FinancialSummary]:
        """Return the cached summary for a link, or None if absent or expired."""
        entry = self.get_entry(link_id)
        return entry.summary if entry else None

    def invalidate(self, link_id: str) -> bool:
        """Drop a link's entry. Return True if one was present."""
        with self._lock.write_locked():
            return self._entries.pop(link_id, None) is not None

    def purge_expired(self) -> int:
        """Remove every expired entry and return how many were removed."""
        with self._lock.write_locked():
            now = self._clock()
            expired = [k for k, e in self._entries.items() if e.is_expired(now)]
            for link_id in expired:
                del self._entries[link_id]
            return len(expired)

    def clear(self) -> None:
        with self._lock.write_locked():
            self._entries.clear()

    def __len__(self) -> int:
        """Number of stored entries, expired ones included until evicted."""
        with self._lock.read_locked():
            return len(self._entries)
