"""Entity store - In-memory, TTL-bounded map from identity key to merged server entry."""
import logging
import threading
import time
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Union

from ...application.services.identity import make_key
from ...config.config import DEFAULT_EXPIRY_SECONDS
from ...domain.entities.server_entry import ServerEntry, ServerRecord

logger = logging.getLogger(__name__)


class EntityStore:
    """
    Thread-safe store of server entries.

    Every public operation holds the lock for its whole duration, so an
    upsert, a sweep or a snapshot is never observed half-done. Snapshots
    return copies; the entries themselves never leave the store.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entries: Dict[str, ServerEntry] = {}
        self._lock = threading.Lock()

    def upsert(self, records: Union[ServerRecord, Iterable[ServerRecord]]) -> int:
        """
        Merge one record or an ordered sequence of records.

        Returns:
            Total number of entries after the merge
        """
        if isinstance(records, ServerRecord):
            records = [records]
        with self._lock:
            for record in records:
                self._upsert_one(record, self._clock())
            return len(self._entries)

    def _upsert_one(self, record: ServerRecord, now: float) -> None:
        key = make_key(record)
        existing = self._entries.get(key)
        if existing is None:
            self._entries[key] = ServerEntry.create(record, now)
            logger.debug(f"Created entry {key}")
        else:
            existing.merge(record, now)
            logger.debug(f"Merged entry {key}")

    def snapshot(self, ttl_seconds: int = DEFAULT_EXPIRY_SECONDS) -> List[ServerEntry]:
        """Entries seen within the TTL, most recently updated first."""
        with self._lock:
            now = self._clock()
            fresh = [replace(entry) for entry in self._entries.values() if entry.age(now) <= ttl_seconds]
        fresh.sort(key=lambda entry: entry.last_seen, reverse=True)
        return fresh

    def sweep(self, ttl_seconds: int = DEFAULT_EXPIRY_SECONDS) -> int:
        """
        Remove entries older than the TTL.

        Returns:
            Number of removed entries
        """
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if entry.age(now) > ttl_seconds]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def get(self, key: str) -> Optional[ServerEntry]:
        with self._lock:
            entry = self._entries.get(key)
            return replace(entry) if entry else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_store = EntityStore()


def get_entity_store() -> EntityStore:
    """Process-wide store shared by the poll loop, the sweeper and the endpoints."""
    return _store
