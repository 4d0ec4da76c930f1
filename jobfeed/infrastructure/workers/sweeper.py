"""Periodic eviction of stale store entries."""
import asyncio
import logging

from ..store.entity_store import EntityStore

logger = logging.getLogger(__name__)


class ExpirySweeper:
    """Runs EntityStore.sweep on a fixed interval, independent of query traffic."""

    def __init__(self, store: EntityStore, ttl_seconds: int = 600, interval_seconds: float = 30.0):
        self._store = store
        self._ttl_seconds = ttl_seconds
        self._interval_seconds = interval_seconds
        self._stop_event = asyncio.Event()

    def sweep_once(self) -> int:
        removed = self._store.sweep(self._ttl_seconds)
        if removed:
            logger.info(f"Evicted {removed} expired entries (ttl={self._ttl_seconds}s)")
        return removed

    async def run(self) -> None:
        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval_seconds)
            except asyncio.TimeoutError:
                self.sweep_once()

    def stop(self) -> None:
        self._stop_event.set()
