"""Record deliverers used by the poll loop."""
from typing import Callable

from ...domain.entities.server_entry import ServerRecord
from ..http.ingest_client import post_record
from ..store.entity_store import EntityStore

Deliverer = Callable[[ServerRecord], bool]


def make_store_deliverer(store: EntityStore) -> Deliverer:
    """Deliver straight into the in-process store."""
    def _deliver(record: ServerRecord) -> bool:
        store.upsert(record)
        return True
    return _deliver


def make_http_deliverer(ingest_url: str, timeout: float) -> Deliverer:
    """Deliver through an external /receive endpoint."""
    def _deliver(record: ServerRecord) -> bool:
        return post_record(ingest_url, record, timeout)
    return _deliver
