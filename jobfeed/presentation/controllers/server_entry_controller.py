"""Server entry controller - Request/response handling."""
import logging
from typing import Any, Dict, List, Union

from ...application.use_cases.ingest_use_cases import ingest_records
from ...domain.entities.server_entry import ServerRecord
from ...infrastructure.store.entity_store import EntityStore
from ..dtos.server_entry_models import ReceiveRecordRequest

logger = logging.getLogger(__name__)


def _request_to_record(payload: ReceiveRecordRequest) -> ServerRecord:
    return ServerRecord(
        server_name=payload.server_name or "",
        money_per_sec=payload.money_per_sec or 0,
        players=payload.players or "",
        job_id=payload.job_id or "",
        author=payload.author or "",
        id=payload.id or "",
    )


def handle_receive(
    payload: Union[ReceiveRecordRequest, List[ReceiveRecordRequest]],
    store: EntityStore,
) -> Dict[str, Any]:
    """
    Handle an ingestion request with one record or a list of records.

    Returns:
        Acknowledgement with the total entity count
    """
    items = payload if isinstance(payload, list) else [payload]
    count = ingest_records((_request_to_record(item) for item in items), store.upsert)
    logger.info(f"Received {len(items)} record(s); store now holds {count}")
    return {"status": "ok", "count": count}


def handle_list_entries(store: EntityStore, ttl_seconds: int) -> List[Dict[str, Any]]:
    """Fresh entries, most recently updated first."""
    return [entry.to_dict() for entry in store.snapshot(ttl_seconds)]
