"""Server entry router - Ingestion and query endpoints."""
from typing import Any, Dict, List, Union

from fastapi import APIRouter, Depends, Request

from ...config.config import DEFAULT_EXPIRY_SECONDS
from ...infrastructure.store.entity_store import EntityStore, get_entity_store
from ..controllers.server_entry_controller import handle_list_entries, handle_receive
from ..dtos.server_entry_models import ReceiveRecordRequest, ReceiveResponse, ServerEntryResponse

router = APIRouter(tags=["ServerEntries"])


def get_expiry_seconds(request: Request) -> int:
    """TTL loaded once at startup; the default applies before the lifespan runs."""
    return getattr(request.app.state, "expiry_seconds", DEFAULT_EXPIRY_SECONDS)


@router.post("/receive", status_code=200, response_model=ReceiveResponse)
def receive(
    payload: Union[List[ReceiveRecordRequest], ReceiveRecordRequest],
    store: EntityStore = Depends(get_entity_store),
) -> Dict[str, Any]:
    """
    Store one server record or an ordered list of records.

    Used by the poll loop when INGEST_URL points at this service.
    """
    return handle_receive(payload, store)


@router.get("/messages", status_code=200, response_model=List[ServerEntryResponse])
def list_messages(
    store: EntityStore = Depends(get_entity_store),
    ttl_seconds: int = Depends(get_expiry_seconds),
) -> List[Dict[str, Any]]:
    """Freshest known state of every tracked server, most recent first."""
    return handle_list_entries(store, ttl_seconds)


@router.get("/health", summary="Service health check")
def health_check() -> Dict[str, str]:
    """Basic readiness endpoint."""
    return {"status": "ok"}
