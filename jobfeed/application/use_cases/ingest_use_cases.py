"""Ingest use cases - Functional programming style."""
from typing import Callable, Iterable, Optional

from ...domain.entities.message import RawMessage
from ...domain.entities.server_entry import ServerRecord
from ..services.field_extractor import extract_fields, is_informative

UNKNOWN_AUTHOR = "Unknown"


def build_record(message: RawMessage, extracted: ServerRecord) -> ServerRecord:
    """Combine extracted fields with the message id and author."""
    return ServerRecord(
        server_name=extracted.server_name or "",
        money_per_sec=extracted.money_per_sec or 0,
        players=extracted.players or "",
        job_id=extracted.job_id or "",
        author=message.author or UNKNOWN_AUTHOR,
        id=message.id,
    )


def record_from_message(message: RawMessage, loose_content_job_id: bool = False) -> Optional[ServerRecord]:
    """
    Extract a deliverable record from a message.

    Returns:
        The record, or None when the message is uninformative
    """
    extracted = extract_fields(message, loose_content_job_id=loose_content_job_id)
    if not is_informative(extracted):
        return None
    return build_record(message, extracted)


def ingest_records(
    records: Iterable[ServerRecord],
    upsert: Callable[[Iterable[ServerRecord]], int],
) -> int:
    """
    Hand records to the store in order.

    Returns:
        Total entity count after ingestion
    """
    return upsert(list(records))
