"""Identity keys used to deduplicate server records."""
import time
from typing import Callable, Optional

from ...domain.entities.server_entry import ServerRecord


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


def make_key(record: ServerRecord, now_millis: Optional[Callable[[], int]] = None) -> str:
    """
    Derive the store key for a record.

    Job id wins over message id. A record with neither gets a "ts:<millis>"
    key, so it does not merge with earlier records.
    """
    if record.job_id:
        return f"job:{record.job_id}"
    if record.id:
        return f"msg:{record.id}"
    return f"ts:{(now_millis or _now_millis)()}"
