"""Poll loop - Pulls new channel messages and hands informative ones to the store."""
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from ...application.use_cases.ingest_use_cases import record_from_message
from ...config.config import AppConfig, require_polling_credentials
from ...domain.entities.message import RawMessage
from ...domain.entities.server_entry import ServerRecord
from ..http.discord_client import MessageSourceError, fetch_messages_after
from ..store.entity_store import EntityStore
from .deliverers import Deliverer, make_http_deliverer, make_store_deliverer

logger = logging.getLogger(__name__)

Fetcher = Callable[[Optional[str]], List[Dict[str, Any]]]


class PollLoop:
    """
    Long-running ingestion task.

    Blocking fetch and delivery calls run in worker threads so the event
    loop keeps serving requests. The cursor advances past every processed
    message whether or not its delivery succeeded.
    """

    def __init__(
        self,
        fetch_messages: Fetcher,
        deliver: Deliverer,
        interval_seconds: float = 2.0,
        loose_content_job_id: bool = False,
    ):
        self._fetch_messages = fetch_messages
        self._deliver = deliver
        self._interval_seconds = interval_seconds
        self._loose_content_job_id = loose_content_job_id
        self._stop_event = asyncio.Event()
        self.cursor: Optional[str] = None

    async def run_once(self) -> int:
        """
        Run one fetch/process cycle.

        Returns:
            Number of records delivered successfully

        Raises:
            MessageSourceError: If the fetch fails
        """
        messages = await asyncio.to_thread(self._fetch_messages, self.cursor)
        delivered = 0
        # The API returns newest first; merges must be applied oldest first.
        for raw in reversed(messages):
            if not isinstance(raw, dict):
                logger.warning(f"Skipping malformed message payload: {raw!r}")
                continue
            message = RawMessage.from_dict(raw)
            record = record_from_message(message, loose_content_job_id=self._loose_content_job_id)
            if record is not None and await self._deliver_record(record):
                delivered += 1
            self.cursor = message.id or self.cursor
        return delivered

    async def _deliver_record(self, record: ServerRecord) -> bool:
        try:
            ok = await asyncio.to_thread(self._deliver, record)
        except Exception:
            logger.exception(f"Unhandled error delivering record for message {record.id}")
            return False
        if ok:
            logger.info(f"Delivered record: {record.to_dict()}")
        else:
            logger.warning(f"Failed to deliver record: {record.to_dict()}")
        return ok

    async def run(self) -> None:
        """Poll until stop() is called; failures are logged and retried."""
        logger.info(f"Starting poll loop (interval={self._interval_seconds}s)")
        while not self._stop_event.is_set():
            try:
                await self.run_once()
            except MessageSourceError as e:
                logger.error(f"Error fetching messages: status={e.status_code} {e}")
            except Exception:
                logger.exception("Unexpected error in poll cycle")
            await self._wait()
        logger.info("Poll loop stopped")

    async def _wait(self) -> None:
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval_seconds)
        except asyncio.TimeoutError:
            pass

    def stop(self) -> None:
        """Signal the loop to exit after the current cycle."""
        self._stop_event.set()


def build_poll_loop(config: AppConfig, store: EntityStore) -> PollLoop:
    """
    Wire a poll loop from configuration.

    Records go through INGEST_URL when it is set, otherwise straight into the store.

    Raises:
        RuntimeError: If the upstream token or channel id is missing
    """
    require_polling_credentials(config)
    if config.ingest_url:
        deliver = make_http_deliverer(config.ingest_url, config.request_timeout_seconds)
    else:
        deliver = make_store_deliverer(store)

    def _fetch(cursor: Optional[str]) -> List[Dict[str, Any]]:
        return fetch_messages_after(config, cursor)

    return PollLoop(
        fetch_messages=_fetch,
        deliver=deliver,
        interval_seconds=config.poll_interval_ms / 1000,
        loose_content_job_id=config.loose_content_job_id,
    )
