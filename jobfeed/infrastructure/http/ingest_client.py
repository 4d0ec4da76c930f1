"""HTTP hand-off of server records to a /receive endpoint."""
import logging

import requests

from ...domain.entities.server_entry import ServerRecord

logger = logging.getLogger(__name__)


def post_record(ingest_url: str, record: ServerRecord, timeout: float) -> bool:
    """
    POST one record to the ingestion endpoint.

    Returns:
        True on a 200/201 response, False otherwise
    """
    try:
        response = requests.post(
            ingest_url,
            json=record.to_dict(),
            headers={"Content-Type": "application/json"},
            timeout=timeout
        )
        if response.status_code in [200, 201]:
            return True
        logger.error(
            f"Ingestion call failed: status_code={response.status_code}, response={response.text}",
            extra={"ingest_url": ingest_url, "status_code": response.status_code},
        )
        return False
    except requests.exceptions.Timeout:
        logger.error(f"Ingestion call to {ingest_url} timed out after {timeout}s")
        return False
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Ingestion connection error to {ingest_url}: {e}")
        return False
    except requests.exceptions.RequestException as e:
        logger.exception(f"Ingestion call exception to {ingest_url}: {type(e).__name__}: {e}")
        return False
