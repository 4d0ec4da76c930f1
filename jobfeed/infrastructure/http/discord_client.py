"""Discord REST client for reading channel messages."""
import logging
from typing import Any, Dict, List, Optional

import requests

from ...config.config import AppConfig

logger = logging.getLogger(__name__)

USER_AGENT = "DiscordBot (jobfeed, 0.1)"


class MessageSourceError(Exception):
    """Upstream message fetch failed (transport error or non-200 status)."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def _build_headers(token: str) -> Dict[str, str]:
    return {
        "Authorization": token,
        "User-Agent": USER_AGENT,
        "Content-Type": "application/json",
    }


def _build_messages_url(config: AppConfig) -> str:
    return f"{config.api_base_url}/channels/{config.channel_id}/messages"


def fetch_messages_after(config: AppConfig, cursor: Optional[str]) -> List[Dict[str, Any]]:
    """
    List channel messages newer than the cursor.

    Args:
        config: Application configuration (token, channel, page size, timeout)
        cursor: Last processed message id, or None on the first cycle

    Returns:
        Message objects, newest first as the API returns them

    Raises:
        MessageSourceError: On transport failure, timeout or non-200 status
    """
    params: Dict[str, Any] = {"limit": config.page_size}
    if cursor:
        params["after"] = cursor
    url = _build_messages_url(config)

    try:
        response = requests.get(
            url,
            headers=_build_headers(config.token),
            params=params,
            timeout=config.request_timeout_seconds,
        )
    except requests.exceptions.Timeout as e:
        raise MessageSourceError(f"Timed out fetching messages from {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        raise MessageSourceError(f"Error fetching messages from {url}: {type(e).__name__}: {e}") from e

    if response.status_code != 200:
        raise MessageSourceError(
            f"Message fetch failed: status_code={response.status_code}, response={response.text}",
            status_code=response.status_code,
            body=response.text,
        )

    try:
        messages = response.json()
    except ValueError as e:
        raise MessageSourceError(f"Message fetch returned invalid JSON: {e}", status_code=200, body=response.text) from e

    if not isinstance(messages, list):
        raise MessageSourceError("Message fetch returned a non-list payload", status_code=200, body=response.text)
    return messages
