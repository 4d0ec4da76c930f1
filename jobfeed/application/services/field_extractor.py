"""Field extractor - Recovers server fields from loosely formatted notifier messages.

Rules run in a fixed order and later matches overwrite earlier ones:
content heuristic, then for each embed its fields, the title fallback and the
description fallback.
"""
import logging
import re
from typing import Callable, List, Optional, Tuple

from ...domain.entities.message import Embed, EmbedField, RawMessage
from ...domain.entities.server_entry import ServerRecord
from .money_parser import parse_money_per_sec

logger = logging.getLogger(__name__)

SERVER_NAME = "server_name"
MONEY_PER_SEC = "money_per_sec"
PLAYERS = "players"
JOB_ID = "job_id"

MIN_CONTENT_JOB_ID_LENGTH = 10
MIN_JOB_TOKEN_LENGTH = 9

_CODE_MARKERS_RE = re.compile(r"```|`")
_EMPHASIS_RE = re.compile(r"\*")
_TELEPORT_RE = re.compile(r"TeleportToPlaceInstance\(\s*[^,)]+,\s*['\"`]?([^'\"`,)\s]+)")
_UUID_RE = re.compile(r"([0-9a-fA-F]{8}-[0-9a-fA-F-]{4,}-[0-9a-fA-F]{8,})")


def _is_name_field(name: str) -> bool:
    return "name" in name.lower()


def _is_money_field(name: str) -> bool:
    lowered = name.lower()
    return "money" in lowered or "per sec" in lowered or "💰" in name or "generation" in lowered


def _is_players_field(name: str) -> bool:
    return "players" in name.lower() or "👥" in name


def _is_job_field(name: str) -> bool:
    return "job" in name.lower()


# First matching rule classifies the field.
FIELD_RULES: List[Tuple[str, Callable[[str], bool]]] = [
    (SERVER_NAME, _is_name_field),
    (MONEY_PER_SEC, _is_money_field),
    (PLAYERS, _is_players_field),
    (JOB_ID, _is_job_field),
]


def classify_field(name: str) -> Optional[str]:
    """Return the record attribute an embed field feeds, or None."""
    stripped = (name or "").strip()
    for kind, matches in FIELD_RULES:
        if matches(stripped):
            return kind
    return None


def strip_code_markers(value: str) -> str:
    return _CODE_MARKERS_RE.sub("", value or "").strip()


def job_id_from_content(content: str, loose: bool = False) -> Optional[str]:
    """
    Treat the message text itself as a job id when it looks like one.

    Requires at least 10 characters. The text must also contain "-" or "/"
    unless loose mode is on.
    """
    candidate = strip_code_markers(content)
    if len(candidate) < MIN_CONTENT_JOB_ID_LENGTH:
        return None
    if loose or "-" in candidate or "/" in candidate:
        return candidate
    return None


def job_id_from_field_value(value: str) -> Optional[str]:
    """First whitespace token longer than 8 characters, else the whole cleaned value."""
    cleaned = strip_code_markers(value)
    if not cleaned:
        return None
    for token in cleaned.split():
        if len(token) >= MIN_JOB_TOKEN_LENGTH:
            return token
    return cleaned


def job_id_from_description(description: str) -> Optional[str]:
    """
    Scan an embed description for a job id.

    A UUID-shaped token overrides a TeleportToPlaceInstance argument.
    """
    if not description:
        return None
    job_id = None
    teleport = _TELEPORT_RE.search(description)
    if teleport:
        job_id = teleport.group(1)
    uuid_like = _UUID_RE.search(description)
    if uuid_like:
        job_id = uuid_like.group(1)
    return job_id


def _field_value(kind: str, raw_value: str):
    value = (raw_value or "").strip()
    if kind == SERVER_NAME:
        return value
    if kind == MONEY_PER_SEC:
        return parse_money_per_sec(value)
    if kind == PLAYERS:
        return _EMPHASIS_RE.sub("", value).strip()
    return job_id_from_field_value(value)


def apply_embed_field(record: ServerRecord, embed_field: EmbedField) -> None:
    """Assign one embed field to the record; empty findings leave it untouched."""
    kind = classify_field(embed_field.name)
    if kind is None:
        return
    value = _field_value(kind, embed_field.value)
    if value:
        setattr(record, kind, value)


def apply_embed(record: ServerRecord, embed: Embed) -> None:
    for embed_field in embed.fields:
        apply_embed_field(record, embed_field)

    if not record.server_name and embed.title.strip():
        record.server_name = embed.title.strip()

    if not record.job_id:
        record.job_id = job_id_from_description(embed.description) or ""


def extract_fields(message: RawMessage, loose_content_job_id: bool = False) -> ServerRecord:
    """
    Extract server name, money per second, players and job id from a message.

    Never raises; anything that cannot be recovered stays empty.
    """
    record = ServerRecord()
    record.job_id = job_id_from_content(message.content, loose=loose_content_job_id) or ""

    for embed in message.embeds:
        apply_embed(record, embed)

    logger.debug(
        f"Extracted message {message.id}: server_name={record.server_name!r} "
        f"job_id={record.job_id!r} money_per_sec={record.money_per_sec}"
    )
    return record


def is_informative(record: ServerRecord) -> bool:
    """A record without job id and server name carries nothing worth storing."""
    return bool(record.job_id or record.server_name)
