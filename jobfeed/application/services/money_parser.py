"""Money parser - Decodes human-written magnitudes such as "$1.2M/s"."""
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

MAGNITUDES = {
    "": 1,
    "K": 10 ** 3,
    "M": 10 ** 6,
    "B": 10 ** 9,
    "T": 10 ** 12,
    "Q": 10 ** 15,
}

_EMPHASIS_RE = re.compile(r"[*_~]")
_WHITESPACE_RE = re.compile(r"\s+")
_PER_SECOND_RE = re.compile(r"/s|persec", re.IGNORECASE)
_AMOUNT_RE = re.compile(r"\$?(\d+(?:\.\d+)?)([KMBTQ]?)", re.IGNORECASE)


def _truncate(number: str, multiplier: int) -> int:
    try:
        return max(int(Decimal(number) * multiplier), 0)
    except InvalidOperation:
        return 0


def parse_money_per_sec(raw: Optional[str]) -> int:
    """
    Parse a money/throughput string into an integer.

    Emphasis markers, whitespace and the "/s" or "per sec" annotation are
    removed first. Suffixes K, M, B, T and Q are case-insensitive. The $ and
    the suffix are optional, so the first bare number anywhere in the text is
    found by the same search.

    Examples:
        "$1.2K" -> 1200, "2M/s" -> 2000000, "abc" -> 0
    """
    if not raw:
        return 0

    cleaned = _EMPHASIS_RE.sub("", raw)
    cleaned = _WHITESPACE_RE.sub("", cleaned)
    cleaned = _PER_SECOND_RE.sub("", cleaned)

    match = _AMOUNT_RE.search(cleaned)
    if not match:
        return 0
    return _truncate(match.group(1), MAGNITUDES[match.group(2).upper()])
