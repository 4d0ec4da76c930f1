"""Message entities - Read-only view of upstream channel messages."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class EmbedField:
    """Name/value pair inside an embed."""
    name: str = ""
    value: str = ""


@dataclass(frozen=True)
class Embed:
    """Structured block attached to a message."""
    title: str = ""
    description: str = ""
    fields: List[EmbedField] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Embed":
        if not isinstance(data, dict):
            return cls()
        raw_fields = data.get("fields") or []
        if not isinstance(raw_fields, list):
            raw_fields = []
        return cls(
            title=_as_text(data.get("title")),
            description=_as_text(data.get("description")),
            fields=[
                EmbedField(name=_as_text(f.get("name")), value=_as_text(f.get("value")))
                for f in raw_fields
                if isinstance(f, dict)
            ],
        )


@dataclass(frozen=True)
class RawMessage:
    """Channel message as returned by the upstream API."""
    id: str = ""
    author: Optional[str] = None
    content: str = ""
    embeds: List[Embed] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawMessage":
        """
        Build a message from the upstream JSON object.

        Missing or malformed keys become empty values; this never raises for a dict input.
        """
        author = data.get("author")
        username = author.get("username") if isinstance(author, dict) else None
        raw_embeds = data.get("embeds") or []
        if not isinstance(raw_embeds, list):
            raw_embeds = []
        return cls(
            id=_as_text(data.get("id")),
            author=_as_text(username) or None,
            content=_as_text(data.get("content")),
            embeds=[Embed.from_dict(e) for e in raw_embeds],
        )
