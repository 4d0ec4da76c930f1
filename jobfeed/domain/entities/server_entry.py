"""Server entities - Extracted records and the merged entries kept in the store."""
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class ServerRecord:
    """
    One update about a game server.

    Produced by field extraction (author and id left empty) and by the
    ingestion endpoint. Empty strings and zero mean "unknown".
    """
    server_name: str = ""
    money_per_sec: int = 0
    players: str = ""
    job_id: str = ""
    author: str = ""
    id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire format."""
        return {
            "id": self.id,
            "author": self.author,
            "serverName": self.server_name,
            "moneyPerSec": self.money_per_sec,
            "players": self.players,
            "jobId": self.job_id,
        }


@dataclass
class ServerEntry:
    """Merged state of one tracked server, owned by the entity store."""
    server_name: str
    money_per_sec: int
    players: str
    author: str
    job_id: str
    id: str
    first_seen: float
    last_seen: float

    @classmethod
    def create(cls, record: ServerRecord, now: float) -> "ServerEntry":
        return cls(
            server_name=record.server_name or "",
            money_per_sec=record.money_per_sec or 0,
            players=record.players or "",
            author=record.author or "",
            job_id=record.job_id or "",
            id=record.id or "",
            first_seen=now,
            last_seen=now,
        )

    def merge(self, record: ServerRecord, now: float) -> None:
        """Overwrite only with non-empty incoming values; first_seen is kept."""
        self.server_name = record.server_name or self.server_name
        self.money_per_sec = record.money_per_sec or self.money_per_sec
        self.players = record.players or self.players
        self.author = record.author or self.author
        self.job_id = record.job_id or self.job_id
        self.id = record.id or self.id
        self.last_seen = max(self.last_seen, now)

    def age(self, now: float) -> float:
        return now - self.last_seen

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire format."""
        return {
            "serverName": self.server_name,
            "moneyPerSec": self.money_per_sec,
            "players": self.players,
            "author": self.author,
            "jobId": self.job_id,
            "firstSeen": self.first_seen,
            "lastSeen": self.last_seen,
            "id": self.id,
        }
