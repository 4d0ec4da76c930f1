"""Pydantic models for server entry operations."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReceiveRecordRequest(BaseModel):
    """One record posted to the ingestion endpoint."""
    server_name: Optional[str] = Field(None, alias="serverName")
    money_per_sec: Optional[int] = Field(None, alias="moneyPerSec", ge=0)
    players: Optional[str] = None
    author: Optional[str] = None
    job_id: Optional[str] = Field(None, alias="jobId")
    id: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        # Discord snowflakes are sometimes sent as numbers
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class ReceiveResponse(BaseModel):
    """Acknowledgement for the ingestion endpoint."""
    status: str = "ok"
    count: int


class ServerEntryResponse(BaseModel):
    """Stored entry as returned by the query endpoint."""
    serverName: str
    moneyPerSec: int
    players: str
    author: str
    jobId: str
    firstSeen: float
    lastSeen: float
    id: str
