"""Value types exchanged between peer nodes and the coordination core."""
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def require_rfc3339(value: Any) -> Any:
    """Reject numeric epochs; instants arrive as RFC 3339 strings or datetimes."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and not value.strip().lstrip("-").replace(".", "", 1).isdigit():
        return value
    raise ValueError("timestamp must be an RFC 3339 string")


def as_utc(value: datetime) -> datetime:
    """Normalize an instant to timezone-aware UTC (naive input is taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class NodeStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class Event(BaseModel):
    """
    A signed report produced by a peer node.

    Events are immutable once built. The payload is carried verbatim and is
    never interpreted by the coordinator.
    """

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(..., description="Caller-supplied identifier (UUID or hash)")
    timestamp: datetime = Field(..., description="UTC instant the event occurred")
    origin_id: str = Field(..., description="Identifier of the reporting node")
    event_type: str = Field(..., description="Open tag such as join, leave or data-update")
    payload: Any = Field(..., description="Event-specific JSON data")
    signature: str = Field(..., description="Signature over the event contents")

    @field_validator("timestamp", mode="before")
    @classmethod
    def check_timestamp_format(cls, value: Any) -> Any:
        return require_rfc3339(value)

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, value: datetime) -> datetime:
        return as_utc(value)


class Node(BaseModel):
    """Latest reported state of a peer in the network."""

    model_config = ConfigDict(frozen=True)

    node_id: str = Field(..., description="Unique node identifier")
    last_active: datetime = Field(..., description="UTC instant of the last report")
    status: NodeStatus

    @field_validator("last_active", mode="before")
    @classmethod
    def check_last_active_format(cls, value: Any) -> Any:
        return require_rfc3339(value)

    @field_validator("last_active")
    @classmethod
    def normalize_last_active(cls, value: datetime) -> datetime:
        return as_utc(value)

    @property
    def is_active(self) -> bool:
        return self.status is NodeStatus.ACTIVE
