"""
Data Models for Game Events

Defines the event value sent to the ingestion backend and its wire format.
"""

import json
from types import MappingProxyType
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic_core import PydanticSerializationError

from .errors import SerializationError

# Mapping fields that are left out of the wire format when empty
OPTIONAL_MAPPING_FIELDS = ("event_properties", "user_properties")


class Event(BaseModel):
    """A single telemetry record. Immutable once built."""

    model_config = ConfigDict(frozen=True, strict=True)

    event: str = Field(default="", description="Event name, e.g. 'level_completed' or 'purchase'")
    user_id: str = Field(default="", description="Unique user identifier")
    session_id: str = Field(default="", description="Session identifier")
    time: int = Field(ge=0, description="Unix timestamp in seconds")
    event_properties: Dict[str, Any] = Field(
        default_factory=dict, validate_default=True, description="Event-specific properties"
    )
    user_properties: Dict[str, Any] = Field(
        default_factory=dict,
        validate_default=True,
        description="Snapshot of the session's user properties when the event was created",
    )

    @field_validator(*OPTIONAL_MAPPING_FIELDS)
    @classmethod
    def freeze_mapping(cls, value: Dict[str, Any]) -> Mapping[str, Any]:
        """Store property mappings as read-only views."""
        return MappingProxyType(value)

    @field_serializer(*OPTIONAL_MAPPING_FIELDS)
    def serialize_mapping(self, value: Mapping[str, Any]) -> Dict[str, Any]:
        return dict(value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON-ready wire form, omitting empty property mappings."""
        try:
            data = self.model_dump(mode="json")
        except PydanticSerializationError as exc:
            raise SerializationError(f"Event '{self.event}' is not JSON serializable: {exc}") from exc

        for key in OPTIONAL_MAPPING_FIELDS:
            if not data[key]:
                del data[key]
        return data

    def to_json(self) -> str:
        """Serialize to a JSON object string."""
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        """Create Event from its wire form."""
        return cls(
            event=data.get("event", ""),
            user_id=data.get("user_id", ""),
            session_id=data.get("session_id", ""),
            time=data.get("time", 0),
            event_properties=data.get("event_properties") or {},
            user_properties=data.get("user_properties") or {},
        )


def serialize_events(events) -> list:
    """Serialize a sequence of events to a JSON-ready list, preserving order."""
    return [event.to_dict() for event in events]
