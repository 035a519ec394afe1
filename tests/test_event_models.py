"""
Tests for event construction and the event wire format.
"""

import json
import time

import pytest
from pydantic import ValidationError

from game_events.errors import ClockError, ConstructionError, SerializationError
from game_events.event_factory import EventFactory, build_event, current_unix_time
from game_events.models import Event, serialize_events


class TestEventFactory:
    """Test default filling in EventFactory."""

    def test_event_creation(self):
        """Test building an event with the required identifiers."""
        event = build_event(event="test_event", user_id="user123", session_id="session456")

        assert event.event == "test_event"
        assert event.user_id == "user123"
        assert event.session_id == "session456"
        assert event.time > 0
        assert event.event_properties == {}
        assert event.user_properties == {}

    def test_default_time_close_to_wall_clock(self):
        """Test that an unset time is taken from the wall clock."""
        before = int(time.time())
        event = build_event(event="tick", user_id="u", session_id="s")
        after = int(time.time())

        assert before <= event.time <= after
        assert abs(event.time - time.time()) <= 2

    def test_explicit_time_is_kept(self):
        """Test that an explicit time is not replaced by the clock."""
        factory = EventFactory(clock=lambda: 999.0)
        event = factory.build(event="e", user_id="u", session_id="s", time=1234)
        assert event.time == 1234

    def test_clock_is_truncated_to_seconds(self):
        """Test that fractional clock readings are truncated."""
        factory = EventFactory(clock=lambda: 1700000000.9)
        event = factory.build(event="e")
        assert event.time == 1700000000

    def test_unset_strings_default_to_empty(self):
        """Test that unset identifiers become empty strings."""
        event = build_event()
        assert event.event == ""
        assert event.user_id == ""
        assert event.session_id == ""

    def test_clock_before_epoch_raises(self):
        """Test that a clock before the epoch is a fatal error."""
        factory = EventFactory(clock=lambda: -1.0)
        with pytest.raises(ClockError):
            factory.build(event="e", user_id="u", session_id="s")

    def test_current_unix_time(self):
        """Test the clock helper."""
        assert current_unix_time(lambda: 42.7) == 42
        with pytest.raises(ClockError):
            current_unix_time(lambda: -0.5)

    def test_invalid_identifier_type_raises(self):
        """Test that non-string identifiers are rejected."""
        with pytest.raises(ConstructionError):
            build_event(event="e", user_id=123, session_id="s")

    def test_invalid_properties_type_raises(self):
        """Test that non-mapping properties are rejected."""
        with pytest.raises(ConstructionError):
            build_event(event="e", event_properties=["not", "a", "mapping"])

    def test_negative_time_raises(self):
        """Test that an explicit negative time is rejected."""
        with pytest.raises(ConstructionError):
            build_event(event="e", time=-5)

    def test_properties_are_copied(self):
        """Test that later changes to the caller's mappings do not leak into the event."""
        props = {"level": 1, "tags": ["a"]}
        event = build_event(event="e", event_properties=props)

        props["level"] = 2
        props["tags"].append("b")

        assert event.event_properties == {"level": 1, "tags": ["a"]}


class TestEventModel:
    """Test the Event value and its serialization."""

    def test_event_is_immutable(self):
        """Test that fields cannot be reassigned."""
        event = build_event(event="e", user_id="u", session_id="s")
        with pytest.raises(ValidationError):
            event.user_id = "other"

    def test_property_mappings_are_read_only(self):
        """Test that property mappings cannot be changed in place after the event is built."""
        event = build_event(event="e", time=1, event_properties={"k": 1}, user_properties={"level": 3})

        with pytest.raises(TypeError):
            event.event_properties["k"] = 2
        with pytest.raises(TypeError):
            event.user_properties["level"] = 4

        assert event.event_properties["k"] == 1
        assert event.user_properties["level"] == 3

    def test_read_only_mappings_serialize_as_dicts(self):
        """Test that the wire form still holds plain dictionaries."""
        event = build_event(event="e", time=1, event_properties={"k": 1})
        data = event.to_dict()

        assert type(data["event_properties"]) is dict
        assert data["event_properties"] == {"k": 1}

    def test_empty_mappings_are_omitted(self):
        """Test that empty property mappings are left out of the wire format."""
        event = build_event(event="e", user_id="u", session_id="s", time=10)
        assert event.to_dict() == {"event": "e", "user_id": "u", "session_id": "s", "time": 10}

    def test_non_empty_mappings_are_included(self):
        """Test that non-empty property mappings are serialized verbatim."""
        event = build_event(
            event="purchase",
            user_id="u",
            session_id="s",
            time=10,
            event_properties={"price": 9.99, "currency": "USD"},
            user_properties={"platform": "python"},
        )
        data = event.to_dict()

        assert data["event_properties"] == {"price": 9.99, "currency": "USD"}
        assert data["user_properties"] == {"platform": "python"}

    def test_only_one_mapping_present(self):
        """Test that each mapping is omitted independently."""
        event = build_event(event="e", time=1, user_properties={"level": 3})
        data = event.to_dict()
        assert "event_properties" not in data
        assert data["user_properties"] == {"level": 3}

    def test_to_json(self):
        """Test JSON string serialization."""
        event = build_event(event="e", user_id="u", session_id="s", time=5, event_properties={"k": [1, 2]})
        assert json.loads(event.to_json()) == {
            "event": "e",
            "user_id": "u",
            "session_id": "s",
            "time": 5,
            "event_properties": {"k": [1, 2]},
        }

    def test_from_dict(self):
        """Test parsing an event from its wire form."""
        event = Event.from_dict({"event": "e", "user_id": "u", "session_id": "s", "time": 7})
        assert event.time == 7
        assert event.event_properties == {}
        assert event.user_properties == {}

    def test_unserializable_value_raises(self):
        """Test that values JSON cannot encode raise SerializationError."""
        event = build_event(event="e", time=1, event_properties={"obj": object()})
        with pytest.raises(SerializationError):
            event.to_dict()

    def test_serialize_events_keeps_order(self):
        """Test that a batch serializes in order."""
        events = [build_event(event=f"e{i}", time=i) for i in range(3)]
        assert [item["event"] for item in serialize_events(events)] == ["e0", "e1", "e2"]
