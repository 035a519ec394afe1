"""
Event Factory

Builds Event values, filling in defaults for any field the caller leaves unset.
"""

import copy
import time as _time
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from .errors import ClockError, ConstructionError
from .models import Event

Clock = Callable[[], float]


def current_unix_time(clock: Clock = _time.time) -> int:
    """Return the current wall-clock time in whole seconds since the Unix epoch.

    Raises:
        ClockError: If the clock reports a time before the epoch
    """
    now = clock()
    if now < 0:
        raise ClockError(f"Time went backwards: clock reported {now} seconds since the epoch")
    return int(now)


def _copy_mapping(value: Optional[Mapping], field_name: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConstructionError(f"{field_name} must be a mapping, got {type(value).__name__}")
    return copy.deepcopy(dict(value))


class EventFactory:
    """Creates events, reading the clock only when no time is supplied."""

    def __init__(self, clock: Clock = _time.time):
        """Initialize the factory.

        Args:
            clock: Callable returning seconds since the Unix epoch
        """
        self.clock = clock

    def build(
        self,
        event: str = "",
        user_id: str = "",
        session_id: str = "",
        time: Optional[int] = None,
        event_properties: Optional[Mapping] = None,
        user_properties: Optional[Mapping] = None,
    ) -> Event:
        """Build a single event.

        Args:
            event: Event name
            user_id: User identifier
            session_id: Session identifier
            time: Unix seconds; the current time is used when omitted
            event_properties: Event-specific properties, copied into the event
            user_properties: User properties, copied into the event

        Returns:
            The new Event

        Raises:
            ConstructionError: If a field has the wrong type
            ClockError: If time is omitted and the clock is before the epoch
        """
        fields = {
            "event": event,
            "user_id": user_id,
            "session_id": session_id,
            "event_properties": _copy_mapping(event_properties, "event_properties"),
            "user_properties": _copy_mapping(user_properties, "user_properties"),
        }
        fields["time"] = current_unix_time(self.clock) if time is None else time

        try:
            return Event(**fields)
        except ValidationError as exc:
            raise ConstructionError(f"Invalid event '{event}': {exc}") from exc


default_factory = EventFactory()


def build_event(**fields: Any) -> Event:
    """Build an event with the module's default factory.

    Accepts the same keyword arguments as ``EventFactory.build``.
    """
    return default_factory.build(**fields)
