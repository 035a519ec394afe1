"""
Session

Groups events under one user/session identity and attaches the session's
user properties to every event created while grouped.
"""

import threading
import uuid
from collections import deque
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Deque, Dict, List, Optional

from .errors import ConstructionError
from .event_factory import EventFactory, default_factory
from .models import Event

# Event property keys that override the session identifiers for one event
USER_ID_OVERRIDE_KEY = "user_id"
SESSION_ID_OVERRIDE_KEY = "session_id"


def generate_id() -> str:
    """Return a fresh random identifier in 36-character UUID4 form."""
    return str(uuid.uuid4())


class Session:
    """Holds session-level user properties and a FIFO buffer of pending events."""

    def __init__(
        self,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
        user_properties: Optional[Mapping] = None,
        factory: Optional[EventFactory] = None,
    ):
        """Initialize the session.

        Args:
            user_id: User identifier, generated when omitted
            session_id: Session identifier, generated when omitted
            user_properties: Initial user properties
            factory: Event factory, the module default when omitted
        """
        self._user_id = user_id if user_id is not None else generate_id()
        self._session_id = session_id if session_id is not None else generate_id()
        self._user_properties: Dict[str, Any] = dict(user_properties or {})
        self._factory = factory or default_factory
        self._events: Deque[Event] = deque()
        self._lock = threading.Lock()

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def user_properties(self) -> Mapping:
        """Read-only view of the session's user properties."""
        return MappingProxyType(self._user_properties)

    def set_user_property(self, key: str, value: Any) -> None:
        """Add or update a single user property."""
        with self._lock:
            self._user_properties[key] = value

    def set_user_properties(self, user_properties: Mapping) -> None:
        """Replace all user properties."""
        with self._lock:
            self._user_properties = dict(user_properties)

    def _resolve_id(self, event_properties: Mapping, key: str, fallback: str) -> str:
        value = event_properties.get(key)
        return value if isinstance(value, str) else fallback

    def event(self, name: str, event_properties: Optional[Mapping] = None) -> Event:
        """Create an event carrying this session's identity without buffering it.

        A string ``user_id`` or ``session_id`` entry in *event_properties*
        replaces the session's identifier for this event only. The entries
        stay in the event properties.
        """
        if event_properties is None:
            event_properties = {}
        elif not isinstance(event_properties, Mapping):
            raise ConstructionError(
                f"event_properties must be a mapping, got {type(event_properties).__name__}"
            )

        # EventFactory deep-copies user_properties
        with self._lock:
            return self._factory.build(
                event=name,
                user_id=self._resolve_id(event_properties, USER_ID_OVERRIDE_KEY, self._user_id),
                session_id=self._resolve_id(event_properties, SESSION_ID_OVERRIDE_KEY, self._session_id),
                event_properties=event_properties,
                user_properties=self._user_properties,
            )

    def push_event(self, name: str, event_properties: Optional[Mapping] = None) -> Event:
        """Create an event and append it to the session buffer.

        Returns:
            The event that was buffered
        """
        event = self.event(name, event_properties)
        with self._lock:
            self._events.append(event)
        return event

    def take_events(self, max_count: int) -> List[Event]:
        """Remove and return up to *max_count* of the oldest buffered events."""
        taken: List[Event] = []
        with self._lock:
            while self._events and len(taken) < max_count:
                taken.append(self._events.popleft())
        return taken

    def pending_events_count(self) -> int:
        return len(self._events)

    def __repr__(self) -> str:
        return (
            f"Session(user_id={self._user_id!r}, session_id={self._session_id!r}, "
            f"pending={len(self._events)})"
        )
