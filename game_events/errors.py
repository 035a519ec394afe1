"""
Error types raised by the game-events SDK.
"""

from typing import Optional


class GameEventsError(Exception):
    """Base class for all SDK errors."""


class ConstructionError(GameEventsError):
    """Raised when an event cannot be built from the supplied fields."""


class ClockError(GameEventsError):
    """Raised when the system clock reports a time before the Unix epoch."""


class SerializationError(GameEventsError):
    """Raised when buffered events cannot be encoded as JSON."""


class TransportError(GameEventsError):
    """Raised when a flush could not deliver its batch to the backend."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text
