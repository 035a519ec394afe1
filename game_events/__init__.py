"""
Game Events SDK

Client-side telemetry: build events, group them in sessions and send them to
the ingestion backend in batches.
"""

__version__ = "0.1.0"

from .errors import (
    GameEventsError,
    ConstructionError,
    ClockError,
    SerializationError,
    TransportError,
)
from .models import Event, serialize_events
from .event_factory import EventFactory, build_event, current_unix_time
from .session import Session, generate_id
from .config import (
    DEFAULT_BACKEND_URL,
    ClientConfig,
    ConfigManager,
    LoggingConfig,
    get_client_config,
    get_logging_config,
    reload_config,
)
from .client import Client, NO_EVENTS_RESPONSE
from .logging_config import setup_logging, stop_logging, get_logger

__all__ = [
    # Errors
    "GameEventsError",
    "ConstructionError",
    "ClockError",
    "SerializationError",
    "TransportError",

    # Events
    "Event",
    "serialize_events",
    "EventFactory",
    "build_event",
    "current_unix_time",

    # Sessions
    "Session",
    "generate_id",

    # Client
    "Client",
    "NO_EVENTS_RESPONSE",
    "DEFAULT_BACKEND_URL",

    # Configuration
    "ClientConfig",
    "ConfigManager",
    "LoggingConfig",
    "get_client_config",
    "get_logging_config",
    "reload_config",

    # Logging
    "setup_logging",
    "stop_logging",
    "get_logger",
]
