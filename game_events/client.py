"""
Game Events Client

Buffers events in memory and sends them to the ingestion backend on request.

Flushing removes events from the buffer before the HTTP request is made. When
the request fails the removed events are dropped, not re-queued: callers that
cannot afford to lose a batch must keep their own copy or log it again.
"""

import logging
import threading
from collections import deque
from typing import Deque, Iterable, List, Optional

import requests

from . import __version__
from .config import DEFAULT_BACKEND_URL, ClientConfig, get_client_config
from .errors import SerializationError, TransportError
from .models import Event, serialize_events
from .session import Session

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
NO_EVENTS_RESPONSE = "No events to send"
USER_AGENT = f"game-events-python/{__version__}"


class Client:
    """Game events SDK client."""

    def __init__(
        self,
        api_key: str,
        backend_url: str = DEFAULT_BACKEND_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            api_key: API key sent as a bearer token
            backend_url: Ingestion endpoint events are POSTed to
            timeout: Request timeout in seconds
            http_session: requests session to reuse, a new one when omitted.
                A session passed in is left unchanged and is not closed by close()
        """
        self._api_key = api_key
        self._backend_url = backend_url
        self.timeout = timeout
        self._owns_http = http_session is None
        if http_session is None:
            http_session = requests.Session()
            http_session.headers.update({"User-Agent": USER_AGENT})
        self.http = http_session
        self._events: Deque[Event] = deque()
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Optional[ClientConfig] = None) -> "Client":
        """Create a client from configuration, loading it when not given."""
        config = config or get_client_config()
        if not config.api_key:
            logger.warning("No API key configured, the backend will likely reject events")
        return cls(api_key=config.api_key, backend_url=config.backend_url, timeout=config.timeout)

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def backend_url(self) -> str:
        return self._backend_url

    def log_event(self, event: Event) -> None:
        """Add an event to the buffer."""
        with self._lock:
            self._events.append(event)

    def log_events(self, events: Iterable[Event]) -> None:
        """Add several events to the buffer, keeping their order."""
        with self._lock:
            self._events.extend(events)

    def log_session(self, session: Session, max_count: int) -> int:
        """Move up to *max_count* of a session's oldest events into the buffer.

        Returns:
            Number of events moved
        """
        events = session.take_events(max_count)
        self.log_events(events)
        return len(events)

    def pending_events_count(self) -> int:
        """Get the number of buffered events."""
        return len(self._events)

    def flush(self) -> str:
        """Send all buffered events in one request.

        Returns:
            Raw response body, or NO_EVENTS_RESPONSE when nothing was buffered

        Raises:
            TransportError: If the request fails or the backend rejects it
            SerializationError: If an event holds a value JSON cannot encode
        """
        events = self._drain()
        if not events:
            return NO_EVENTS_RESPONSE
        return self._send(events)

    def flush_batch(self, batch_size: int) -> str:
        """Send at most *batch_size* of the oldest buffered events.

        The remaining events stay buffered for a later call.
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        events = self._drain(batch_size)
        if not events:
            return NO_EVENTS_RESPONSE
        return self._send(events)

    def _drain(self, max_count: Optional[int] = None) -> List[Event]:
        with self._lock:
            count = len(self._events)
            if max_count is not None:
                count = min(count, max_count)
            return [self._events.popleft() for _ in range(count)]

    def _send(self, events: List[Event]) -> str:
        logger.debug("Flushing %d events to %s", len(events), self._backend_url)

        try:
            payload = serialize_events(events)
        except SerializationError:
            logger.warning("Dropped %d events that could not be serialized", len(events))
            raise

        try:
            response = self.http.post(
                self._backend_url,
                json=payload,
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.warning("Dropped %d events, request to %s failed: %s", len(events), self._backend_url, exc)
            raise TransportError(f"Failed to send {len(events)} events: {exc}") from exc

        if not response.ok:
            logger.warning(
                "Dropped %d events, backend responded with HTTP %d", len(events), response.status_code
            )
            raise TransportError(
                f"Backend rejected {len(events)} events with HTTP {response.status_code}",
                status_code=response.status_code,
                response_text=response.text,
            )

        logger.info("Sent %d events (HTTP %d)", len(events), response.status_code)
        return response.text

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
