"""Domain events and the in-process event bus.

Publishing is fire-and-forget: a failing subscriber is logged and never
affects the publisher.
"""

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TradesImportedEvent:
    """Trades were committed by an import call."""

    count: int
    account_id: int


@dataclass(frozen=True)
class FileDetectedEvent:
    """The folder watcher found a candidate file."""

    file_path: str
    file_size: int
    detected_at: datetime


@dataclass(frozen=True)
class FileProcessedEvent:
    """A watched file was imported successfully."""

    file_path: str
    imported_count: int
    skipped_count: int
    duration: timedelta


@dataclass(frozen=True)
class FileErrorEvent:
    """A watched file could not be imported."""

    file_path: str
    error_message: str
    exception: Optional[BaseException] = None


Handler = Callable[[object], None]


class EventBus:
    """Minimal synchronous publish/subscribe bus keyed by event type."""

    def __init__(self):
        self._handlers: dict[type, list[Handler]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, event_type: type, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for ``event_type``.

        Returns:
            A callable that removes the subscription again
        """
        with self._lock:
            self._handlers[event_type].append(handler)

        def unsubscribe() -> None:
            with self._lock:
                if handler in self._handlers[event_type]:
                    self._handlers[event_type].remove(handler)

        return unsubscribe

    def publish(self, event: object) -> None:
        """Deliver ``event`` to every handler subscribed to its type."""
        with self._lock:
            handlers = list(self._handlers.get(type(event), ()))

        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception("Event handler failed for %s", type(event).__name__)
