"""Append-only, signature-gated event log."""
from datetime import datetime
from threading import Lock
from typing import List

import structlog

from ..errors import InvalidSignatureError
from ..models import Event, as_utc
from ..verification import AcceptAllVerifier, SignatureVerifier

log = structlog.get_logger()


class EventLog:
    """
    In-memory log of authenticated events.

    Guarantees:
    - Entries are only ever appended; nothing is updated or removed.
    - Iteration order is the order in which appends acquired the lock.
    - Rejected events leave the log untouched.

    The log does not deduplicate event ids, does not reject out-of-order
    timestamps and has no size bound.

    The verifier runs while the lock is held, so a slow verifier delays every
    other append and query on the same log.
    """

    def __init__(self, verifier: SignatureVerifier | None = None):
        self._events: List[Event] = []
        self._lock = Lock()
        self._verifier = verifier or AcceptAllVerifier()

    @property
    def verifier(self) -> SignatureVerifier:
        return self._verifier

    def add_event(self, event: Event) -> None:
        """
        Verify an event's signature and append it to the log.

        Args:
            event: Event to append

        Raises:
            InvalidSignatureError: If the verifier rejects the event
        """
        stored = event.model_copy(deep=True)
        with self._lock:
            if not self._verifier.verify(stored):
                log.warning(
                    "event.rejected",
                    event_id=event.event_id,
                    origin_id=event.origin_id,
                    reason="invalid_signature",
                )
                raise InvalidSignatureError(event.event_id)
            self._events.append(stored)
            size = len(self._events)

        log.info(
            "event.logged",
            event_id=stored.event_id,
            event_type=stored.event_type,
            origin_id=stored.origin_id,
            log_size=size,
        )

    def get_events_since(self, timestamp: datetime) -> List[Event]:
        """
        Return events strictly newer than ``timestamp``.

        Results keep insertion order and are copies of the stored entries.
        """
        since = as_utc(timestamp)
        with self._lock:
            matching = [e for e in self._events if e.timestamp > since]
        return [e.model_copy(deep=True) for e in matching]

    def count(self) -> int:
        """Get total number of logged events."""
        with self._lock:
            return len(self._events)
