"""Hand-off of worker-thread events to the consumer thread."""

from __future__ import annotations

import threading
from collections.abc import Callable

from .models import InboxEvent


class EventInbox:
    """Locked list of pending events.

    Worker threads ``put``; the consumer claims everything pending with a
    single ``drain`` and processes it outside the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: list[InboxEvent] = []

    def put(self, event: InboxEvent) -> None:
        with self._lock:
            self._pending.append(event)

    def drain(self) -> list[InboxEvent]:
        with self._lock:
            events, self._pending = self._pending, []
        return events

    def discard(self, predicate: Callable[[InboxEvent], bool]) -> int:
        """Remove pending events matching ``predicate``; return how many."""
        with self._lock:
            kept = [e for e in self._pending if not predicate(e)]
            dropped = len(self._pending) - len(kept)
            self._pending = kept
        return dropped

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)
