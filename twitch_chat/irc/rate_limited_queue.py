"""Throttled FIFO of outbound IRC lines."""

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Callable

from .models import OutboundCommand


class RateLimitedQueue:
    """FIFO of ``OutboundCommand`` with a minimum gap between dequeues.

    Producers are the consumer thread (chat sends) and the reader thread
    (JOIN, PONG); the writer thread is the only consumer. The first dequeue
    is never delayed; every later one waits until ``interval`` seconds have
    passed since the previous dequeue. Order is strictly FIFO.

    Args:
        interval: Minimum seconds between two dequeues.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self, interval: float, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.interval = interval
        self._clock = clock
        self._items: deque[OutboundCommand] = deque()
        self._cond = threading.Condition()
        self._last_dequeue: float | None = None

    def enqueue(self, command: OutboundCommand) -> None:
        with self._cond:
            self._items.append(command)
            self._cond.notify_all()

    def enqueue_command(self, raw: str) -> OutboundCommand:
        command = OutboundCommand.from_raw(raw)
        self.enqueue(command)
        return command

    def enqueue_chat_message(self, channel: str, body: str) -> OutboundCommand:
        command = OutboundCommand.privmsg(channel, body)
        self.enqueue(command)
        return command

    def _remaining_locked(self, now: float) -> float:
        if self._last_dequeue is None:
            return 0.0
        return max(0.0, self.interval - (now - self._last_dequeue))

    def pop_ready(self) -> OutboundCommand | None:
        """Dequeue the front command if the throttle allows it, else ``None``."""
        with self._cond:
            if not self._items:
                return None
            now = self._clock()
            if self._remaining_locked(now) > 0:
                return None
            self._last_dequeue = now
            return self._items.popleft()

    def wait_next(
        self, stop_event: threading.Event, poll_interval: float = 0.5
    ) -> OutboundCommand | None:
        """Block until a command may be sent or ``stop_event`` is set.

        Returns ``None`` once stopped. ``wake()`` interrupts the wait so a
        stop is observed without waiting out the poll interval.
        """
        with self._cond:
            while not stop_event.is_set():
                if self._items:
                    now = self._clock()
                    remaining = self._remaining_locked(now)
                    if remaining <= 0:
                        self._last_dequeue = now
                        return self._items.popleft()
                    self._cond.wait(remaining)
                else:
                    self._cond.wait(poll_interval)
        return None

    def wake(self) -> None:
        with self._cond:
            self._cond.notify_all()

    def clear(self) -> int:
        with self._cond:
            dropped = len(self._items)
            self._items.clear()
            return dropped

    def snapshot(self) -> list[str]:
        with self._cond:
            return [item.raw for item in self._items]

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)
