"""Bounded chat history owned by the consumer thread."""

from __future__ import annotations

from collections.abc import Iterator

from .models import ChatEntry


class LineBuffer:
    """Fixed-capacity ring buffer of ``ChatEntry``.

    Appending to a full buffer overwrites the oldest entry. Iteration runs
    oldest to newest. Not thread-safe: only the consumer thread touches it.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._slots: list[ChatEntry | None] = [None] * capacity
        self._head = 0  # index of the oldest entry
        self._count = 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def append(self, entry: ChatEntry) -> None:
        if self._count == self.capacity:
            self._slots[self._head] = entry
            self._head = (self._head + 1) % self.capacity
            return
        self._slots[(self._head + self._count) % self.capacity] = entry
        self._count += 1

    def clear(self) -> None:
        self._slots = [None] * self.capacity
        self._head = 0
        self._count = 0

    def latest(self) -> ChatEntry | None:
        if not self._count:
            return None
        return self._slots[(self._head + self._count - 1) % self.capacity]

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[ChatEntry]:
        for offset in range(self._count):
            yield self._slots[(self._head + offset) % self.capacity]

    def __bool__(self) -> bool:
        return self._count > 0
