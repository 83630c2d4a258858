"""Reader worker: socket bytes in, classified events routed out."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from ..constants import MAX_LINE_LENGTH, RECV_BUFFER_SIZE
from ..errors import ReadError
from ..logs.logger import logger
from .models import ChatMessage, JoinAck, Ping
from .parser import parse_line
from .rate_limited_queue import RateLimitedQueue
from .worker import IRCWorker


class InboundLoop(IRCWorker):
    """Reads lines from the socket until stopped.

    Reads block for at most the socket timeout, after which the stop flag
    is re-checked. Each line is classified and routed:

    - chat messages go to ``on_chat`` (the consumer hand-off)
    - the registration reply queues ``JOIN #<channel>`` then calls
      ``on_registered``
    - ``PING`` queues the matching ``PONG``
    - anything else is dropped
    """

    name = "inbound"

    def __init__(
        self,
        sock,
        queue: RateLimitedQueue,
        channel: str,
        stop_event: threading.Event,
        on_chat: Callable[[ChatMessage], None],
        on_registered: Callable[[], None],
        on_failure: Callable[[IRCWorker, ReadError], None],
        user: str | None = None,
        recv_size: int = RECV_BUFFER_SIZE,
        max_line_length: int = MAX_LINE_LENGTH,
    ) -> None:
        super().__init__(sock, stop_event, on_failure, user=user)
        self.queue = queue
        self.channel = channel
        self.on_chat = on_chat
        self.on_registered = on_registered
        self.recv_size = recv_size
        self.max_line_length = max_line_length
        self._buffer = bytearray()
        self._discarding = False

    def run(self) -> None:
        while not self.stop_event.is_set():
            try:
                data = self.sock.recv(self.recv_size)
            except TimeoutError:
                continue
            except OSError as e:
                error = ReadError(
                    "Error while reading IRC input.", data={"direction": "read"}
                )
                error.__cause__ = e
                self._fail(error)
                break
            if not data:
                self._fail(
                    ReadError(
                        "Connection closed by server.", data={"direction": "read"}
                    )
                )
                break
            self.feed(data)

    def feed(self, data: bytes) -> None:
        """Append received bytes and handle every complete line.

        A partial line longer than ``max_line_length`` is dropped, along with
        the rest of it up to the next terminator.
        """
        self._buffer.extend(data)
        start = 0
        while True:
            end = self._buffer.find(b"\n", start)
            if end < 0:
                break
            line = bytes(self._buffer[start:end])
            start = end + 1
            if self._discarding:
                self._discarding = False
                continue
            text = line.rstrip(b"\r").decode("utf-8", errors="replace")
            if text:
                self.handle_line(text)
        del self._buffer[:start]

        if len(self._buffer) > self.max_line_length:
            if not self._discarding:
                logger.log_event(
                    "irc",
                    "line_too_long",
                    level=logging.WARNING,
                    user=self.user,
                    limit=self.max_line_length,
                )
            self._buffer.clear()
            self._discarding = True

    def handle_line(self, raw: str) -> None:
        event = parse_line(raw)
        if isinstance(event, ChatMessage):
            self.on_chat(event)
        elif isinstance(event, JoinAck):
            self.queue.enqueue_command(f"JOIN #{self.channel}")
            self.on_registered()
        elif isinstance(event, Ping):
            self.queue.enqueue_command(event.pong())
            logger.log_event("irc", "ping", level=logging.DEBUG, user=self.user)
        else:
            logger.log_event(
                "irc", "unclassified", level=logging.DEBUG, user=self.user, line=raw[:80]
            )
