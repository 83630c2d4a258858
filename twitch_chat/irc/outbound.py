"""Writer worker: throttled queue in, socket bytes out."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from ..errors import ReadError
from ..logs.logger import logger
from .models import OutboundCommand
from .rate_limited_queue import RateLimitedQueue
from .worker import IRCWorker


class OutboundLoop(IRCWorker):
    """Sends queued commands at most once per throttle interval.

    A PRIVMSG is echoed to ``on_self_message`` before it is written, so the
    sender sees their own line whether or not the server echoes it.
    """

    name = "outbound"

    def __init__(
        self,
        sock,
        queue: RateLimitedQueue,
        stop_event: threading.Event,
        on_self_message: Callable[[OutboundCommand], None],
        on_failure: Callable[[IRCWorker, ReadError], None],
        user: str | None = None,
    ) -> None:
        super().__init__(sock, stop_event, on_failure, user=user)
        self.queue = queue
        self.on_self_message = on_self_message

    def run(self) -> None:
        while not self.stop_event.is_set():
            command = self.queue.wait_next(self.stop_event)
            if command is None:
                break
            if not self.send(command):
                break

    def send(self, command: OutboundCommand) -> bool:
        if command.is_privmsg:
            self.on_self_message(command)
        try:
            self.sock.sendall(f"{command.raw}\r\n".encode("utf-8"))
        except OSError as e:
            error = ReadError(
                "Error while writing IRC output.", data={"direction": "write"}
            )
            error.__cause__ = e
            self._fail(error)
            return False
        logger.log_event(
            "outbound",
            "send",
            level=logging.DEBUG,
            user=self.user,
            command=command.raw.split(" ", 1)[0],
        )
        return True
