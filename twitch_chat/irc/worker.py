"""Base for the per-connection I/O worker threads."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from ..errors import ReadError
from ..logs.logger import logger


class IRCWorker:
    """Owns one daemon thread running ``run()`` until ``stop_event`` is set.

    Workers read from or write to the socket but never close it; the
    connection manager closes it after stopping and joining them.
    """

    name = "worker"

    def __init__(
        self,
        sock,
        stop_event: threading.Event,
        on_failure: Callable[[IRCWorker, ReadError], None],
        user: str | None = None,
    ) -> None:
        self.sock = sock
        self.stop_event = stop_event
        self.on_failure = on_failure
        self.user = user
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        self._thread = threading.Thread(
            target=self._run_logged, name=f"irc-{self.name}", daemon=True
        )
        self._thread.start()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the thread to finish. Returns ``True`` if it stopped."""
        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return True
        thread.join(timeout)
        return not thread.is_alive()

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run_logged(self) -> None:
        logger.log_event(
            "irc", "worker_started", level=logging.DEBUG, user=self.user, worker=self.name
        )
        try:
            self.run()
        finally:
            logger.log_event(
                "irc", "worker_stopped", level=logging.DEBUG, user=self.user, worker=self.name
            )

    def run(self) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def _fail(self, error: ReadError) -> None:
        if self.stop_event.is_set():
            return
        self.on_failure(self, error)
