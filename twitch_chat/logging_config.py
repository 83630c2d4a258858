"""
Logging configuration for the Twitch IRC chat client.

``LoggerConfigurator`` sets up the root logger with a colorlog console
handler. ``log_structured_error`` writes categorized error lines and feeds
the session error tally, which is summarized when the user disconnects and
once more at exit.
"""

import atexit
import logging
import os
import sys
import threading
from collections import Counter
from typing import Any

import colorlog


class ErrorAggregator:
    """Tally of connection trouble for the current chat session.

    Counts errors per category (``config``, ``connect``, ``io``, ...) and
    reconnect attempts, and remembers the last message of each category.
    The connection manager logs and resets it when the user disconnects.
    """

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.error_counts: Counter[str] = Counter()
        self.last_errors: dict[str, str] = {}
        self.reconnects = 0

    def record_error(self, error_type: str, message: str) -> None:
        with self.lock:
            self.error_counts[error_type] += 1
            self.last_errors[error_type] = message

    def record_reconnect(self) -> None:
        with self.lock:
            self.reconnects += 1

    def counts(self) -> dict[str, int]:
        with self.lock:
            return dict(self.error_counts)

    def is_empty(self) -> bool:
        with self.lock:
            return not self.error_counts and not self.reconnects

    def reset(self) -> None:
        with self.lock:
            self.error_counts.clear()
            self.last_errors.clear()
            self.reconnects = 0

    def summary(self) -> str:
        """One line like ``2 reconnect attempt(s); io=2 (last: ...)``."""
        with self.lock:
            parts = []
            if self.reconnects:
                parts.append(f"{self.reconnects} reconnect attempt(s)")
            for error_type, count in sorted(self.error_counts.items()):
                parts.append(f"{error_type}={count} (last: {self.last_errors[error_type]})")
            return "; ".join(parts)

    def log_summary_report(self) -> None:
        if self.is_empty():
            logging.info("No errors recorded in current session")
            return
        logging.warning(f"Session error summary: {self.summary()}")


# Global error aggregator instance
error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: Exception | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log ``[TYPE] message | Exception: ... | Context: k=v`` and tally it.

    Args:
        error_type: Category of the error (e.g. 'connect', 'io', 'config')
        message: Descriptive error message
        exception: The exception that occurred (optional)
        context: Additional key/value pairs appended to the line
        level: Logging level (default: ERROR)
    """
    parts = [f"[{error_type.upper()}] {message}"]
    if exception is not None:
        parts.append(f"Exception: {type(exception).__name__}: {exception}")
    if context:
        parts.append("Context: " + " | ".join(f"{k}={v}" for k, v in context.items()))
    logging.log(level, " | ".join(parts))
    error_aggregator.record_error(error_type, message)


class LoggerConfigurator:
    """Configures the root logger with a colorlog console handler.

    Config keys (all optional):
        stream: Output stream, ``sys.stderr`` by default.
        level: Explicit log level; otherwise ``DEBUG`` env selects DEBUG/INFO.
        show_threads: Include the thread name column (on by default, the
            reader and writer run on their own threads).
    """

    def __init__(self, config=None):
        self.config = config or {}

    def _resolve_level(self) -> int:
        if "level" in self.config:
            return self.config["level"]
        debug_env = os.environ.get("DEBUG", "").lower()
        return logging.DEBUG if debug_env in ("true", "1", "yes") else logging.INFO

    def configure(self) -> int:
        log_level = self._resolve_level()
        thread_column = "%(threadName)-12s " if self.config.get("show_threads", True) else ""

        formatter = colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s "
            f"{thread_column}%(message_log_color)s%(message)s",
            datefmt="%H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "magenta",
            },
            secondary_log_colors={"message": {"ERROR": "red", "CRITICAL": "magenta"}},
        )

        handler = logging.StreamHandler(self.config.get("stream", sys.stderr))
        handler.setFormatter(formatter)
        logging.basicConfig(level=log_level, handlers=[handler], force=True)

        atexit.unregister(error_aggregator.log_summary_report)
        atexit.register(error_aggregator.log_summary_report)
        return log_level
