from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import ChatError, ConfigError, ConnectError, ReadError


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    The error category is derived from the exception type so the error
    aggregator can group failures (config, connect, io).

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    error_type = "unknown"
    if isinstance(error, ConfigError):
        error_type = "config"
    elif isinstance(error, ConnectError):
        error_type = "connect"
    elif isinstance(error, ReadError | OSError | ConnectionError):
        error_type = "io"
    elif isinstance(error, ChatError):
        error_type = "internal"

    merged: dict = {}
    if isinstance(error, ChatError):
        merged.update(error.data)
    if context:
        merged.update(context)

    log_structured_error(
        error_type=error_type,
        message=f"{message}: {str(error)}",
        exception=error,
        context=merged or None,
    )
