"""Error taxonomy and structured error logging."""

from .handling import log_error
from .internal import ChatError, ConfigError, ConnectError, ReadError

__all__ = ["ChatError", "ConfigError", "ConnectError", "ReadError", "log_error"]
