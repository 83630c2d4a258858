"""
Configuration constants for the Twitch IRC chat client

This module contains the defaults used throughout the client.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Attempts to parse the environment variable as a float. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes")


# IRC gateway
IRC_HOST = os.getenv("IRC_HOST", "irc.chat.twitch.tv")
IRC_PORT = _get_env_int("IRC_PORT", 6667)

# Chat buffer
MAX_MESSAGES = _get_env_int("MAX_MESSAGES", 60)  # Entries kept in the line buffer

# Outbound throttle
THROTTLE_INTERVAL_SECONDS = _get_env_float(
    "THROTTLE_INTERVAL_SECONDS", 1.75
)  # Minimum gap between two outbound sends

# Socket timeouts
CONNECT_TIMEOUT_SECONDS = _get_env_float(
    "CONNECT_TIMEOUT_SECONDS", 10.0
)  # TCP connect timeout
READ_TIMEOUT_SECONDS = _get_env_float(
    "READ_TIMEOUT_SECONDS", 1.0
)  # Upper bound on how long a reader waits before re-checking its stop flag
WORKER_JOIN_TIMEOUT_SECONDS = _get_env_float(
    "WORKER_JOIN_TIMEOUT_SECONDS", 2.0
)  # Bounded wait for worker threads on disconnect
RECV_BUFFER_SIZE = _get_env_int("RECV_BUFFER_SIZE", 4096)
MAX_LINE_LENGTH = _get_env_int(
    "MAX_LINE_LENGTH", 8192
)  # Bytes buffered without a line terminator before the partial line is dropped

# Reconnect/backoff
AUTO_RECONNECT = _get_env_bool("AUTO_RECONNECT", True)
RECONNECT_MAX_ATTEMPTS = _get_env_int(
    "RECONNECT_MAX_ATTEMPTS", 5
)  # Maximum reconnection attempts after a dropped connection
RECONNECT_BACKOFF_BASE_SECONDS = _get_env_float(
    "RECONNECT_BACKOFF_BASE_SECONDS", 1.0
)  # Exponential backoff multiplier
RECONNECT_BACKOFF_MAX_SECONDS = _get_env_float(
    "RECONNECT_BACKOFF_MAX_SECONDS", 30.0
)  # Maximum backoff time in seconds

# Consumer loop
PUMP_INTERVAL_SECONDS = _get_env_float(
    "PUMP_INTERVAL_SECONDS", 0.1
)  # How often the console consumer drains inbound events
