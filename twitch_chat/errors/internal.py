"""Centralized chat client error hierarchy.

These exceptions give semantic categories to the failures the connection
core can hit. They never cross the consumer boundary: the connection
manager catches them and turns them into status events.

Classes:
  ChatError     – Base for all client errors.
  ConfigError   – Missing or blank credential field (no connection attempted).
  ConnectError  – The TCP connection could not be established.
  ReadError     – I/O failure on an established connection.
"""

from __future__ import annotations

from collections.abc import Mapping


class ChatError(Exception):
    """Base class for all chat client errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class ConfigError(ChatError):
    """Raised when a credential field is missing or blank.

    ``data["missing"]`` lists the offending field names.
    """


class ConnectError(ChatError):
    """Raised when the socket to the IRC gateway cannot be opened."""


class ReadError(ChatError):
    """Raised for I/O failures on an established connection.

    Covers both directions; ``data["direction"]`` is ``"read"`` or ``"write"``.
    """


__all__ = [
    "ChatError",
    "ConfigError",
    "ConnectError",
    "ReadError",
]
