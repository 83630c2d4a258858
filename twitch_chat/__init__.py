"""Minimal Twitch IRC chat client: one channel, throttled sends, status events."""

from .config import ChatConfig, Credentials
from .irc import ChatEntry, ConnectionManager, ConnectionState, StatusKind

__version__ = "1.0.0"

__all__ = [
    "ChatConfig",
    "ChatEntry",
    "ConnectionManager",
    "ConnectionState",
    "Credentials",
    "StatusKind",
]
