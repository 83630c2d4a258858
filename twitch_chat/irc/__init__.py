"""IRC subsystem package.

Contains parsing, the throttled outbound queue, the reader/writer worker
loops, the consumer-side line buffer and the connection manager that ties
them together.
"""

from .connection_manager import ConnectionManager  # noqa: F401
from .inbound import InboundLoop  # noqa: F401
from .inbox import EventInbox  # noqa: F401
from .line_buffer import LineBuffer  # noqa: F401
from .models import (  # noqa: F401
    BufferReset,
    ChatEntry,
    ChatMessage,
    ConnectionState,
    ConnectionStatusEvent,
    JoinAck,
    OutboundCommand,
    ParsedEvent,
    Ping,
    StatusKind,
    Unclassified,
    format_display_name,
)
from .outbound import OutboundLoop  # noqa: F401
from .parser import parse_line  # noqa: F401
from .rate_limited_queue import RateLimitedQueue  # noqa: F401

__all__ = [
    "BufferReset",
    "ChatEntry",
    "ChatMessage",
    "ConnectionManager",
    "ConnectionState",
    "ConnectionStatusEvent",
    "EventInbox",
    "InboundLoop",
    "JoinAck",
    "LineBuffer",
    "OutboundCommand",
    "OutboundLoop",
    "ParsedEvent",
    "Ping",
    "RateLimitedQueue",
    "StatusKind",
    "Unclassified",
    "format_display_name",
    "parse_line",
]
