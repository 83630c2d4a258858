"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    AUTHENTICATING = auto()
    JOINED = auto()


class StatusKind(Enum):
    NORMAL = "normal"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ConnectionStatusEvent:
    kind: StatusKind
    message: str


# Parsed inbound lines


@dataclass(frozen=True, slots=True)
class ChatMessage:
    sender: str
    channel: str
    body: str
    raw: str = ""


@dataclass(frozen=True, slots=True)
class JoinAck:
    raw: str = ""


@dataclass(frozen=True, slots=True)
class Ping:
    token: str
    raw: str = ""

    def pong(self) -> str:
        return f"PONG {self.token}" if self.token else "PONG"


@dataclass(frozen=True, slots=True)
class Unclassified:
    raw: str = ""


ParsedEvent = ChatMessage | JoinAck | Ping | Unclassified


@dataclass(frozen=True, slots=True)
class OutboundCommand:
    """A raw line waiting in the outbound queue.

    ``is_privmsg`` marks chat messages, which the writer echoes back to the
    consumer as self-sent entries before putting them on the wire.
    """

    raw: str
    is_privmsg: bool = False
    body: str = ""

    @classmethod
    def from_raw(cls, raw: str) -> OutboundCommand:
        if raw.startswith("PRIVMSG #"):
            _, _, body = raw.partition(" :")
            return cls(raw=raw, is_privmsg=True, body=body)
        return cls(raw=raw)

    @classmethod
    def privmsg(cls, channel: str, body: str) -> OutboundCommand:
        return cls(
            raw=f"PRIVMSG #{channel.lstrip('#')} :{body}", is_privmsg=True, body=body
        )


def format_display_name(sender: str) -> str:
    """Upper-case the first character of a sender, leave the rest alone."""
    if not sender:
        return sender
    return sender[0].upper() + sender[1:]


@dataclass(frozen=True, slots=True)
class ChatEntry:
    timestamp: datetime
    display_name: str
    body: str
    is_self: bool = False

    @classmethod
    def from_message(
        cls, message: ChatMessage, is_self: bool = False, now: datetime | None = None
    ) -> ChatEntry:
        return cls(
            timestamp=now or datetime.now(),
            display_name=format_display_name(message.sender),
            body=message.body,
            is_self=is_self,
        )

    def render(self) -> str:
        return f"[{self.timestamp:%H:%M:%S}] {self.display_name}: {self.body}"


@dataclass(frozen=True, slots=True)
class BufferReset:
    """Tells the consumer to clear its line buffer (emitted on disconnect)."""

    reason: str = field(default="disconnect")


InboxEvent = ChatMessage | ChatEntry | ConnectionStatusEvent | BufferReset
