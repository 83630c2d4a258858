"""IRC line classification.

Only the handful of shapes the client reacts to are recognized; everything
else comes back as ``Unclassified`` and is dropped by the caller.
"""

from __future__ import annotations

from .models import ChatMessage, JoinAck, ParsedEvent, Ping, Unclassified

RPL_WELCOME = "001"


def strip_tags(line: str) -> str | None:
    """Drop a leading ``@tags`` segment. ``None`` if nothing follows it."""
    if not line.startswith("@"):
        return line
    _, sep, rest = line.partition(" ")
    if not sep:
        return None
    return rest.lstrip()


def parse_line(raw: str) -> ParsedEvent:
    """Classify one raw IRC line (terminator already removed).

    >>> parse_line(":nick!user@host PRIVMSG #chan :hello")
    ChatMessage(sender='nick', channel='chan', body='hello', raw=':nick!user@host PRIVMSG #chan :hello')
    """
    if not raw:
        return Unclassified(raw)

    # Bare PING carries no prefix, so check the untouched line.
    if raw.startswith("PING"):
        return Ping(token=raw[4:].strip(), raw=raw)

    line = strip_tags(raw)
    if not line or not line.startswith(":"):
        return Unclassified(raw)

    parts = line[1:].split(" ", 2)
    if len(parts) < 2:
        return Unclassified(raw)
    prefix, command = parts[0], parts[1]
    rest = parts[2] if len(parts) > 2 else ""

    if command == "PRIVMSG":
        return _build_chat_message(raw, prefix, rest)
    if command == RPL_WELCOME:
        return JoinAck(raw)
    return Unclassified(raw)


def _build_chat_message(raw: str, prefix: str, rest: str) -> ParsedEvent:
    target, sep, body = rest.partition(" :")
    if not sep:
        # Single-word trailing parameter without the colon.
        target, sep, body = rest.partition(" ")
    target = target.strip()
    if not sep or not target:
        return Unclassified(raw)
    sender = prefix.split("!", 1)[0]
    if not sender:
        return Unclassified(raw)
    return ChatMessage(
        sender=sender, channel=target.lstrip("#").lower(), body=body, raw=raw
    )
