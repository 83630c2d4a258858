"""Event-template logger used across the chat client."""

from __future__ import annotations

import logging
import os

from .event_catalog import EVENT_TEMPLATES

_EVENT_COLUMN_WIDTH = 28
_PREFIX_WIDTH = 24


class ChatLogger:
    """Thin wrapper over a stdlib logger that renders catalog events.

    Events are addressed by ``(domain, action)``; the human text comes from
    ``event_templates.json`` formatted with the keyword context, or from the
    explicit ``human`` argument. ``user`` and ``channel`` are reserved and
    end up in the aligned ``[nick#channel]`` prefix.
    """

    def __init__(self, name: str = "twitch_chat") -> None:
        self.logger = logging.getLogger(name)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        event_name = f"{domain}_{action}".lower()
        human_text = human
        derived = False
        if human_text is None:
            template = EVENT_TEMPLATES.get((domain, action))
            if template:
                try:
                    human_text = template.format(**kwargs)
                except (KeyError, IndexError, ValueError):
                    human_text = template
            else:
                human_text = f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}"
                derived = True
        if derived:
            kwargs.setdefault("derived", True)
        self._log(level, event_name, human_text, exc_info=exc_info, **kwargs)

    def _log(
        self,
        level: int,
        event_name: str,
        human_text: str | None,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        kw: dict[str, object] = dict(kwargs)
        user, channel = self._extract_reserved(kw)
        prefix = self._build_prefix(user, channel)
        if event_name == "irc_privmsg" and human_text and channel:
            human_text = f"#{channel} {human_text}"
        msg = (
            self._build_debug_message(event_name, prefix, human_text, kw)
            if self._is_debug_enabled()
            else f"{prefix} {human_text or event_name}"
        )
        self.logger.log(level, msg, exc_info=exc_info)

    @staticmethod
    def _is_debug_enabled() -> bool:
        return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")

    @staticmethod
    def _extract_reserved(kwargs: dict[str, object]) -> tuple[str | None, str | None]:
        user_o = kwargs.pop("user", None)
        channel_o = kwargs.pop("channel", None)
        user = user_o if isinstance(user_o, str) and user_o else None
        channel = channel_o if isinstance(channel_o, str) and channel_o else None
        return user, channel

    @staticmethod
    def _build_prefix(user: str | None, channel: str | None) -> str:
        user_label = user or "system"
        core = f"{user_label}#{channel}" if channel else user_label
        padded = core.ljust(_PREFIX_WIDTH)[:_PREFIX_WIDTH]
        return f"[{padded}]"

    @staticmethod
    def _build_debug_message(
        event_name: str,
        prefix: str,
        human_text: str | None,
        kwargs: dict[str, object],
    ) -> str:
        context = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        if len(event_name) <= _EVENT_COLUMN_WIDTH:
            ev = event_name.ljust(_EVENT_COLUMN_WIDTH)
        else:
            ev = event_name[: _EVENT_COLUMN_WIDTH - 1] + "~"
        base = f"{ev} {prefix}"
        if human_text:
            base = f"{base} {human_text}"
        if context:
            base = f"{base} ({context})"
        return base


logger = ChatLogger()
