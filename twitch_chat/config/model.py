from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .. import constants


class Credentials(BaseModel):
    """Token, nickname and channel for one connection attempt.

    Construction never fails on blank fields: the connection manager reports
    them as a configuration error status instead. Values are normalized:

    - surrounding whitespace stripped from every field
    - channel lower-cased without a leading ``#``
    - token prefixed with ``oauth:`` when the prefix is missing
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    token: str = ""
    nickname: str = ""
    channel: str = ""

    @field_validator("channel", mode="after")
    @classmethod
    def normalize_channel(cls, v: str) -> str:
        return v.lstrip("#").strip().lower()

    @field_validator("token", mode="after")
    @classmethod
    def normalize_token(cls, v: str) -> str:
        if v and not v.startswith("oauth:"):
            return f"oauth:{v}"
        return v

    def missing_fields(self) -> list[str]:
        """Names of the fields that are empty after normalization."""
        missing = []
        if not self.token or self.token == "oauth:":
            missing.append("token")
        if not self.nickname:
            missing.append("nickname")
        if not self.channel:
            missing.append("channel")
        return missing

    @property
    def login(self) -> str:
        """Nickname as sent in ``NICK`` (Twitch logins are lower-case)."""
        return self.nickname.lower()

    def redacted(self) -> dict[str, str]:
        """Loggable view without the token."""
        return {"nickname": self.nickname, "channel": self.channel}


class ChatConfig(BaseModel):
    """Runtime configuration of the chat client.

    Attributes:
        host: IRC gateway host.
        port: IRC gateway port (plain-text IRC).
        max_messages: Capacity of the line buffer.
        throttle_interval: Minimum seconds between two outbound sends.
        connect_timeout: TCP connect timeout in seconds.
        read_timeout: Socket timeout used by the reader between stop checks.
        join_timeout: Bounded wait for worker threads on disconnect.
        auto_reconnect: Reconnect after a read/write failure.
        reconnect_max_attempts: Attempts before giving up on a reconnect.
        reconnect_backoff_base: Exponential backoff multiplier in seconds.
        reconnect_backoff_max: Upper bound of a single backoff wait.
    """

    model_config = ConfigDict(extra="forbid")

    host: str = Field(default=constants.IRC_HOST, min_length=1)
    port: int = Field(default=constants.IRC_PORT, ge=1, le=65535)
    max_messages: int = Field(default=constants.MAX_MESSAGES, ge=1)
    throttle_interval: float = Field(default=constants.THROTTLE_INTERVAL_SECONDS, ge=0)
    connect_timeout: float = Field(default=constants.CONNECT_TIMEOUT_SECONDS, gt=0)
    read_timeout: float = Field(default=constants.READ_TIMEOUT_SECONDS, gt=0)
    join_timeout: float = Field(default=constants.WORKER_JOIN_TIMEOUT_SECONDS, ge=0)
    auto_reconnect: bool = constants.AUTO_RECONNECT
    reconnect_max_attempts: int = Field(default=constants.RECONNECT_MAX_ATTEMPTS, ge=1)
    reconnect_backoff_base: float = Field(
        default=constants.RECONNECT_BACKOFF_BASE_SECONDS, ge=0
    )
    reconnect_backoff_max: float = Field(
        default=constants.RECONNECT_BACKOFF_MAX_SECONDS, ge=0
    )
