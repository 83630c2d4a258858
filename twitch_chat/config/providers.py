"""Credential providers.

The connection core only consumes a ``Credentials`` value at connect time.
Where those values live (environment, an editor preference store, a
keyring) is the caller's business; it plugs in through ``CredentialsProvider``.
"""

from __future__ import annotations

import os
from typing import Protocol

from .model import Credentials


class CredentialsProvider(Protocol):
    """Protocol for anything that can hand out connection credentials."""

    def get_credentials(self) -> Credentials:
        """Return the credentials for the next connection attempt."""
        ...


class StaticCredentialsProvider:
    """Provider returning a fixed ``Credentials`` value."""

    def __init__(self, credentials: Credentials) -> None:
        self.credentials = credentials

    def get_credentials(self) -> Credentials:
        return self.credentials


class EnvCredentialsProvider:
    """Provider reading ``TWITCH_TOKEN``, ``TWITCH_NICK`` and ``TWITCH_CHANNEL``.

    Values are read on every call so a caller can update the environment
    between connection attempts. Missing variables become blank fields.
    """

    def __init__(
        self,
        token_var: str = "TWITCH_TOKEN",
        nick_var: str = "TWITCH_NICK",
        channel_var: str = "TWITCH_CHANNEL",
    ) -> None:
        self.token_var = token_var
        self.nick_var = nick_var
        self.channel_var = channel_var

    def get_credentials(self) -> Credentials:
        return Credentials(
            token=os.environ.get(self.token_var, ""),
            nickname=os.environ.get(self.nick_var, ""),
            channel=os.environ.get(self.channel_var, ""),
        )
