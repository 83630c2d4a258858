"""Configuration models, credential providers and file loading."""

from .loader import CONFIG_ENV_VAR, load_chat_config, load_raw_config
from .model import ChatConfig, Credentials
from .providers import (
    CredentialsProvider,
    EnvCredentialsProvider,
    StaticCredentialsProvider,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "ChatConfig",
    "Credentials",
    "CredentialsProvider",
    "EnvCredentialsProvider",
    "StaticCredentialsProvider",
    "load_chat_config",
    "load_raw_config",
]
