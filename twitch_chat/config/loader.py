"""Configuration loading utilities."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors import ConfigError
from .model import ChatConfig

CONFIG_ENV_VAR = "TWITCH_CHAT_CONF"


def load_raw_config(path: str | Path) -> dict[str, Any]:
    """Read a JSON config file into a dict.

    Returns an empty dict when the file does not exist.

    Raises:
        ConfigError: If the file is unreadable or not a JSON object.
    """
    config_path = Path(path)
    if not config_path.exists():
        logging.debug(f"Config file not found, using defaults path={config_path}")
        return {}
    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(
            f"Could not read config file {config_path}", data={"path": str(config_path)}
        ) from e
    if not isinstance(raw, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a JSON object",
            data={"path": str(config_path)},
        )
    return raw


def load_chat_config(path: str | Path | None = None) -> ChatConfig:
    """Load ``ChatConfig`` from a JSON file layered over the env defaults.

    Args:
        path: Config file path. Defaults to ``$TWITCH_CHAT_CONF`` when set,
            otherwise only defaults are used.

    Raises:
        ConfigError: If the file cannot be read or fails validation.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    raw = load_raw_config(path) if path else {}
    try:
        config = ChatConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid chat configuration: {e.error_count()} error(s)",
            data={"errors": [err["loc"] for err in e.errors()]},
        ) from e
    logging.debug(f"Loaded chat configuration host={config.host} port={config.port}")
    return config
