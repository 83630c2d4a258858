"""Project logging package.

Contains the event catalog and the ChatLogger used by every module. Avoid
importing stdlib logging through this package name externally.
"""

from .event_catalog import (  # noqa: F401
    EVENT_TEMPLATES,
    load_event_templates,
    reload_event_templates,
)
from .logger import ChatLogger, logger  # noqa: F401

__all__ = [
    "ChatLogger",
    "logger",
    "EVENT_TEMPLATES",
    "load_event_templates",
    "reload_event_templates",
]
