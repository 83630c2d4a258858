"""Event template catalog.

Templates live in ``event_templates.json`` next to this module, shaped as
``{domain: {action: template}}``, and are flattened to ``(domain, action)``
keys. A broken or missing file never stops the client: the catalog then
holds a single ``("app", "load_error")`` entry and the logger falls back to
derived text for everything else.
"""

from __future__ import annotations

import json
from pathlib import Path

TEMPLATES_PATH = Path(__file__).with_name("event_templates.json")


def load_event_templates(path: Path = TEMPLATES_PATH) -> dict[tuple[str, str], str]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {("app", "load_error"): f"Event templates file missing: {path.name}"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Failed to load event templates: {e}"[:200]}
    if not isinstance(raw, dict):
        return {("app", "load_error"): "Event templates file must hold a JSON object"}
    return {
        (domain, action): template
        for domain, actions in raw.items()
        if isinstance(actions, dict)
        for action, template in actions.items()
        if isinstance(template, str)
    }


# Updated in place so modules holding a reference see reloads.
EVENT_TEMPLATES: dict[tuple[str, str], str] = load_event_templates()


def reload_event_templates(path: Path = TEMPLATES_PATH) -> None:
    templates = load_event_templates(path)
    EVENT_TEMPLATES.clear()
    EVENT_TEMPLATES.update(templates)


__all__ = [
    "EVENT_TEMPLATES",
    "TEMPLATES_PATH",
    "load_event_templates",
    "reload_event_templates",
]
