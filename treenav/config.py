"""Persistent JSON config helpers.

Stores the hidden-file preference, the navigation depth bound, and
per-workspace session records. All access is defensive: malformed or missing
config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .navigation import DEFAULT_MAX_DEPTH

APP_NAME = "treenav"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Return the config object, or ``{}`` when the file is absent or not a JSON object."""
    try:
        raw = CONFIG_PATH.read_text(encoding="utf-8")
        data = json.loads(raw)
    except (OSError, ValueError):
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def save_config(data: dict[str, object]) -> None:
    """Write ``data`` as indented JSON; write failures leave the old file in place."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError):
        pass


def load_show_hidden() -> bool:
    """Return whether dot files are scanned into the tree by default."""
    return load_config().get("show_hidden") is True


def save_show_hidden(show_hidden: bool) -> None:
    """Remember the dot-file preference for later runs."""
    config = load_config()
    config["show_hidden"] = show_hidden is True
    save_config(config)


def load_max_tree_depth() -> int:
    """Return the configured walk depth bound, or the default when invalid."""
    value = load_config().get("max_tree_depth")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_MAX_DEPTH
    return value


def load_sessions() -> dict[str, dict[str, object]]:
    """Return session records keyed by workspace root, dropping malformed ones."""
    value = load_config().get("sessions")
    if not isinstance(value, dict):
        return {}
    return {
        key: record
        for key, record in value.items()
        if isinstance(key, str) and isinstance(record, dict)
    }


def save_sessions(sessions: dict[str, dict[str, object]]) -> None:
    config = load_config()
    config["sessions"] = sessions
    save_config(config)
