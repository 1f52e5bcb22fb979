"""Settings file I/O for chit-parse.

Manages a small JSON settings file at XDG_CONFIG_HOME/chit-parse/settings.json.
The highlighter theme and preview length are the current consumers; other
settings can be added as top-level keys.

Import as: import chit_parse.settings
"""

import json
import os
import tempfile
from pathlib import Path

from chit_parse.core.preview import DEFAULT_PREVIEW_LENGTH

DEFAULT_CODE_THEME = "monokai"


def get_config_path() -> Path:
    """Return path to settings file.

    Uses XDG_CONFIG_HOME (default ~/.config) / chit-parse / settings.json.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "chit-parse" / "settings.json"


def load_settings() -> dict:
    """Load settings from JSON file. Returns empty dict on missing/corrupt file."""
    path = get_config_path()
    # [LAW:dataflow-not-control-flow] Always attempt read; empty dict is the "no data" value.
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def save_settings(data: dict) -> None:
    """Atomic write of settings dict to JSON file.

    Creates parent directories if needed. Writes to temp file then renames
    to avoid partial writes on crash.
    """
    path = get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def load_setting(key: str, default=None):
    """Load a single setting by key. Returns default if absent."""
    return load_settings().get(key, default)


def save_setting(key: str, value) -> None:
    """Save a single setting by key (merge into existing settings)."""
    data = load_settings()
    data[key] = value
    save_settings(data)


def load_code_theme() -> str:
    """Highlighter theme for code segments."""
    theme = load_setting("code_theme", DEFAULT_CODE_THEME)
    return theme if isinstance(theme, str) and theme else DEFAULT_CODE_THEME


def save_code_theme(theme: str) -> None:
    save_setting("code_theme", theme)


def load_preview_length() -> int:
    """Max characters in a message preview line."""
    value = load_setting("preview_length", DEFAULT_PREVIEW_LENGTH)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_PREVIEW_LENGTH
    return value
