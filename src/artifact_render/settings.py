"""Settings file I/O for artifact-render.

Manages a JSON settings file at XDG_CONFIG_HOME/artifact-render/settings.json.
Holds presentation preferences only (stream replay pacing, panel title,
theme); the parser itself has no configuration.

Import as: import artifact_render.settings
"""

import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Any, Callable

logger = logging.getLogger(__name__)


DEFAULTS: dict[str, Any] = {
    "chunk_size": 4,
    "delay_ms": 15,
    "panel_title": "Data Analysis",
    "theme": "dark",
}


def get_config_path() -> Path:
    """Return path to settings file.

    Uses XDG_CONFIG_HOME (default ~/.config) / artifact-render / settings.json.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "artifact-render" / "settings.json"


def load_settings() -> dict:
    """Load settings from JSON file. Returns empty dict on missing/corrupt file."""
    path = get_config_path()
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


def get_setting(key: str, default: Any = None) -> Any:
    """Value from the settings file, else DEFAULTS, else ``default``."""
    data = load_settings()
    if key in data:
        return data[key]
    return DEFAULTS.get(key, default)


def get_number_setting(key: str, cast: Callable[[Any], Any] = float) -> Any:
    """Numeric setting converted with ``cast``.

    A stored value that does not convert, is not finite, or is negative is
    logged and replaced by the value in DEFAULTS.
    """
    value = get_setting(key)
    try:
        number = cast(value)
    except (TypeError, ValueError, OverflowError):
        number = None
    if number is None or not math.isfinite(number) or number < 0:
        logger.warning("ignoring invalid setting key=%s value=%r", key, value)
        return cast(DEFAULTS[key])
    return number


def set_setting(key: str, value: Any) -> None:
    """Merge one key into the settings file, keeping the other keys."""
    data = load_settings()
    data[key] = value
    save_settings(data)
