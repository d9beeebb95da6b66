"""User configuration for the editor.

Settings are read from a JSON file in the OS-appropriate config directory.
Missing files fall back to defaults; invalid values are ignored one by one
so a typo in a single key never discards the rest of the file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"

# (type, minimum, maximum) for each configurable field
_LIMITS: Dict[str, tuple] = {
    "tab_stop": (int, 1, 32),
    "quit_times": (int, 0, 10),
    "message_timeout": ((int, float), 0, 60),
    "read_timeout": ((int, float), 0.01, 1.0),
}


@dataclass
class EditorSettings:
    tab_stop: int = EditorConstants.TAB_STOP
    quit_times: int = EditorConstants.QUIT_TIMES
    message_timeout: float = EditorConstants.MESSAGE_TIMEOUT
    read_timeout: float = EditorConstants.READ_TIMEOUT


def default_settings_path() -> Path:
    return Path(platformdirs.user_config_dir("linemark")) / SETTINGS_FILENAME


def validate_setting(key: str, value: Any) -> bool:
    """Return True if ``value`` is acceptable for setting ``key``.

    Unknown keys are never valid here; callers skip them.
    """
    if key not in _LIMITS:
        return False
    kind, low, high = _LIMITS[key]
    # bool is an int subclass but never a meaningful setting value
    if isinstance(value, bool) or not isinstance(value, kind):
        return False
    return low <= value <= high


def settings_from_dict(data: Dict[str, Any]) -> EditorSettings:
    settings = EditorSettings()
    known = {f.name for f in fields(EditorSettings)}
    for key, value in data.items():
        if key not in known:
            logger.debug(f"Ignoring unknown setting {key!r}")
            continue
        if not validate_setting(key, value):
            logger.warning(f"Ignoring invalid value for {key}: {value!r}")
            continue
        setattr(settings, key, value)
    return settings


def load_settings(path: Optional[Path] = None) -> EditorSettings:
    """Load settings from ``path`` (default: the user config directory)."""
    path = path or default_settings_path()
    if not path.exists():
        return EditorSettings()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {path}: {e}")
        return EditorSettings()

    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return EditorSettings()

    return settings_from_dict(data)
