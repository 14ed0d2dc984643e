"""
User settings for Zoom Join, read from ``config.json`` in App Support.

On first launch the bundled ``config.json`` is copied next to the meeting
file so the user has something to edit.
"""
from __future__ import annotations

import json
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from gui.constants import CONFIG_PATH, DEFAULT_MEETING_FILE, logger, resource_path


@dataclass
class PickerSettings:
    """Geometry and behaviour of the searchable meeting picker."""
    rows: int = 5
    width_percent: int = 40
    search_sub_text: bool = True


@dataclass
class LauncherSettings:
    """Settings for the meeting menu."""
    meeting_file: Path = DEFAULT_MEETING_FILE
    # Save after every add/remove; when False a "Save Meetings" item is shown
    autosave: bool = True
    # Show the add/remove/reload submenu
    edit_menu: bool = True
    backup_count: int = 3
    picker: PickerSettings = field(default_factory=PickerSettings)


def _as_int(value: Any, default: int, minimum: int = 0) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        logger.warning(f"Settings: expected a number, got {value!r}; using {default}")
        return default
    return max(minimum, number)


def settings_from_dict(raw: Dict[str, Any]) -> LauncherSettings:
    """Build LauncherSettings from the parsed contents of config.json."""
    meetings = raw.get("meetings", {}) or {}
    picker = raw.get("picker", {}) or {}

    meeting_file = str(meetings.get("meeting_file", "") or "").strip()
    return LauncherSettings(
        meeting_file=Path(meeting_file).expanduser() if meeting_file else DEFAULT_MEETING_FILE,
        autosave=bool(meetings.get("autosave", True)),
        edit_menu=bool(meetings.get("edit_menu", True)),
        backup_count=_as_int(meetings.get("backup_count", 3), 3),
        picker=PickerSettings(
            rows=_as_int(picker.get("rows", 5), 5, minimum=1),
            width_percent=min(100, _as_int(picker.get("width_percent", 40), 40, minimum=10)),
            search_sub_text=bool(picker.get("search_sub_text", True)),
        ),
    )


def load_config(config_path: Path = CONFIG_PATH) -> Dict[str, Any]:
    """Read config.json, installing the bundled default on first run.

    Returns an empty dict (all defaults) if the file is missing or invalid.
    """
    if not config_path.exists():
        bundled_config = resource_path("config.json")
        if bundled_config.exists():
            try:
                config_path.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(str(bundled_config), str(config_path))
                logger.info(f"Config: first run, copied bundled config to {config_path}")
            except OSError as e:
                logger.warning(f"Config: could not install default config: {e}")
                return {}
        else:
            logger.warning("Config: no config.json found, using defaults")
            return {}

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning(f"Config: invalid JSON in {config_path}: {e}; using defaults")
        return {}
    except OSError as e:
        logger.warning(f"Config: could not read {config_path}: {e}; using defaults")
        return {}

    if not isinstance(config, dict):
        logger.warning(f"Config: {config_path} is not a JSON object; using defaults")
        return {}
    return config


def load_settings(config_path: Optional[Path] = None) -> Tuple[Dict[str, Any], LauncherSettings]:
    """Return the raw config dict and the LauncherSettings built from it."""
    config = load_config(config_path or CONFIG_PATH)
    settings = settings_from_dict(config)
    logger.info(
        f"Config: meeting_file={settings.meeting_file}, autosave={settings.autosave}, "
        f"edit_menu={settings.edit_menu}"
    )
    return config, settings
