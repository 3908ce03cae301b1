"""JSON-based settings persistence for the calendar grid engine."""

import json
import logging
import os

from events import EventColor
from view_navigator import ViewMode

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".calendar-grid-settings.json")

_DENSITIES = ("comfortable", "compact")

_DEFAULTS = {
    "row_height": 48,
    "compact_row_height": 32,
    "density": "comfortable",
    "now_refresh_seconds": 60,
    "default_view": ViewMode.MONTH.value,
    "default_color": EventColor.BLUE.value,
}


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing or bad keys."""
    settings = dict(_DEFAULTS)
    path = path or _SETTINGS_PATH
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return settings
    if not isinstance(stored, dict):
        logger.warning("Ignoring settings file %s: expected an object", path)
        return settings

    for key in ("row_height", "compact_row_height", "now_refresh_seconds"):
        value = stored.get(key)
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            settings[key] = value
    if stored.get("density") in _DENSITIES:
        settings["density"] = stored["density"]
    if "default_view" in stored:
        try:
            settings["default_view"] = ViewMode.parse(stored["default_view"]).value
        except ValueError:
            logger.debug("Unknown default_view %r in %s", stored["default_view"], path)
    if "default_color" in stored:
        settings["default_color"] = EventColor.resolve(stored["default_color"]).value
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    with open(path or _SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def row_height_for(settings: dict) -> int:
    """Row height of the configured density layout."""
    if settings.get("density") == "compact":
        return settings.get("compact_row_height", _DEFAULTS["compact_row_height"])
    return settings.get("row_height", _DEFAULTS["row_height"])


def default_settings() -> dict:
    return dict(_DEFAULTS)
