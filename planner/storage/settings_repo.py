"""Repository for user settings, stored as a JSON object under "settings"."""

import json
import logging
import sqlite3

from planner.models.common import TemperatureUnit
from planner.models.events import Settings
from planner.storage import kv_repo

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"


def load_settings(conn: sqlite3.Connection) -> Settings:
    """Stored settings with defaults for anything absent or invalid."""
    defaults = Settings()
    raw = kv_repo.get_value(conn, SETTINGS_KEY)
    if raw is None:
        return defaults
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Stored settings are not valid JSON, using defaults")
        return defaults
    if not isinstance(data, dict):
        return defaults

    unit = data.get("unit", defaults.unit)
    if unit not in {u.value for u in TemperatureUnit}:
        unit = defaults.unit
    theme = data.get("theme") or defaults.theme
    return Settings(theme=theme, unit=TemperatureUnit(unit))


def save_settings(conn: sqlite3.Connection, settings: Settings) -> None:
    kv_repo.set_value(conn, SETTINGS_KEY, json.dumps(settings.to_dict()))
