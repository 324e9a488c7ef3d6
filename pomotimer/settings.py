"""Application settings loaded from JSON.

Settings are read from:
    ~/Library/Application Support/Pomotimer/settings.json

Usage::

    settings = load_settings()
    engine = TimerEngine(
        work_minutes=settings.work_minutes,
        break_minutes=settings.break_minutes,
    )
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Pomotimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    work_minutes: int = 25
    break_minutes: int = 5

    # ── logging ───────────────────────────────────────────────────────
    log_level: str = "INFO"


def load_settings(path: Path = SETTINGS_PATH) -> Settings:
    """Load settings from disk, falling back to defaults."""
    path = Path(path)
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return Settings()
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: not a JSON object", path)
        return Settings()
    # Only use keys that exist in the dataclass, with the right type
    defaults = Settings()
    filtered = {}
    for f in fields(Settings):
        if f.name not in data:
            continue
        value = data[f.name]
        expected = type(getattr(defaults, f.name))
        if isinstance(value, bool) is not (expected is bool) or not isinstance(value, expected):
            logger.warning(
                "Ignoring %s=%r in %s: expected %s", f.name, value, path, expected.__name__
            )
            continue
        filtered[f.name] = value
    return Settings(**filtered)
