"""Application settings with JSON persistence.

Settings are stored at:
    $FITQUEST_HOME/settings.json   (default ``~/.fitquest``)

Usage::

    settings = load_settings()
    settings.session_xp = 120
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path

logger = logging.getLogger(__name__)


def app_home() -> Path:
    """Directory holding the settings file and the default database."""
    return Path(os.environ.get("FITQUEST_HOME", Path.home() / ".fitquest"))


def settings_path() -> Path:
    return app_home() / "settings.json"


@dataclass
class Settings:
    """All operator-configurable preferences."""

    # ── storage ───────────────────────────────────────────────────────
    database_url: str | None = None        # None → sqlite file in app_home()

    # ── logging ───────────────────────────────────────────────────────
    log_level: str = "INFO"

    # ── rewards ───────────────────────────────────────────────────────
    session_xp: int = 100                  # coached session
    self_logged_xp: int = 75               # self-reported workout

    # ── queries ───────────────────────────────────────────────────────
    history_limit: int = 50


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk, falling back to defaults."""
    path = path or settings_path()
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
    return Settings()


def save_settings(settings: Settings, path: Path | None = None) -> None:
    """Write settings to disk as JSON."""
    path = path or settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
