"""Environment-driven configuration."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

STORAGE_KEY = "qrdeck.urls"

DEFAULT_QR_WIDTH = 280


def get_storage_path() -> Path:
    env = os.environ.get("QRDECK_STORAGE")
    if env:
        return Path(env)
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home()))
    else:
        base = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return base / "qrdeck" / "storage.json"


def get_log_level() -> int:
    """Return the level named by ``QRDECK_LOG_LEVEL`` (WARNING if unset or unknown)."""
    name = os.environ.get("QRDECK_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def get_qr_width() -> int:
    raw = os.environ.get("QRDECK_QR_WIDTH")
    if not raw:
        return DEFAULT_QR_WIDTH
    try:
        width = int(raw)
    except ValueError:
        return DEFAULT_QR_WIDTH
    return width if width > 0 else DEFAULT_QR_WIDTH
