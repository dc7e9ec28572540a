"""Key/value storage file for saved state.

The file is a single JSON object mapping namespaced keys to JSON values,
mirroring the browser ``localStorage`` the URL deck was first kept in::

    {
      "qrdeck.urls": {"version": "1", "urls": [...]}
    }

Reads never raise: a missing, unreadable or non-object file behaves as empty.
Writes raise :class:`~qrdeck.errors.PersistenceError`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import PersistenceError

logger = logging.getLogger(__name__)


class LocalStorage:
    """Manages reading and writing the storage file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def exists(self) -> bool:
        return self.path.exists()

    def get_item(self, key: str) -> Any:
        """Return the value stored under *key*, or ``None``."""
        return self._read().get(key)

    def set_item(self, key: str, value: Any) -> None:
        """Store *value* (JSON-serialisable) under *key* and persist."""
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: top level is not an object", self.path)
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        try:
            text = json.dumps(data, indent=2)
            self.path.parent.mkdir(parents=True, exist_ok=True)

            # Atomic write via temp file
            tmp = self.path.with_suffix(".tmp")
            tmp.write_text(text, encoding="utf-8")
            tmp.replace(self.path)
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Could not write {self.path}: {exc}") from exc
