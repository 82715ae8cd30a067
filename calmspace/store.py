"""A small JSON file used as a key-value store.

The whole file is one JSON object. Reads are best effort: a missing or
damaged file behaves like an empty store. Writes rewrite the file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from calmspace.config import get_data_path

log = logging.getLogger(__name__)


class KeyValueStore:
    """String keys mapped to JSON-serializable values."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path or get_data_path()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log.warning("Ignoring corrupt store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring store %s: expected a JSON object", self.path)
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> bool:
        """Delete ``key``. Returns False if it was not there."""
        data = self._read()
        if key not in data:
            return False
        del data[key]
        self._write(data)
        return True

    def keys(self) -> list[str]:
        return list(self._read())
