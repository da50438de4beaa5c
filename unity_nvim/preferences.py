"""Editor preference storage, the stand-in for Unity's EditorPrefs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

PREFERENCES_PATH = Path.home() / ".config" / "unity-nvim" / "prefs.json"


class Preferences(Protocol):
    """Key/value store for editor preferences."""

    def get_string(self, key: str, default: str = "") -> str: ...

    def set_string(self, key: str, value: str) -> None: ...

    def get_int(self, key: str, default: int = 0) -> int: ...

    def set_int(self, key: str, value: int) -> None: ...

    def has_key(self, key: str) -> bool: ...

    def delete_key(self, key: str) -> None: ...


class InMemoryPreferences:
    """Preferences held in a plain dict."""

    def __init__(self, values: dict[str, str | int] | None = None) -> None:
        self._values: dict[str, str | int] = dict(values or {})

    def _load(self) -> dict[str, str | int]:
        return self._values

    def _save(self, values: dict[str, str | int]) -> None:
        self._values = values

    def get_string(self, key: str, default: str = "") -> str:
        """Return the string stored under *key*, or *default*."""
        value = self._load().get(key)
        return value if isinstance(value, str) else default

    def set_string(self, key: str, value: str) -> None:
        """Store a string under *key*."""
        values = self._load()
        values[key] = value
        self._save(values)

    def get_int(self, key: str, default: int = 0) -> int:
        """Return the integer stored under *key*, or *default*."""
        value = self._load().get(key)
        # bool is an int subclass; never treat it as one here
        return value if isinstance(value, int) and not isinstance(value, bool) else default

    def set_int(self, key: str, value: int) -> None:
        """Store an integer under *key*."""
        values = self._load()
        values[key] = value
        self._save(values)

    def has_key(self, key: str) -> bool:
        """Check whether *key* has a stored value."""
        return key in self._load()

    def delete_key(self, key: str) -> None:
        """Remove *key* if present."""
        values = self._load()
        if values.pop(key, None) is not None:
            self._save(values)


class JsonPreferences(InMemoryPreferences):
    """Preferences persisted to a JSON file.

    The file is read on every access so several processes see each other's
    writes. A missing or corrupt file reads as empty.
    """

    def __init__(self, path: Path | None = None) -> None:
        super().__init__()
        self.path = path or PREFERENCES_PATH

    def _load(self) -> dict[str, str | int]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str | int)}

    def _save(self, values: dict[str, str | int]) -> None:
        """Atomically write preferences to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to temp file then rename for atomicity
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(values, indent=2, sort_keys=True) + "\n")
        tmp.replace(self.path)
        logger.debug("Saved %d preferences to %s", len(values), self.path)
