"""
Read access to the app's widget preferences.

The course list is written by the app into a small key-value store
(one JSON object of string keys to string values):

    data/HomeWidgetPreferences.json

This module only needs one capability from it: get(key) -> str | None.
Keeping that behind KeyValueStore lets the projector run against a plain
dict in tests and against the real file everywhere else.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def _default_prefs_path() -> Path:
    """
    Return the default path of HomeWidgetPreferences.json inside the package.

    Using a function instead of a constant makes testing easier,
    because tests can override the path.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "HomeWidgetPreferences.json"


class KeyValueStore(ABC):
    """Minimal read interface over a preferences store."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...


class MemoryStore(KeyValueStore):
    def __init__(self, values: Optional[Dict[str, str]] = None) -> None:
        self.values: Dict[str, str] = dict(values or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)


class JsonPrefsStore(KeyValueStore):
    """
    Preferences backed by a JSON file.

    The file is read again on every get(), so each call sees the
    current state written by the app.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else _default_prefs_path()

    def _load(self) -> Dict[str, Any]:
        # First run: file does not exist yet -> nothing stored
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
            logger.error("Failed to read preferences from %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.error("Preferences file %s does not contain an object", self.path)
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        if value is None or isinstance(value, str):
            return value
        # hand non-string values on as JSON so the projector can reject them
        return json.dumps(value, ensure_ascii=False)

    def put(self, key: str, value: str) -> None:
        """
        Store one value, keeping all other keys.

        Creates parent directories if needed.
        """
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
