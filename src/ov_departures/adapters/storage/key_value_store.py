"""Key/value store adapters standing in for the host settings store."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from ov_departures.domain.ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore(KeyValueStore):
    """Process-lifetime store, used when no durable location is configured."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonFileKeyValueStore(KeyValueStore):
    """Store persisted as a single JSON document on disk.

    The whole document is rewritten on every ``set`` through a temporary file and
    an atomic rename, so a crash never leaves a half-written file behind.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON document. Created on first write.
        """
        self._path = Path(path)
        self._data: dict[str, Any] = self._load()

    def _load(self) -> dict[str, Any]:
        """Read the document, starting empty when it is missing or unreadable."""
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable settings file {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {self._path}: expected a JSON object")
            return {}
        return data

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f)
            os.replace(tmp_path, self._path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
