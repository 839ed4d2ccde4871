# src/daybook/storage/local_storage.py

"""
Key/value string storage, modelled on browser localStorage.

Backends:
- JsonFileStorage: one JSON object on disk ({key: value}), rewritten
  atomically (temp file + os.replace) on every set/remove.
- MemoryStorage: process-local dict; used for degraded mode and tests.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class StorageError(OSError):
    """Storage backend cannot read or write its data."""


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """
    File-backed storage.

    The file is read on every access so that it always reflects what is on
    disk; a missing file is an empty storage.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text("utf-8")
        except OSError as e:
            raise StorageError(f"cannot read {self._path}: {e}") from e
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise StorageError(f"storage file {self._path} is not valid JSON") from e
        if not isinstance(data, dict):
            raise StorageError(f"storage file {self._path} does not hold a JSON object")
        return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in data.items()}

    def _write_all(self, items: dict[str, str]) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(items, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise StorageError(f"cannot write {self._path}: {e}") from e
        logger.debug("Storage written path=%s keys=%d", self._path, len(items))

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = str(value)
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)
