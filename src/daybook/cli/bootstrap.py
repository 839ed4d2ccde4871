# src/daybook/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the storage backend and the task store into AppState.

The store is returned unloaded: the caller owns the load()/dispose() lifecycle.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import KeyValueStorage
from ..core.state import AppState
from ..storage.local_storage import JsonFileStorage, MemoryStorage
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    try:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        settings.storage_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        # The store degrades to in-memory operation if the path stays unusable.
        logger.warning("Cannot create local data dirs under %s", settings.data_dir, exc_info=True)


def build_storage(settings) -> KeyValueStorage:
    if not getattr(settings, "persist_enabled", True):
        logger.info("Persistence disabled; tasks are kept in memory only.")
        return MemoryStorage()
    return JsonFileStorage(settings.storage_path)


def create_initial_state(*, settings=None, clock=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage = build_storage(settings)
    store_kwargs = {"key": settings.storage_key}
    if clock is not None:
        store_kwargs["clock"] = clock

    return AppState(
        settings=settings,
        storage=storage,
        task_store=TaskStore(storage, **store_kwargs),
    )
