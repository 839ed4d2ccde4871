# tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import Any

from ..core.ports import Clock, KeyValueStorage, StoreListener
from ..storage.local_storage import MemoryStorage
from .dates import normalize_date, sort_key, today_canonical
from .task_codec import MalformedEntryError, dumps_collection, loads_collection, record_to_task
from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "todoTasks"


class TaskStore:
    """
    Ordered task collection with sort and persistence policy.

    Invariants:
    - tasks are sorted ascending by date after add / date change / load;
      the sort is stable and unparsable dates go last
    - every mutating intent ends in exactly one _normalize_and_persist() call:
      optional re-sort, one full-snapshot write, one listener notification
    - incomplete_count is a pure read

    Failures of the storage backend never propagate. A failed write leaves
    `persisted == False` until a later write succeeds. A failed read puts the
    store in degraded mode: nothing is written until the next successful
    load(), so a partial in-memory list never replaces the stored one.
    """

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Clock = date.today,
    ) -> None:
        self._storage: KeyValueStorage = storage if storage is not None else MemoryStorage()
        self._key = key
        self._clock = clock
        self._tasks: list[Task] = []
        self._listeners: list[StoreListener] = []
        self._persisted = True
        self._degraded = False
        self._disposed = False

        # Input buffer of the "new task" field; never persisted.
        self.new_task: str = ""

    # ---- lifecycle ----

    def load(self) -> None:
        """Replace the in-memory collection with the persisted one."""
        self._ensure_alive()
        try:
            raw = self._storage.get_item(self._key)
        except OSError:
            logger.warning(
                "Storage unavailable key=%s; running in memory only.", self._key, exc_info=True
            )
            self._persisted = False
            self._degraded = True
            raw = None
        else:
            self._degraded = False
            self._persisted = True

        loaded: list[Task] = []
        skipped = 0
        if raw is not None:
            try:
                entries = loads_collection(raw)
            except MalformedEntryError as e:
                logger.warning("Ignoring persisted tasks key=%s: %s", self._key, e)
                entries = []
            for idx, entry in enumerate(entries):
                try:
                    loaded.append(record_to_task(entry))
                except MalformedEntryError as e:
                    skipped += 1
                    logger.warning("Skipping persisted task #%d: %s", idx, e)

        loaded.sort(key=lambda t: sort_key(t.date))
        self._tasks = loaded
        logger.info(
            "TaskStore loaded key=%s total=%d skipped=%d", self._key, len(loaded), skipped
        )
        self._notify()

    def dispose(self) -> None:
        if self._disposed:
            return
        self._listeners.clear()
        self._disposed = True
        logger.debug("TaskStore disposed key=%s", self._key)

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a change listener; returns a function that unregisters it."""
        self._ensure_alive()
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return _unsubscribe

    # ---- reads ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def incomplete_count(self) -> int:
        return sum(1 for t in self._tasks if not t.completed)

    @property
    def persisted(self) -> bool:
        return self._persisted

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task: object) -> bool:
        return self._index_of(task) is not None

    # ---- intents ----

    def add_task(self, raw_text: str | None = None) -> Task | None:
        """
        Add a task dated today.

        Uses the `new_task` buffer when raw_text is None. Blank text is ignored
        (returns None, nothing is written).
        """
        self._ensure_alive()
        text = (self.new_task if raw_text is None else raw_text or "").strip()
        if not text:
            return None

        task = Task.create(text, today_canonical(self._clock()))
        self._tasks.append(task)
        self.new_task = ""
        logger.debug("Task added text=%r date=%s", task.text, task.date)
        self._normalize_and_persist(resort=True)
        return task

    def remove_task(self, task: Task) -> bool:
        self._ensure_alive()
        idx = self._index_of(task)
        if idx is None:
            logger.debug("remove_task: task not in store text=%r", getattr(task, "text", None))
            return False
        del self._tasks[idx]
        self._normalize_and_persist(resort=False)
        return True

    def edit_task(self, task: Task) -> bool:
        self._ensure_alive()
        if self._index_of(task) is None:
            return False
        task.begin_edit()
        return True

    def save_editing(self, task: Task) -> bool:
        # Text edits never change the date, so no re-sort.
        self._ensure_alive()
        if self._index_of(task) is None:
            return False
        task.commit_edit()
        self._normalize_and_persist(resort=False)
        return True

    def cancel_editing(self, task: Task) -> bool:
        self._ensure_alive()
        if self._index_of(task) is None:
            return False
        task.cancel_edit()
        return True

    def toggle_completion(self, task: Task) -> bool:
        self._ensure_alive()
        if self._index_of(task) is None:
            return False
        task.toggle_completion()
        self._normalize_and_persist(resort=False)
        return True

    def set_task_date(self, task: Task, value: Any) -> bool:
        """
        Date-picker intent: accepts canonical "M/D/YYYY" or "/Date(<ms>)/".

        Unrecognized values leave the task unchanged and return False.
        """
        self._ensure_alive()
        if self._index_of(task) is None:
            return False
        try:
            canonical = normalize_date(value)
        except ValueError:
            logger.warning("Rejected date %r for task %r", value, task.text)
            return False
        task.date = canonical
        self._normalize_and_persist(resort=True)
        return True

    # ---- internals ----

    def _ensure_alive(self) -> None:
        if self._disposed:
            raise RuntimeError("TaskStore has been disposed")

    def _index_of(self, task: object) -> int | None:
        for i, t in enumerate(self._tasks):
            if t is task:
                return i
        return None

    def _sort(self) -> None:
        self._tasks.sort(key=lambda t: sort_key(t.date))

    def _normalize_and_persist(self, *, resort: bool) -> None:
        if resort:
            self._sort()
        self._write()
        self._notify()

    def _write(self) -> None:
        if self._degraded:
            logger.debug("Degraded mode; skipped persisting key=%s", self._key)
            return
        payload = dumps_collection(self._tasks)
        try:
            self._storage.set_item(self._key, payload)
        except OSError:
            logger.exception("Failed to persist %d tasks key=%s", len(self._tasks), self._key)
            self._persisted = False
            return
        self._persisted = True
        logger.debug("Persisted %d tasks key=%s", len(self._tasks), self._key)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("TaskStore listener failed.")
