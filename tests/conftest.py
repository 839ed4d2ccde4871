# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from daybook.cli.bootstrap import create_initial_state
from daybook.core.state import AppState
from daybook.tasks.task_store import TaskStore

from .fakes import FakeClock, RecordingStorage


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and front-ends.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="daybook-test",
        log_level="DEBUG",
        console_enabled=False,
        persist_enabled=True,
        data_dir=data_dir,
        storage_path=data_dir / "local_storage.json",
        storage_key="todoTasks",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(date(2024, 3, 1))


@pytest.fixture()
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture()
def store(storage: RecordingStorage, clock: FakeClock) -> TaskStore:
    s = TaskStore(storage, clock=clock)
    s.load()
    return s


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FakeClock) -> AppState:
    """
    AppState wired through the real composition root.

    NOTE: the real JSON file storage is used here (under tmp_path) because
    its behaviour is part of what we want to test.
    """
    st = create_initial_state(settings=settings, clock=clock)
    st.task_store.load()
    return st
