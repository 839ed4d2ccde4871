# tests/test_bootstrap.py

from __future__ import annotations

from daybook.cli.bootstrap import create_initial_state
from daybook.config import Settings
from daybook.storage.local_storage import JsonFileStorage, MemoryStorage


def test_bootstrap_wires_file_storage(settings) -> None:
    state = create_initial_state(settings=settings)

    assert isinstance(state.storage, JsonFileStorage)
    assert state.storage.path == settings.storage_path
    assert settings.data_dir.is_dir()
    assert state.task_store.tasks == ()


def test_bootstrap_in_memory_when_persistence_disabled(settings) -> None:
    settings.persist_enabled = False
    state = create_initial_state(settings=settings)
    state.task_store.load()
    state.task_store.add_task("ephemeral")

    assert isinstance(state.storage, MemoryStorage)
    assert not settings.storage_path.exists()


def test_tasks_survive_restart(settings, clock) -> None:
    first = create_initial_state(settings=settings, clock=clock)
    first.task_store.load()
    first.task_store.add_task("Buy milk")
    first.task_store.dispose()

    second = create_initial_state(settings=settings)
    second.task_store.load()
    assert [(t.text, t.date) for t in second.task_store.tasks] == [("Buy milk", "3/1/2024")]


def test_settings_from_env(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("DAYBOOK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("DAYBOOK_STORAGE_KEY", "myTasks")
    monkeypatch.setenv("DAYBOOK_PERSIST_ENABLED", "no")
    monkeypatch.delenv("DAYBOOK_STORAGE_PATH", raising=False)

    s = Settings.from_env()

    assert s.data_dir == tmp_path
    assert s.storage_path == tmp_path / "local_storage.json"
    assert s.storage_key == "myTasks"
    assert s.persist_enabled is False
