# src/daybook/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_store import TaskStore
from .ports import KeyValueStorage


@dataclass
class AppState:
    # Settings are kept on the state so front-ends can read them without globals.
    settings: object

    storage: KeyValueStorage
    task_store: TaskStore
