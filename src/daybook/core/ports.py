# src/daybook/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps storage backends and front-ends swappable and makes testing easier.
"""

from collections.abc import Callable
from datetime import date
from typing import Any, Protocol


class KeyValueStorage(Protocol):
    """
    localStorage-like string storage.

    Implementations raise OSError (usually StorageError) when the underlying
    medium is unavailable.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


StoreListener = Callable[[Any], None]
# Called with the store after each mutation and after load().

Clock = Callable[[], date]
# Returns "today" for newly added tasks.
