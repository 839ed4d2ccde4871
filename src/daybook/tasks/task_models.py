# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .dates import normalize_date

CHECK_MARK = "✔"
BLANK_MARK = " "

_TRUE_STRINGS = {"1", "true", "yes", "y", "on"}
_FALSE_STRINGS = {"", "0", "false", "no", "n", "off", "none", "null"}


def coerce_bool(raw: Any) -> bool:
    """
    Interpret a stored completion flag.

    Strings are matched against the usual spellings; anything else falls back
    to Python truthiness. Never raises.
    """
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        s = raw.strip().lower()
        if s in _TRUE_STRINGS:
            return True
        if s in _FALSE_STRINGS:
            return False
    try:
        return bool(raw)
    except Exception:
        return False


@dataclass(slots=True)
class Task:
    """
    One to-do entry.

    `is_editing` and the edit snapshot are UI-transient: they are not
    persisted and do not take part in equality.
    """

    text: str
    date: str
    completed: bool = False

    is_editing: bool = field(default=False, compare=False)
    _snapshot: str | None = field(default=None, init=False, compare=False, repr=False)

    @classmethod
    def create(cls, text: str, date: Any) -> Task:
        return cls(text=text, date=normalize_date(date), completed=False)

    @classmethod
    def from_persisted(cls, text: str, date: Any, completed: Any) -> Task:
        return cls(text=text, date=normalize_date(date), completed=coerce_bool(completed))

    @property
    def committed_text(self) -> str:
        """Text as of the last commit; in-progress edits are not included."""
        return self._snapshot if self._snapshot is not None else self.text

    @property
    def complete_marker(self) -> str:
        return CHECK_MARK if self.completed else BLANK_MARK

    def toggle_completion(self) -> None:
        self.completed = not self.completed

    def begin_edit(self) -> None:
        self.is_editing = True
        self._snapshot = self.text

    def commit_edit(self) -> None:
        """
        Finish editing with the trimmed text.

        Empty text after trimming reverts to the text captured by begin_edit().
        """
        trimmed = (self.text or "").strip()
        if not trimmed and self._snapshot is not None:
            trimmed = self._snapshot
        self.text = trimmed
        self.is_editing = False
        self._snapshot = None

    def cancel_edit(self) -> None:
        if self._snapshot is not None:
            self.text = self._snapshot
        self.is_editing = False
        self._snapshot = None
