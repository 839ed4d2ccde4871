# tasks/task_codec.py

"""
Persisted representation of the task collection.

The stored value is a JSON array of objects:
    {"task": str, "date": str, "completion": bool, "completeContent": str}

`completeContent` is derived from `completion` and written with the HTML
entities older data uses ("&#10004;" / "&nbsp;"); on read it is ignored.
Tasks under edit are written with their last committed text.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from .dates import parse_date
from .task_models import Task

STORED_CHECK_MARK = "&#10004;"
STORED_BLANK_MARK = "&nbsp;"


class MalformedEntryError(ValueError):
    """A persisted payload or entry cannot be turned into tasks."""


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "task": task.committed_text,
        "date": task.date,
        "completion": bool(task.completed),
        "completeContent": STORED_CHECK_MARK if task.completed else STORED_BLANK_MARK,
    }


def record_to_task(record: Any) -> Task:
    if not isinstance(record, Mapping):
        raise MalformedEntryError(f"entry is not an object: {type(record).__name__}")

    text = record.get("task")
    if not isinstance(text, str):
        raise MalformedEntryError("entry has no string 'task'")

    raw_date = record.get("date")
    if parse_date(raw_date) is None:
        raise MalformedEntryError(f"entry has an unrecognized date: {raw_date!r}")

    return Task.from_persisted(text, raw_date, record.get("completion", False))


def dumps_collection(tasks: Iterable[Task]) -> str:
    return json.dumps([task_to_record(t) for t in tasks], ensure_ascii=False)


def loads_collection(raw: str) -> list[Any]:
    """Decode the stored JSON array; entries are returned undecoded."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedEntryError(f"payload is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise MalformedEntryError(f"payload is not a JSON array: {type(data).__name__}")
    return data
