# tasks/dates.py

"""
Calendar date helpers for tasks.

Stored dates are always canonical "M/D/YYYY" strings (no leading zeros).
Input may also arrive as:
- a date / datetime object,
- a legacy wrapped epoch string "/Date(<millis>)/" (optionally with a
  "+HHMM" offset suffix, which is ignored),
- an ISO "YYYY-MM-DD" string.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Any

_CANONICAL_RE = re.compile(r"^\s*(\d{1,2})/(\d{1,2})/(\d{4})\s*$")
_LEGACY_RE = re.compile(r"^\s*/Date\((-?\d+)(?:[+-]\d{4})?\)/\s*$", re.IGNORECASE)
_ISO_RE = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})\s*$")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Sort key for dates that cannot be parsed: after every real date.
UNPARSABLE_SORT_KEY: tuple[int, int] = (1, 0)


def format_canonical(d: date) -> str:
    return f"{d.month}/{d.day}/{d.year}"


def today_canonical(today: date | None = None) -> str:
    return format_canonical(today or date.today())


def _from_epoch_millis(millis: int) -> date:
    # Local calendar day of the instant, like a JS Date built from millis.
    return (_EPOCH + timedelta(milliseconds=millis)).astimezone().date()


def parse_date(value: Any) -> date | None:
    """Parse any accepted date representation; None if it is not a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    m = _CANONICAL_RE.match(value)
    if m:
        month, day, year = (int(g) for g in m.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None

    m = _LEGACY_RE.match(value)
    if m:
        try:
            return _from_epoch_millis(int(m.group(1)))
        except (OverflowError, ValueError):
            return None

    m = _ISO_RE.match(value)
    if m:
        year, month, day = (int(g) for g in m.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None

    return None


def normalize_date(value: Any) -> str:
    """Return the canonical string for value or raise ValueError."""
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"Unrecognized date: {value!r}")
    return format_canonical(parsed)


def sort_key(value: Any) -> tuple[int, int]:
    parsed = parse_date(value)
    if parsed is None:
        return UNPARSABLE_SORT_KEY
    return (0, parsed.toordinal())
