"""Date helper utilities shared by the requirement validators."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any


def coerce_date(value: Any) -> date | None:
    """Return a ``date`` for ``value``, parsing ISO strings when possible.

    ``datetime`` values are truncated to their calendar day so that a start
    date picked at midnight and an end date picked later on the same day
    compare as equal. Strings must be a complete ISO date or timestamp.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return None
        try:
            return date.fromisoformat(candidate)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(candidate).date()
        except ValueError:
            return None
    return None


__all__ = ["coerce_date"]
