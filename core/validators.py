"""Helper validators shared across the category schemas.

Every validator has the same shape: it receives the value stored for its own
field plus a read-only view of the whole form and returns an error message, or
``None`` when the value is acceptable. Validators never raise for bad user
input.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Collection, Iterable, Mapping
from typing import Final, Optional

from core.date_utils import coerce_date

FieldValidator = Callable[[object, Mapping[str, object]], Optional[str]]

REQUIRED_MESSAGE: Final[str] = "required"
POSITIVE_NUMBER_MESSAGE: Final[str] = "must be a positive number"
INVALID_DATE_MESSAGE: Final[str] = "must be a valid date"
NOT_ACCEPTED_MESSAGE: Final[str] = "must be accepted"


def is_value_present(value: object | None) -> bool:
    """Return ``True`` when ``value`` should count as populated."""

    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(is_value_present(item) for item in value)
    if isinstance(value, Mapping):
        return any(is_value_present(item) for item in value.values())
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    return True


def _to_number(value: object | None) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def required_string(value: object, _values: Mapping[str, object]) -> str | None:
    """Require a non-blank string."""

    if not isinstance(value, str) or not value.strip():
        return REQUIRED_MESSAGE
    return None


def positive_number(value: object, _values: Mapping[str, object]) -> str | None:
    """Require a finite number (or numeric string) strictly greater than zero."""

    number = _to_number(value)
    if number is None or not math.isfinite(number) or number <= 0:
        return POSITIVE_NUMBER_MESSAGE
    return None


def valid_date(value: object, _values: Mapping[str, object]) -> str | None:
    """Require a ``date``, ``datetime`` or ISO formatted date string."""

    if coerce_date(value) is None:
        return INVALID_DATE_MESSAGE
    return None


def accepted(value: object, _values: Mapping[str, object]) -> str | None:
    """Require an explicit boolean ``True``."""

    if value is not True:
        return NOT_ACCEPTED_MESSAGE
    return None


def date_after(start_key: str) -> FieldValidator:
    """Build a validator requiring the field to fall on or after ``start_key``.

    The start date is optional: when it is missing or unparsable only the
    field's own date format is checked.
    """

    def _validate(value: object, values: Mapping[str, object]) -> str | None:
        end = coerce_date(value)
        if end is None:
            return INVALID_DATE_MESSAGE
        start = coerce_date(values.get(start_key))
        if start is not None and end < start:
            return f"must be on or after {start_key}"
        return None

    _validate.__name__ = f"date_after_{start_key}"
    return _validate


def enum_membership(options: Iterable[str]) -> FieldValidator:
    """Build a validator requiring the value to be one of ``options``."""

    allowed: tuple[str, ...] = tuple(options)

    def _validate(value: object, _values: Mapping[str, object]) -> str | None:
        if not isinstance(value, str) or value not in allowed:
            return f"must be one of: {', '.join(allowed)}"
        return None

    return _validate


def subset_of(options: Iterable[str]) -> FieldValidator:
    """Build a validator requiring every entry of a string array to be in ``options``."""

    allowed: tuple[str, ...] = tuple(options)

    def _validate(value: object, _values: Mapping[str, object]) -> str | None:
        if isinstance(value, str) or not isinstance(value, Collection):
            return "must be a list of values"
        invalid = [str(item) for item in value if item not in allowed]
        if invalid:
            return f"contains unsupported values: {', '.join(invalid)}"
        return None

    return _validate


__all__ = [
    "FieldValidator",
    "INVALID_DATE_MESSAGE",
    "NOT_ACCEPTED_MESSAGE",
    "POSITIVE_NUMBER_MESSAGE",
    "REQUIRED_MESSAGE",
    "accepted",
    "date_after",
    "enum_membership",
    "is_value_present",
    "positive_number",
    "required_string",
    "subset_of",
    "valid_date",
]
