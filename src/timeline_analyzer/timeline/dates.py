"""Timestamp parsing for timeline records.

Timeline APIs emit ISO-8601 timestamps with up to seven fractional
digits (e.g. ``2024-05-01T10:00:00.1234567Z``). Fractions are normalized
to milliseconds before the value is validated as a pydantic datetime.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from pydantic import TypeAdapter, ValidationError

__all__ = ["parse_timeline_date"]

_FRACTIONAL = re.compile(r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})\.(\d+)(Z|z|[+-]\d{2}:?\d{2})?$")
_NUMERIC = re.compile(r"^\s*[+-]?\d+(\.\d*)?\s*$")

_datetime_adapter = TypeAdapter(datetime)


def parse_timeline_date(value: Any) -> datetime | None:
    """Parse a timeline timestamp into an aware UTC datetime.

    Args:
        value: Raw timestamp value from a record.

    Returns:
        The parsed datetime, or None when the value is missing or
        unparseable. Timestamps without an offset are taken as UTC.

    """
    if not isinstance(value, str) or not value or _NUMERIC.match(value):
        return None

    match = _FRACTIONAL.match(value)
    if match:
        millis = match.group(2)[:3].ljust(3, "0")
        value = f"{match.group(1)}.{millis}{match.group(3) or ''}"

    try:
        parsed = _datetime_adapter.validate_python(value)
    except ValidationError:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
