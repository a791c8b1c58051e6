"""Test fixtures for timeline-analyzer tests.

This package provides a sample timeline document and helper functions
for building timeline records in unit and integration tests.
"""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

__all__ = [
    "BASE_TIME",
    "FIXTURES_DIR",
    "iso",
    "load_fixture",
    "make_record",
    "make_timeline",
]


FIXTURES_DIR = Path(__file__).parent

BASE_TIME = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)


def load_fixture(filename: str) -> dict[str, Any]:
    """Load a JSON fixture file by name.

    Args:
        filename: Name of the fixture file (with or without .json extension).

    Returns:
        Parsed JSON data as a dictionary.

    """
    if not filename.endswith(".json"):
        filename = f"{filename}.json"
    return json.loads((FIXTURES_DIR / filename).read_text(encoding="utf-8"))


def iso(seconds: float) -> str:
    """ISO-8601 timestamp ``seconds`` after BASE_TIME, with a 7-digit fraction."""
    moment = BASE_TIME + timedelta(seconds=seconds)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.%f") + "0Z"


def make_record(
    record_id: str,
    record_type: str = "Task",
    *,
    parent_id: str | None = None,
    name: str | None = None,
    start: float | None = None,
    finish: float | None = None,
    order: int | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a raw timeline record.

    Args:
        record_id: Record id.
        record_type: Record type.
        parent_id: Parent record id.
        name: Display name (defaults to the id).
        start: Start offset from BASE_TIME in seconds.
        finish: Finish offset from BASE_TIME in seconds.
        order: Sibling order.
        **extra: Additional raw fields.

    Returns:
        A record dictionary in the timeline API shape.

    """
    record: dict[str, Any] = {
        "id": record_id,
        "parentId": parent_id,
        "type": record_type,
        "name": name if name is not None else record_id,
        "state": "completed",
        "result": "succeeded",
    }
    if start is not None:
        record["startTime"] = iso(start)
    if finish is not None:
        record["finishTime"] = iso(finish)
    if order is not None:
        record["order"] = order
    record.update(extra)
    return record


def make_timeline(*records: dict[str, Any]) -> dict[str, Any]:
    """Wrap records in a timeline document."""
    return {"id": "timeline-1", "changeId": 1, "records": list(records)}
