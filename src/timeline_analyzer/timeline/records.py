"""Boundary decoding of raw timeline records.

Each raw record decodes to either a typed TimelineRecord or a
RecordRejection describing why it cannot become a node.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from pydantic import ValidationError

from timeline_analyzer.models.timeline import TimelineRecord

__all__ = ["DecodedRecord", "RecordRejection", "decode_record"]


@dataclass(frozen=True)
class RecordRejection:
    """A raw record that could not be decoded.

    Attributes:
        reason: Why the record was rejected.
        raw: The original value.
    """

    reason: str
    raw: Any = None


DecodedRecord = Union[TimelineRecord, RecordRejection]


def decode_record(raw: Any) -> DecodedRecord:
    """Decode a raw record into a TimelineRecord.

    Args:
        raw: One entry of the timeline ``records`` array.

    Returns:
        The decoded record, or a RecordRejection when the entry is not an
        object or has no usable id.

    """
    if not isinstance(raw, Mapping):
        return RecordRejection(reason="record is not an object", raw=raw)

    try:
        return TimelineRecord.model_validate(dict(raw))
    except ValidationError as e:
        return RecordRejection(reason=str(e.errors()[0].get("msg", e)), raw=raw)
