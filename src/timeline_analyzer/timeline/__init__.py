"""Timeline normalization and dependency inference.

This module provides:
- normalize_timeline: Raw timeline document to TimelineGraph
- decode_record: Boundary decoding of a single raw record
- parse_timeline_date: Tolerant ISO-8601 timestamp parsing
- collect_descendant_ids: Cycle-safe descendant traversal
"""

from timeline_analyzer.timeline.dates import parse_timeline_date
from timeline_analyzer.timeline.dependencies import (
    build_dependency_edges,
    build_dependency_lookup,
)
from timeline_analyzer.timeline.exceptions import MalformedInputError, TimelineError
from timeline_analyzer.timeline.normalizer import compare_nodes, normalize_timeline
from timeline_analyzer.timeline.records import RecordRejection, decode_record
from timeline_analyzer.timeline.traversal import collect_descendant_ids, iter_descendants

__all__ = [
    "build_dependency_edges",
    "build_dependency_lookup",
    "collect_descendant_ids",
    "compare_nodes",
    "decode_record",
    "iter_descendants",
    "MalformedInputError",
    "normalize_timeline",
    "parse_timeline_date",
    "RecordRejection",
    "TimelineError",
]
