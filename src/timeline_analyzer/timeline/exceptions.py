"""Exceptions for the timeline module.

This module defines exceptions raised when a timeline document cannot
be analyzed at all. Per-record anomalies are reported as graph warnings
instead.
"""

from timeline_analyzer.exceptions import TimelineAnalyzerError

__all__ = ["MalformedInputError", "TimelineError"]


class TimelineError(TimelineAnalyzerError):
    """Base exception for timeline-related errors."""

    pass


class MalformedInputError(TimelineError):
    """Raised when the timeline payload is not an object with a records array."""

    pass
