"""Base exceptions for timeline-analyzer.

This module defines the root exception hierarchy for the entire
package. All domain-specific exceptions should inherit from
TimelineAnalyzerError.
"""

__all__ = ["TimelineAnalyzerError"]


class TimelineAnalyzerError(Exception):
    """Base exception for all timeline-analyzer errors.

    Provides a common exception type for clients to catch package errors.
    """

    pass
