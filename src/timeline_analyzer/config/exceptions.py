"""Exceptions for config module.

This module defines exceptions related to configuration loading
and validation errors.
"""

from timeline_analyzer.exceptions import TimelineAnalyzerError

__all__ = ["ConfigurationError"]


class ConfigurationError(TimelineAnalyzerError):
    """Base exception for configuration-related errors."""

    pass
