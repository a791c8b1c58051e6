"""Exceptions for the CLI module.

This module defines exceptions specific to CLI operations.
"""

from timeline_analyzer.exceptions import TimelineAnalyzerError

__all__ = [
    "CLIError",
    "CommandError",
    "ValidationError",
]


class CLIError(TimelineAnalyzerError):
    """Base exception for CLI-related errors."""

    pass


class ValidationError(CLIError):
    """Raised when CLI argument validation fails."""

    pass


class CommandError(CLIError):
    """Raised when a command execution fails."""

    pass
