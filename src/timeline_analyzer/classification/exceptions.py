"""Exceptions for the classification module.

This module defines exceptions for rule-set import, rule editing and
rule-set persistence.
"""

from timeline_analyzer.exceptions import TimelineAnalyzerError

__all__ = [
    "ClassificationError",
    "RuleNotFoundError",
    "RuleSetImportError",
    "RuleSetStorageError",
]


class ClassificationError(TimelineAnalyzerError):
    """Base exception for classification-related errors."""

    pass


class RuleSetImportError(ClassificationError):
    """Raised when a rule file cannot be imported as a whole."""

    pass


class RuleNotFoundError(ClassificationError):
    """Raised when an edit targets a rule id that is not in the rule set."""

    pass


class RuleSetStorageError(ClassificationError):
    """Raised when the persisted rule set cannot be written."""

    pass
