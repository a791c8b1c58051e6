"""Enumeration types for timeline-analyzer.

This module defines the closed vocabularies used throughout the package,
including dependency reasons, work categories and classification rule
fields and operators.
"""

from enum import Enum

__all__ = [
    "ClassificationSource",
    "DependencyReason",
    "InsightLevel",
    "RuleField",
    "RuleOperator",
    "WorkCategory",
]


class DependencyReason(str, Enum):
    """Why a dependency edge was inferred.

    Attributes:
        parent_child: The target is a child of the source record.
        sibling_order: The target follows the source among its siblings.
    """

    parent_child = "parent-child"
    sibling_order = "sibling-order"


class WorkCategory(str, Enum):
    """Semantic category assigned to a pipeline step.

    Attributes:
        useful: Build, test and publish work.
        setup: Job initialization and resource preparation.
        teardown: Cleanup after the useful work.
        infrastructure: Security, policy and compliance checks.
        unclassified: No override or rule applied.
    """

    useful = "useful"
    setup = "setup"
    teardown = "teardown"
    infrastructure = "infrastructure"
    unclassified = "unclassified"


class RuleField(str, Enum):
    """Node attribute a classification rule inspects."""

    name = "name"
    type = "type"
    identifier = "identifier"
    refName = "refName"
    taskName = "taskName"


class RuleOperator(str, Enum):
    """Comparison a classification rule performs.

    Attributes:
        contains: Case-insensitive substring match.
        startsWith: Case-insensitive prefix match.
        equals: Case-insensitive equality.
        regex: Case-insensitive regular expression search.
    """

    contains = "contains"
    startsWith = "startsWith"
    equals = "equals"
    regex = "regex"


class ClassificationSource(str, Enum):
    """Where a node's category came from."""

    override = "override"
    rule = "rule"
    default = "default"


class InsightLevel(str, Enum):
    """Severity of a parallelization insight."""

    info = "info"
    warning = "warning"
    opportunity = "opportunity"
