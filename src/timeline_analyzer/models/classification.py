"""Classification models for timeline-analyzer.

This module defines classification rules, the exchangeable rule set, and
the per-node and aggregate classification results.
"""

from pydantic import Field

from timeline_analyzer.config.defaults import RULE_SET_VERSION
from timeline_analyzer.models.base import BaseSchema
from timeline_analyzer.models.enums import (
    ClassificationSource,
    RuleField,
    RuleOperator,
    WorkCategory,
)

__all__ = [
    "ClassificationEntry",
    "ClassificationRule",
    "ClassificationSummary",
    "RuleSet",
]


class ClassificationRule(BaseSchema):
    """A single first-match-wins classification rule.

    Attributes:
        id: Unique rule identifier.
        label: Human-readable description.
        enabled: Disabled rules are skipped during evaluation.
        field: Node attribute to test.
        operator: Comparison to perform.
        value: Text (or pattern) to compare against.
        category: Category assigned when the rule matches.
    """

    id: str
    label: str
    enabled: bool = True
    field: RuleField = RuleField.name
    operator: RuleOperator = RuleOperator.contains
    value: str = ""
    category: WorkCategory = WorkCategory.useful


class RuleSet(BaseSchema):
    """Ordered rules plus per-node overrides.

    List order of ``rules`` is the evaluation priority.

    Attributes:
        version: Exchange format version.
        rules: Rules in evaluation order.
        overrides: Node id to category, taking precedence over rules.
    """

    version: int = RULE_SET_VERSION
    rules: list[ClassificationRule] = Field(default_factory=list)
    overrides: dict[str, WorkCategory] = Field(default_factory=dict)


class ClassificationEntry(BaseSchema):
    """Category assigned to one node and how it was decided."""

    category: WorkCategory
    matched_rule_id: str | None = None
    source: ClassificationSource


class ClassificationSummary(BaseSchema):
    """Classification of a node list with per-category duration totals.

    Attributes:
        by_node_id: Entry per classified node.
        totals_by_category: Summed duration per category.
        total_duration_ms: Summed duration of all nodes.
        useful_duration_ms: Duration classified as useful.
        non_useful_duration_ms: Everything else.
        warnings: Enabled rules whose pattern cannot be compiled.
    """

    by_node_id: dict[str, ClassificationEntry] = Field(default_factory=dict)
    totals_by_category: dict[WorkCategory, int] = Field(default_factory=dict)
    total_duration_ms: int = 0
    useful_duration_ms: int = 0
    non_useful_duration_ms: int = 0
    warnings: list[str] = Field(default_factory=list)
