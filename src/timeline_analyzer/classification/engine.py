"""Rule evaluation.

Classification is a pure function of (node, rules, overrides): an
override wins, otherwise the first enabled matching rule in list order,
otherwise "unclassified".
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from functools import lru_cache

from timeline_analyzer.logging_config import get_logger
from timeline_analyzer.models.classification import (
    ClassificationEntry,
    ClassificationRule,
    ClassificationSummary,
)
from timeline_analyzer.models.enums import (
    ClassificationSource,
    RuleField,
    RuleOperator,
    WorkCategory,
)
from timeline_analyzer.models.timeline import TimelineNode

__all__ = [
    "classify_node",
    "classify_nodes",
    "get_field_value",
    "is_rule_match",
]

logger = get_logger(__name__)


def classify_node(
    node: TimelineNode,
    rules: Iterable[ClassificationRule],
    overrides: Mapping[str, WorkCategory],
) -> ClassificationEntry:
    """Classify a single node.

    Args:
        node: Node to classify.
        rules: Rules in priority order.
        overrides: Manual categories keyed by node id.

    Returns:
        The category with the rule that matched and where it came from.

    """
    override = overrides.get(node.id)
    if override is not None:
        return ClassificationEntry(
            category=override,
            matched_rule_id=None,
            source=ClassificationSource.override,
        )

    for rule in rules:
        if not rule.enabled:
            continue
        if is_rule_match(rule, node):
            return ClassificationEntry(
                category=rule.category,
                matched_rule_id=rule.id,
                source=ClassificationSource.rule,
            )

    return ClassificationEntry(
        category=WorkCategory.unclassified,
        matched_rule_id=None,
        source=ClassificationSource.default,
    )


def classify_nodes(
    nodes: Iterable[TimelineNode],
    rules: list[ClassificationRule],
    overrides: Mapping[str, WorkCategory],
) -> ClassificationSummary:
    """Classify nodes and total their durations per category.

    Args:
        nodes: Nodes to classify (usually the step-like nodes).
        rules: Rules in priority order.
        overrides: Manual categories keyed by node id.

    Returns:
        Per-node entries and duration totals.

    """
    by_node_id: dict[str, ClassificationEntry] = {}
    totals = {category: 0 for category in WorkCategory}
    total_ms = 0

    for node in nodes:
        entry = classify_node(node, rules, overrides)
        by_node_id[node.id] = entry
        totals[entry.category] += node.duration_ms
        total_ms += node.duration_ms

    warnings = [
        f"Rule '{rule.id}' has an invalid regular expression and never matches."
        for rule in rules
        if rule.enabled
        and rule.operator is RuleOperator.regex
        and rule.value
        and _compile_pattern(rule.value) is None
    ]
    useful_ms = totals[WorkCategory.useful]
    return ClassificationSummary(
        by_node_id=by_node_id,
        totals_by_category=totals,
        total_duration_ms=total_ms,
        useful_duration_ms=useful_ms,
        non_useful_duration_ms=total_ms - useful_ms,
        warnings=warnings,
    )


def is_rule_match(rule: ClassificationRule, node: TimelineNode) -> bool:
    """Test a rule against a node.

    Comparisons are case-insensitive. Empty field values and empty rule
    values never match, and an invalid regex never matches.
    """
    field_value = get_field_value(node, rule.field)
    if not field_value or not rule.value:
        return False

    candidate = field_value.lower()
    target = rule.value.lower()

    if rule.operator is RuleOperator.contains:
        return target in candidate
    if rule.operator is RuleOperator.startsWith:
        return candidate.startswith(target)
    if rule.operator is RuleOperator.equals:
        return candidate == target
    if rule.operator is RuleOperator.regex:
        pattern = _compile_pattern(rule.value)
        return pattern is not None and pattern.search(field_value) is not None
    return False


def get_field_value(node: TimelineNode, field: RuleField) -> str:
    """Read the attribute a rule inspects, as a string."""
    if field is RuleField.name:
        return node.name
    if field is RuleField.type:
        return node.type
    if field is RuleField.identifier:
        return node.identifier or ""
    if field is RuleField.refName:
        return node.ref_name or ""
    if field is RuleField.taskName:
        return node.task_name or ""
    return ""


@lru_cache(maxsize=256)
def _compile_pattern(value: str) -> re.Pattern[str] | None:
    try:
        return re.compile(value, re.IGNORECASE)
    except re.error as e:
        logger.debug("invalid_rule_pattern", pattern=value, error=str(e))
        return None
