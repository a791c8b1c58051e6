"""Rule-set JSON export and import.

The exchange format is ``{"version": 1, "rules": [...], "overrides":
{nodeId: category}}``. Import rejects the file as a whole only for an
unsupported version or a missing rules array; individual rules and
overrides are repaired or dropped.
"""

from __future__ import annotations

import json
from typing import Any

from timeline_analyzer.classification.exceptions import RuleSetImportError
from timeline_analyzer.classification.rules import generate_rule_id
from timeline_analyzer.config.defaults import RULE_SET_VERSION
from timeline_analyzer.logging_config import get_logger
from timeline_analyzer.models.classification import ClassificationRule, RuleSet
from timeline_analyzer.models.enums import RuleField, RuleOperator, WorkCategory

__all__ = [
    "parse_rule",
    "parse_rule_set",
    "rule_set_from_data",
    "rule_set_to_data",
    "serialize_rule_set",
]

logger = get_logger(__name__)

_CATEGORY_VALUES = {category.value for category in WorkCategory}
_FIELD_VALUES = {field.value for field in RuleField}
_OPERATOR_VALUES = {operator.value for operator in RuleOperator}


def rule_set_to_data(rule_set: RuleSet) -> dict[str, Any]:
    """Convert a rule set to its JSON-ready exchange form.

    The current format version is always written.
    """
    data = rule_set.model_dump(mode="json")
    data["version"] = RULE_SET_VERSION
    return data


def serialize_rule_set(rule_set: RuleSet) -> str:
    """Serialize a rule set to indented JSON text."""
    return json.dumps(rule_set_to_data(rule_set), indent=2)


def parse_rule_set(text: str) -> RuleSet:
    """Parse rule-set JSON text.

    Args:
        text: Exported rule-set JSON.

    Returns:
        The reconstructed rule set.

    Raises:
        RuleSetImportError: If the text is not JSON, not an object, has an
            unsupported version, or lacks a rules array.

    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RuleSetImportError(f"Rule file is not valid JSON: {e}") from e
    return rule_set_from_data(data)


def rule_set_from_data(data: Any) -> RuleSet:
    """Reconstruct a rule set from decoded JSON.

    Args:
        data: Decoded rule-set document.

    Returns:
        The reconstructed rule set.

    Raises:
        RuleSetImportError: If the document is not an object, has an
            unsupported version, or lacks a rules array.

    """
    if not isinstance(data, dict):
        raise RuleSetImportError("Rule file must be a JSON object.")

    raw_version = data.get("version")
    version = _integer_or_none(raw_version)
    if version != RULE_SET_VERSION:
        raise RuleSetImportError(f"Unsupported rule file version '{raw_version}'.")

    raw_rules = data.get("rules")
    if not isinstance(raw_rules, list):
        raise RuleSetImportError("Rule file must include a rules array.")

    rules = [parse_rule(entry, index) for index, entry in enumerate(_order_by_priority(raw_rules))]
    overrides = _parse_overrides(data.get("overrides"))

    logger.debug("rule_set_parsed", rule_count=len(rules), override_count=len(overrides))
    return RuleSet(version=version, rules=rules, overrides=overrides)


def parse_rule(entry: Any, index: int) -> ClassificationRule:
    """Rebuild one rule, substituting defaults for missing or invalid fields.

    Args:
        entry: Decoded rule entry; anything but an object yields an
            all-default rule.
        index: Position in the file, used for the fallback label.

    Returns:
        A valid ClassificationRule.

    """
    candidate: dict[str, Any] = entry if isinstance(entry, dict) else {}

    rule_id = candidate.get("id")
    label = candidate.get("label")
    enabled = candidate.get("enabled")
    field = candidate.get("field")
    operator = candidate.get("operator")
    value = candidate.get("value")
    category = candidate.get("category")

    return ClassificationRule(
        id=rule_id if isinstance(rule_id, str) and rule_id else generate_rule_id(),
        label=label if isinstance(label, str) and label else f"Imported rule {index + 1}",
        enabled=enabled if isinstance(enabled, bool) else True,
        field=field if _is_member(field, _FIELD_VALUES) else RuleField.name,
        operator=operator if _is_member(operator, _OPERATOR_VALUES) else RuleOperator.contains,
        value=value if isinstance(value, str) else "",
        category=category if _is_member(category, _CATEGORY_VALUES) else WorkCategory.unclassified,
    )


def _parse_overrides(raw_overrides: Any) -> dict[str, WorkCategory]:
    if not isinstance(raw_overrides, dict):
        return {}

    overrides: dict[str, WorkCategory] = {}
    for node_id, category in raw_overrides.items():
        if not _is_member(category, _CATEGORY_VALUES):
            logger.debug("override_dropped", node_id=node_id, category=category)
            continue
        overrides[node_id] = WorkCategory(category)
    return overrides


def _order_by_priority(raw_rules: list[Any]) -> list[Any]:
    # Priority-numbered files are flattened to list order; mixed files keep file order
    priorities = [
        _integer_or_none(entry.get("priority")) if isinstance(entry, dict) else None
        for entry in raw_rules
    ]
    if not raw_rules or any(priority is None for priority in priorities):
        return raw_rules
    ranked = sorted(zip(priorities, range(len(raw_rules))))
    return [raw_rules[index] for _, index in ranked]


def _integer_or_none(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _is_member(value: Any, allowed: set[str]) -> bool:
    return isinstance(value, str) and value in allowed
