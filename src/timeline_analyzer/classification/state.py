"""Immutable rule-set updates.

Every function returns a new RuleSet and leaves its input untouched, so
classification stays a function of the rule set it is handed.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from timeline_analyzer.classification.exceptions import ClassificationError, RuleNotFoundError
from timeline_analyzer.classification.rules import create_default_rules
from timeline_analyzer.models.classification import ClassificationRule, RuleSet
from timeline_analyzer.models.enums import WorkCategory

__all__ = [
    "add_rule",
    "clear_overrides",
    "create_default_rule_set",
    "move_rule",
    "remove_rule",
    "reset_rules",
    "set_override",
    "update_rule",
]


def create_default_rule_set() -> RuleSet:
    """Built-in rules with no overrides."""
    return RuleSet(rules=create_default_rules(), overrides={})


def add_rule(rule_set: RuleSet, rule: ClassificationRule) -> RuleSet:
    """Append a rule at the lowest priority."""
    return rule_set.model_copy(update={"rules": [*rule_set.rules, rule]})


def update_rule(rule_set: RuleSet, rule_id: str, **changes: Any) -> RuleSet:
    """Replace fields of one rule; the id itself cannot change.

    Raises:
        RuleNotFoundError: If no rule has ``rule_id``.
        ClassificationError: If a changed field has an invalid value.

    """
    index = _index_of(rule_set, rule_id)
    changes.pop("id", None)
    current = rule_set.rules[index]
    try:
        updated = ClassificationRule.model_validate({**current.model_dump(), **changes})
    except ValidationError as e:
        raise ClassificationError(f"Invalid update for rule '{rule_id}': {e}") from e
    rules = list(rule_set.rules)
    rules[index] = updated
    return rule_set.model_copy(update={"rules": rules})


def remove_rule(rule_set: RuleSet, rule_id: str) -> RuleSet:
    """Drop a rule.

    Raises:
        RuleNotFoundError: If no rule has ``rule_id``.

    """
    index = _index_of(rule_set, rule_id)
    rules = [rule for position, rule in enumerate(rule_set.rules) if position != index]
    return rule_set.model_copy(update={"rules": rules})


def move_rule(rule_set: RuleSet, rule_id: str, new_index: int) -> RuleSet:
    """Move a rule to ``new_index`` (clamped to the list bounds).

    Raises:
        RuleNotFoundError: If no rule has ``rule_id``.

    """
    index = _index_of(rule_set, rule_id)
    rules = list(rule_set.rules)
    rule = rules.pop(index)
    target = max(0, min(new_index, len(rules)))
    rules.insert(target, rule)
    return rule_set.model_copy(update={"rules": rules})


def set_override(rule_set: RuleSet, node_id: str, category: WorkCategory | None) -> RuleSet:
    """Pin a node to a category, or clear its override when ``category`` is None.

    Raises:
        ClassificationError: If ``category`` is not a known work category.

    """
    overrides = dict(rule_set.overrides)
    if category is None:
        overrides.pop(node_id, None)
    else:
        try:
            overrides[node_id] = WorkCategory(category)
        except ValueError as e:
            raise ClassificationError(f"Unknown work category '{category}'.") from e
    return rule_set.model_copy(update={"overrides": overrides})


def clear_overrides(rule_set: RuleSet) -> RuleSet:
    """Remove every override."""
    return rule_set.model_copy(update={"overrides": {}})


def reset_rules(rule_set: RuleSet) -> RuleSet:
    """Restore the built-in rules, keeping overrides."""
    return rule_set.model_copy(update={"rules": create_default_rules()})


def _index_of(rule_set: RuleSet, rule_id: str) -> int:
    for index, rule in enumerate(rule_set.rules):
        if rule.id == rule_id:
            return index
    raise RuleNotFoundError(f"No classification rule with id '{rule_id}'.")
