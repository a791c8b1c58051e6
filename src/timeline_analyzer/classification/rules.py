"""Built-in classification rules and rule construction helpers."""

from __future__ import annotations

import uuid
from typing import Any

from timeline_analyzer.models.classification import ClassificationRule
from timeline_analyzer.models.enums import RuleField, RuleOperator, WorkCategory

__all__ = [
    "WORK_CATEGORY_LABELS",
    "create_default_rules",
    "create_rule",
    "generate_rule_id",
]

WORK_CATEGORY_LABELS: dict[WorkCategory, str] = {
    WorkCategory.useful: "Useful work",
    WorkCategory.setup: "Setup",
    WorkCategory.teardown: "Teardown",
    WorkCategory.infrastructure: "Infrastructure / policy",
    WorkCategory.unclassified: "Unclassified",
}


def generate_rule_id() -> str:
    """Return a new unique rule id."""
    return str(uuid.uuid4())


def create_default_rules() -> list[ClassificationRule]:
    """Return the built-in rules in evaluation order."""
    return [
        ClassificationRule(
            id="setup-init-finalize",
            label="Initialize/finalize tasks",
            field=RuleField.name,
            operator=RuleOperator.regex,
            value="(initialize job|pre-job|finalize job|post-job)",
            category=WorkCategory.setup,
        ),
        ClassificationRule(
            id="setup-download-secrets",
            label="Download secrets/setup resources",
            field=RuleField.name,
            operator=RuleOperator.regex,
            value="(download secrets|checkout|set .* variable|prepare|setup)",
            category=WorkCategory.setup,
        ),
        ClassificationRule(
            id="infra-security-policy",
            label="Security and policy checks",
            field=RuleField.name,
            operator=RuleOperator.regex,
            value="(codeql|governance|security|policy|compliance|validation|drift management)",
            category=WorkCategory.infrastructure,
        ),
        ClassificationRule(
            id="teardown-stop-cleanup",
            label="Stop/cleanup tasks",
            field=RuleField.name,
            operator=RuleOperator.regex,
            value="(stop .*|cleanup|tear ?down|finalize)",
            category=WorkCategory.teardown,
        ),
        ClassificationRule(
            id="useful-build-test",
            label="Build/test/publish work",
            field=RuleField.name,
            operator=RuleOperator.regex,
            value="(build|compile|restore|test|pack|publish|run)",
            category=WorkCategory.useful,
        ),
    ]


def create_rule(**fields: Any) -> ClassificationRule:
    """Create a rule, filling unspecified fields with defaults.

    Defaults: a generated id, label "Custom rule", enabled, field name,
    operator contains, empty value, category useful.
    """
    values: dict[str, Any] = {
        "id": generate_rule_id(),
        "label": "Custom rule",
        "enabled": True,
        "field": RuleField.name,
        "operator": RuleOperator.contains,
        "value": "",
        "category": WorkCategory.useful,
    }
    values.update({key: value for key, value in fields.items() if value is not None})
    return ClassificationRule(**values)
