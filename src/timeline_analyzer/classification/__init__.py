"""Classification module for timeline-analyzer.

This module provides first-match-wins step classification:
- classify_node / classify_nodes: Rule and override evaluation
- create_default_rules / create_rule: Built-in and custom rules
- parse_rule_set / serialize_rule_set: JSON exchange format
- RuleSetStore / RuleSetStorage: Session state and persistence
"""

from timeline_analyzer.classification.engine import (
    classify_node,
    classify_nodes,
    is_rule_match,
)
from timeline_analyzer.classification.exceptions import (
    ClassificationError,
    RuleNotFoundError,
    RuleSetImportError,
    RuleSetStorageError,
)
from timeline_analyzer.classification.rules import (
    WORK_CATEGORY_LABELS,
    create_default_rules,
    create_rule,
)
from timeline_analyzer.classification.serialization import (
    parse_rule_set,
    serialize_rule_set,
)
from timeline_analyzer.classification.state import create_default_rule_set
from timeline_analyzer.classification.storage import RuleSetStorage
from timeline_analyzer.classification.store import RuleSetStore

__all__ = [
    "ClassificationError",
    "classify_node",
    "classify_nodes",
    "create_default_rule_set",
    "create_default_rules",
    "create_rule",
    "is_rule_match",
    "parse_rule_set",
    "RuleNotFoundError",
    "RuleSetImportError",
    "RuleSetStorage",
    "RuleSetStorageError",
    "RuleSetStore",
    "serialize_rule_set",
    "WORK_CATEGORY_LABELS",
]
