"""Rule-set store.

RuleSetStore owns the in-force rule set for a session. Mutations go
through the pure functions in ``state`` and the result replaces the
current value; each change is persisted when storage is configured.
Persistence failures never undo a change: they are kept as a warning.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from timeline_analyzer.classification import state
from timeline_analyzer.classification.exceptions import RuleSetStorageError
from timeline_analyzer.classification.serialization import (
    parse_rule_set,
    serialize_rule_set,
)
from timeline_analyzer.classification.storage import RuleSetStorage
from timeline_analyzer.logging_config import get_logger
from timeline_analyzer.models.classification import ClassificationRule, RuleSet
from timeline_analyzer.models.enums import WorkCategory

__all__ = ["RuleSetStore"]

logger = get_logger(__name__)


class RuleSetStore:
    """Holds the current rule set and persists every change.

    Example:
        store = RuleSetStore(RuleSetStorage(Path("rules.json")))
        store.set_override("step-42", WorkCategory.setup)
        summary = classify_nodes(steps, store.rule_set.rules, store.rule_set.overrides)

    Attributes:
        storage: Backing storage, or None for an in-memory store.
        last_warning: Message from the most recent failed save, if any.

    """

    def __init__(self, storage: RuleSetStorage | None = None) -> None:
        """Initialize from stored state, falling back to the built-in rules.

        Args:
            storage: Backing storage; None keeps the store in memory.

        """
        self.storage = storage
        self.last_warning: str | None = None

        stored = storage.load() if storage is not None else None
        self._rule_set = stored if stored is not None else state.create_default_rule_set()

    @property
    def rule_set(self) -> RuleSet:
        """The in-force rule set."""
        return self._rule_set

    def add_rule(self, rule: ClassificationRule) -> str | None:
        """Append a rule. Returns a persistence warning, if any."""
        return self._apply(state.add_rule, rule)

    def update_rule(self, rule_id: str, **changes: Any) -> str | None:
        """Change fields of a rule. Returns a persistence warning, if any."""
        return self._apply(lambda current: state.update_rule(current, rule_id, **changes))

    def remove_rule(self, rule_id: str) -> str | None:
        """Delete a rule. Returns a persistence warning, if any."""
        return self._apply(state.remove_rule, rule_id)

    def move_rule(self, rule_id: str, new_index: int) -> str | None:
        """Reorder a rule. Returns a persistence warning, if any."""
        return self._apply(state.move_rule, rule_id, new_index)

    def set_override(self, node_id: str, category: WorkCategory | None) -> str | None:
        """Set or clear a node override. Returns a persistence warning, if any."""
        return self._apply(state.set_override, node_id, category)

    def clear_overrides(self) -> str | None:
        """Remove all overrides. Returns a persistence warning, if any."""
        return self._apply(state.clear_overrides)

    def reset_rules(self) -> str | None:
        """Restore the built-in rules. Returns a persistence warning, if any."""
        return self._apply(state.reset_rules)

    def reset(self) -> str | None:
        """Restore the built-in rules and drop all overrides."""
        return self._commit(state.create_default_rule_set())

    def import_json(self, text: str) -> str | None:
        """Replace the rule set with an imported one.

        The current rule set is left unchanged when the import fails.

        Args:
            text: Rule-set JSON.

        Returns:
            A persistence warning, if any.

        Raises:
            RuleSetImportError: If the file cannot be imported.

        """
        imported = parse_rule_set(text)
        logger.info(
            "rule_set_imported",
            rule_count=len(imported.rules),
            override_count=len(imported.overrides),
        )
        return self._commit(imported)

    def export_json(self) -> str:
        """Serialize the in-force rule set."""
        return serialize_rule_set(self._rule_set)

    def _apply(self, update: Callable[..., RuleSet], *args: Any) -> str | None:
        return self._commit(update(self._rule_set, *args))

    def _commit(self, rule_set: RuleSet) -> str | None:
        self._rule_set = rule_set
        self.last_warning = None
        if self.storage is None:
            return None

        try:
            self.storage.save(rule_set)
        except RuleSetStorageError as e:
            logger.warning("rule_set_save_failed", error=str(e))
            self.last_warning = str(e)
        return self.last_warning
