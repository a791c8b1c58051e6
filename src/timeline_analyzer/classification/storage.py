"""Rule-set persistence.

The rule set is stored as a single JSON document in the exchange format.
A missing, unreadable or corrupt file loads as "no stored state".
"""

from __future__ import annotations

import json
from pathlib import Path

from timeline_analyzer.classification.exceptions import (
    RuleSetImportError,
    RuleSetStorageError,
)
from timeline_analyzer.classification.serialization import (
    rule_set_from_data,
    serialize_rule_set,
)
from timeline_analyzer.logging_config import get_logger
from timeline_analyzer.models.classification import RuleSet

__all__ = ["RuleSetStorage"]

logger = get_logger(__name__)


class RuleSetStorage:
    """Reads and writes the persisted rule set.

    Attributes:
        path: JSON file holding the rule set.

    """

    def __init__(self, path: Path) -> None:
        """Initialize the storage.

        Args:
            path: JSON file holding the rule set.

        """
        self.path = path

    def load(self) -> RuleSet | None:
        """Load the stored rule set.

        Returns:
            The stored rule set, or None when nothing usable is stored.

        """
        if not self.path.exists():
            return None

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            return rule_set_from_data(data)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, RuleSetImportError) as e:
            logger.warning(
                "rule_set_store_corrupt",
                path=str(self.path),
                error=str(e),
            )
            return None

    def save(self, rule_set: RuleSet) -> Path:
        """Write the rule set.

        Args:
            rule_set: Rule set to persist.

        Returns:
            Path to the written file.

        Raises:
            RuleSetStorageError: If the file cannot be written.

        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(serialize_rule_set(rule_set), encoding="utf-8")
        except OSError as e:
            raise RuleSetStorageError(
                f"Failed to save rule set to {self.path}: {e}"
            ) from e

        logger.debug("rule_set_saved", path=str(self.path), rule_count=len(rule_set.rules))
        return self.path
