"""Rule-set management commands.

This module implements the commands that import, export and reset the
stored rule set.
"""

from argparse import Namespace
from pathlib import Path

from timeline_analyzer.classification.store import RuleSetStore
from timeline_analyzer.cli.commands.base import BaseCommand, CommandResult
from timeline_analyzer.cli.exceptions import CommandError

__all__ = ["ExportRulesCommand", "ImportRulesCommand", "ResetRulesCommand"]


class _RuleSetCommand(BaseCommand):
    """Shared base for commands that operate on the rule-set store."""

    def __init__(self, store: RuleSetStore) -> None:
        """Initialize the command.

        Args:
            store: Rule-set store to operate on.

        """
        self._store = store

    def _result(self, message: str, warning: str | None) -> CommandResult:
        if warning:
            message = f"{message}\nWarning: {warning}"
        return CommandResult(exit_code=0, message=message)


class ImportRulesCommand(_RuleSetCommand):
    """Command to replace the stored rule set with a rule file."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "import-rules"

    def execute(self, args: Namespace) -> CommandResult:
        """Import the rule file named by ``--import-rules``.

        Raises:
            CommandError: If the file cannot be read.
            RuleSetImportError: If the file cannot be imported.

        """
        path = Path(args.import_rules)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CommandError(f"Failed to read rule file {path}: {e}") from e

        warning = self._store.import_json(text)
        rule_set = self._store.rule_set
        return self._result(
            f"Imported {len(rule_set.rules)} rules and "
            f"{len(rule_set.overrides)} overrides from {path}",
            warning,
        )


class ExportRulesCommand(_RuleSetCommand):
    """Command to write the stored rule set to a file or stdout."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "export-rules"

    def execute(self, args: Namespace) -> CommandResult:
        """Export to the path named by ``--export-rules`` ('-' for stdout).

        Raises:
            CommandError: If the file cannot be written.

        """
        text = self._store.export_json()
        if args.export_rules == "-":
            return CommandResult(exit_code=0, output=text)

        path = Path(args.export_rules)
        try:
            path.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            raise CommandError(f"Failed to write rule file {path}: {e}") from e

        return CommandResult(
            exit_code=0,
            message=f"Exported {len(self._store.rule_set.rules)} rules to {path}",
        )


class ResetRulesCommand(_RuleSetCommand):
    """Command to restore the built-in rules."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "reset-rules"

    def execute(self, args: Namespace) -> CommandResult:
        """Restore the built-in rules and drop all overrides."""
        warning = self._store.reset()
        return self._result(
            f"Restored {len(self._store.rule_set.rules)} built-in rules",
            warning,
        )
