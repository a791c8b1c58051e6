"""CLI main entry point.

This module provides the main entry point for the timeline-analyzer CLI.
"""

import argparse
import sys
import traceback
from pathlib import Path

from timeline_analyzer.classification.storage import RuleSetStorage
from timeline_analyzer.classification.store import RuleSetStore
from timeline_analyzer.cli.commands import (
    AnalyzeTimelineCommand,
    BaseCommand,
    ExportRulesCommand,
    ImportRulesCommand,
    ResetRulesCommand,
)
from timeline_analyzer.cli.parser import create_parser
from timeline_analyzer.cli.validators import validate_args
from timeline_analyzer.config.settings import AnalyzerSettings, get_settings
from timeline_analyzer.exceptions import TimelineAnalyzerError
from timeline_analyzer.logging_config import configure_logging, get_logger

__all__ = ["main", "CommandDispatcher"]

logger = get_logger(__name__)


class CommandDispatcher:
    """Dispatches CLI arguments to the requested commands.

    Rule-set commands run before analysis so that an analysis in the same
    invocation sees the updated rules.

    Attributes:
        _store: Rule-set store shared by all commands.
        _settings: Application settings.

    """

    def __init__(self, store: RuleSetStore, settings: AnalyzerSettings) -> None:
        """Initialize the dispatcher with all command handlers.

        Args:
            store: Rule-set store shared by all commands.
            settings: Application settings.

        """
        self._store = store
        self._settings = settings
        self._reset_cmd = ResetRulesCommand(store)
        self._import_cmd = ImportRulesCommand(store)
        self._export_cmd = ExportRulesCommand(store)
        self._analyze_cmd = AnalyzeTimelineCommand(store, settings)

    def dispatch(self, args: argparse.Namespace) -> int:
        """Run every command the arguments ask for.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for errors).

        """
        commands: list[BaseCommand] = []
        if getattr(args, "reset_rules", False):
            commands.append(self._reset_cmd)
        if getattr(args, "import_rules", None):
            commands.append(self._import_cmd)
        if getattr(args, "export_rules", None):
            commands.append(self._export_cmd)
        if getattr(args, "timeline", None):
            commands.append(self._analyze_cmd)

        for command in commands:
            logger.debug("command_started", command=command.name)
            result = command.execute(args)
            if result.message:
                print(result.message, file=sys.stderr)
            if result.output is not None:
                print(result.output)
            if result.exit_code != 0:
                return result.exit_code

        return 0


def main(argv: list[str] | None = None) -> int:
    """Run the CLI application.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).

    """
    parser = create_parser()
    args = parser.parse_args(argv)

    _setup_logging(getattr(args, "verbose", False))

    error = validate_args(args)
    if error:
        print(error, file=sys.stderr)
        return 1

    try:
        settings = get_settings()
        store_path = Path(args.store) if args.store else settings.rules_store_path
        store = RuleSetStore(RuleSetStorage(store_path))
        dispatcher = CommandDispatcher(store, settings)
        return dispatcher.dispatch(args)

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    except TimelineAnalyzerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except Exception as e:
        logger.exception("fatal_error", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        if getattr(args, "verbose", False):
            traceback.print_exc()
        return 1


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI.

    Args:
        verbose: Whether to enable debug-level logging.

    """
    configure_logging(verbose=verbose, json_output=False)


if __name__ == "__main__":
    sys.exit(main())
