"""Analyze timeline command implementation.

This module implements the command that analyzes a timeline document
and classifies its steps.
"""

from argparse import Namespace
from pathlib import Path

from timeline_analyzer.analysis.analyzer import analyze_timeline, classify_steps, load_timeline
from timeline_analyzer.classification.serialization import parse_rule_set
from timeline_analyzer.classification.store import RuleSetStore
from timeline_analyzer.cli.commands.base import BaseCommand, CommandResult
from timeline_analyzer.cli.exceptions import CommandError
from timeline_analyzer.cli.formatters import format_analysis
from timeline_analyzer.config.settings import AnalyzerSettings
from timeline_analyzer.logging_config import get_logger
from timeline_analyzer.models.classification import RuleSet

__all__ = ["AnalyzeTimelineCommand"]

logger = get_logger(__name__)


class AnalyzeTimelineCommand(BaseCommand):
    """Command to analyze a timeline and classify its steps.

    Attributes:
        _store: Rule-set store supplying the in-force rules.
        _settings: Reporting limits.

    """

    def __init__(self, store: RuleSetStore, settings: AnalyzerSettings) -> None:
        """Initialize the command.

        Args:
            store: Rule-set store supplying the in-force rules.
            settings: Reporting limits.

        """
        self._store = store
        self._settings = settings

    @property
    def name(self) -> str:
        """Get the command name."""
        return "analyze"

    def execute(self, args: Namespace) -> CommandResult:
        """Execute the analyze command.

        Args:
            args: Parsed arguments with the timeline path.

        Returns:
            CommandResult with the formatted report.

        Raises:
            MalformedInputError: If the timeline cannot be analyzed.
            RuleSetImportError: If the --rules file cannot be imported.

        """
        timeline_path = Path(args.timeline)
        raw = load_timeline(timeline_path)

        top_limit = getattr(args, "top", None) or self._settings.top_consumers_limit
        analysis = analyze_timeline(raw, top_limit=top_limit)

        rule_set = self._resolve_rule_set(getattr(args, "rules", None))
        summary = classify_steps(analysis.graph, rule_set)

        logger.info(
            "timeline_report_ready",
            path=str(timeline_path),
            warning_count=len(analysis.graph.warnings),
        )

        output = format_analysis(
            analysis,
            summary,
            json_output=getattr(args, "json_output", False),
            max_warnings=self._settings.max_displayed_warnings,
        )
        return CommandResult(exit_code=0, output=output)

    def _resolve_rule_set(self, rules_path: str | None) -> RuleSet:
        if not rules_path:
            return self._store.rule_set
        try:
            text = Path(rules_path).read_text(encoding="utf-8")
        except OSError as e:
            raise CommandError(f"Failed to read rule file {rules_path}: {e}") from e
        return parse_rule_set(text)
