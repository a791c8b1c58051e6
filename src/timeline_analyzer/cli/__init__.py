"""CLI package for timeline-analyzer.

This package provides the command-line interface for analyzing pipeline
timelines and managing the stored classification rule set. It implements
the Command pattern for the individual operations.
"""

from timeline_analyzer.cli.commands import (
    AnalyzeTimelineCommand,
    BaseCommand,
    CommandResult,
    ExportRulesCommand,
    ImportRulesCommand,
    ResetRulesCommand,
)
from timeline_analyzer.cli.formatters import format_analysis
from timeline_analyzer.cli.main import CommandDispatcher, main
from timeline_analyzer.cli.parser import create_parser
from timeline_analyzer.cli.validators import validate_args

__all__ = [
    "AnalyzeTimelineCommand",
    "BaseCommand",
    "CommandDispatcher",
    "CommandResult",
    "create_parser",
    "ExportRulesCommand",
    "format_analysis",
    "ImportRulesCommand",
    "main",
    "ResetRulesCommand",
    "validate_args",
]
