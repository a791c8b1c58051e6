"""CLI command implementations.

This module exports the command classes for the CLI.
"""

from timeline_analyzer.cli.commands.analyze import AnalyzeTimelineCommand
from timeline_analyzer.cli.commands.base import BaseCommand, CommandResult
from timeline_analyzer.cli.commands.rules import (
    ExportRulesCommand,
    ImportRulesCommand,
    ResetRulesCommand,
)

__all__ = [
    "AnalyzeTimelineCommand",
    "BaseCommand",
    "CommandResult",
    "ExportRulesCommand",
    "ImportRulesCommand",
    "ResetRulesCommand",
]
