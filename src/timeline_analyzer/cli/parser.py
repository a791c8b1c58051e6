"""CLI argument parser configuration.

This module provides the argument parser for the timeline-analyzer CLI.
"""

import argparse

from timeline_analyzer import __version__

__all__ = ["create_parser"]


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        An ArgumentParser configured with all CLI options.

    """
    parser = argparse.ArgumentParser(
        prog="timeline-analyzer",
        description=(
            "Timeline Analyzer - Derive wall-clock, agent-wait, critical-path and "
            "parallelization metrics from a CI/CD pipeline timeline."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyze a timeline downloaded from the build timeline API
  timeline-analyzer --timeline build-1234-timeline.json

  # Machine-readable output
  timeline-analyzer --timeline build-1234-timeline.json --json

  # Classify steps with a shared rule file instead of the stored rules
  timeline-analyzer --timeline build-1234-timeline.json --rules team-rules.json

  # Replace the stored rules with an exported rule file
  timeline-analyzer --import-rules team-rules.json

  # Print the stored rules
  timeline-analyzer --export-rules -

  # Restore the built-in rules
  timeline-analyzer --reset-rules
""",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Analysis
    parser.add_argument(
        "--timeline",
        type=str,
        metavar="FILE",
        help="Timeline JSON document to analyze",
    )

    parser.add_argument(
        "--rules",
        type=str,
        metavar="FILE",
        help="Rule file used to classify steps instead of the stored rule set",
    )

    parser.add_argument(
        "--top",
        type=int,
        metavar="N",
        help="Number of entries in each top-consumer list",
    )

    # Rule-set management
    parser.add_argument(
        "--import-rules",
        type=str,
        metavar="FILE",
        help="Replace the stored rule set with the contents of FILE",
    )

    parser.add_argument(
        "--export-rules",
        type=str,
        metavar="FILE",
        help="Write the stored rule set to FILE ('-' for stdout)",
    )

    parser.add_argument(
        "--reset-rules",
        action="store_true",
        help="Restore the built-in rules and drop all overrides",
    )

    parser.add_argument(
        "--store",
        type=str,
        metavar="PATH",
        help="Location of the stored rule set (default: from settings)",
    )

    # Output format
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with debug logging",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output results as JSON instead of formatted text",
    )

    return parser
