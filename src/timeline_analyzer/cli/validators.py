"""Validation utilities for CLI arguments."""

import argparse

__all__ = ["validate_args"]


def validate_args(args: argparse.Namespace) -> str | None:
    """Validate CLI arguments for consistency.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Error message if validation fails, None if valid.

    """
    timeline = getattr(args, "timeline", None)
    import_rules = getattr(args, "import_rules", None)
    export_rules = getattr(args, "export_rules", None)
    reset_rules = getattr(args, "reset_rules", False)

    if not any([timeline, import_rules, export_rules, reset_rules]):
        return (
            "Error: Nothing to do. Use --timeline, --import-rules, "
            "--export-rules or --reset-rules"
        )

    if import_rules and reset_rules:
        return "Error: --import-rules and --reset-rules cannot be combined"

    if getattr(args, "rules", None) and not timeline:
        return "Error: --rules requires --timeline"

    top = getattr(args, "top", None)
    if top is not None and top < 1:
        return "Error: --top must be at least 1"

    return None
