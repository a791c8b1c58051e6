"""Human-readable formatting helpers shared by insights and reports."""

import math

__all__ = ["format_duration", "to_percent"]


def format_duration(duration_ms: float) -> str:
    """Format a millisecond duration as a compact string.

    Args:
        duration_ms: Duration in milliseconds.

    Returns:
        "0s" for non-positive or non-finite values, otherwise
        "Hh Mm Ss", "Mm Ss" or "Ss" with seconds rounded.

    """
    if not math.isfinite(duration_ms) or duration_ms <= 0:
        return "0s"

    # Halves round up
    total_seconds = math.floor(duration_ms / 1000 + 0.5)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60

    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def to_percent(value: float) -> str:
    """Format a ratio as a percentage with one decimal place."""
    return f"{value * 100:.1f}%"
