"""Default configuration values for timeline-analyzer.

This module centralizes all hard-coded default values used throughout
the application, making them easy to discover and modify.
"""

from pathlib import Path

# Rule-set exchange format
RULE_SET_VERSION = 1

# Persistence
DEFAULT_RULES_STORE_PATH = Path.home() / ".timeline-analyzer" / "rules.json"

# Reporting limits
DEFAULT_TOP_CONSUMERS_LIMIT = 8
DEFAULT_MAX_DISPLAYED_WARNINGS = 20

# Parallelization insight thresholds
AGENT_WAIT_RATIO_THRESHOLD = 0.05
DOMINANT_CRITICAL_PATH_RATIO = 0.85
LOW_CONCURRENCY_THRESHOLD = 1.75
COVERAGE_GAP_THRESHOLD = 0.92
HIGH_CONCURRENCY_THRESHOLD = 5
SHORT_CRITICAL_PATH_RATIO = 0.55
