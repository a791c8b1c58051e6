"""Analysis entry points for timeline-analyzer."""

from timeline_analyzer.analysis.analyzer import (
    analyze_timeline,
    classify_steps,
    load_timeline,
    top_duration_buckets,
)

__all__ = [
    "analyze_timeline",
    "classify_steps",
    "load_timeline",
    "top_duration_buckets",
]
