"""Metrics module for timeline-analyzer.

This module provides the analytics engines:
- compute_pipeline_metrics: Wall clock, agent wait, machine time, counts
- compute_critical_path: Weighted interval scheduling over timed activities
- compute_parallelization: Sweep-line concurrency, coverage and insights
"""

from timeline_analyzer.metrics.activities import (
    build_timed_activities,
    select_timed_activities,
)
from timeline_analyzer.metrics.critical_path import compute_critical_path
from timeline_analyzer.metrics.parallelism import compute_parallelization
from timeline_analyzer.metrics.pipeline import compute_job_waits, compute_pipeline_metrics

__all__ = [
    "build_timed_activities",
    "compute_critical_path",
    "compute_job_waits",
    "compute_parallelization",
    "compute_pipeline_metrics",
    "select_timed_activities",
]
