"""Parallelization analysis.

A sweep over activity start and finish events measures how much of the
wall clock had work running and the peak concurrency. Threshold-based
insights are derived from the resulting ratios.
"""

from __future__ import annotations

from timeline_analyzer.config.defaults import (
    AGENT_WAIT_RATIO_THRESHOLD,
    COVERAGE_GAP_THRESHOLD,
    DOMINANT_CRITICAL_PATH_RATIO,
    HIGH_CONCURRENCY_THRESHOLD,
    LOW_CONCURRENCY_THRESHOLD,
    SHORT_CRITICAL_PATH_RATIO,
)
from timeline_analyzer.formatting import format_duration, to_percent
from timeline_analyzer.models.enums import InsightLevel
from timeline_analyzer.models.metrics import (
    ParallelizationAnalysis,
    ParallelizationInsight,
    TimedActivity,
)

__all__ = [
    "build_parallelization_insights",
    "compute_coverage_and_concurrency",
    "compute_parallelization",
]


def compute_parallelization(
    activities: list[TimedActivity],
    wall_clock_ms: int,
    critical_path_ms: int,
    agent_wait_ms: int,
) -> ParallelizationAnalysis:
    """Compute concurrency statistics and insights.

    Args:
        activities: Timed activities (usually steps).
        wall_clock_ms: Pipeline wall-clock duration.
        critical_path_ms: Critical-path duration.
        agent_wait_ms: Total agent wait across jobs.

    Returns:
        ParallelizationAnalysis; all zeros with a single informational
        insight when there is no activity or no wall clock.

    """
    if not activities or wall_clock_ms <= 0:
        return ParallelizationAnalysis(
            insights=[
                ParallelizationInsight(
                    level=InsightLevel.info,
                    message="Not enough timed data for parallelization insights.",
                )
            ],
        )

    total_runtime_ms = sum(activity.duration_ms for activity in activities)
    average_concurrency = total_runtime_ms / wall_clock_ms
    covered_ms, max_concurrency = compute_coverage_and_concurrency(activities)
    idle_ms = max(0, wall_clock_ms - covered_ms)
    critical_path_ratio = min(1.0, critical_path_ms / wall_clock_ms)
    coverage_ratio = min(1.0, covered_ms / wall_clock_ms)

    insights = build_parallelization_insights(
        average_concurrency=average_concurrency,
        critical_path_ratio=critical_path_ratio,
        timeline_coverage_ratio=coverage_ratio,
        idle_wall_clock_ms=idle_ms,
        wall_clock_ms=wall_clock_ms,
        agent_wait_ms=agent_wait_ms,
    )

    return ParallelizationAnalysis(
        average_concurrency=average_concurrency,
        max_concurrency=max_concurrency,
        critical_path_ratio=critical_path_ratio,
        timeline_coverage_ratio=coverage_ratio,
        idle_wall_clock_ms=idle_ms,
        insights=insights,
    )


def compute_coverage_and_concurrency(activities: list[TimedActivity]) -> tuple[int, int]:
    """Sweep start/finish events to measure coverage and peak concurrency.

    At equal timestamps finishes are processed before starts, so
    back-to-back activities never count as overlapping.

    Args:
        activities: Timed activities.

    Returns:
        Tuple of (covered milliseconds, maximum concurrency).

    """
    events: list[tuple[int, int]] = []
    for activity in activities:
        events.append((activity.start_ms, 1))
        events.append((activity.finish_ms, -1))
    # -1 sorts before +1 at the same timestamp
    events.sort()

    covered_ms = 0
    active = 0
    max_concurrency = 0
    previous_ms = events[0][0] if events else 0

    for timestamp, delta in events:
        if timestamp > previous_ms and active > 0:
            covered_ms += timestamp - previous_ms
        previous_ms = timestamp
        active += delta
        max_concurrency = max(max_concurrency, active)

    return covered_ms, max_concurrency


def build_parallelization_insights(
    *,
    average_concurrency: float,
    critical_path_ratio: float,
    timeline_coverage_ratio: float,
    idle_wall_clock_ms: int,
    wall_clock_ms: int,
    agent_wait_ms: int,
) -> list[ParallelizationInsight]:
    """Derive insights in a fixed order; a balanced note is added if none apply."""
    insights: list[ParallelizationInsight] = []
    wait_ratio = agent_wait_ms / wall_clock_ms if wall_clock_ms > 0 else 0.0

    if wait_ratio > AGENT_WAIT_RATIO_THRESHOLD:
        insights.append(
            ParallelizationInsight(
                level=InsightLevel.opportunity,
                message=(
                    f"Build-agent wait time is {to_percent(wait_ratio)} of wall clock. "
                    "Reducing queue/start latency should improve completion time."
                ),
            )
        )

    if (
        critical_path_ratio > DOMINANT_CRITICAL_PATH_RATIO
        and average_concurrency < LOW_CONCURRENCY_THRESHOLD
    ):
        insights.append(
            ParallelizationInsight(
                level=InsightLevel.opportunity,
                message=(
                    "The critical path is close to total wall clock with low average "
                    "concurrency, indicating limited parallelism in the slowest chain."
                ),
            )
        )

    if timeline_coverage_ratio < COVERAGE_GAP_THRESHOLD:
        insights.append(
            ParallelizationInsight(
                level=InsightLevel.warning,
                message=(
                    f"There are {format_duration(idle_wall_clock_ms)} of idle timeline "
                    "gaps where no step-level work was running."
                ),
            )
        )

    if (
        average_concurrency > HIGH_CONCURRENCY_THRESHOLD
        and critical_path_ratio < SHORT_CRITICAL_PATH_RATIO
    ):
        insights.append(
            ParallelizationInsight(
                level=InsightLevel.info,
                message=(
                    "High average concurrency with a relatively short critical path "
                    "suggests the pipeline is already heavily parallelized."
                ),
            )
        )

    if not insights:
        insights.append(
            ParallelizationInsight(
                level=InsightLevel.info,
                message=(
                    "Parallelization appears balanced for this timeline based on "
                    "runtime overlap and critical-path ratio."
                ),
            )
        )

    return insights
