"""Pipeline metrics computation.

This module computes wall-clock duration, per-job agent wait, machine
running time, the no-wait theoretical minimum, record counts and
dependency counts from a normalized graph.
"""

from __future__ import annotations

import math

from timeline_analyzer.logging_config import get_logger
from timeline_analyzer.models.enums import DependencyReason
from timeline_analyzer.models.metrics import PipelineMetrics, RecordCounts
from timeline_analyzer.models.timeline import CHECKPOINT_PREFIX, TimelineGraph
from timeline_analyzer.timeline.traversal import iter_descendants

__all__ = [
    "compute_job_waits",
    "compute_no_wait_wall_clock",
    "compute_pipeline_metrics",
    "compute_wall_clock",
    "find_earliest_descendant_step_start",
]

logger = get_logger(__name__)


def compute_pipeline_metrics(graph: TimelineGraph) -> PipelineMetrics:
    """Compute aggregate metrics for a normalized timeline.

    Args:
        graph: Normalized graph.

    Returns:
        PipelineMetrics for the timeline.

    """
    wall_clock_ms = compute_wall_clock(graph)
    total_step_runtime_ms = sum(
        graph.nodes_by_id[node_id].duration_ms for node_id in graph.step_ids
    )

    job_wait_by_id = compute_job_waits(graph)
    machine_wait_ms = sum(job_wait_by_id.values())
    machine_running_ms = sum(
        graph.nodes_by_id[node_id].duration_ms for node_id in graph.job_ids
    )
    no_wait_ms = compute_no_wait_wall_clock(graph, job_wait_by_id)

    record_counts = RecordCounts(
        stages=len(graph.stage_ids),
        phases=sum(1 for node in graph.nodes if node.type == "Phase"),
        jobs=len(graph.job_ids),
        steps=len(graph.step_ids),
        tasks=sum(1 for node in graph.nodes if node.type == "Task"),
        checkpoints=sum(
            1
            for node in graph.nodes
            if node.type == "Checkpoint" or node.type.startswith(CHECKPOINT_PREFIX)
        ),
        total=len(graph.nodes),
    )

    dependency_breakdown = {reason: 0 for reason in DependencyReason}
    for edge in graph.dependency_edges:
        dependency_breakdown[edge.reason] += 1

    logger.debug(
        "pipeline_metrics_computed",
        wall_clock_ms=wall_clock_ms,
        machine_wait_ms=machine_wait_ms,
        job_count=len(graph.job_ids),
    )

    return PipelineMetrics(
        wall_clock_duration_ms=wall_clock_ms,
        total_step_runtime_ms=total_step_runtime_ms,
        machine_wait_duration_ms=machine_wait_ms,
        machine_running_duration_ms=machine_running_ms,
        shortest_no_wait_duration_ms=no_wait_ms,
        record_counts=record_counts,
        dependency_count=len(graph.dependency_edges),
        dependency_breakdown=dependency_breakdown,
        job_wait_by_id=job_wait_by_id,
    )


def compute_wall_clock(graph: TimelineGraph) -> int:
    """Latest finish minus earliest start over nodes with both times, or 0."""
    min_start = math.inf
    max_finish = -math.inf
    for node in graph.nodes:
        if node.start_ms is None or node.finish_ms is None:
            continue
        min_start = min(min_start, node.start_ms)
        max_finish = max(max_finish, node.finish_ms)

    if not math.isfinite(min_start) or not math.isfinite(max_finish):
        return 0
    return int(max(0, max_finish - min_start))


def compute_job_waits(graph: TimelineGraph) -> dict[str, int]:
    """Compute the agent wait of every job.

    A job's wait is the gap between its own start and the earliest start
    of its step-like descendants, floored at zero. Jobs without a start
    time or without a timed step-like descendant wait 0.

    Args:
        graph: Normalized graph.

    Returns:
        Wait in milliseconds keyed by job id.

    """
    waits: dict[str, int] = {}
    for job_id in graph.job_ids:
        job = graph.nodes_by_id[job_id]
        step_start = find_earliest_descendant_step_start(graph, job_id)
        if job.start_ms is None or step_start is None:
            waits[job_id] = 0
            continue
        waits[job_id] = max(0, step_start - job.start_ms)
    return waits


def find_earliest_descendant_step_start(graph: TimelineGraph, root_id: str) -> int | None:
    """Earliest start among the step-like descendants of ``root_id``."""
    starts = [
        node.start_ms
        for node in iter_descendants(graph, root_id)
        if node.is_step_like and node.start_ms is not None
    ]
    return min(starts) if starts else None


def compute_no_wait_wall_clock(graph: TimelineGraph, job_wait_by_id: dict[str, int]) -> int:
    """Wall clock if every job had started its steps without waiting.

    Each timed job's window is shifted back by its own wait before taking
    the overall span.

    Args:
        graph: Normalized graph.
        job_wait_by_id: Per-job waits from compute_job_waits.

    Returns:
        The adjusted span in milliseconds, or 0 when no job is timed.

    """
    min_start = math.inf
    max_finish = -math.inf
    for job_id in graph.job_ids:
        job = graph.nodes_by_id[job_id]
        if job.start_ms is None or job.finish_ms is None:
            continue
        wait_ms = job_wait_by_id.get(job_id, 0)
        min_start = min(min_start, job.start_ms - wait_ms)
        max_finish = max(max_finish, job.finish_ms - wait_ms)

    if not math.isfinite(min_start) or not math.isfinite(max_finish):
        return 0
    return int(max(0, max_finish - min_start))
