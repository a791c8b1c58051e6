"""Timed activity extraction.

Critical-path and parallelism analysis operate on flat time ranges
rather than the node hierarchy. This module flattens selected nodes
into TimedActivity values.
"""

from __future__ import annotations

from collections.abc import Iterable

from timeline_analyzer.models.metrics import TimedActivity
from timeline_analyzer.models.timeline import TimelineGraph, TimelineNode

__all__ = ["build_timed_activities", "select_timed_activities"]


def build_timed_activities(
    nodes_by_id: dict[str, TimelineNode],
    ids: Iterable[str],
) -> list[TimedActivity]:
    """Flatten nodes with both timestamps and a positive duration.

    Args:
        nodes_by_id: Node arena.
        ids: Candidate node ids.

    Returns:
        Activities for the qualifying nodes, in the given id order.

    """
    activities: list[TimedActivity] = []
    for node_id in ids:
        node = nodes_by_id.get(node_id)
        if node is None or node.start_ms is None or node.finish_ms is None:
            continue
        if node.duration_ms <= 0:
            continue
        activities.append(
            TimedActivity(
                id=node.id,
                start_ms=node.start_ms,
                finish_ms=node.finish_ms,
                duration_ms=node.duration_ms,
            )
        )
    return activities


def select_timed_activities(graph: TimelineGraph) -> list[TimedActivity]:
    """Pick the activities used for critical-path and parallelism analysis.

    Step-like nodes are preferred (leaf nodes when the graph has no
    step-like node at all). When none of them qualifies, job nodes are
    used instead.

    Args:
        graph: Normalized graph.

    Returns:
        The selected timed activities.

    """
    candidate_ids = graph.step_ids if graph.step_ids else graph.leaf_ids
    activities = build_timed_activities(graph.nodes_by_id, candidate_ids)
    if activities:
        return activities
    return build_timed_activities(graph.nodes_by_id, graph.job_ids)
