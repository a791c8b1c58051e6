"""Dependency inference over a normalized node arena.

Edges come from two sources: every parent links to each of its
children, and each consecutive pair of ordered siblings is linked when
the pair looks sequential.
"""

from __future__ import annotations

from timeline_analyzer.models.enums import DependencyReason
from timeline_analyzer.models.timeline import DependencyEdge, TimelineNode

__all__ = [
    "build_dependency_edges",
    "build_dependency_lookup",
    "should_add_sequential_edge",
]


def build_dependency_edges(nodes_by_id: dict[str, TimelineNode]) -> list[DependencyEdge]:
    """Infer dependency edges from linked and ordered nodes.

    Args:
        nodes_by_id: Node arena with ordered ``child_ids``.

    Returns:
        Edges deduplicated by (from, to), without self-loops.

    """
    seen: set[tuple[str, str]] = set()
    edges: list[DependencyEdge] = []

    def add_edge(from_id: str, to_id: str, reason: DependencyReason) -> None:
        if from_id == to_id or (from_id, to_id) in seen:
            return
        seen.add((from_id, to_id))
        edges.append(DependencyEdge(from_id=from_id, to_id=to_id, reason=reason))

    for node in nodes_by_id.values():
        for child_id in node.child_ids:
            add_edge(node.id, child_id, DependencyReason.parent_child)

        for current_id, next_id in zip(node.child_ids, node.child_ids[1:]):
            current = nodes_by_id.get(current_id)
            following = nodes_by_id.get(next_id)
            if current is None or following is None:
                continue
            if should_add_sequential_edge(current, following):
                add_edge(current.id, following.id, DependencyReason.sibling_order)

    return edges


def should_add_sequential_edge(left: TimelineNode, right: TimelineNode) -> bool:
    """Decide whether ``right`` follows ``left`` among siblings.

    Timing wins when available: the edge exists only if ``left`` finishes
    no later than ``right`` starts. Without timing, distinct order values
    decide. With neither, siblings are assumed sequential.
    """
    if left.finish_time is not None and right.start_time is not None:
        return left.finish_time <= right.start_time
    if left.order is not None and right.order is not None:
        return left.order < right.order
    return True


def build_dependency_lookup(
    nodes_by_id: dict[str, TimelineNode],
    edges: list[DependencyEdge],
) -> tuple[dict[str, list[str]], dict[str, list[str]]]:
    """Build incoming and outgoing adjacency lists keyed by node id.

    Args:
        nodes_by_id: Node arena; every node gets an entry.
        edges: Inferred edges.

    Returns:
        Tuple of (incoming sources by id, outgoing targets by id).

    """
    incoming: dict[str, list[str]] = {node_id: [] for node_id in nodes_by_id}
    outgoing: dict[str, list[str]] = {node_id: [] for node_id in nodes_by_id}

    for edge in edges:
        if edge.to_id in incoming:
            incoming[edge.to_id].append(edge.from_id)
        if edge.from_id in outgoing:
            outgoing[edge.from_id].append(edge.to_id)

    return incoming, outgoing
