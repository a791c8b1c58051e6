"""Graph traversal helpers."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from timeline_analyzer.models.timeline import TimelineGraph, TimelineNode

__all__ = ["collect_descendant_ids", "iter_descendants"]


def iter_descendants(graph: TimelineGraph, root_id: str) -> Iterator[TimelineNode]:
    """Yield the descendants of ``root_id`` in pre-order.

    Uses an explicit stack and a visited set, so cyclic input terminates.
    The root itself is not yielded.
    """
    root = graph.nodes_by_id.get(root_id)
    if root is None:
        return

    stack = list(reversed(root.child_ids))
    visited: set[str] = set()

    while stack:
        node_id = stack.pop()
        if node_id in visited:
            continue
        visited.add(node_id)

        node = graph.nodes_by_id.get(node_id)
        if node is None:
            continue

        yield node
        stack.extend(reversed(node.child_ids))


def collect_descendant_ids(
    graph: TimelineGraph,
    root_id: str,
    predicate: Callable[[TimelineNode], bool] | None = None,
) -> list[str]:
    """Collect descendant ids of a node in pre-order.

    Args:
        graph: Normalized graph.
        root_id: Node whose descendants to collect.
        predicate: Optional filter applied to each descendant.

    Returns:
        Matching descendant ids.

    """
    return [
        node.id
        for node in iter_descendants(graph, root_id)
        if predicate is None or predicate(node)
    ]
