"""Timeline normalization.

This module turns a raw timeline document into a TimelineGraph: records
are decoded and validated, parent/child links are established, children
and roots are ordered, depths are assigned with cycle detection, and
dependency edges are inferred.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from functools import cmp_to_key
from typing import Any

from timeline_analyzer.logging_config import get_logger
from timeline_analyzer.models.timeline import (
    TimelineGraph,
    TimelineNode,
    TimelineRecord,
    to_epoch_ms,
)
from timeline_analyzer.timeline.dates import parse_timeline_date
from timeline_analyzer.timeline.dependencies import (
    build_dependency_edges,
    build_dependency_lookup,
)
from timeline_analyzer.timeline.exceptions import MalformedInputError
from timeline_analyzer.timeline.records import RecordRejection, decode_record

__all__ = [
    "assign_depths",
    "build_node",
    "compare_nodes",
    "ensure_raw_timeline",
    "normalize_timeline",
]

logger = get_logger(__name__)


def ensure_raw_timeline(raw_input: Any) -> Mapping[str, Any]:
    """Check the top-level shape of a timeline payload.

    Args:
        raw_input: Decoded JSON document.

    Returns:
        The payload, guaranteed to be a mapping with a ``records`` list.

    Raises:
        MalformedInputError: If the payload is not an object or has no
            records array.

    """
    if not isinstance(raw_input, Mapping):
        raise MalformedInputError("Timeline payload must be a JSON object.")
    if not isinstance(raw_input.get("records"), list):
        raise MalformedInputError("Timeline payload must include a records array.")
    return raw_input


def normalize_timeline(raw_input: Any) -> TimelineGraph:
    """Normalize a raw timeline document into a graph.

    Per-record problems never abort normalization; they are collected in
    ``TimelineGraph.warnings``.

    Args:
        raw_input: Decoded JSON document with a ``records`` array.

    Returns:
        The normalized TimelineGraph.

    Raises:
        MalformedInputError: If the payload shape is invalid.

    """
    timeline = ensure_raw_timeline(raw_input)
    warnings: list[str] = []
    nodes_by_id: dict[str, TimelineNode] = {}

    for raw_record in timeline["records"]:
        decoded = decode_record(raw_record)
        if isinstance(decoded, RecordRejection):
            warnings.append("Skipped a timeline record without a valid id.")
            logger.debug("record_skipped", reason=decoded.reason)
            continue

        if decoded.id in nodes_by_id:
            warnings.append(f"Skipped duplicate timeline record id '{decoded.id}'.")
            logger.debug("duplicate_record_skipped", record_id=decoded.id)
            continue

        nodes_by_id[decoded.id] = build_node(decoded)

    _link_children(nodes_by_id, warnings)

    node_order = cmp_to_key(compare_nodes)
    for node in nodes_by_id.values():
        node.child_ids.sort(key=lambda child_id: node_order(nodes_by_id[child_id]))

    root_ids = [
        node.id
        for node in sorted(
            (node for node in nodes_by_id.values() if node.parent_id is None),
            key=node_order,
        )
    ]

    assign_depths(nodes_by_id, root_ids, warnings)

    nodes = sorted(nodes_by_id.values(), key=node_order)
    edges = build_dependency_edges(nodes_by_id)
    incoming, outgoing = build_dependency_lookup(nodes_by_id, edges)

    graph = TimelineGraph(
        nodes=nodes,
        nodes_by_id=nodes_by_id,
        root_ids=root_ids,
        leaf_ids=[node.id for node in nodes if not node.child_ids],
        stage_ids=[node.id for node in nodes if node.type == "Stage"],
        job_ids=[node.id for node in nodes if node.type == "Job"],
        step_ids=[node.id for node in nodes if node.is_step_like],
        dependency_edges=edges,
        incoming_deps_by_id=incoming,
        outgoing_deps_by_id=outgoing,
        warnings=warnings,
    )

    logger.info(
        "timeline_normalized",
        node_count=len(nodes),
        edge_count=len(edges),
        warning_count=len(warnings),
    )
    return graph


def build_node(record: TimelineRecord) -> TimelineNode:
    """Create a node from a decoded record.

    Args:
        record: A record that passed boundary decoding.

    Returns:
        A node with parsed timestamps and no children yet.

    """
    start_time = parse_timeline_date(record.start_time)
    finish_time = parse_timeline_date(record.finish_time)
    duration_ms = 0
    if start_time is not None and finish_time is not None:
        duration_ms = max(0, to_epoch_ms(finish_time) - to_epoch_ms(start_time))

    task = record.task
    return TimelineNode(
        id=record.id,
        parent_id=record.parent_id,
        type=record.type or "Unknown",
        name=record.name or record.id,
        identifier=record.identifier,
        ref_name=record.ref_name,
        order=record.order,
        start_time=start_time,
        finish_time=finish_time,
        duration_ms=duration_ms,
        state=record.state,
        result=record.result,
        worker_name=record.worker_name,
        queue_id=record.queue_id,
        task_name=task.name if task else None,
        task_id=task.id if task else None,
    )


def compare_nodes(left: TimelineNode, right: TimelineNode) -> int:
    """Order siblings and roots.

    Keys, in turn: ``order`` when both nodes have distinct values, start
    time, finish time (missing times sort last), then name.
    """
    if left.order is not None and right.order is not None and left.order != right.order:
        return -1 if left.order < right.order else 1

    for left_ms, right_ms in (
        (left.start_ms, right.start_ms),
        (left.finish_ms, right.finish_ms),
    ):
        left_key = math.inf if left_ms is None else left_ms
        right_key = math.inf if right_ms is None else right_ms
        if left_key != right_key:
            return -1 if left_key < right_key else 1

    return (left.name > right.name) - (left.name < right.name)


def assign_depths(
    nodes_by_id: dict[str, TimelineNode],
    root_ids: list[str],
    warnings: list[str],
) -> None:
    """Assign traversal depths to every node.

    Walks depth-first from each root with an explicit stack. Revisiting a
    node that is on the current path records a cycle warning and stops
    descending. Nodes not reached from any root are treated as extra
    roots, with a warning.

    Args:
        nodes_by_id: Node arena; ``depth`` is updated in place.
        root_ids: Declared roots in traversal order.
        warnings: Warning list to append to.

    """
    visited: set[str] = set()
    on_path: set[str] = set()

    def walk(start_id: str) -> None:
        # Entries are (node_id, depth, leaving); a leaving entry pops the node off the path
        stack: list[tuple[str, int, bool]] = [(start_id, 0, False)]
        while stack:
            node_id, depth, leaving = stack.pop()
            if leaving:
                on_path.discard(node_id)
                continue

            node = nodes_by_id.get(node_id)
            if node is None:
                continue
            if node_id in on_path:
                warnings.append(f"Detected cycle at '{node_id}'.")
                logger.debug("cycle_detected", node_id=node_id)
                continue
            if node_id in visited:
                node.depth = min(node.depth, depth)
                continue

            visited.add(node_id)
            on_path.add(node_id)
            node.depth = depth
            stack.append((node_id, depth, True))
            for child_id in reversed(node.child_ids):
                stack.append((child_id, depth + 1, False))

    for root_id in root_ids:
        walk(root_id)

    for node in nodes_by_id.values():
        if node.id in visited:
            continue
        warnings.append(f"Reached disconnected node '{node.id}' from fallback traversal.")
        logger.debug("disconnected_node", node_id=node.id)
        walk(node.id)


def _link_children(nodes_by_id: dict[str, TimelineNode], warnings: list[str]) -> None:
    for node in nodes_by_id.values():
        if node.parent_id is None:
            continue

        parent = nodes_by_id.get(node.parent_id)
        if parent is None:
            warnings.append(
                f"Record '{node.id}' references missing parent '{node.parent_id}'."
            )
            logger.debug("missing_parent", node_id=node.id, parent_id=node.parent_id)
            node.parent_id = None
            continue

        parent.child_ids.append(node.id)
