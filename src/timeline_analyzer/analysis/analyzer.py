"""Timeline analysis orchestration.

This module wires the normalizer and the analytics engines together:
a raw document goes in, a TimelineAnalysis comes out. Classification is
kept separate because rule sets have their own lifecycle.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from timeline_analyzer.classification.engine import classify_nodes
from timeline_analyzer.config.defaults import DEFAULT_TOP_CONSUMERS_LIMIT
from timeline_analyzer.logging_config import get_logger
from timeline_analyzer.metrics.activities import select_timed_activities
from timeline_analyzer.metrics.critical_path import compute_critical_path
from timeline_analyzer.metrics.parallelism import compute_parallelization
from timeline_analyzer.metrics.pipeline import compute_pipeline_metrics
from timeline_analyzer.models.classification import ClassificationSummary, RuleSet
from timeline_analyzer.models.metrics import DurationBucket, TimelineAnalysis, TopConsumers
from timeline_analyzer.models.timeline import TimelineGraph
from timeline_analyzer.timeline.exceptions import MalformedInputError
from timeline_analyzer.timeline.normalizer import normalize_timeline

__all__ = [
    "analyze_timeline",
    "classify_steps",
    "load_timeline",
    "top_duration_buckets",
]

logger = get_logger(__name__)


def load_timeline(path: Path) -> Any:
    """Read and decode a timeline JSON file.

    Args:
        path: Timeline document location.

    Returns:
        The decoded JSON document.

    Raises:
        MalformedInputError: If the file cannot be read or is not JSON.

    """
    try:
        with path.open("r", encoding="utf-8-sig") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Timeline file {path} is not valid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedInputError(f"Failed to read timeline file {path}: {e}") from e


def analyze_timeline(raw_input: Any, top_limit: int | None = None) -> TimelineAnalysis:
    """Run the full analysis pipeline on a raw timeline document.

    Args:
        raw_input: Decoded timeline document.
        top_limit: Entries per top-consumer list (default 8).

    Returns:
        Graph, metrics, critical path, parallelization and top consumers.

    Raises:
        MalformedInputError: If the payload shape is invalid.

    """
    limit = top_limit if top_limit is not None else DEFAULT_TOP_CONSUMERS_LIMIT

    graph = normalize_timeline(raw_input)
    activities = select_timed_activities(graph)
    critical_path = compute_critical_path(activities)
    metrics = compute_pipeline_metrics(graph)
    parallelization = compute_parallelization(
        activities,
        metrics.wall_clock_duration_ms,
        critical_path.duration_ms,
        metrics.machine_wait_duration_ms,
    )

    logger.info(
        "timeline_analyzed",
        node_count=len(graph.nodes),
        activity_count=len(activities),
        wall_clock_ms=metrics.wall_clock_duration_ms,
        critical_path_ms=critical_path.duration_ms,
    )

    return TimelineAnalysis(
        graph=graph,
        metrics=metrics,
        critical_path=critical_path,
        parallelization=parallelization,
        top_consumers=TopConsumers(
            stages=top_duration_buckets(graph, graph.stage_ids, limit),
            jobs=top_duration_buckets(graph, graph.job_ids, limit),
            steps=top_duration_buckets(graph, graph.step_ids, limit),
        ),
    )


def classify_steps(graph: TimelineGraph, rule_set: RuleSet) -> ClassificationSummary:
    """Classify the step-like nodes of a graph with a rule set."""
    steps = [graph.nodes_by_id[node_id] for node_id in graph.step_ids]
    return classify_nodes(steps, rule_set.rules, rule_set.overrides)


def top_duration_buckets(
    graph: TimelineGraph,
    ids: list[str],
    limit: int = DEFAULT_TOP_CONSUMERS_LIMIT,
) -> list[DurationBucket]:
    """Longest-running nodes among ``ids``, longest first.

    Nodes with zero duration are left out.
    """
    nodes = [
        graph.nodes_by_id[node_id]
        for node_id in ids
        if node_id in graph.nodes_by_id and graph.nodes_by_id[node_id].duration_ms > 0
    ]
    nodes.sort(key=lambda node: node.duration_ms, reverse=True)
    return [
        DurationBucket(id=node.id, name=node.name, type=node.type, duration_ms=node.duration_ms)
        for node in nodes[:limit]
    ]
