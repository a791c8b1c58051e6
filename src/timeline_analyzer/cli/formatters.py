"""Output formatting utilities for CLI.

This module provides functions for rendering a timeline analysis and
its classification summary as text or JSON.
"""

import json
from typing import Any

from timeline_analyzer.classification.rules import WORK_CATEGORY_LABELS
from timeline_analyzer.config.defaults import DEFAULT_MAX_DISPLAYED_WARNINGS
from timeline_analyzer.formatting import format_duration, to_percent
from timeline_analyzer.models.classification import ClassificationSummary
from timeline_analyzer.models.enums import DependencyReason
from timeline_analyzer.models.metrics import DurationBucket, TimelineAnalysis

__all__ = [
    "analysis_to_data",
    "format_analysis",
    "format_warnings",
]


def analysis_to_data(
    analysis: TimelineAnalysis,
    summary: ClassificationSummary | None = None,
) -> dict[str, Any]:
    """Build the JSON document for an analysis.

    The node arena is omitted; ``graph.nodes`` carries the same nodes.
    """
    data: dict[str, Any] = {
        "analysis": analysis.model_dump(
            mode="json",
            by_alias=True,
            exclude={"graph": {"nodes_by_id"}},
        ),
    }
    if summary is not None:
        data["classification"] = summary.model_dump(mode="json")
    return data


def format_analysis(
    analysis: TimelineAnalysis,
    summary: ClassificationSummary | None = None,
    *,
    json_output: bool = False,
    max_warnings: int = DEFAULT_MAX_DISPLAYED_WARNINGS,
) -> str:
    """Format an analysis for output.

    Args:
        analysis: Result of analyze_timeline.
        summary: Classification of the step nodes, if available.
        json_output: Whether to format as JSON.
        max_warnings: Warnings listed before the rest are summarized.

    Returns:
        Formatted string output.

    """
    if json_output:
        return json.dumps(analysis_to_data(analysis, summary), indent=2)

    metrics = analysis.metrics
    counts = metrics.record_counts
    graph = analysis.graph
    nodes_by_id = graph.nodes_by_id

    lines: list[str] = []
    lines.append("")
    lines.append("=" * 60)
    lines.append("Pipeline Timeline Analysis")
    lines.append("=" * 60)
    lines.append(
        f"  Records: {counts.total} (stages {counts.stages}, phases {counts.phases}, "
        f"jobs {counts.jobs}, steps {counts.steps})"
    )
    lines.append(f"  Wall clock: {format_duration(metrics.wall_clock_duration_ms)}")
    lines.append(f"  Step runtime: {format_duration(metrics.total_step_runtime_ms)}")
    lines.append(f"  Machine running: {format_duration(metrics.machine_running_duration_ms)}")
    lines.append(f"  Agent wait: {format_duration(metrics.machine_wait_duration_ms)}")
    lines.append(f"  No-wait minimum: {format_duration(metrics.shortest_no_wait_duration_ms)}")
    lines.append(
        f"  Dependencies: {metrics.dependency_count} "
        f"(parent-child {metrics.dependency_breakdown.get(DependencyReason.parent_child, 0)}, "
        f"sibling-order {metrics.dependency_breakdown.get(DependencyReason.sibling_order, 0)})"
    )

    critical_path = analysis.critical_path
    _section(lines, "Critical Path")
    lines.append(f"  Duration: {format_duration(critical_path.duration_ms)}")
    for position, node_id in enumerate(critical_path.node_ids, start=1):
        node = nodes_by_id.get(node_id)
        if node is None:
            continue
        lines.append(f"  {position}. {node.name} ({format_duration(node.duration_ms)})")
    lines.append(f"  {critical_path.explanation}")

    parallelization = analysis.parallelization
    _section(lines, "Parallelization")
    lines.append(f"  Average concurrency: {parallelization.average_concurrency:.2f}")
    lines.append(f"  Max concurrency: {parallelization.max_concurrency}")
    lines.append(f"  Critical path ratio: {to_percent(parallelization.critical_path_ratio)}")
    lines.append(f"  Timeline coverage: {to_percent(parallelization.timeline_coverage_ratio)}")
    lines.append(f"  Idle wall clock: {format_duration(parallelization.idle_wall_clock_ms)}")
    for insight in parallelization.insights:
        lines.append(f"  [{insight.level.value}] {insight.message}")

    top = analysis.top_consumers
    for title, buckets in (
        ("Longest Stages", top.stages),
        ("Longest Jobs", top.jobs),
        ("Longest Steps", top.steps),
    ):
        if buckets:
            _section(lines, title)
            lines.extend(_format_buckets(buckets))

    if summary is not None:
        _section(lines, "Step Classification")
        total_ms = summary.total_duration_ms
        for category, duration_ms in summary.totals_by_category.items():
            share = duration_ms / total_ms if total_ms > 0 else 0.0
            lines.append(
                f"  {WORK_CATEGORY_LABELS[category]:<26}"
                f"{format_duration(duration_ms):>12}  {to_percent(share):>6}"
            )
        lines.append(f"  Useful: {format_duration(summary.useful_duration_ms)}")
        lines.append(f"  Non-useful: {format_duration(summary.non_useful_duration_ms)}")

    warnings = [*graph.warnings, *(summary.warnings if summary is not None else [])]
    if warnings:
        _section(lines, f"Warnings ({len(warnings)})")
        lines.extend(format_warnings(warnings, max_warnings))

    lines.append("")
    return "\n".join(lines)


def format_warnings(warnings: list[str], max_warnings: int) -> list[str]:
    """List the first ``max_warnings`` warnings and count the rest."""
    lines = [f"  - {warning}" for warning in warnings[:max_warnings]]
    hidden = len(warnings) - max_warnings
    if hidden > 0:
        lines.append(f"  ... and {hidden} more")
    return lines


def _section(lines: list[str], title: str) -> None:
    lines.append("")
    lines.append("-" * 60)
    lines.append(title)
    lines.append("-" * 60)


def _format_buckets(buckets: list[DurationBucket]) -> list[str]:
    return [
        f"  {format_duration(bucket.duration_ms):>12}  {bucket.name} [{bucket.type}]"
        for bucket in buckets
    ]
