"""Analysis result models for timeline-analyzer.

This module defines the pipeline metrics, critical path, parallelization
analysis and top-consumer models, plus the bundle returned by a full
timeline analysis.
"""

from pydantic import Field

from timeline_analyzer.models.base import BaseSchema
from timeline_analyzer.models.enums import DependencyReason, InsightLevel
from timeline_analyzer.models.timeline import TimelineGraph

__all__ = [
    "CriticalPathResult",
    "DurationBucket",
    "ParallelizationAnalysis",
    "ParallelizationInsight",
    "PipelineMetrics",
    "RecordCounts",
    "TimedActivity",
    "TimelineAnalysis",
    "TopConsumers",
]


class RecordCounts(BaseSchema):
    """Node counts partitioned by record type.

    Attributes:
        stages: Nodes of type Stage.
        phases: Nodes of type Phase.
        jobs: Nodes of type Job.
        steps: Step-like nodes (tasks plus checkpoints).
        tasks: Nodes of type Task.
        checkpoints: Checkpoint and Checkpoint.* nodes.
        total: All nodes.
    """

    stages: int = 0
    phases: int = 0
    jobs: int = 0
    steps: int = 0
    tasks: int = 0
    checkpoints: int = 0
    total: int = 0


class PipelineMetrics(BaseSchema):
    """Aggregate timing and structure metrics for a pipeline run.

    Attributes:
        wall_clock_duration_ms: Latest finish minus earliest start.
        total_step_runtime_ms: Sum of step-like durations.
        machine_wait_duration_ms: Sum of per-job agent waits.
        machine_running_duration_ms: Sum of job durations.
        shortest_no_wait_duration_ms: Wall clock with every job's wait removed.
        record_counts: Node counts by type.
        dependency_count: Number of inferred edges.
        dependency_breakdown: Edge counts by reason.
        job_wait_by_id: Agent wait per job id.
    """

    wall_clock_duration_ms: int = 0
    total_step_runtime_ms: int = 0
    machine_wait_duration_ms: int = 0
    machine_running_duration_ms: int = 0
    shortest_no_wait_duration_ms: int = 0
    record_counts: RecordCounts = Field(default_factory=RecordCounts)
    dependency_count: int = 0
    dependency_breakdown: dict[DependencyReason, int] = Field(default_factory=dict)
    job_wait_by_id: dict[str, int] = Field(default_factory=dict)


class TimedActivity(BaseSchema):
    """A node flattened to a time range for interval analysis."""

    id: str
    start_ms: int
    finish_ms: int
    duration_ms: int


class CriticalPathResult(BaseSchema):
    """Inferred critical path.

    Attributes:
        node_ids: Chosen activities in chronological order.
        duration_ms: Sum of the chosen activity durations.
        explanation: How the path was derived.
    """

    node_ids: list[str] = Field(default_factory=list)
    duration_ms: int = 0
    explanation: str


class ParallelizationInsight(BaseSchema):
    """A heuristic observation about pipeline parallelism."""

    level: InsightLevel
    message: str


class ParallelizationAnalysis(BaseSchema):
    """Concurrency statistics over the pipeline wall clock.

    Attributes:
        average_concurrency: Summed activity time divided by wall clock.
        max_concurrency: Peak number of simultaneous activities.
        critical_path_ratio: Critical path over wall clock, capped at 1.
        timeline_coverage_ratio: Covered time over wall clock, capped at 1.
        idle_wall_clock_ms: Wall clock with no activity running.
        insights: Threshold-based observations, in evaluation order.
    """

    average_concurrency: float = 0.0
    max_concurrency: int = 0
    critical_path_ratio: float = 0.0
    timeline_coverage_ratio: float = 0.0
    idle_wall_clock_ms: int = 0
    insights: list[ParallelizationInsight] = Field(default_factory=list)


class DurationBucket(BaseSchema):
    """A single entry of a top-consumer list."""

    id: str
    name: str
    type: str
    duration_ms: int


class TopConsumers(BaseSchema):
    """Longest-running stages, jobs and steps."""

    stages: list[DurationBucket] = Field(default_factory=list)
    jobs: list[DurationBucket] = Field(default_factory=list)
    steps: list[DurationBucket] = Field(default_factory=list)


class TimelineAnalysis(BaseSchema):
    """Everything derived from one timeline document.

    Attributes:
        graph: Normalized graph with inferred dependencies.
        metrics: Aggregate pipeline metrics.
        critical_path: Inferred critical path.
        parallelization: Concurrency statistics and insights.
        top_consumers: Longest-running entities per type.
    """

    graph: TimelineGraph
    metrics: PipelineMetrics
    critical_path: CriticalPathResult
    parallelization: ParallelizationAnalysis
    top_consumers: TopConsumers = Field(default_factory=TopConsumers)
