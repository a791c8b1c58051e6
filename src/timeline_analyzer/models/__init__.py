"""Models module for timeline-analyzer.

This module contains data models organized by domain:
- base: BaseSchema for Pydantic models
- enums: DependencyReason, WorkCategory, RuleField, RuleOperator,
  ClassificationSource, InsightLevel
- timeline: TimelineRecord, TimelineNode, DependencyEdge, TimelineGraph
- metrics: PipelineMetrics, CriticalPathResult, ParallelizationAnalysis,
  TimelineAnalysis
- classification: ClassificationRule, RuleSet, ClassificationSummary
"""

from timeline_analyzer.models.base import BaseSchema
from timeline_analyzer.models.classification import (
    ClassificationEntry,
    ClassificationRule,
    ClassificationSummary,
    RuleSet,
)
from timeline_analyzer.models.enums import (
    ClassificationSource,
    DependencyReason,
    InsightLevel,
    RuleField,
    RuleOperator,
    WorkCategory,
)
from timeline_analyzer.models.metrics import (
    CriticalPathResult,
    DurationBucket,
    ParallelizationAnalysis,
    ParallelizationInsight,
    PipelineMetrics,
    RecordCounts,
    TimedActivity,
    TimelineAnalysis,
    TopConsumers,
)
from timeline_analyzer.models.timeline import (
    DependencyEdge,
    TaskMetadata,
    TimelineGraph,
    TimelineNode,
    TimelineRecord,
    is_step_like_type,
    to_epoch_ms,
)

__all__ = [
    "BaseSchema",
    "ClassificationEntry",
    "ClassificationRule",
    "ClassificationSource",
    "ClassificationSummary",
    "CriticalPathResult",
    "DependencyEdge",
    "DependencyReason",
    "DurationBucket",
    "InsightLevel",
    "ParallelizationAnalysis",
    "ParallelizationInsight",
    "PipelineMetrics",
    "RecordCounts",
    "RuleField",
    "RuleOperator",
    "RuleSet",
    "TaskMetadata",
    "TimedActivity",
    "TimelineAnalysis",
    "TimelineGraph",
    "TimelineNode",
    "TimelineRecord",
    "TopConsumers",
    "WorkCategory",
    "is_step_like_type",
    "to_epoch_ms",
]
