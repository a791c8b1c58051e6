"""Timeline models for timeline-analyzer.

This module defines the decoded input record, the normalized node, the
inferred dependency edge and the aggregate graph produced by the
normalizer.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from timeline_analyzer.models.base import BaseSchema
from timeline_analyzer.models.enums import DependencyReason

__all__ = [
    "CHECKPOINT_PREFIX",
    "DependencyEdge",
    "TaskMetadata",
    "TimelineGraph",
    "TimelineNode",
    "TimelineRecord",
    "is_step_like_type",
    "to_epoch_ms",
]

CHECKPOINT_PREFIX = "Checkpoint."

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def is_step_like_type(record_type: str) -> bool:
    """Return True for Task, Checkpoint and Checkpoint.* record types."""
    return (
        record_type == "Task"
        or record_type == "Checkpoint"
        or record_type.startswith(CHECKPOINT_PREFIX)
    )


def to_epoch_ms(value: datetime) -> int:
    """Convert an aware datetime to integer milliseconds since the epoch."""
    return (value - _EPOCH) // _ONE_MS


def _string_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) and len(value) > 0 else None


def _finite_number_or_none(value: Any) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class TaskMetadata(BaseSchema):
    """Nested task descriptor carried by step records.

    Attributes:
        id: Task definition identifier.
        name: Task definition name (e.g. "PowerShell").
        version: Task definition version.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str | None = None
    version: str | None = None

    @field_validator("id", "name", "version", mode="before")
    @classmethod
    def coerce_string(cls, value: Any) -> str | None:
        """Treat anything but a non-empty string as missing."""
        return _string_or_none(value)


class TimelineRecord(BaseSchema):
    """A raw timeline record decoded at the input boundary.

    Only ``id`` is required. Every other field that does not carry a
    usable value decodes to None instead of failing the record, and
    fields not listed here are preserved in ``model_extra``. Fields are
    read only under their API names; a snake_case key such as
    ``parent_id`` is kept as an extra rather than interpreted.

    Attributes:
        id: Unique record identifier (non-empty string).
        parent_id: Identifier of the parent record, if any.
        type: Record type (Stage, Phase, Job, Task, Checkpoint, ...).
        name: Display name.
        identifier: Stable identifier within the pipeline definition.
        ref_name: Reference name within the pipeline definition.
        order: Position among siblings.
        start_time: Raw ISO-8601 start timestamp.
        finish_time: Raw ISO-8601 finish timestamp.
        state: Execution state (e.g. "completed").
        result: Execution result (e.g. "succeeded").
        worker_name: Agent that ran the record.
        queue_id: Agent pool queue.
        task: Nested task metadata for step records.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=False)

    id: str
    parent_id: str | None = Field(default=None, alias="parentId")
    type: str | None = None
    name: str | None = None
    identifier: str | None = None
    ref_name: str | None = Field(default=None, alias="refName")
    order: int | float | None = None
    start_time: str | None = Field(default=None, alias="startTime")
    finish_time: str | None = Field(default=None, alias="finishTime")
    state: str | None = None
    result: str | None = None
    worker_name: str | None = Field(default=None, alias="workerName")
    queue_id: int | float | None = Field(default=None, alias="queueId")
    task: TaskMetadata | None = None

    @field_validator("id", mode="before")
    @classmethod
    def require_id(cls, value: Any) -> str:
        """Reject ids that are not non-empty strings."""
        if not isinstance(value, str) or not value.strip():
            raise ValueError("record id must be a non-empty string")
        return value

    @field_validator(
        "parent_id",
        "type",
        "name",
        "identifier",
        "ref_name",
        "start_time",
        "finish_time",
        "state",
        "result",
        "worker_name",
        mode="before",
    )
    @classmethod
    def coerce_string(cls, value: Any) -> str | None:
        """Treat anything but a non-empty string as missing."""
        return _string_or_none(value)

    @field_validator("order", "queue_id", mode="before")
    @classmethod
    def coerce_number(cls, value: Any) -> int | float | None:
        """Treat anything but a finite number as missing."""
        return _finite_number_or_none(value)

    @field_validator("task", mode="before")
    @classmethod
    def coerce_task(cls, value: Any) -> Any:
        """Ignore task metadata that is not an object."""
        return value if isinstance(value, dict) else None


class TimelineNode(BaseSchema):
    """A normalized timeline entity.

    Nodes live in an arena keyed by id. ``parent_id`` is a weak reference
    resolved through the arena; ``child_ids`` is the only ownership
    relationship and is populated by the normalizer.

    Attributes:
        id: Unique node identifier.
        parent_id: Identifier of an existing parent node, or None for roots.
        type: Record type, "Unknown" when missing.
        name: Display name, falling back to the id.
        identifier: Stable identifier within the pipeline definition.
        ref_name: Reference name within the pipeline definition.
        order: Position among siblings.
        start_time: Parsed start timestamp (UTC).
        finish_time: Parsed finish timestamp (UTC).
        duration_ms: Finish minus start, clamped to zero.
        state: Execution state.
        result: Execution result.
        worker_name: Agent that ran the node.
        queue_id: Agent pool queue.
        task_name: Name from the nested task metadata.
        task_id: Id from the nested task metadata.
        child_ids: Ordered child identifiers.
        depth: Traversal depth, 0 for roots.
    """

    id: str
    parent_id: str | None = None
    type: str = "Unknown"
    name: str
    identifier: str | None = None
    ref_name: str | None = None
    order: int | float | None = None
    start_time: datetime | None = None
    finish_time: datetime | None = None
    duration_ms: int = Field(default=0, ge=0)
    state: str | None = None
    result: str | None = None
    worker_name: str | None = None
    queue_id: int | float | None = None
    task_name: str | None = None
    task_id: str | None = None
    child_ids: list[str] = Field(default_factory=list)
    depth: int = 0

    @property
    def start_ms(self) -> int | None:
        """Start time in epoch milliseconds."""
        return to_epoch_ms(self.start_time) if self.start_time else None

    @property
    def finish_ms(self) -> int | None:
        """Finish time in epoch milliseconds."""
        return to_epoch_ms(self.finish_time) if self.finish_time else None

    @property
    def is_step_like(self) -> bool:
        """Whether the node is a Task or Checkpoint record."""
        return is_step_like_type(self.type)


class DependencyEdge(BaseSchema):
    """A directed dependency between two nodes.

    Attributes:
        from_id: Source node id (serialized as "from").
        to_id: Target node id (serialized as "to").
        reason: Why the edge was inferred.
    """

    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    reason: DependencyReason


class TimelineGraph(BaseSchema):
    """Normalized timeline with inferred dependencies.

    ``nodes`` and ``nodes_by_id`` hold the same node objects.

    Attributes:
        nodes: All nodes in a stable order.
        nodes_by_id: Node arena keyed by id.
        root_ids: Nodes without a parent, ordered.
        leaf_ids: Nodes without children.
        stage_ids: Nodes of type Stage.
        job_ids: Nodes of type Job.
        step_ids: Step-like nodes.
        dependency_edges: Inferred edges.
        incoming_deps_by_id: Sources of the edges into each node.
        outgoing_deps_by_id: Targets of the edges out of each node.
        warnings: Non-fatal anomalies found while normalizing.
    """

    nodes: list[TimelineNode] = Field(default_factory=list)
    nodes_by_id: dict[str, TimelineNode] = Field(default_factory=dict)
    root_ids: list[str] = Field(default_factory=list)
    leaf_ids: list[str] = Field(default_factory=list)
    stage_ids: list[str] = Field(default_factory=list)
    job_ids: list[str] = Field(default_factory=list)
    step_ids: list[str] = Field(default_factory=list)
    dependency_edges: list[DependencyEdge] = Field(default_factory=list)
    incoming_deps_by_id: dict[str, list[str]] = Field(default_factory=dict)
    outgoing_deps_by_id: dict[str, list[str]] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
