"""Unit tests for timeline normalization.

This module tests normalize_timeline and its helpers including:
- Payload shape validation
- Skipping records without ids and duplicate ids
- Re-rooting records whose parent is missing
- Sibling and root ordering
- Depth assignment with cycle detection and fallback traversal
- Graph indexes (roots, leaves, stages, jobs, steps)
"""

from typing import Any

import pytest

from tests.fixtures import make_record, make_timeline
from timeline_analyzer.models.timeline import TimelineNode
from timeline_analyzer.timeline.exceptions import MalformedInputError
from timeline_analyzer.timeline.normalizer import compare_nodes, normalize_timeline


class TestPayloadShape:
    """Tests for top-level payload validation."""

    @pytest.mark.parametrize("payload", [None, [], "records", 3])
    def test_non_object_payload_raises(self, payload: Any) -> None:
        """Test that a payload that is not an object is rejected."""
        with pytest.raises(MalformedInputError, match="JSON object"):
            normalize_timeline(payload)

    @pytest.mark.parametrize("payload", [{}, {"records": None}, {"records": {"a": 1}}])
    def test_missing_records_array_raises(self, payload: dict[str, Any]) -> None:
        """Test that a payload without a records array is rejected."""
        with pytest.raises(MalformedInputError, match="records array"):
            normalize_timeline(payload)

    def test_empty_records_produce_empty_graph(self) -> None:
        """Test that an empty timeline normalizes without warnings."""
        graph = normalize_timeline({"records": []})

        assert graph.nodes == []
        assert graph.root_ids == []
        assert graph.dependency_edges == []
        assert graph.warnings == []


class TestRecordValidation:
    """Tests for per-record problems reported as warnings."""

    def test_record_without_id_is_skipped(self) -> None:
        """Test that records without a valid id are skipped with a warning."""
        graph = normalize_timeline(
            make_timeline({"name": "ghost"}, "not-a-record", make_record("t1"))
        )

        assert list(graph.nodes_by_id) == ["t1"]
        assert graph.warnings == [
            "Skipped a timeline record without a valid id.",
            "Skipped a timeline record without a valid id.",
        ]

    def test_duplicate_id_keeps_first_record(self) -> None:
        """Test that the first record wins when ids repeat."""
        graph = normalize_timeline(
            make_timeline(
                make_record("t1", name="First"),
                make_record("t1", name="Second"),
            )
        )

        assert len(graph.nodes) == 1
        assert graph.nodes_by_id["t1"].name == "First"
        assert graph.warnings == ["Skipped duplicate timeline record id 't1'."]

    def test_missing_parent_becomes_root(self) -> None:
        """Test that a record pointing at an unknown parent is re-rooted."""
        graph = normalize_timeline(make_timeline(make_record("t1", parent_id="nowhere")))

        node = graph.nodes_by_id["t1"]
        assert node.parent_id is None
        assert node.depth == 0
        assert graph.root_ids == ["t1"]
        assert graph.warnings == ["Record 't1' references missing parent 'nowhere'."]

    def test_snake_case_fields_do_not_link_or_time(self) -> None:
        """Test that only API field names drive parent links and timing."""
        graph = normalize_timeline(
            make_timeline(
                {"id": "a", "type": "Job"},
                {
                    "id": "b",
                    "type": "Task",
                    "parent_id": "a",
                    "start_time": "2024-01-01T00:00:00Z",
                    "finish_time": "2024-01-01T00:00:10Z",
                },
            )
        )

        node = graph.nodes_by_id["b"]
        assert node.parent_id is None
        assert node.duration_ms == 0
        assert graph.nodes_by_id["a"].child_ids == []
        assert graph.root_ids == ["a", "b"]

    def test_node_defaults(self) -> None:
        """Test fallbacks for missing type and name."""
        graph = normalize_timeline(make_timeline({"id": "bare"}))

        node = graph.nodes_by_id["bare"]
        assert node.type == "Unknown"
        assert node.name == "bare"
        assert node.duration_ms == 0
        assert node.start_time is None

    def test_duration_is_clamped_at_zero(self) -> None:
        """Test that a finish before the start yields a zero duration."""
        graph = normalize_timeline(make_timeline(make_record("t1", start=10, finish=4)))

        assert graph.nodes_by_id["t1"].duration_ms == 0

    def test_task_metadata_is_flattened(self) -> None:
        """Test that nested task metadata is copied onto the node."""
        graph = normalize_timeline(
            make_timeline(make_record("t1", task={"id": "tid", "name": "PowerShell"}))
        )

        node = graph.nodes_by_id["t1"]
        assert node.task_name == "PowerShell"
        assert node.task_id == "tid"


class TestOrdering:
    """Tests for sibling and root ordering."""

    def test_children_sorted_by_order(self) -> None:
        """Test that the order field ranks siblings first."""
        graph = normalize_timeline(
            make_timeline(
                make_record("job", "Job"),
                make_record("late", parent_id="job", order=2, start=0, finish=1),
                make_record("early", parent_id="job", order=1, start=5, finish=6),
            )
        )

        assert graph.nodes_by_id["job"].child_ids == ["early", "late"]

    def test_equal_order_falls_back_to_start_time(self) -> None:
        """Test that equal orders are ranked by start time."""
        graph = normalize_timeline(
            make_timeline(
                make_record("job", "Job"),
                make_record("b", parent_id="job", order=1, start=5, finish=6),
                make_record("a", parent_id="job", order=1, start=1, finish=2),
            )
        )

        assert graph.nodes_by_id["job"].child_ids == ["a", "b"]

    def test_untimed_siblings_sort_after_timed_ones(self) -> None:
        """Test that missing start times sort last."""
        graph = normalize_timeline(
            make_timeline(
                make_record("job", "Job"),
                make_record("untimed", parent_id="job"),
                make_record("timed", parent_id="job", start=3, finish=4),
            )
        )

        assert graph.nodes_by_id["job"].child_ids == ["timed", "untimed"]

    def test_name_breaks_remaining_ties(self) -> None:
        """Test that names decide between otherwise identical siblings."""
        graph = normalize_timeline(
            make_timeline(
                make_record("job", "Job"),
                make_record("x", parent_id="job", name="Zeta"),
                make_record("y", parent_id="job", name="Alpha"),
            )
        )

        assert graph.nodes_by_id["job"].child_ids == ["y", "x"]

    def test_compare_nodes_is_zero_for_identical_keys(self) -> None:
        """Test that nodes with identical sort keys compare equal."""
        left = TimelineNode(id="a", name="Same", order=1)
        right = TimelineNode(id="b", name="Same", order=1)

        assert compare_nodes(left, right) == 0

    def test_roots_are_ordered(self, sample_timeline: dict[str, Any]) -> None:
        """Test that roots follow the same ordering as siblings."""
        graph = normalize_timeline(sample_timeline)

        assert graph.root_ids == ["stage-build", "stage-deploy", "task-orphan"]


class TestDepthAssignment:
    """Tests for depth assignment and cycle handling."""

    def test_depths_follow_the_hierarchy(self, simple_timeline: dict[str, Any]) -> None:
        """Test that depth is the distance from the root."""
        graph = normalize_timeline(simple_timeline)

        assert graph.nodes_by_id["stage"].depth == 0
        assert graph.nodes_by_id["job"].depth == 1
        assert graph.nodes_by_id["t1"].depth == 2
        assert graph.nodes_by_id["t2"].depth == 2

    def test_parent_cycle_is_reported(self) -> None:
        """Test that a two-node parent cycle terminates with warnings."""
        graph = normalize_timeline(
            make_timeline(
                make_record("a", parent_id="b"),
                make_record("b", parent_id="a"),
            )
        )

        assert graph.root_ids == []
        assert graph.warnings == [
            "Reached disconnected node 'a' from fallback traversal.",
            "Detected cycle at 'a'.",
        ]
        assert graph.nodes_by_id["a"].depth == 0
        assert graph.nodes_by_id["b"].depth == 1

    def test_self_parent_is_a_cycle(self) -> None:
        """Test that a record naming itself as parent is detected."""
        graph = normalize_timeline(make_timeline(make_record("loop", parent_id="loop")))

        assert "Detected cycle at 'loop'." in graph.warnings
        assert "Reached disconnected node 'loop' from fallback traversal." in graph.warnings

    def test_detached_cycle_is_walked_once(self) -> None:
        """Test that a cycle unreachable from any root is walked and reported once."""
        graph = normalize_timeline(
            make_timeline(
                make_record("root", "Stage"),
                make_record("a", parent_id="c"),
                make_record("b", parent_id="a"),
                make_record("c", parent_id="b"),
            )
        )

        assert graph.root_ids == ["root"]
        assert graph.warnings == [
            "Reached disconnected node 'a' from fallback traversal.",
            "Detected cycle at 'a'.",
        ]
        assert graph.nodes_by_id["c"].depth == 2

    def test_deep_chain_does_not_recurse(self) -> None:
        """Test that very deep hierarchies are traversed iteratively."""
        records = [make_record("n0", "Stage")]
        records.extend(make_record(f"n{i}", parent_id=f"n{i - 1}") for i in range(1, 3000))

        graph = normalize_timeline(make_timeline(*records))

        assert graph.nodes_by_id["n2999"].depth == 2999
        assert graph.warnings == []


class TestGraphIndexes:
    """Tests for the id indexes of the normalized graph."""

    def test_sample_timeline_indexes(self, sample_timeline: dict[str, Any]) -> None:
        """Test stage, job, step and leaf indexes on the sample timeline."""
        graph = normalize_timeline(sample_timeline)

        assert set(graph.stage_ids) == {"stage-build", "stage-deploy"}
        assert set(graph.job_ids) == {"job-build", "job-deploy"}
        assert len(graph.step_ids) == 11
        assert "checkpoint-approval" in graph.step_ids
        assert "job-build" not in graph.leaf_ids
        assert "task-orphan" in graph.leaf_ids
        assert len(graph.nodes) == len(graph.nodes_by_id) == 17

    def test_sample_timeline_warnings(self, sample_timeline: dict[str, Any]) -> None:
        """Test that malformed sample records are reported in order."""
        graph = normalize_timeline(sample_timeline)

        assert graph.warnings == [
            "Skipped a timeline record without a valid id.",
            "Skipped duplicate timeline record id 'task-test'.",
            "Record 'task-orphan' references missing parent 'missing-job'.",
        ]

    def test_nodes_list_shares_arena_objects(self, simple_timeline: dict[str, Any]) -> None:
        """Test that nodes and nodes_by_id hold the same objects."""
        graph = normalize_timeline(simple_timeline)

        for node in graph.nodes:
            assert graph.nodes_by_id[node.id] is node


def _two_node_cycle() -> dict[str, Any]:
    return make_timeline(make_record("a", parent_id="b"), make_record("b", parent_id="a"))


def _detached_cycle() -> dict[str, Any]:
    return make_timeline(
        make_record("root", "Stage"),
        make_record("a", parent_id="c"),
        make_record("b", parent_id="a"),
        make_record("c", parent_id="b"),
        {"name": "no id"},
        make_record("b", name="duplicate"),
    )


class TestStructuralInvariants:
    """Tests for properties every normalized graph must satisfy."""

    @pytest.fixture(params=["sample", "two_node_cycle", "detached_cycle"])
    def raw_timeline(
        self, request: pytest.FixtureRequest, sample_timeline: dict[str, Any]
    ) -> dict[str, Any]:
        """Provide well-formed and cyclic timeline documents."""
        if request.param == "sample":
            return sample_timeline
        if request.param == "two_node_cycle":
            return _two_node_cycle()
        return _detached_cycle()

    def test_child_ids_resolve(self, raw_timeline: dict[str, Any]) -> None:
        """Test that every child reference points at an existing node."""
        graph = normalize_timeline(raw_timeline)

        for node in graph.nodes:
            for child_id in node.child_ids:
                assert child_id in graph.nodes_by_id
                assert graph.nodes_by_id[child_id].parent_id == node.id

    def test_every_node_is_a_root_or_a_child_once(self, raw_timeline: dict[str, Any]) -> None:
        """Test that roots plus child lists account for each kept record exactly once."""
        graph = normalize_timeline(raw_timeline)
        dropped = sum(1 for warning in graph.warnings if warning.startswith("Skipped"))

        placements = list(graph.root_ids)
        for node in graph.nodes:
            placements.extend(node.child_ids)

        assert len(graph.nodes) == len(raw_timeline["records"]) - dropped
        assert sorted(placements) == sorted(graph.nodes_by_id)

    def test_children_are_one_level_deeper_unless_cyclic(self, raw_timeline: dict[str, Any]) -> None:
        """Test that depth increases by one from parent to child off cycles."""
        graph = normalize_timeline(raw_timeline)
        cyclic = any(warning.startswith("Detected cycle") for warning in graph.warnings)

        for node in graph.nodes:
            for child_id in node.child_ids:
                child = graph.nodes_by_id[child_id]
                if cyclic and child.depth <= node.depth:
                    continue
                assert child.depth == node.depth + 1
