"""Pytest configuration and shared fixtures for the timeline-analyzer test suite.

This module provides common fixtures used across unit and integration
tests, including small hand-built timelines, the sample timeline document
and an isolated rule-set store.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from tests.fixtures import load_fixture, make_record, make_timeline
from timeline_analyzer.classification.storage import RuleSetStorage
from timeline_analyzer.classification.store import RuleSetStore
from timeline_analyzer.config.settings import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep tests away from the user's stored rule set.

    Points the rule store at a temporary file and clears the cached
    settings before and after every test.
    """
    monkeypatch.setenv("TIMELINE_ANALYZER_RULES_STORE_PATH", str(tmp_path / "store" / "rules.json"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_timeline() -> dict[str, Any]:
    """Provide the two-stage sample timeline document.

    The document contains a build stage with one job and five tasks, a
    deploy stage with an approval checkpoint and a job with four tasks
    (two of them overlapping), plus three malformed records: one without
    an id, one duplicate id and one orphan.
    """
    return load_fixture("sample_timeline")


@pytest.fixture
def simple_timeline() -> dict[str, Any]:
    """Provide one stage, one job and two back-to-back tasks.

    Job runs from 0s to 10s; its tasks run from 2s to 6s and 6s to 10s.
    """
    return make_timeline(
        make_record("stage", "Stage", name="Build", start=0, finish=10, order=1),
        make_record("job", "Job", parent_id="stage", name="Compile", start=0, finish=10, order=1),
        make_record("t1", parent_id="job", name="Restore packages", start=2, finish=6, order=1),
        make_record("t2", parent_id="job", name="Run tests", start=6, finish=10, order=2),
    )


@pytest.fixture
def rules_path(tmp_path: Path) -> Path:
    """Provide a path for a persisted rule set inside the test directory."""
    return tmp_path / "rules" / "rules.json"


@pytest.fixture
def rule_store(rules_path: Path) -> RuleSetStore:
    """Provide a rule-set store backed by a temporary file."""
    return RuleSetStore(RuleSetStorage(rules_path))
