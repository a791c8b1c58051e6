"""Integration tests for complete CLI invocations.

These tests run the CLI entry point against real files: analyzing the
sample timeline, importing, exporting and resetting the persisted rule
set, and the error paths that end in a non-zero exit code.
"""

import json
import os
from pathlib import Path

import pytest

from tests.fixtures import FIXTURES_DIR
from timeline_analyzer.cli.main import main

SAMPLE_TIMELINE = str(FIXTURES_DIR / "sample_timeline.json")


@pytest.fixture
def store_file(tmp_path: Path) -> Path:
    """Provide a rule store location for one CLI session."""
    return tmp_path / "session" / "rules.json"


@pytest.fixture
def team_rules(tmp_path: Path) -> Path:
    """Provide a rule file that marks every publish step as teardown."""
    path = tmp_path / "team-rules.json"
    path.write_text(
        json.dumps(
            {
                "version": 1,
                "rules": [
                    {
                        "id": "publish-is-teardown",
                        "label": "Publishing",
                        "field": "name",
                        "operator": "startsWith",
                        "value": "publish",
                        "category": "teardown",
                    }
                ],
                "overrides": {"checkpoint-approval": "setup"},
            }
        ),
        encoding="utf-8",
    )
    return path


class TestAnalyzeWorkflow:
    """Tests for analyzing a timeline through the CLI."""

    def test_text_report(self, store_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a default analysis run."""
        exit_code = main(["--timeline", SAMPLE_TIMELINE, "--store", str(store_file)])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert "Pipeline Timeline Analysis" in captured.out
        assert "Step Classification" in captured.out
        assert "Warnings (3)" in captured.out

    def test_json_report(self, store_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that --json prints a single parseable document."""
        exit_code = main(["--timeline", SAMPLE_TIMELINE, "--store", str(store_file), "--json"])

        data = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert data["analysis"]["metrics"]["machine_wait_duration_ms"] == 25000
        assert data["analysis"]["parallelization"]["idle_wall_clock_ms"] == 32000
        assert data["analysis"]["graph"]["root_ids"] == ["stage-build", "stage-deploy", "task-orphan"]
        assert data["classification"]["totals_by_category"]["useful"] == 128000

    def test_analysis_does_not_write_store(self, store_file: Path) -> None:
        """Test that analyzing alone leaves no stored rule set behind."""
        main(["--timeline", SAMPLE_TIMELINE, "--store", str(store_file)])

        assert not store_file.exists()

    def test_malformed_timeline(
        self, tmp_path: Path, store_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that a payload without records fails with a readable error."""
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"count": 0, "value": []}), encoding="utf-8")

        exit_code = main(["--timeline", str(bad), "--store", str(store_file)])

        assert exit_code == 1
        assert "Error: Timeline payload must include a records array." in capsys.readouterr().err

    def test_missing_timeline_file(
        self, tmp_path: Path, store_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that a missing file fails without a traceback."""
        exit_code = main(["--timeline", str(tmp_path / "none.json"), "--store", str(store_file)])

        err = capsys.readouterr().err
        assert exit_code == 1
        assert "Failed to read timeline file" in err
        assert "Traceback" not in err

    def test_nothing_to_do(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that an empty invocation is rejected."""
        exit_code = main([])

        assert exit_code == 1
        assert "Nothing to do" in capsys.readouterr().err


class TestRuleSetWorkflow:
    """Tests for managing the persisted rule set across invocations."""

    def test_import_then_analyze(
        self, team_rules: Path, store_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that imported rules are used by a later analysis."""
        assert main(["--import-rules", str(team_rules), "--store", str(store_file)]) == 0
        assert store_file.exists()
        capsys.readouterr()

        exit_code = main(["--timeline", SAMPLE_TIMELINE, "--store", str(store_file), "--json"])

        classification = json.loads(capsys.readouterr().out)["classification"]
        assert exit_code == 0
        assert classification["totals_by_category"]["teardown"] == 48000
        assert classification["totals_by_category"]["setup"] == 10000
        assert classification["by_node_id"]["checkpoint-approval"]["source"] == "override"

    def test_export_to_stdout(
        self, team_rules: Path, store_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test exporting the stored rule set after an import."""
        main(["--import-rules", str(team_rules), "--store", str(store_file)])
        capsys.readouterr()

        exit_code = main(["--export-rules", "-", "--store", str(store_file)])

        exported = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert exported["version"] == 1
        assert [rule["id"] for rule in exported["rules"]] == ["publish-is-teardown"]
        assert exported["overrides"] == {"checkpoint-approval": "setup"}

    def test_export_file_reimports_identically(self, tmp_path: Path, store_file: Path) -> None:
        """Test that an exported file imports back to the same rule set."""
        exported = tmp_path / "exported.json"
        other_store = tmp_path / "other" / "rules.json"

        assert main(["--export-rules", str(exported), "--store", str(store_file)]) == 0
        assert main(["--import-rules", str(exported), "--store", str(other_store)]) == 0

        assert json.loads(other_store.read_text(encoding="utf-8")) == json.loads(
            exported.read_text(encoding="utf-8")
        )

    def test_reset_restores_defaults(self, team_rules: Path, store_file: Path) -> None:
        """Test that reset replaces imported rules with the built-in ones."""
        main(["--import-rules", str(team_rules), "--store", str(store_file)])

        exit_code = main(["--reset-rules", "--store", str(store_file)])

        stored = json.loads(store_file.read_text(encoding="utf-8"))
        assert exit_code == 0
        assert len(stored["rules"]) == 5
        assert stored["overrides"] == {}

    def test_rejected_import_keeps_stored_rules(
        self, tmp_path: Path, team_rules: Path, store_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that an unsupported version leaves the stored rule set untouched."""
        main(["--import-rules", str(team_rules), "--store", str(store_file)])
        before = store_file.read_text(encoding="utf-8")
        newer = tmp_path / "v2.json"
        newer.write_text(json.dumps({"version": 2, "rules": []}), encoding="utf-8")
        capsys.readouterr()

        exit_code = main(["--import-rules", str(newer), "--store", str(store_file)])

        assert exit_code == 1
        assert "Unsupported rule file version '2'" in capsys.readouterr().err
        assert store_file.read_text(encoding="utf-8") == before

    def test_store_location_from_environment(self, team_rules: Path) -> None:
        """Test that the store defaults to the configured location."""
        configured = Path(os.environ["TIMELINE_ANALYZER_RULES_STORE_PATH"])

        assert main(["--import-rules", str(team_rules)]) == 0

        assert configured.exists()

    def test_corrupt_store_is_ignored(
        self, store_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that analysis still runs with a damaged store file."""
        store_file.parent.mkdir(parents=True)
        store_file.write_text("{not json", encoding="utf-8")

        exit_code = main(["--timeline", SAMPLE_TIMELINE, "--store", str(store_file), "--json"])

        assert exit_code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["classification"]["totals_by_category"]["useful"] == 128000
