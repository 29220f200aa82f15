"""End-to-end tests for IssuesRecorder.

Verifies:
    - A single tool run with no reference (all issues unchanged).
    - Separate mode: one result per tool, no thresholds means INACTIVE.
    - Aggregate mode: one "analysis" result with per-origin counts.
    - The same tool configured twice collides unless aggregating.
    - Empty patterns, invalid configurations, cancellation and baselines.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from warnhub.config import ExecutionConfig, ToolConfiguration
from warnhub.core.aggregation import AnalysisResult, Baseline, Status, Threshold
from warnhub.exceptions import ConfigurationError, ExecutionAbortedError
from warnhub.recording import BuildResult, ExecutionOutcome, IssuesRecorder, load_baseline
from warnhub.recording.recorder import evaluate_build_result


def _config(*tools: ToolConfiguration, **kwargs) -> ExecutionConfig:
    return ExecutionConfig(tools=list(tools), **kwargs)


CHECKSTYLE = ToolConfiguration(tool="checkstyle", pattern="checkstyle-issues.txt")
PMD = ToolConfiguration(tool="pmd", pattern="pmd-warnings-issues.txt")


class TestSingleTool:
    def test_pylint_without_reference(self, python_workspace: Path) -> None:
        config = _config(ToolConfiguration(tool="pylint", pattern="pylint-issues.txt"))
        outcome = IssuesRecorder(config, python_workspace).record()

        result = outcome.result("pylint")
        assert result is not None
        assert result.total_size == 8
        assert result.new_size == 0
        assert result.fixed_size == 0
        assert result.unchanged_size == 8
        assert outcome.build_result is BuildResult.SUCCESS
        assert "Resolved module names for 8 issues" in result.info_messages
        assert "Resolved package names of 4 affected files" in result.info_messages

    def test_console_log(self, tmp_path: Path) -> None:
        config = _config(ToolConfiguration(tool="java"))
        log = "[2019-03-14T10:00:00.000Z] [javac] Test.java:39: warning: Test Warning\n"
        outcome = IssuesRecorder(config, tmp_path, console_log=log).record()
        assert outcome.results[0].total_size == 1


class TestSeparateMode:
    def test_one_result_per_tool(self, workspace: Path) -> None:
        outcome = IssuesRecorder(_config(CHECKSTYLE, PMD), workspace).record()

        assert [r.id for r in outcome.results] == ["checkstyle", "pmd"]
        assert [r.total_size for r in outcome.results] == [6, 4]
        assert all(r.status is Status.INACTIVE for r in outcome.results)
        assert outcome.build_result is BuildResult.SUCCESS

    def test_same_tool_twice_collides(self, workspace: Path) -> None:
        config = _config(
            ToolConfiguration(tool="checkstyle", pattern="checkstyle2-issues.txt"),
            ToolConfiguration(tool="checkstyle", pattern="checkstyle3-issues.txt"),
        )
        outcome = IssuesRecorder(config, workspace).record()

        assert outcome.build_result is BuildResult.FAILURE
        assert outcome.error_messages == [
            "ID checkstyle is already used by another action: ToolRun for CheckStyle"
        ]
        assert [r.total_size for r in outcome.results] == [6]

    def test_collision_stops_later_tools(self, workspace: Path) -> None:
        config = _config(CHECKSTYLE, CHECKSTYLE, PMD)
        outcome = IssuesRecorder(config, workspace).record()
        assert [r.id for r in outcome.results] == ["checkstyle"]

    def test_custom_ids_avoid_collision(self, workspace: Path) -> None:
        config = _config(
            ToolConfiguration(tool="checkstyle", pattern="checkstyle2-issues.txt", id="cs-a"),
            ToolConfiguration(tool="checkstyle", pattern="checkstyle3-issues.txt", id="cs-b"),
        )
        outcome = IssuesRecorder(config, workspace).record()
        assert outcome.build_result is BuildResult.SUCCESS
        assert {r.id: r.total_size for r in outcome.results} == {"cs-a": 6, "cs-b": 4}

    def test_per_tool_threshold(self, workspace: Path) -> None:
        config = _config(
            ToolConfiguration(
                tool="checkstyle", pattern="checkstyle-issues.txt",
                threshold=Threshold(unstable_total_all=6),
            ),
            PMD,
        )
        outcome = IssuesRecorder(config, workspace).record()
        assert outcome.result("checkstyle").status is Status.WARNING_NORMAL
        assert outcome.result("pmd").status is Status.INACTIVE
        assert outcome.build_result is BuildResult.UNSTABLE

    def test_failed_threshold_fails_build(self, workspace: Path) -> None:
        config = _config(CHECKSTYLE, PMD, threshold=Threshold(failed_total_all=5))
        outcome = IssuesRecorder(config, workspace).record()
        assert outcome.result("checkstyle").status is Status.FAILED
        assert outcome.result("pmd").status is Status.PASSED
        assert outcome.build_result is BuildResult.FAILURE


class TestAggregateMode:
    def test_single_analysis_result(self, workspace: Path) -> None:
        outcome = IssuesRecorder(_config(CHECKSTYLE, PMD, aggregate=True), workspace).record()

        assert len(outcome.results) == 1
        result = outcome.results[0]
        assert result.id == "analysis"
        assert result.total_size == 10
        assert dict(result.size_per_origin) == {"checkstyle": 6, "pmd": 4}
        assert outcome.build_result is BuildResult.SUCCESS

    def test_same_tool_twice_sums(self, workspace: Path) -> None:
        config = _config(
            ToolConfiguration(tool="checkstyle", pattern="checkstyle2-issues.txt"),
            ToolConfiguration(tool="checkstyle", pattern="checkstyle3-issues.txt"),
            aggregate=True,
        )
        outcome = IssuesRecorder(config, workspace).record()

        assert outcome.error_messages == []
        result = outcome.results[0]
        assert result.total_size == 10
        assert dict(result.size_per_origin) == {"checkstyle": 10}

    def test_execution_threshold(self, workspace: Path) -> None:
        config = _config(
            CHECKSTYLE, PMD, aggregate=True, threshold=Threshold(unstable_total_all=10),
        )
        outcome = IssuesRecorder(config, workspace).record()
        assert outcome.results[0].status.is_warning
        assert outcome.build_result is BuildResult.UNSTABLE

    def test_messages_labelled(self, workspace: Path) -> None:
        outcome = IssuesRecorder(_config(CHECKSTYLE, PMD, aggregate=True), workspace).record()
        info = outcome.results[0].info_messages
        assert any(message.startswith("checkstyle: Searching for all files") for message in info)
        assert any(message.startswith("pmd: Searching for all files") for message in info)


class TestEdgeCases:
    def test_empty_pattern_match(self, workspace: Path) -> None:
        config = _config(ToolConfiguration(tool="checkstyle", pattern="**/nothing.xml"))
        outcome = IssuesRecorder(config, workspace).record()
        result = outcome.results[0]
        assert result.total_size == 0
        assert (
            "No files found for pattern '**/nothing.xml'. Configuration error?"
            in result.info_messages
        )
        assert outcome.build_result is BuildResult.SUCCESS

    def test_invalid_configuration_rejected_before_parsing(self, workspace: Path) -> None:
        config = _config(CHECKSTYLE, ToolConfiguration(tool="spotbugs"))
        with pytest.raises(ConfigurationError):
            IssuesRecorder(config, workspace).record()

    def test_cancelled(self, workspace: Path) -> None:
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(ExecutionAbortedError):
            IssuesRecorder(_config(CHECKSTYLE), workspace).record(cancel)

    def test_baseline(self, workspace: Path) -> None:
        first = IssuesRecorder(_config(CHECKSTYLE), workspace).record()
        reference = workspace / "previous.json"
        reference.write_text(json.dumps(first.to_dict()))

        config = _config(
            ToolConfiguration(tool="checkstyle", pattern="checkstyle2-issues.txt"),
            reference=reference,
        )
        second = IssuesRecorder(config, workspace).record()
        result = second.results[0]
        assert (result.new_size, result.fixed_size, result.unchanged_size) == (6, 6, 0)

    def test_explicit_baseline(self, workspace: Path) -> None:
        first = IssuesRecorder(_config(CHECKSTYLE), workspace).record()
        baseline = Baseline.from_results(first.to_dict()["results"])
        second = IssuesRecorder(_config(CHECKSTYLE), workspace, baseline=baseline).record()
        result = second.results[0]
        assert (result.new_size, result.fixed_size, result.unchanged_size) == (0, 0, 6)


class TestLoadBaseline:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert load_baseline(tmp_path / "none.json").fingerprints == {}

    def test_list_of_results(self, tmp_path: Path) -> None:
        path = tmp_path / "results.json"
        path.write_text(json.dumps([{"id": "pmd", "issues": []}]))
        assert load_baseline(path).has_reference("pmd")

    def test_unreadable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "results.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="Cannot read reference results"):
            load_baseline(path)


class TestBuildResult:
    def test_precedence(self) -> None:
        warning = AnalysisResult(id="a", name="a", status=Status.WARNING_LOW)
        failed = AnalysisResult(id="b", name="b", status=Status.FAILED)
        passed = AnalysisResult(id="c", name="c", status=Status.PASSED)
        assert evaluate_build_result([passed], collided=False) is BuildResult.SUCCESS
        assert evaluate_build_result([passed, warning], collided=False) is BuildResult.UNSTABLE
        assert evaluate_build_result([warning, failed], collided=False) is BuildResult.FAILURE
        assert evaluate_build_result([passed], collided=True) is BuildResult.FAILURE

    def test_outcome_round_trip(self, workspace: Path) -> None:
        outcome = IssuesRecorder(_config(CHECKSTYLE, PMD), workspace).record()
        restored = ExecutionOutcome.from_dict(json.loads(json.dumps(outcome.to_dict())))
        assert restored.build_result is outcome.build_result
        assert [r.id for r in restored.results] == ["checkstyle", "pmd"]
        assert restored.total_size == 10
