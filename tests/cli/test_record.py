"""Tests for ``warnhub record`` command.

Verifies:
    - Exit codes for success, unstable and failed executions.
    - Collisions and configuration errors exit with code 2.
    - JSON output and the ``--output`` results file.
    - YAML configuration merged with command line options.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from warnhub.cli.main import cli
from warnhub.cli.record import build_config, parse_tool_option
from warnhub.core.aggregation import Threshold
from warnhub.exceptions import ConfigurationError


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


class TestParseToolOption:
    def test_tool_only(self) -> None:
        tool = parse_tool_option("checkstyle")
        assert (tool.tool, tool.pattern) == ("checkstyle", "")

    def test_tool_and_pattern(self) -> None:
        tool = parse_tool_option("pmd=**/pmd.xml")
        assert (tool.tool, tool.pattern) == ("pmd", "**/pmd.xml")

    def test_empty_tool(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_tool_option("=x.xml")


class TestBuildConfig:
    def test_options_override(self, tmp_path: Path) -> None:
        config_file = tmp_path / "warnhub.yaml"
        config_file.write_text(
            "threshold:\n  unstable_total_all: 5\ntools:\n  - tool: pmd\n"
        )
        config = build_config(config_file, ("java",), True, None, 9, None)
        assert [t.tool for t in config.tools] == ["pmd", "java"]
        assert config.aggregate is True
        assert config.threshold == Threshold(unstable_total_all=5, failed_total_all=9)

    def test_no_config_file(self) -> None:
        config = build_config(None, ("pmd",), None, 3, None, Path("ref.json"))
        assert config.aggregate is False
        assert config.threshold == Threshold(unstable_total_all=3)
        assert config.reference == Path("ref.json")


class TestRecordExitCodes:
    def test_success(self, runner: CliRunner, workspace: Path) -> None:
        result = runner.invoke(cli, [
            "record", str(workspace),
            "-t", "checkstyle=checkstyle-issues.txt",
            "-t", "pmd=pmd-warnings-issues.txt",
        ])
        assert result.exit_code == 0
        assert "SUCCESS" in result.output

    def test_unstable(self, runner: CliRunner, workspace: Path) -> None:
        result = runner.invoke(cli, [
            "record", str(workspace),
            "-t", "checkstyle=checkstyle-issues.txt",
            "--unstable-total", "1",
        ])
        assert result.exit_code == 1

    def test_failed(self, runner: CliRunner, workspace: Path) -> None:
        result = runner.invoke(cli, [
            "record", str(workspace),
            "-t", "checkstyle=checkstyle-issues.txt",
            "--failed-total", "6",
        ])
        assert result.exit_code == 2

    def test_collision(self, runner: CliRunner, workspace: Path) -> None:
        result = runner.invoke(cli, [
            "record", str(workspace), "--format", "json",
            "-t", "checkstyle=checkstyle2-issues.txt",
            "-t", "checkstyle=checkstyle3-issues.txt",
        ])
        assert result.exit_code == 2
        data = json.loads(result.output)
        assert data["build_result"] == "FAILURE"
        assert data["error_messages"] == [
            "ID checkstyle is already used by another action: ToolRun for CheckStyle"
        ]

    def test_unknown_tool(self, runner: CliRunner, workspace: Path) -> None:
        result = runner.invoke(cli, ["record", str(workspace), "-t", "spotbugs"])
        assert result.exit_code == 2
        assert "Unknown tool 'spotbugs'" in result.output

    def test_no_tools(self, runner: CliRunner, workspace: Path) -> None:
        result = runner.invoke(cli, ["record", str(workspace)])
        assert result.exit_code == 2
        assert "No tools configured" in result.output


class TestRecordOutput:
    def test_json_aggregate(self, runner: CliRunner, workspace: Path) -> None:
        result = runner.invoke(cli, [
            "record", str(workspace), "--aggregate", "--format", "json",
            "-t", "checkstyle=checkstyle-issues.txt",
            "-t", "pmd=pmd-warnings-issues.txt",
        ])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["results"]) == 1
        analysis = data["results"][0]
        assert analysis["id"] == "analysis"
        assert analysis["total_size"] == 10
        assert analysis["size_per_origin"] == {"checkstyle": 6, "pmd": 4}

    def test_output_file_usable_as_reference(
        self, runner: CliRunner, workspace: Path, tmp_path: Path
    ) -> None:
        output = tmp_path / "results.json"
        first = runner.invoke(cli, [
            "record", str(workspace), "-o", str(output),
            "-t", "checkstyle=checkstyle-issues.txt",
        ])
        assert first.exit_code == 0
        assert output.exists()

        second = runner.invoke(cli, [
            "record", str(workspace), "--format", "json", "--reference", str(output),
            "-t", "checkstyle=checkstyle-issues.txt,checkstyle3-issues.txt",
        ])
        data = json.loads(second.output)
        assert data["results"][0]["new_size"] == 4
        assert data["results"][0]["unchanged_size"] == 6

    def test_config_file(self, runner: CliRunner, workspace: Path) -> None:
        config_file = workspace / "warnhub.yaml"
        config_file.write_text(
            "aggregate: true\n"
            "tools:\n"
            "  - tool: checkstyle\n"
            "    pattern: checkstyle2-issues.txt\n"
            "  - tool: checkstyle\n"
            "    pattern: checkstyle3-issues.txt\n"
        )
        result = runner.invoke(cli, [
            "record", str(workspace), "-c", str(config_file), "--format", "json",
        ])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["results"][0]["size_per_origin"] == {"checkstyle": 10}

    def test_console_log(self, runner: CliRunner, tmp_path: Path) -> None:
        log = tmp_path / "console.log"
        log.write_text("[javac] Test.java:39: warning: Test Warning\n")
        result = runner.invoke(cli, [
            "record", str(tmp_path), "--console-log", str(log), "-t", "java",
            "--format", "json",
        ])
        data = json.loads(result.output)
        assert data["results"][0]["total_size"] == 1

    def test_details(self, runner: CliRunner, workspace: Path) -> None:
        result = runner.invoke(cli, [
            "record", str(workspace), "--details",
            "-t", "pmd=pmd-warnings-issues.txt",
        ])
        assert result.exit_code == 0
        assert "Analysis Result" in result.output
        assert "INFO:" in result.output
