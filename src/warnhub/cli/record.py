"""``warnhub record [workspace]`` -- Parse tool reports and aggregate issues.

Tools come from a YAML configuration (``--config``), from ``--tool``
options, or both (options are appended after configured tools). Each
``--tool`` takes ``TOOL`` or ``TOOL=PATTERN``; without a pattern the tool's
default pattern or the console log (``--console-log``) is used.

Exit Codes:
    0 -- SUCCESS: no quality gate reached.
    1 -- UNSTABLE: a warning threshold was reached.
    2 -- FAILURE: a failure threshold was reached, an origin id was used
         twice without ``--aggregate``, or the configuration is invalid.
"""

from __future__ import annotations

import json
import sys
from dataclasses import replace
from pathlib import Path

import click

from warnhub.cli.output import print_outcome, print_result_detail
from warnhub.config import ExecutionConfig, ToolConfiguration, load_config
from warnhub.core.aggregation import Threshold
from warnhub.exceptions import ConfigurationError
from warnhub.recording import BuildResult, IssuesRecorder

EXIT_CODES: dict[BuildResult, int] = {
    BuildResult.SUCCESS: 0,
    BuildResult.UNSTABLE: 1,
    BuildResult.FAILURE: 2,
}


def parse_tool_option(value: str) -> ToolConfiguration:
    """Convert a ``TOOL[=PATTERN]`` option value into a tool configuration."""
    tool, _, pattern = value.partition("=")
    tool = tool.strip()
    if not tool:
        raise ConfigurationError(f"Invalid tool option '{value}'")
    return ToolConfiguration(tool=tool, pattern=pattern.strip())


def build_config(
    config_path: Path | None,
    tool_options: tuple[str, ...],
    aggregate: bool | None,
    unstable_total: int | None,
    failed_total: int | None,
    reference: Path | None,
) -> ExecutionConfig:
    """Merge the configuration file with command line overrides."""
    config = load_config(config_path) if config_path else ExecutionConfig()
    config.tools.extend(parse_tool_option(option) for option in tool_options)
    if aggregate is not None:
        config.aggregate = aggregate
    if unstable_total is not None or failed_total is not None:
        base = config.threshold or Threshold()
        overrides = {}
        if unstable_total is not None:
            overrides["unstable_total_all"] = unstable_total
        if failed_total is not None:
            overrides["failed_total_all"] = failed_total
        config.threshold = replace(base, **overrides)
    if reference is not None:
        config.reference = reference
    return config


@click.command("record")
@click.argument(
    "workspace",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML execution configuration.",
)
@click.option(
    "--tool", "-t", "tool_options", multiple=True, metavar="TOOL[=PATTERN]",
    help="Tool to run, optionally with a report file pattern. Repeatable.",
)
@click.option(
    "--aggregate/--no-aggregate", default=None,
    help="Merge all tools into a single 'analysis' result.",
)
@click.option("--unstable-total", type=int, help="Issue count marking the build unstable.")
@click.option("--failed-total", type=int, help="Issue count failing the build.")
@click.option(
    "--reference", type=click.Path(dir_okay=False, path_type=Path),
    help="Results file of a previous run, used to count new and fixed issues.",
)
@click.option(
    "--console-log", type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Console log scanned by tools without a report pattern.",
)
@click.option(
    "--output", "-o", type=click.Path(dir_okay=False, path_type=Path),
    help="Write the results as JSON to this file.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]), default="text",
    help="Output format (default: text).",
)
@click.option("--details", is_flag=True, help="List issues and messages of each result.")
def record_command(
    workspace: Path,
    config_path: Path | None,
    tool_options: tuple[str, ...],
    aggregate: bool | None,
    unstable_total: int | None,
    failed_total: int | None,
    reference: Path | None,
    console_log: Path | None,
    output: Path | None,
    output_format: str,
    details: bool,
) -> None:
    """Parse analysis reports in WORKSPACE and record the issues.

    WORKSPACE defaults to the current directory.
    """
    try:
        config = build_config(
            config_path, tool_options, aggregate, unstable_total, failed_total, reference
        )
        log_text = console_log.read_text(encoding="utf-8", errors="replace") if console_log else None
        outcome = IssuesRecorder(config, workspace, console_log=log_text).record()
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    if output is not None:
        output.write_text(json.dumps(outcome.to_dict(), indent=2), encoding="utf-8")

    if output_format == "json":
        click.echo(json.dumps(outcome.to_dict(), indent=2))
    else:
        if details:
            for result in outcome.results:
                print_result_detail(result)
        print_outcome(outcome)

    sys.exit(EXIT_CODES[outcome.build_result])
