"""Issues recorder: runs one execution from configuration to results.

Recording Algorithm:
    1. Validate the configuration against the tool registry. Invalid
       configurations fail here, before anything is parsed.
    2. For each configured tool, in order, scan the workspace into a
       sealed report and register it under the tool's origin.
    3. On an origin collision (separate mode only) stop producing further
       reports; the build fails with the collision message.
    4. Materialize analysis results with the aggregation engine and derive
       the overall build result from their statuses.

The tool run registry lives only for the duration of ``record()``.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from warnhub.config import ExecutionConfig
from warnhub.core.aggregation import AggregationEngine, AnalysisResult, Baseline, Status
from warnhub.core.runs import ToolRunRegistry
from warnhub.exceptions import ConfigurationError, DuplicateOriginError, ExecutionAbortedError
from warnhub.parsers.registry import ToolRegistry, default_registry
from warnhub.recording.models import BuildResult, ExecutionOutcome
from warnhub.workspace.scanner import ReportScanner

logger = logging.getLogger(__name__)


def load_baseline(path: Path) -> Baseline:
    """Load a reference baseline from a results file of a previous run.

    A missing file yields an empty baseline (first execution).

    Raises:
        ConfigurationError: If the file exists but is not a results file.
    """
    if not path.exists():
        logger.warning("Reference results %s not found, using empty baseline", path)
        return Baseline()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        results = data["results"] if isinstance(data, dict) else data
        return Baseline.from_results(results)
    except (OSError, ValueError, KeyError, TypeError) as exc:
        raise ConfigurationError(f"Cannot read reference results '{path}': {exc}") from exc


def evaluate_build_result(results: list[AnalysisResult], collided: bool) -> BuildResult:
    """Derive the overall verdict from result statuses."""
    if collided or any(result.status is Status.FAILED for result in results):
        return BuildResult.FAILURE
    if any(result.status.is_warning for result in results):
        return BuildResult.UNSTABLE
    return BuildResult.SUCCESS


class IssuesRecorder:
    """Records the issues of one execution.

    Usage::

        recorder = IssuesRecorder(config, Path("workspace"))
        outcome = recorder.record()
        for result in outcome.results:
            print(result.id, result.total_size, result.status.name)

    Attributes:
        config: The execution configuration.
        workspace: Root directory containing the report files.
        tools: Tool registry resolving tool ids to parsers.
        console_log: Console output for tools scanning the console log.
        baseline: Reference issues; loaded from ``config.reference`` when
            not given.
    """

    def __init__(
        self,
        config: ExecutionConfig,
        workspace: Path,
        tools: ToolRegistry | None = None,
        console_log: str | None = None,
        baseline: Baseline | None = None,
    ) -> None:
        self.config = config
        self.workspace = workspace
        self.tools = tools or default_registry()
        self.console_log = console_log
        self.baseline = baseline

    def record(self, cancel: threading.Event | None = None) -> ExecutionOutcome:
        """Run all configured tools and return the execution outcome.

        Args:
            cancel: Optional event; when set, the execution is abandoned
                and no results are produced.

        Raises:
            ConfigurationError: If the configuration is invalid.
            ExecutionAbortedError: If ``cancel`` is set during recording.
        """
        self.config.validate(self.tools)
        baseline = self.baseline
        if baseline is None:
            baseline = load_baseline(self.config.reference) if self.config.reference else Baseline()

        registry = ToolRunRegistry(aggregate=self.config.aggregate)
        scanner = ReportScanner(self.workspace, self.console_log)
        errors: list[str] = []
        collided = False

        for tool in self.config.tools:
            _check_cancelled(cancel)
            descriptor = self.tools.get(tool.tool)
            name = tool.display_name(descriptor)
            report = scanner.scan(tool, descriptor)
            _check_cancelled(cancel)
            try:
                registry.register(tool.origin, report, name=name, description=f"ToolRun for {name}")
            except DuplicateOriginError as exc:
                logger.error("%s", exc)
                errors.append(str(exc))
                collided = True
                break

        engine = AggregationEngine(
            aggregate=self.config.aggregate,
            thresholds=self.config.per_tool_thresholds,
            execution_threshold=self.config.threshold,
            baseline=baseline,
            labels=self.config.labels,
        )
        results = engine.materialize(registry)
        registry.clear()
        return ExecutionOutcome(
            results=results,
            build_result=evaluate_build_result(results, collided),
            error_messages=errors,
        )


def _check_cancelled(cancel: threading.Event | None) -> None:
    if cancel is not None and cancel.is_set():
        raise ExecutionAbortedError("Execution aborted; no results recorded")
