"""Aggregation engine: turns registered tool runs into analysis results.

The engine is a pure function of the final registry state plus three
collaborators supplied by the caller: thresholds (quality gate), a
reference baseline (new/fixed counts), and display labels.

Modes
-----
**Separate** (``aggregate=False``): one ``AnalysisResult`` per origin,
``id == origin``, in first-registration order. The origin's own threshold
applies, falling back to the execution threshold.

**Aggregate** (``aggregate=True``): exactly one result with the synthetic
id ``"analysis"``. Issues of all runs are concatenated in registration
order; repeated runs of the same origin add their counts under one
``size_per_origin`` key. Only the execution threshold applies, so the
status is ``INACTIVE`` unless one is configured.

Messages
--------
Messages of all contributing reports are concatenated in registration
order. When a result spans more than one origin each message is labelled
``"<origin>: <message>"``. Exact duplicates are dropped, keeping the first.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from warnhub import AGGREGATE_ID
from warnhub.core.aggregation.baseline import Baseline
from warnhub.core.aggregation.models import AnalysisResult
from warnhub.core.aggregation.thresholds import Threshold, evaluate_status
from warnhub.core.issues.models import Issue, Severity
from warnhub.core.runs.registry import ToolRun, ToolRunRegistry

_AGGREGATE_NAME = "Static Analysis"


def _unique(messages: Iterable[str]) -> tuple[str, ...]:
    """Drop exact duplicates, preserving first occurrence order."""
    return tuple(dict.fromkeys(messages))


class AggregationEngine:
    """Materializes analysis results from a tool run registry.

    Usage::

        engine = AggregationEngine(aggregate=True)
        results = engine.materialize(registry)

    Attributes:
        aggregate: Whether to merge all origins into one result.
        thresholds: Per-origin thresholds (separate mode).
        execution_threshold: Threshold for the whole execution.
        baseline: Reference issues for new/fixed counts.
        labels: Display name overrides, keyed by result id.
    """

    def __init__(
        self,
        aggregate: bool = False,
        thresholds: Mapping[str, Threshold] | None = None,
        execution_threshold: Threshold | None = None,
        baseline: Baseline | None = None,
        labels: Mapping[str, str] | None = None,
    ) -> None:
        self.aggregate = aggregate
        self.thresholds = dict(thresholds or {})
        self.execution_threshold = execution_threshold
        self.baseline = baseline or Baseline()
        self.labels = dict(labels or {})

    def materialize(self, registry: ToolRunRegistry) -> list[AnalysisResult]:
        """Produce the analysis results for the registry's current state.

        Returns:
            One result per origin in separate mode; exactly one result in
            aggregate mode (empty with ``total_size == 0`` if nothing was
            registered).
        """
        if self.aggregate:
            name = self.labels.get(AGGREGATE_ID, _AGGREGATE_NAME)
            return [self._build(
                AGGREGATE_ID, name, registry.all_runs(), self.execution_threshold
            )]

        results: list[AnalysisResult] = []
        for origin in registry.origins:
            runs = registry.runs_of(origin)
            name = self.labels.get(origin) or runs[0].name or origin
            threshold = self.thresholds.get(origin, self.execution_threshold)
            results.append(self._build(origin, name, runs, threshold))
        return results

    def _build(
        self,
        result_id: str,
        name: str,
        runs: list[ToolRun],
        threshold: Threshold | None,
    ) -> AnalysisResult:
        """Combine runs into one immutable result."""
        issues: list[Issue] = []
        size_per_origin: dict[str, int] = {}
        for run in runs:
            issues.extend(run.report.issues)
            size_per_origin[run.origin] = (
                size_per_origin.get(run.origin, 0) + run.report.size()
            )

        labelled = len(size_per_origin) > 1
        info: list[str] = []
        errors: list[str] = []
        for run in runs:
            prefix = f"{run.origin}: " if labelled else ""
            info.extend(prefix + message for message in run.report.info_messages)
            errors.extend(prefix + message for message in run.report.error_messages)

        size_per_severity = {severity: 0 for severity in Severity}
        for issue in issues:
            size_per_severity[issue.severity] += 1

        delta = self.baseline.compare(result_id, issues)
        return AnalysisResult(
            id=result_id,
            name=name,
            issues=tuple(issues),
            size_per_origin=size_per_origin,
            new_size=delta.new_size,
            fixed_size=delta.fixed_size,
            unchanged_size=delta.unchanged_size,
            status=evaluate_status(threshold, size_per_severity),
            info_messages=_unique(info),
            error_messages=_unique(errors),
        )
