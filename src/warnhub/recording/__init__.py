"""Execution recording: configuration in, analysis results out."""

from warnhub.recording.models import BuildResult, ExecutionOutcome
from warnhub.recording.recorder import IssuesRecorder, evaluate_build_result, load_baseline

__all__ = [
    "BuildResult",
    "ExecutionOutcome",
    "IssuesRecorder",
    "evaluate_build_result",
    "load_baseline",
]
