"""Data models for the recording module: BuildResult and ExecutionOutcome."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from warnhub.core.aggregation.models import AnalysisResult


class BuildResult(Enum):
    """Overall verdict of an execution."""

    SUCCESS = "SUCCESS"
    UNSTABLE = "UNSTABLE"
    FAILURE = "FAILURE"


@dataclass
class ExecutionOutcome:
    """Everything an execution hands back to its caller.

    Attributes:
        results: Analysis results in first-registration order. After an
            origin collision this holds the results of the runs registered
            before the collision.
        build_result: Overall verdict.
        error_messages: Build-level errors (e.g. origin collisions).
    """

    results: list[AnalysisResult]
    build_result: BuildResult = BuildResult.SUCCESS
    error_messages: list[str] = field(default_factory=list)

    def result(self, result_id: str) -> AnalysisResult | None:
        """Return the result with the given id, or None."""
        for result in self.results:
            if result.id == result_id:
                return result
        return None

    @property
    def total_size(self) -> int:
        """Return the number of issues over all results."""
        return sum(result.total_size for result in self.results)

    def to_dict(self) -> dict[str, Any]:
        """Convert the outcome to a JSON-serializable dict."""
        return {
            "build_result": self.build_result.value,
            "error_messages": list(self.error_messages),
            "results": [result.to_dict() for result in self.results],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExecutionOutcome:
        """Reconstruct an outcome from ``to_dict`` output."""
        return cls(
            results=[AnalysisResult.from_dict(item) for item in data.get("results", [])],
            build_result=BuildResult(data.get("build_result", BuildResult.SUCCESS.value)),
            error_messages=list(data.get("error_messages", [])),
        )
