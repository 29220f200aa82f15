"""Data models for aggregation output: AnalysisResult.

These types are intentionally decoupled from the aggregation engine so
that CLI formatters and baseline loading can import them without pulling
in the registry or the engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from warnhub.core.aggregation.thresholds import Status
from warnhub.core.issues.models import Issue, Severity


@dataclass(frozen=True)
class AnalysisResult:
    """Immutable outcome for one result unit of an execution.

    One instance exists per origin in separate mode, exactly one (with the
    synthetic id ``"analysis"``) in aggregate mode.

    Attributes:
        id: Origin id, or ``"analysis"`` for an aggregated result.
        name: Display name.
        issues: All issues, first-registered report first.
        size_per_origin: Issue count per origin, in first-registration
            order. Present for merged and single-origin results alike.
        new_size: Issues not present in the reference baseline.
        fixed_size: Reference issues no longer present.
        unchanged_size: Issues present in both.
        status: Quality gate status.
        info_messages: Informational diagnostics of all contributing reports.
        error_messages: Error diagnostics of all contributing reports.
    """

    id: str
    name: str
    issues: tuple[Issue, ...] = ()
    size_per_origin: Mapping[str, int] = field(default_factory=dict)
    new_size: int = 0
    fixed_size: int = 0
    unchanged_size: int = 0
    status: Status = Status.INACTIVE
    info_messages: tuple[str, ...] = ()
    error_messages: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "issues", tuple(self.issues))
        object.__setattr__(
            self, "size_per_origin", MappingProxyType(dict(self.size_per_origin))
        )
        object.__setattr__(self, "info_messages", tuple(self.info_messages))
        object.__setattr__(self, "error_messages", tuple(self.error_messages))

    @property
    def total_size(self) -> int:
        """Return the number of issues in this result."""
        return len(self.issues)

    @property
    def size_per_severity(self) -> dict[Severity, int]:
        """Return the issue count per severity, most severe first."""
        counts = {severity: 0 for severity in sorted(Severity, reverse=True)}
        for issue in self.issues:
            counts[issue.severity] += 1
        return counts

    @property
    def origins(self) -> list[str]:
        """Return the contributing origins in first-registration order."""
        return list(self.size_per_origin)

    @property
    def is_aggregated(self) -> bool:
        """Return True if the result combines more than one origin."""
        return len(self.size_per_origin) > 1

    # -- Serialization ------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Convert the result to a JSON-serializable dict."""
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "total_size": self.total_size,
            "new_size": self.new_size,
            "fixed_size": self.fixed_size,
            "unchanged_size": self.unchanged_size,
            "size_per_origin": dict(self.size_per_origin),
            "size_per_severity": {
                severity.name: count
                for severity, count in self.size_per_severity.items()
            },
            "info_messages": list(self.info_messages),
            "error_messages": list(self.error_messages),
            "issues": [issue.to_dict() for issue in self.issues],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AnalysisResult:
        """Reconstruct a result from ``to_dict`` output."""
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            issues=tuple(Issue.from_dict(item) for item in data.get("issues", [])),
            size_per_origin={
                str(origin): int(count)
                for origin, count in (data.get("size_per_origin") or {}).items()
            },
            new_size=int(data.get("new_size", 0)),
            fixed_size=int(data.get("fixed_size", 0)),
            unchanged_size=int(data.get("unchanged_size", 0)),
            status=Status(data.get("status", Status.INACTIVE.value)),
            info_messages=tuple(data.get("info_messages", [])),
            error_messages=tuple(data.get("error_messages", [])),
        )
