"""Quality gate thresholds and status evaluation.

A ``Threshold`` holds optional issue-count limits. A limit is *reached*
when the actual count is greater than or equal to it. A limit of 0
disables the check, like ``None``. Evaluation order:

1. No limit configured: ``INACTIVE`` (informational result).
2. ``failed_total_all`` reached: ``FAILED``.
3. ``unstable_total_high`` reached (errors and high warnings): ``WARNING_HIGH``.
4. ``unstable_total_normal`` reached: ``WARNING_NORMAL``.
5. ``unstable_total_low`` reached: ``WARNING_LOW``.
6. ``unstable_total_all`` reached: ``WARNING_<most severe issue present>``.
7. Otherwise: ``PASSED``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

from warnhub.core.issues.models import Severity
from warnhub.exceptions import ThresholdEvaluationError


class Status(Enum):
    """Quality gate status of an analysis result."""

    INACTIVE = "INACTIVE"
    PASSED = "PASSED"
    WARNING_LOW = "WARNING_LOW"
    WARNING_NORMAL = "WARNING_NORMAL"
    WARNING_HIGH = "WARNING_HIGH"
    FAILED = "FAILED"

    @property
    def is_warning(self) -> bool:
        """Return True for the three WARNING_* states."""
        return self.name.startswith("WARNING_")


_SEVERITY_STATUS: dict[Severity, Status] = {
    Severity.ERROR: Status.WARNING_HIGH,
    Severity.WARNING_HIGH: Status.WARNING_HIGH,
    Severity.WARNING_NORMAL: Status.WARNING_NORMAL,
    Severity.WARNING_LOW: Status.WARNING_LOW,
}


@dataclass(frozen=True)
class Threshold:
    """Issue-count limits for one result. ``None`` disables a limit.

    Raises:
        ThresholdEvaluationError: If a limit is not a non-negative int.
    """

    unstable_total_all: int | None = None
    unstable_total_high: int | None = None
    unstable_total_normal: int | None = None
    unstable_total_low: int | None = None
    failed_total_all: int | None = None

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ThresholdEvaluationError(
                    f"Threshold '{f.name}' must be a non-negative integer, got {value!r}"
                )

    @property
    def is_active(self) -> bool:
        """Return True if at least one limit is configured and non-zero."""
        return any(getattr(self, f.name) for f in fields(self))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> Threshold | None:
        """Build a threshold from configuration data.

        Returns:
            None for an empty or missing mapping.

        Raises:
            ThresholdEvaluationError: For unknown keys or invalid limits.
        """
        if not data:
            return None
        if not isinstance(data, Mapping):
            raise ThresholdEvaluationError(f"Threshold must be a mapping, got {data!r}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ThresholdEvaluationError(
                f"Unknown threshold option(s): {', '.join(unknown)}"
            )
        return cls(**dict(data))

    def to_dict(self) -> dict[str, int]:
        """Return the configured limits only."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


def _reached(limit: int | None, count: int) -> bool:
    return limit is not None and limit > 0 and count >= limit


def evaluate_status(
    threshold: Threshold | None,
    size_per_severity: Mapping[Severity, int],
) -> Status:
    """Derive the quality gate status from issue counts.

    Args:
        threshold: Limits to apply, or None.
        size_per_severity: Issue count per severity.

    Returns:
        The resulting ``Status``.
    """
    if threshold is None or not threshold.is_active:
        return Status.INACTIVE

    total = sum(size_per_severity.values())
    high = size_per_severity.get(Severity.ERROR, 0) + size_per_severity.get(
        Severity.WARNING_HIGH, 0
    )
    normal = size_per_severity.get(Severity.WARNING_NORMAL, 0)
    low = size_per_severity.get(Severity.WARNING_LOW, 0)

    if _reached(threshold.failed_total_all, total):
        return Status.FAILED
    if _reached(threshold.unstable_total_high, high):
        return Status.WARNING_HIGH
    if _reached(threshold.unstable_total_normal, normal):
        return Status.WARNING_NORMAL
    if _reached(threshold.unstable_total_low, low):
        return Status.WARNING_LOW
    if _reached(threshold.unstable_total_all, total):
        present = [s for s, count in size_per_severity.items() if count > 0]
        return _SEVERITY_STATUS[max(present)]
    return Status.PASSED
