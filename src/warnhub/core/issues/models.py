"""Data models for normalized issues: Severity and Issue.

These are the leaf data types of the pipeline. Every parser produces
``Issue`` instances, every report stores them, and the aggregation engine
counts them. They are intentionally free of any parsing or I/O logic.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


# ---------------------------------------------------------------------------
# Severity: Ordered issue severity levels
# ---------------------------------------------------------------------------


class Severity(IntEnum):
    """Four-level severity scale for static analysis issues.

    The integer encoding enables direct comparison: LOW < NORMAL < HIGH < ERROR.
    """

    WARNING_LOW = 1
    WARNING_NORMAL = 2
    WARNING_HIGH = 3
    ERROR = 4

    @classmethod
    def from_string(cls, value: str | None, default: Severity | None = None) -> Severity:
        """Map a tool-specific severity label onto the normalized scale.

        Accepts the enum names themselves as well as common labels used by
        analysis tools ("error", "high", "warning", "info", ...).

        Args:
            value: The raw label. Case-insensitive.
            default: Returned for unknown or empty labels. Defaults to
                ``WARNING_NORMAL``.
        """
        fallback = default if default is not None else cls.WARNING_NORMAL
        if not value:
            return fallback
        key = value.strip().upper().replace("-", "_")
        if key in cls.__members__:
            return cls[key]
        return _SEVERITY_ALIASES.get(key, fallback)


_SEVERITY_ALIASES: dict[str, Severity] = {
    "FATAL": Severity.ERROR,
    "ERROR": Severity.ERROR,
    "HIGH": Severity.WARNING_HIGH,
    "MAJOR": Severity.WARNING_HIGH,
    "CRITICAL": Severity.WARNING_HIGH,
    "WARNING": Severity.WARNING_NORMAL,
    "NORMAL": Severity.WARNING_NORMAL,
    "MEDIUM": Severity.WARNING_NORMAL,
    "LOW": Severity.WARNING_LOW,
    "MINOR": Severity.WARNING_LOW,
    "INFO": Severity.WARNING_LOW,
    "IGNORE": Severity.WARNING_LOW,
}


# ---------------------------------------------------------------------------
# Issue: A single normalized finding
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Issue:
    """A normalized static analysis finding.

    Issues are immutable. Post-processing steps that enrich an issue (module
    or package name resolution, absolute paths) create a modified copy with
    ``dataclasses.replace``.

    Attributes:
        file_path: Path of the affected file. Absolute once resolved
            against the workspace; may be empty when the tool reports an
            issue without a file.
        line_start: First affected line, 0 for "no line".
        line_end: Last affected line. Defaults to ``line_start``.
        message: Human-readable description. Must not be empty.
        severity: Normalized severity.
        origin_id: Identifier of the tool run that produced the issue.
            Left empty by parsers, stamped by the owning report.
        column_start: First affected column, 0 for "no column".
        category: Tool-specific category (e.g. "Naming", "Design").
        type: Tool-specific rule or check identifier.
        module_name: Build module of the affected file, resolved lazily.
        package_name: Package or namespace of the affected file.
    """

    file_path: str
    line_start: int
    message: str
    severity: Severity = Severity.WARNING_NORMAL
    origin_id: str = ""
    line_end: int = -1
    column_start: int = 0
    category: str = ""
    type: str = ""
    module_name: str = ""
    package_name: str = ""
    fingerprint: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.message or not self.message.strip():
            raise ValueError("Issue message must not be empty")
        line_start = max(self.line_start, 0)
        line_end = line_start if self.line_end < 0 else max(self.line_end, line_start)
        object.__setattr__(self, "line_start", line_start)
        object.__setattr__(self, "line_end", line_end)
        object.__setattr__(self, "column_start", max(self.column_start, 0))
        object.__setattr__(
            self,
            "fingerprint",
            compute_fingerprint(
                self.file_path, line_start, line_end, self.message, self.severity
            ),
        )

    @property
    def has_line(self) -> bool:
        """Return True when the issue is associated with a line."""
        return self.line_start > 0

    @property
    def identity(self) -> tuple[str, str]:
        """Dedup key within a report: the fingerprint qualified by origin."""
        return (self.origin_id, self.fingerprint)

    def to_dict(self) -> dict[str, Any]:
        """Convert the issue to a JSON-serializable dict."""
        return {
            "file_path": self.file_path,
            "line_start": self.line_start,
            "line_end": self.line_end,
            "column_start": self.column_start,
            "message": self.message,
            "severity": self.severity.name,
            "origin_id": self.origin_id,
            "category": self.category,
            "type": self.type,
            "module_name": self.module_name,
            "package_name": self.package_name,
            "fingerprint": self.fingerprint,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Issue:
        """Reconstruct an issue from ``to_dict`` output.

        The fingerprint is recomputed rather than trusted.
        """
        return cls(
            file_path=data.get("file_path", ""),
            line_start=int(data.get("line_start", 0)),
            line_end=int(data.get("line_end", -1)),
            column_start=int(data.get("column_start", 0)),
            message=data["message"],
            severity=Severity.from_string(data.get("severity")),
            origin_id=data.get("origin_id", ""),
            category=data.get("category", ""),
            type=data.get("type", ""),
            module_name=data.get("module_name", ""),
            package_name=data.get("package_name", ""),
        )


def compute_fingerprint(
    file_path: str,
    line_start: int,
    line_end: int,
    message: str,
    severity: Severity,
) -> str:
    """Compute the dedup fingerprint of an issue.

    Covers path, line range, message and severity. Path separators are
    normalized so the same finding reported on Windows and POSIX agents
    yields the same key.

    Returns:
        Fingerprint in "sha256:<hex>" format.
    """
    payload = "|".join([
        file_path.replace("\\", "/"),
        str(line_start),
        str(line_end),
        message.strip(),
        severity.name,
    ])
    return "sha256:" + hashlib.sha256(payload.encode("utf-8")).hexdigest()
