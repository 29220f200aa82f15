"""Base interface and data structures for report parsers.

Every parser in warnhub implements the ``IssueParser`` abstract base class,
which provides a single method:

- ``parse(text, workspace_root)`` -- Convert the raw content of one report
  file (or a console log) into an ``IssueBatch``.

The ``IssueBatch`` is the unit handed from a parser to the report builder.
It carries the issues found plus any diagnostics the parser wants to
surface on the owning report. Parsers never decide about deduplication,
origins or thresholds; that is the job of the core model.

Line-oriented formats (compiler output, pylint's parseable format, ...)
derive from ``LineParser``, which strips build log timestamp prefixes
before matching each line against a single regular expression.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from warnhub.core.issues.models import Issue


@dataclass
class IssueBatch:
    """Issues and diagnostics produced by one parser invocation.

    Attributes:
        issues: Issues in the order they appear in the input.
        info_messages: Informational diagnostics for the report.
        error_messages: Error diagnostics for the report (e.g. lines that
            looked like warnings but could not be converted).
    """

    issues: list[Issue] = field(default_factory=list)
    info_messages: list[str] = field(default_factory=list)
    error_messages: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.issues)


class IssueParser(ABC):
    """Abstract base class for report parsers.

    Each concrete parser knows one tool's output format. Parsers are
    stateless: the same instance may be used for many files.
    """

    @abstractmethod
    def parse(self, text: str, workspace_root: Path) -> IssueBatch:
        """Parse the raw content of a report.

        Args:
            text: Full content of the report file or console log.
            workspace_root: Root directory the build ran in. Parsers may use
                it to relativize tool output; path resolution itself is a
                post-processing step.

        Returns:
            An ``IssueBatch``; empty when the report contains no issues.

        Raises:
            ParseError: If the input is structurally unreadable (malformed
                XML or JSON, wrong document type).
        """


# Timestamp prefixes added by build log timestampers, e.g.
# "[2019-03-14T10:00:00.000Z] " or "10:00:00 ".
_TIMESTAMP_PREFIX = re.compile(
    r"^(?:\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?Z?\]\s|\d{2}:\d{2}:\d{2}\s)"
)


def strip_timestamp(line: str) -> str:
    """Remove a leading build log timestamp from a line, if present."""
    return _TIMESTAMP_PREFIX.sub("", line, count=1)


class LineParser(IssueParser):
    """Base class for formats with one issue per line.

    Subclasses set ``pattern`` and implement ``create_issue`` to convert a
    match into an ``Issue`` (or return None to skip the line).
    """

    pattern: re.Pattern[str]

    def parse(self, text: str, workspace_root: Path) -> IssueBatch:
        batch = IssueBatch()
        for line in text.splitlines():
            match = self.pattern.search(strip_timestamp(line.rstrip()))
            if match is None:
                continue
            try:
                issue = self.create_issue(match)
            except ValueError as exc:
                batch.error_messages.append(f"Skipping line '{line.strip()}': {exc}")
                continue
            if issue is not None:
                batch.issues.append(issue)
        return batch

    @abstractmethod
    def create_issue(self, match: re.Match[str]) -> Issue | None:
        """Convert a regex match into an issue."""


def to_int(value: str | None, default: int = 0) -> int:
    """Convert a numeric string from tool output, tolerating garbage."""
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default
