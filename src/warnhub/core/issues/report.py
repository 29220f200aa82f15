"""The ``Report``: issues produced by one tool run, with message logs.

A report is built incrementally while a tool's parser runs over all of its
matched files, then sealed. Sealing runs the post-processing chain exactly
once (path, module and package resolution) and freezes the issue sequence.

Deduplication
-------------
Two issues are the same finding when their fingerprint *and* origin match.
The second occurrence is dropped and counted in ``duplicates``. Issues of
different origins never collapse, even with identical fingerprints.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import replace
from typing import TYPE_CHECKING

from warnhub.core.issues.models import Issue, Severity
from warnhub.exceptions import ReportSealedError

if TYPE_CHECKING:
    from warnhub.parsers.base import IssueBatch

logger = logging.getLogger(__name__)


class PostProcessor(ABC):
    """A step applied to the issues of a report when it is sealed.

    Implementations enrich issues (e.g. resolve module names) and log
    informational summaries on the report. They must return exactly one
    issue per input issue, in the same order.
    """

    @abstractmethod
    def process(self, issues: list[Issue], report: Report) -> list[Issue]:
        """Return the enriched issues; may log messages on ``report``."""


class Report:
    """Ordered, deduplicating collection of issues for one origin.

    Attributes:
        origin: Identifier of the tool run owning this report.
        info_messages: Informational diagnostics, in logging order.
        error_messages: Error diagnostics, in logging order.
        duplicates: Number of issues dropped as duplicates.
    """

    def __init__(self, origin: str) -> None:
        self.origin = origin
        self.info_messages: list[str] = []
        self.error_messages: list[str] = []
        self.duplicates = 0
        self._issues: list[Issue] = []
        self._identities: set[tuple[str, str]] = set()
        self._sealed = False

    # -- Construction -------------------------------------------------------

    def add(self, issue: Issue) -> bool:
        """Add an issue, stamping this report's origin when it has none.

        Returns:
            True if the issue was added, False if it duplicated an issue
            already present.

        Raises:
            ReportSealedError: If the report has been sealed.
        """
        self._check_open()
        if not issue.origin_id:
            issue = replace(issue, origin_id=self.origin)
        if issue.identity in self._identities:
            self.duplicates += 1
            return False
        self._identities.add(issue.identity)
        self._issues.append(issue)
        return True

    def add_all(self, issues: Iterable[Issue]) -> int:
        """Add several issues. Returns the number actually added."""
        return sum(1 for issue in issues if self.add(issue))

    def add_batch(self, batch: IssueBatch) -> int:
        """Add a parser batch: its issues plus its diagnostics."""
        added = self.add_all(batch.issues)
        self.info_messages.extend(batch.info_messages)
        self.error_messages.extend(batch.error_messages)
        return added

    def log_info(self, message: str) -> None:
        """Record an informational diagnostic. Allowed after sealing."""
        self.info_messages.append(message)

    def log_error(self, message: str) -> None:
        """Record an error diagnostic. Allowed after sealing."""
        self.error_messages.append(message)

    # -- Sealing ------------------------------------------------------------

    def seal(self, post_processors: Iterable[PostProcessor] = ()) -> Report:
        """Run the post-processing chain once and freeze the issues.

        A post-processor that raises, or returns a different number of
        issues, is reported as an error message and its output discarded.
        Sealing an already sealed report is a no-op.

        Returns:
            The report itself, for chaining.
        """
        if self._sealed:
            return self
        issues = list(self._issues)
        for processor in post_processors:
            name = type(processor).__name__
            try:
                processed = processor.process(list(issues), self)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Post-processor %s failed", name, exc_info=True)
                self.log_error(f"Post processing step {name} failed: {exc}")
                continue
            if len(processed) != len(issues):
                self.log_error(
                    f"Post processing step {name} changed the number of issues "
                    f"from {len(issues)} to {len(processed)}; result ignored"
                )
                continue
            issues = processed
        self._issues = issues
        self._sealed = True
        return self

    @property
    def is_sealed(self) -> bool:
        """Return True once ``seal()`` has been called."""
        return self._sealed

    def _check_open(self) -> None:
        if self._sealed:
            raise ReportSealedError(f"Report '{self.origin}' is sealed")

    # -- Queries ------------------------------------------------------------

    @property
    def issues(self) -> tuple[Issue, ...]:
        """Return the issues in insertion order."""
        return tuple(self._issues)

    def size(self) -> int:
        """Return the number of (deduplicated) issues."""
        return len(self._issues)

    def size_of(self, severity: Severity) -> int:
        """Return the number of issues with the given severity."""
        return sum(1 for issue in self._issues if issue.severity == severity)

    def fingerprints(self) -> set[str]:
        """Return the fingerprints of all issues."""
        return {issue.fingerprint for issue in self._issues}

    def __len__(self) -> int:
        return len(self._issues)

    def __iter__(self) -> Iterator[Issue]:
        return iter(tuple(self._issues))

    def __repr__(self) -> str:
        state = "sealed" if self._sealed else "open"
        return f"Report(origin={self.origin!r}, size={self.size()}, {state})"
