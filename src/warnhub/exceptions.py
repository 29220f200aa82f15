"""warnhub exception hierarchy.

All public exceptions inherit from WarnHubError, giving callers a single
base class to catch when they want to handle any warnhub-specific failure
without swallowing unrelated errors.

Only identity collisions and configuration errors are meant to escalate to
an execution failure. Per-file problems (``ParseError``) are absorbed into
the message log of the owning report by the workspace scanner.
"""

from __future__ import annotations


class WarnHubError(Exception):
    """Base exception for all warnhub errors."""


class ParseError(WarnHubError):
    """Raised when a parser cannot read a report file.

    Covers malformed XML/JSON documents and any other structurally
    unreadable input. Recoverable: the scanner records the failure on the
    report and continues with the next file.
    """


class ConfigurationError(WarnHubError):
    """Raised for invalid execution configuration.

    Detected before any parsing begins: unknown tool ids, missing patterns
    for tools that cannot scan a console log, malformed configuration files.
    """


class ThresholdEvaluationError(ConfigurationError):
    """Raised when a quality gate threshold cannot be evaluated.

    Limits must be non-negative integers.
    """


class DuplicateOriginError(WarnHubError):
    """Raised when a second report is registered under an existing origin.

    Fatal for the whole execution when aggregation is disabled.

    Attributes:
        origin: The colliding origin id.
        existing: Description of the action already holding the origin.
    """

    def __init__(self, origin: str, existing: str) -> None:
        self.origin = origin
        self.existing = existing
        super().__init__(
            f"ID {origin} is already used by another action: {existing}"
        )


class ReportSealedError(WarnHubError):
    """Raised when issues are added to a report that has been sealed."""


class ExecutionAbortedError(WarnHubError):
    """Raised when an execution is cancelled before results are produced."""
