"""Reference baseline for new/fixed/unchanged issue counts.

A ``Baseline`` holds, per result id, the fingerprints of the issues of a
previous execution. Acquiring it (e.g. loading a results file written by an
earlier run) is the caller's concern; ``Baseline.from_results`` builds one
from serialized analysis results.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from warnhub.core.issues.models import Issue


@dataclass(frozen=True)
class IssueDelta:
    """Outcome of comparing current issues with a reference."""

    new_size: int = 0
    fixed_size: int = 0
    unchanged_size: int = 0


@dataclass
class Baseline:
    """Fingerprints of a previous execution, keyed by result id."""

    fingerprints: dict[str, frozenset[str]] = field(default_factory=dict)

    def has_reference(self, result_id: str) -> bool:
        """Return True if a reference exists for ``result_id``."""
        return result_id in self.fingerprints

    def compare(self, result_id: str, issues: Iterable[Issue]) -> IssueDelta:
        """Compare current issues with the reference of ``result_id``.

        Without a reference all issues count as unchanged and nothing as
        new or fixed.
        """
        current = [issue.fingerprint for issue in issues]
        reference = self.fingerprints.get(result_id)
        if reference is None:
            return IssueDelta(unchanged_size=len(current))
        new_size = sum(1 for fingerprint in current if fingerprint not in reference)
        return IssueDelta(
            new_size=new_size,
            fixed_size=len(reference - set(current)),
            unchanged_size=len(current) - new_size,
        )

    @classmethod
    def from_results(cls, results: Iterable[Mapping[str, Any]]) -> Baseline:
        """Build a baseline from serialized analysis results.

        Each result mapping must provide ``id`` and ``issues`` (a list of
        issue dicts with a ``fingerprint`` key, as written by
        ``AnalysisResult.to_dict``).
        """
        fingerprints: dict[str, frozenset[str]] = {}
        for result in results:
            issues = result.get("issues") or []
            fingerprints[str(result["id"])] = frozenset(
                str(issue["fingerprint"]) for issue in issues if "fingerprint" in issue
            )
        return cls(fingerprints)
