"""Parser for Brakeman JSON reports (``brakeman -f json``).

Brakeman rates each warning with a confidence ("High", "Medium", "Weak"),
which is used as severity.
"""

from __future__ import annotations

import json
from pathlib import Path

from warnhub.core.issues.models import Issue, Severity
from warnhub.exceptions import ParseError
from warnhub.parsers.base import IssueBatch, IssueParser

_CONFIDENCE: dict[str, Severity] = {
    "high": Severity.WARNING_HIGH,
    "medium": Severity.WARNING_NORMAL,
    "weak": Severity.WARNING_LOW,
}


class BrakemanParser(IssueParser):
    """Parser for Brakeman's JSON output format."""

    def parse(self, text: str, workspace_root: Path) -> IssueBatch:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Malformed JSON: {exc}") from exc
        if not isinstance(data, dict) or not isinstance(data.get("warnings"), list):
            raise ParseError("Not a Brakeman report: missing 'warnings' list")

        batch = IssueBatch()
        for warning in data["warnings"]:
            if not isinstance(warning, dict) or not warning.get("message"):
                continue
            line = warning.get("line")
            batch.issues.append(Issue(
                file_path=str(warning.get("file") or ""),
                line_start=line if isinstance(line, int) else 0,
                message=str(warning["message"]),
                severity=_CONFIDENCE.get(
                    str(warning.get("confidence", "")).lower(), Severity.WARNING_NORMAL
                ),
                category=str(warning.get("warning_type", "")),
                type=str(warning.get("check_name", "")),
            ))
        for error in data.get("errors") or []:
            if isinstance(error, dict):
                batch.error_messages.append(f"Brakeman error: {error.get('error', error)}")
        return batch
