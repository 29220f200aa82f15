"""Parser for PMD XML reports (``pmd.xml``).

PMD rates violations with a priority from 1 (highest) to 5 (lowest).
Processing errors reported by PMD itself (``<error>`` elements) are
surfaced as error messages of the batch, not as issues.
"""

from __future__ import annotations

from pathlib import Path

from warnhub.core.issues.models import Issue, Severity
from warnhub.parsers.base import IssueBatch, IssueParser
from warnhub.parsers.xml_support import int_attribute, load_document


def priority_to_severity(priority: int) -> Severity:
    """Map a PMD priority (1..5) to a severity."""
    if priority <= 2:
        return Severity.WARNING_HIGH
    if priority == 3:
        return Severity.WARNING_NORMAL
    return Severity.WARNING_LOW


class PmdParser(IssueParser):
    """Parser for PMD's XML output format."""

    def parse(self, text: str, workspace_root: Path) -> IssueBatch:
        root = load_document(text, "pmd")
        batch = IssueBatch()
        for file_element in root.iter("file"):
            file_name = file_element.get("name", "")
            for violation in file_element.iter("violation"):
                message = " ".join((violation.text or "").split())
                if not message:
                    continue
                batch.issues.append(Issue(
                    file_path=file_name,
                    line_start=int_attribute(violation, "beginline"),
                    line_end=int_attribute(violation, "endline", -1),
                    column_start=int_attribute(violation, "begincolumn"),
                    message=message,
                    severity=priority_to_severity(int_attribute(violation, "priority", 3)),
                    category=violation.get("ruleset", ""),
                    type=violation.get("rule", ""),
                    package_name=violation.get("package", ""),
                ))
        for error in root.iter("error"):
            batch.error_messages.append(
                f"PMD error in '{error.get('filename', '')}': {error.get('msg', '')}"
            )
        return batch
