"""Parser for Clang (and GCC compatible) compiler diagnostics.

::

    test.c:1:2: error: This is an error.
    src/io.c:87:10: warning: unused variable 'n' [-Wunused-variable]
"""

from __future__ import annotations

import re

from warnhub.core.issues.models import Issue, Severity
from warnhub.parsers.base import LineParser, to_int

_KIND_SEVERITY: dict[str, Severity] = {
    "fatal error": Severity.ERROR,
    "error": Severity.WARNING_HIGH,
    "warning": Severity.WARNING_NORMAL,
    "note": Severity.WARNING_LOW,
    "remark": Severity.WARNING_LOW,
}


class ClangParser(LineParser):
    """Parser for clang diagnostics in console logs and log files."""

    pattern = re.compile(
        r"^\s*(?P<path>[^\s:][^:]*):(?P<line>\d+):(?:(?P<col>\d+):)?\s*"
        r"(?P<kind>fatal error|error|warning|note|remark):\s*"
        r"(?P<message>.*?)(?:\s*\[(?P<flag>-W[^\]]+)\])?\s*$"
    )

    def create_issue(self, match: re.Match[str]) -> Issue | None:
        if not match.group("message"):
            return None
        return Issue(
            file_path=match.group("path"),
            line_start=to_int(match.group("line")),
            column_start=to_int(match.group("col")),
            message=match.group("message"),
            severity=_KIND_SEVERITY[match.group("kind")],
            category=match.group("flag") or "",
        )
