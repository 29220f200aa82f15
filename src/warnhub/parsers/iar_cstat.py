"""Parser for IAR C-STAT static analysis messages.

::

    "C:\\src\\main.c",30  Severity-High[MISRAC2012-Rule-10.4_a]: Mismatched essential type
"""

from __future__ import annotations

import re

from warnhub.core.issues.models import Issue, Severity
from warnhub.parsers.base import LineParser, to_int

_SEVERITY: dict[str, Severity] = {
    "High": Severity.WARNING_HIGH,
    "Medium": Severity.WARNING_NORMAL,
    "Low": Severity.WARNING_LOW,
}


class IarCstatParser(LineParser):
    """Parser for IAR C-STAT command line output."""

    pattern = re.compile(
        r'^\s*"(?P<path>[^"]+)",(?P<line>\d+)\s+'
        r"Severity-(?P<severity>High|Medium|Low)\[(?P<check>[^\]]+)\]:\s*"
        r"(?P<message>.+)$"
    )

    def create_issue(self, match: re.Match[str]) -> Issue | None:
        return Issue(
            file_path=match.group("path"),
            line_start=to_int(match.group("line")),
            message=match.group("message").strip(),
            severity=_SEVERITY[match.group("severity")],
            type=match.group("check"),
        )
