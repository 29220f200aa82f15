"""Parser for javac compiler warnings, as printed by Ant, Maven or plain javac.

Recognized forms::

    [javac] Test.java:39: warning: Test Warning
    Test.java:39: error: cannot find symbol
    [WARNING] /src/main/java/Foo.java:[12,5] unchecked conversion
"""

from __future__ import annotations

import re

from warnhub.core.issues.models import Issue, Severity
from warnhub.parsers.base import LineParser, to_int


class JavacParser(LineParser):
    """Parser for javac output in console logs and build log files."""

    pattern = re.compile(
        r"^\s*(?:\[(?P<prefix>javac|WARNING|ERROR)\]\s+)?"
        r"(?P<path>(?:[A-Za-z]:)?[^:\[\]\s][^:\[\]]*\.(?:java|kt|scala))"
        r"(?::(?P<line>\d+):|:\[(?P<mline>\d+),(?P<mcol>\d+)\])"
        r"\s*(?:(?P<kind>warning|error):\s*)?(?P<message>.+)$"
    )

    def create_issue(self, match: re.Match[str]) -> Issue | None:
        kind = match.group("kind")
        prefix = match.group("prefix")
        if kind is None and prefix not in ("WARNING", "ERROR"):
            return None
        if kind == "error" or (kind is None and prefix == "ERROR"):
            severity = Severity.ERROR
        else:
            severity = Severity.WARNING_NORMAL
        return Issue(
            file_path=match.group("path").strip(),
            line_start=to_int(match.group("line") or match.group("mline")),
            column_start=to_int(match.group("mcol")),
            message=match.group("message").strip(),
            severity=severity,
        )
