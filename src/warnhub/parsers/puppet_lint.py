"""Parser for puppet-lint output.

Expects the log format ``%{path}:%{line}:%{check}:%{KIND}:%{message}``::

    manifests/init.pp:3:autoloader_layout:ERROR:mymodule not in autoload module layout
"""

from __future__ import annotations

import re

from warnhub.core.issues.models import Issue, Severity
from warnhub.parsers.base import LineParser, to_int


class PuppetLintParser(LineParser):
    """Parser for ``puppet-lint --log-format``."""

    pattern = re.compile(
        r"^\s*(?P<path>[^:\s][^:]*):(?P<line>\d+):(?P<check>[^:]+):"
        r"(?P<kind>ERROR|WARNING):(?P<message>.+)$"
    )

    def create_issue(self, match: re.Match[str]) -> Issue | None:
        severity = (
            Severity.WARNING_HIGH if match.group("kind") == "ERROR"
            else Severity.WARNING_NORMAL
        )
        return Issue(
            file_path=match.group("path"),
            line_start=to_int(match.group("line")),
            message=match.group("message").strip(),
            severity=severity,
            category=match.group("check"),
        )
