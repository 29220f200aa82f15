"""Parser for Pylint's parseable output format.

Expects the message template ``{path}:{line}: [{msg_id}({symbol}), {obj}] {msg}``
(``--output-format=parseable``)::

    src/app/views.py:42: [W0612(unused-variable), index] Unused variable 'x'

Severity follows the message category: fatal and error messages are high,
warnings normal, conventions, refactorings and infos low.
"""

from __future__ import annotations

import re

from warnhub.core.issues.models import Issue, Severity
from warnhub.parsers.base import LineParser, to_int

_CATEGORY_SEVERITY: dict[str, Severity] = {
    "F": Severity.WARNING_HIGH,
    "E": Severity.WARNING_HIGH,
    "W": Severity.WARNING_NORMAL,
    "C": Severity.WARNING_LOW,
    "R": Severity.WARNING_LOW,
    "I": Severity.WARNING_LOW,
}


class PyLintParser(LineParser):
    """Parser for ``pylint --output-format=parseable``."""

    pattern = re.compile(
        r"^(?P<path>[^:\s][^:]*):(?P<line>\d+):\s*"
        r"\[(?P<id>[A-Z]\d{4})(?:\((?P<symbol>[\w-]+)\))?(?:,\s*(?P<obj>[^\]]*))?\]\s*"
        r"(?P<message>.+)$"
    )

    def create_issue(self, match: re.Match[str]) -> Issue | None:
        msg_id = match.group("id")
        return Issue(
            file_path=match.group("path"),
            line_start=to_int(match.group("line")),
            message=match.group("message"),
            severity=_CATEGORY_SEVERITY.get(msg_id[0], Severity.WARNING_NORMAL),
            category=match.group("symbol") or "",
            type=msg_id,
        )
