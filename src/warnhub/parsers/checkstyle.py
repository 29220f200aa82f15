"""Parser for CheckStyle XML reports (``checkstyle-result.xml``).

.. code-block:: xml

    <checkstyle version="8.29">
      <file name="src/main/java/Foo.java">
        <error line="12" column="5" severity="warning"
               message="Missing a Javadoc comment."
               source="com.puppycrawl.tools.checkstyle.checks.javadoc.MissingJavadocMethodCheck"/>
      </file>
    </checkstyle>

The check class name becomes the issue type (without the ``Check``
suffix) and its package the category.
"""

from __future__ import annotations

from pathlib import Path

from warnhub.core.issues.models import Issue, Severity
from warnhub.parsers.base import IssueBatch, IssueParser
from warnhub.parsers.xml_support import int_attribute, load_document

_SEVERITIES: dict[str, Severity] = {
    "error": Severity.WARNING_HIGH,
    "warning": Severity.WARNING_NORMAL,
    "info": Severity.WARNING_LOW,
    "ignore": Severity.WARNING_LOW,
}


def _split_source(source: str) -> tuple[str, str]:
    """Split a check class name into (category, type)."""
    if not source:
        return "", ""
    parts = source.split(".")
    check = parts[-1]
    if check.endswith("Check"):
        check = check[: -len("Check")]
    category = parts[-2] if len(parts) > 1 else ""
    return category, check


class CheckStyleParser(IssueParser):
    """Parser for CheckStyle's XML output format."""

    def parse(self, text: str, workspace_root: Path) -> IssueBatch:
        root = load_document(text, "checkstyle")
        batch = IssueBatch()
        for file_element in root.iter("file"):
            file_name = file_element.get("name", "")
            for error in file_element.iter("error"):
                message = (error.get("message") or "").strip()
                if not message:
                    continue
                category, check = _split_source(error.get("source", ""))
                batch.issues.append(Issue(
                    file_path=file_name,
                    line_start=int_attribute(error, "line"),
                    column_start=int_attribute(error, "column"),
                    message=message,
                    severity=_SEVERITIES.get(
                        (error.get("severity") or "").lower(), Severity.WARNING_NORMAL
                    ),
                    category=category,
                    type=check,
                ))
        return batch
