"""Tests for the XML report parsers (CheckStyle and PMD)."""

from __future__ import annotations

from pathlib import Path

import pytest

from warnhub.core.issues import Severity
from warnhub.exceptions import ParseError
from warnhub.parsers import CheckStyleParser, PmdParser
from warnhub.parsers.pmd import priority_to_severity

CHECKSTYLE = """<?xml version="1.0" encoding="UTF-8"?>
<checkstyle version="8.29">
  <file name="src/main/java/Foo.java">
    <error line="12" column="5" severity="warning"
           message="Missing a Javadoc comment."
           source="com.puppycrawl.tools.checkstyle.checks.javadoc.MissingJavadocMethodCheck"/>
    <error line="20" severity="error" message="Line is too long." source="LineLength"/>
    <error line="30" severity="info" message="   " source="x"/>
  </file>
  <file name="src/main/java/Bar.java">
    <error line="1" severity="ignore" message="Ignored check."/>
  </file>
</checkstyle>
"""

PMD = """<?xml version="1.0" encoding="UTF-8"?>
<pmd version="6.21.0">
  <file name="/ws/src/Util.java">
    <violation beginline="7" endline="9" begincolumn="3" rule="GodClass"
               ruleset="Design" package="edu.hm" priority="1">
      Possible God Class
    </violation>
    <violation beginline="15" endline="15" rule="UnusedImport" ruleset="Best Practices" priority="4">
      Avoid unused imports
    </violation>
  </file>
  <error filename="/ws/src/Broken.java" msg="ParseException: Encountered end of file"/>
</pmd>
"""


class TestCheckStyleParser:
    """Tests for CheckStyle XML parsing."""

    def test_parses_errors(self) -> None:
        batch = CheckStyleParser().parse(CHECKSTYLE, Path("/ws"))
        assert len(batch) == 3
        first = batch.issues[0]
        assert first.file_path == "src/main/java/Foo.java"
        assert (first.line_start, first.column_start) == (12, 5)
        assert first.severity is Severity.WARNING_NORMAL
        assert first.category == "javadoc"
        assert first.type == "MissingJavadocMethod"

    def test_severity_mapping(self) -> None:
        batch = CheckStyleParser().parse(CHECKSTYLE, Path("/ws"))
        assert [issue.severity for issue in batch.issues] == [
            Severity.WARNING_NORMAL, Severity.WARNING_HIGH, Severity.WARNING_LOW,
        ]

    def test_source_without_package(self) -> None:
        batch = CheckStyleParser().parse(CHECKSTYLE, Path("/ws"))
        assert (batch.issues[1].category, batch.issues[1].type) == ("", "LineLength")

    def test_generated_report(self, write_checkstyle) -> None:
        batch = CheckStyleParser().parse(write_checkstyle("A.java", 6), Path("/ws"))
        assert len(batch) == 6

    def test_empty_report(self) -> None:
        batch = CheckStyleParser().parse('<checkstyle version="8.29"/>', Path("/ws"))
        assert len(batch) == 0

    @pytest.mark.parametrize(
        "text", ["", "<checkstyle><file>", "<pmd version='6'/>", "not xml at all"],
    )
    def test_unreadable_documents(self, text: str) -> None:
        with pytest.raises(ParseError):
            CheckStyleParser().parse(text, Path("/ws"))


class TestPmdParser:
    """Tests for PMD XML parsing."""

    def test_parses_violations(self) -> None:
        batch = PmdParser().parse(PMD, Path("/ws"))
        assert len(batch) == 2
        first = batch.issues[0]
        assert first.message == "Possible God Class"
        assert (first.line_start, first.line_end, first.column_start) == (7, 9, 3)
        assert first.severity is Severity.WARNING_HIGH
        assert (first.category, first.type, first.package_name) == ("Design", "GodClass", "edu.hm")

    def test_processing_errors_become_messages(self) -> None:
        batch = PmdParser().parse(PMD, Path("/ws"))
        assert batch.error_messages == [
            "PMD error in '/ws/src/Broken.java': ParseException: Encountered end of file"
        ]

    @pytest.mark.parametrize(
        ("priority", "expected"),
        [
            (1, Severity.WARNING_HIGH),
            (2, Severity.WARNING_HIGH),
            (3, Severity.WARNING_NORMAL),
            (4, Severity.WARNING_LOW),
            (5, Severity.WARNING_LOW),
        ],
    )
    def test_priority_to_severity(self, priority: int, expected: Severity) -> None:
        assert priority_to_severity(priority) is expected

    def test_wrong_root(self, write_checkstyle) -> None:
        with pytest.raises(ParseError, match="Expected <pmd>"):
            PmdParser().parse(write_checkstyle("A.java", 1), Path("/ws"))
