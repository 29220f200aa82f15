"""Shared fixtures for warnhub tests.

Report content is generated rather than stored as fixture files so that
each test states exactly how many issues it expects.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from warnhub.core.issues import Issue, Severity


def checkstyle_xml(file_name: str, count: int, first_line: int = 1) -> str:
    """Build a CheckStyle report with ``count`` distinct issues."""
    errors = "\n".join(
        f'    <error line="{first_line + i}" column="{i + 1}" severity="warning" '
        f'message="Line is longer than 80 characters (found {90 + i})." '
        f'source="com.puppycrawl.tools.checkstyle.checks.sizes.LineLengthCheck"/>'
        for i in range(count)
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<checkstyle version="8.29">\n'
        f'  <file name="{file_name}">\n{errors}\n  </file>\n'
        "</checkstyle>\n"
    )


def pmd_xml(file_name: str, count: int) -> str:
    """Build a PMD report with ``count`` distinct violations."""
    violations = "\n".join(
        f'    <violation beginline="{10 + i}" endline="{10 + i}" begincolumn="1" '
        f'rule="UnusedLocalVariable" ruleset="Best Practices" package="edu.hm" '
        f'priority="{1 + i % 5}">\n      Avoid unused local variables such as v{i}.\n    </violation>'
        for i in range(count)
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<pmd version="6.21.0">\n'
        f'  <file name="{file_name}">\n{violations}\n  </file>\n'
        "</pmd>\n"
    )


@pytest.fixture
def make_issue() -> Callable[..., Issue]:
    """Factory for issues with sensible defaults."""

    def _make(
        message: str = "Unused import",
        file_path: str = "/ws/src/Foo.java",
        line_start: int = 1,
        severity: Severity = Severity.WARNING_NORMAL,
        origin_id: str = "",
        **kwargs: object,
    ) -> Issue:
        return Issue(
            file_path=file_path,
            line_start=line_start,
            message=message,
            severity=severity,
            origin_id=origin_id,
            **kwargs,
        )

    return _make


@pytest.fixture
def write_checkstyle() -> Callable[..., str]:
    """Expose the CheckStyle report builder to tests."""
    return checkstyle_xml


@pytest.fixture
def write_pmd() -> Callable[..., str]:
    """Expose the PMD report builder to tests."""
    return pmd_xml


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A build workspace with CheckStyle and PMD reports.

    - ``checkstyle-issues.txt``: 6 CheckStyle issues.
    - ``pmd-warnings-issues.txt``: 4 PMD issues.
    - ``checkstyle2-issues.txt``: 6 CheckStyle issues in another file.
    - ``checkstyle3-issues.txt``: 4 CheckStyle issues in a third file.
    """
    ws = tmp_path / "workspace"
    ws.mkdir()
    (ws / "checkstyle-issues.txt").write_text(checkstyle_xml("src/Main.java", 6))
    (ws / "pmd-warnings-issues.txt").write_text(pmd_xml("src/Util.java", 4))
    (ws / "checkstyle2-issues.txt").write_text(checkstyle_xml("src/Second.java", 6))
    (ws / "checkstyle3-issues.txt").write_text(checkstyle_xml("src/Third.java", 4))
    return ws


@pytest.fixture
def python_workspace(tmp_path: Path) -> Path:
    """A Python project with a Pylint report of 8 issues in 4 files."""
    ws = tmp_path / "pyproject-ws"
    package = ws / "app"
    package.mkdir(parents=True)
    (ws / "pyproject.toml").write_text('[project]\nname = "app"\n')
    (package / "__init__.py").write_text("")
    lines = []
    for index, module in enumerate(["models", "views", "forms", "urls"]):
        (package / f"{module}.py").write_text("import os\n" * 20)
        lines.append(f"app/{module}.py:{index + 1}: [W0611(unused-import), ] Unused import os")
        lines.append(f"app/{module}.py:{index + 10}: [C0103(invalid-name), f] Invalid name \"x\"")
    (ws / "pylint-issues.txt").write_text("\n".join(lines) + "\n")
    return ws
