"""Workspace scanner: builds one Report per configured tool run.

This is the I/O side of the pipeline. For a tool configuration it:

1. Expands the report file pattern (Ant-style globs, comma separated)
   below the workspace root, or falls back to the console log.
2. Reads each matched file and hands its text to the tool's parser.
3. Collects all batches into one ``Report`` under the run's origin.
4. Seals the report with the workspace resolvers.

Failures stay local: an unreadable or malformed file is recorded as an
error message on the report and contributes no issues; a pattern matching
no files is recorded as an info message and yields an empty report.
"""

from __future__ import annotations

import logging
from pathlib import Path

from warnhub.config import ToolConfiguration
from warnhub.core.issues.report import PostProcessor, Report
from warnhub.exceptions import ParseError
from warnhub.parsers.base import IssueParser
from warnhub.parsers.registry import ToolDescriptor
from warnhub.workspace.resolvers import AbsolutePathResolver, ModuleResolver, PackageResolver

logger = logging.getLogger(__name__)


def no_files_message(pattern: str) -> str:
    """Return the diagnostic for a pattern that matched nothing."""
    return f"No files found for pattern '{pattern}'. Configuration error?"


def find_files(workspace: Path, pattern: str) -> list[Path]:
    """Expand an Ant-style pattern below ``workspace``.

    Several patterns may be given separated by commas. Only regular files
    are returned, sorted and without duplicates.
    """
    found: set[Path] = set()
    for part in pattern.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            found.update(p for p in workspace.glob(part) if p.is_file())
        except (ValueError, NotImplementedError, OSError):
            logger.warning("Invalid pattern '%s' in %s", part, workspace, exc_info=True)
    return sorted(found)


class ReportScanner:
    """Scans a workspace for the report files of configured tools.

    Attributes:
        workspace: Root directory of the build.
        console_log: Console output of the build, used for tools without a
            file pattern. None if unavailable.
    """

    def __init__(self, workspace: Path, console_log: str | None = None) -> None:
        self.workspace = workspace
        self.console_log = console_log

    def post_processors(self) -> list[PostProcessor]:
        """Return the post-processing chain applied to every report."""
        return [
            AbsolutePathResolver(self.workspace),
            ModuleResolver(self.workspace),
            PackageResolver(self.workspace),
        ]

    def scan(self, tool: ToolConfiguration, descriptor: ToolDescriptor) -> Report:
        """Run one tool configuration and return its sealed report."""
        report = Report(tool.origin)
        parser = descriptor.create_parser()
        pattern = tool.effective_pattern(descriptor)
        if pattern:
            self._scan_files(report, parser, pattern)
        else:
            self._scan_console_log(report, parser)
        return report.seal(self.post_processors())

    def _scan_files(self, report: Report, parser: IssueParser, pattern: str) -> None:
        report.log_info(
            f"Searching for all files in '{self.workspace}' that match the pattern '{pattern}'"
        )
        files = find_files(self.workspace, pattern)
        if not files:
            report.log_info(no_files_message(pattern))
            return
        report.log_info(f"-> found {len(files)} {'file' if len(files) == 1 else 'files'}")
        for path in files:
            try:
                text = path.read_text(encoding="utf-8", errors="replace")
            except OSError as exc:
                report.log_error(f"Skipping file '{path}' because of an error: {exc}")
                continue
            self._parse(report, parser, text, str(path))

    def _scan_console_log(self, report: Report, parser: IssueParser) -> None:
        if self.console_log is None:
            report.log_info("Skipping console log: no console log available")
            return
        report.log_info("Parsing console log")
        self._parse(report, parser, self.console_log, "console log")

    def _parse(self, report: Report, parser: IssueParser, text: str, source: str) -> None:
        try:
            batch = parser.parse(text, self.workspace)
        except ParseError as exc:
            logger.debug("Parsing of %s failed", source, exc_info=True)
            report.log_error(f"Parsing of file '{source}' failed: {exc}")
            return
        duplicates = report.duplicates
        added = report.add_batch(batch)
        report.log_info(f"Successfully parsed file {source}")
        report.log_info(
            f"-> found {added} issues "
            f"(skipped {report.duplicates - duplicates} duplicates)"
        )
