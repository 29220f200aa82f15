"""Post-processors that enrich issues with workspace information.

Applied by ``Report.seal`` after all files of a tool have been parsed:

1. ``AbsolutePathResolver`` -- makes relative file paths absolute.
2. ``ModuleResolver`` -- finds the build module (Maven, Gradle, npm,
   Python project) containing each affected file.
3. ``PackageResolver`` -- reads the package / namespace of each affected
   file (Java-like ``package`` statements, C# namespaces, Python packages).

Each step logs one summary on the report and never changes the number of
issues. Paths that cannot be resolved are listed as info messages, not
errors. Unreadable files and files outside the workspace are skipped
silently; the issue simply keeps an empty module or package name.
"""

from __future__ import annotations

import json
import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import replace
from pathlib import Path

from warnhub.core.issues.models import Issue
from warnhub.core.issues.report import PostProcessor, Report

logger = logging.getLogger(__name__)

# Maximum number of unresolved paths listed individually.
_MAX_LISTED = 20


def _is_within(path: Path, root: Path) -> bool:
    try:
        path.relative_to(root)
    except ValueError:
        return False
    return True


class AbsolutePathResolver(PostProcessor):
    """Resolve relative issue paths against the workspace root."""

    def __init__(self, workspace: Path) -> None:
        self.workspace = workspace.resolve()

    def process(self, issues: list[Issue], report: Report) -> list[Issue]:
        resolved: dict[str, str] = {}
        unresolved: list[str] = []
        without_file = 0
        result: list[Issue] = []
        for issue in issues:
            path = issue.file_path
            if not path or path == "-":
                without_file += 1
                result.append(issue)
                continue
            if path not in resolved and path not in unresolved:
                candidate = Path(path)
                if candidate.is_absolute():
                    resolved[path] = path
                elif (self.workspace / candidate).exists():
                    resolved[path] = str((self.workspace / candidate).resolve())
                else:
                    unresolved.append(path)
            result.append(replace(issue, file_path=resolved.get(path, path)))

        changed = sum(1 for original, absolute in resolved.items() if original != absolute)
        if changed:
            report.log_info(f"Resolved absolute paths for {changed} files")
        if unresolved:
            report.log_info("Can't resolve absolute paths for some files:")
            for path in unresolved[:_MAX_LISTED]:
                report.log_info(f"- {path}")
            if len(unresolved) > _MAX_LISTED:
                report.log_info(f"... skipped logging of {len(unresolved) - _MAX_LISTED} additional paths")
        if without_file:
            report.log_info(f"{without_file} issues are not associated with a file")
        return result


# Build files that mark the root of a module, most specific first.
_MODULE_MARKERS = ("pom.xml", "build.gradle", "build.gradle.kts", "package.json",
                   "pyproject.toml", "setup.py")


class ModuleResolver(PostProcessor):
    """Assign the nearest enclosing build module to each issue.

    The module name is the Maven ``artifactId`` or npm ``name`` when
    available, otherwise the name of the directory holding the build file.
    Only directories inside the workspace are searched.
    """

    def __init__(self, workspace: Path) -> None:
        self.workspace = workspace.resolve()
        self._cache: dict[Path, str] = {}

    def process(self, issues: list[Issue], report: Report) -> list[Issue]:
        if not issues:
            return issues
        result: list[Issue] = []
        count = 0
        for issue in issues:
            module = issue.module_name or self._module_of(issue.file_path)
            if module:
                count += 1
                issue = replace(issue, module_name=module)
            result.append(issue)
        report.log_info(f"Resolved module names for {count} issues")
        return result

    def _module_of(self, file_path: str) -> str:
        if not file_path:
            return ""
        path = Path(file_path)
        if not path.is_absolute() or not _is_within(path, self.workspace):
            return ""
        directory = path.parent
        while _is_within(directory, self.workspace):
            if directory not in self._cache:
                self._cache[directory] = self._read_module(directory)
            if self._cache[directory]:
                return self._cache[directory]
            if directory == self.workspace:
                break
            directory = directory.parent
        return ""

    def _read_module(self, directory: Path) -> str:
        for marker in _MODULE_MARKERS:
            build_file = directory / marker
            if not build_file.is_file():
                continue
            if marker == "pom.xml":
                return _maven_artifact_id(build_file) or directory.name
            if marker == "package.json":
                return _npm_name(build_file) or directory.name
            return directory.name
        return ""


def _maven_artifact_id(pom: Path) -> str:
    try:
        root = ET.parse(pom).getroot()
    except (OSError, ET.ParseError):
        logger.debug("Cannot read %s", pom, exc_info=True)
        return ""
    for child in root:
        if child.tag.rsplit("}", 1)[-1] == "artifactId" and child.text:
            return child.text.strip()
    return ""


def _npm_name(package_json: Path) -> str:
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.debug("Cannot read %s", package_json, exc_info=True)
        return ""
    name = data.get("name") if isinstance(data, dict) else None
    return name if isinstance(name, str) else ""


_PACKAGE_PATTERNS: dict[str, re.Pattern[str]] = {
    ".java": re.compile(r"^\s*package\s+([\w.]+)\s*;", re.MULTILINE),
    ".kt": re.compile(r"^\s*package\s+([\w.]+)", re.MULTILINE),
    ".groovy": re.compile(r"^\s*package\s+([\w.]+)", re.MULTILINE),
    ".scala": re.compile(r"^\s*package\s+([\w.]+)", re.MULTILINE),
    ".cs": re.compile(r"^\s*namespace\s+([\w.]+)", re.MULTILINE),
}


class PackageResolver(PostProcessor):
    """Assign the package or namespace of each affected file.

    Only absolute paths inside the workspace are read.
    """

    def __init__(self, workspace: Path) -> None:
        self.workspace = workspace.resolve()
        self._cache: dict[str, str] = {}

    def process(self, issues: list[Issue], report: Report) -> list[Issue]:
        if not issues:
            return issues
        result: list[Issue] = []
        files: set[str] = set()
        for issue in issues:
            package = issue.package_name or self._package_of(issue.file_path)
            if package:
                files.add(issue.file_path)
                issue = replace(issue, package_name=package)
            result.append(issue)
        report.log_info(f"Resolved package names of {len(files)} affected files")
        return result

    def _package_of(self, file_path: str) -> str:
        if not file_path:
            return ""
        if file_path not in self._cache:
            path = Path(file_path)
            if path.is_absolute() and _is_within(path, self.workspace):
                self._cache[file_path] = _read_package(path, self.workspace)
            else:
                self._cache[file_path] = ""
        return self._cache[file_path]


def _read_package(path: Path, workspace: Path) -> str:
    if path.suffix == ".py":
        return _python_package(path, workspace)
    pattern = _PACKAGE_PATTERNS.get(path.suffix)
    if pattern is None or not path.is_file():
        return ""
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""
    match = pattern.search(text)
    return match.group(1) if match else ""


def _python_package(path: Path, workspace: Path) -> str:
    """Dotted package of a Python module, from the ``__init__.py`` chain."""
    parts: list[str] = []
    directory = path.parent
    while (directory / "__init__.py").is_file():
        parts.append(directory.name)
        if directory == workspace or directory.parent == directory:
            break
        directory = directory.parent
    return ".".join(reversed(parts))
