"""Workspace access: report file scanning and issue enrichment."""

from warnhub.workspace.resolvers import AbsolutePathResolver, ModuleResolver, PackageResolver
from warnhub.workspace.scanner import ReportScanner, find_files, no_files_message

__all__ = [
    "AbsolutePathResolver",
    "ModuleResolver",
    "PackageResolver",
    "ReportScanner",
    "find_files",
    "no_files_message",
]
