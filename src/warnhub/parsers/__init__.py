"""Report parsers for CheckStyle, PMD, Pylint, javac, Clang, Brakeman, Puppet-Lint and IAR C-STAT."""

from warnhub.parsers.base import IssueBatch, IssueParser, LineParser
from warnhub.parsers.brakeman import BrakemanParser
from warnhub.parsers.checkstyle import CheckStyleParser
from warnhub.parsers.clang import ClangParser
from warnhub.parsers.iar_cstat import IarCstatParser
from warnhub.parsers.javac import JavacParser
from warnhub.parsers.pmd import PmdParser
from warnhub.parsers.puppet_lint import PuppetLintParser
from warnhub.parsers.pylint import PyLintParser
from warnhub.parsers.registry import ToolDescriptor, ToolRegistry, default_registry

__all__ = [
    "BrakemanParser",
    "CheckStyleParser",
    "ClangParser",
    "IarCstatParser",
    "IssueBatch",
    "IssueParser",
    "JavacParser",
    "LineParser",
    "PmdParser",
    "PuppetLintParser",
    "PyLintParser",
    "ToolDescriptor",
    "ToolRegistry",
    "default_registry",
]
