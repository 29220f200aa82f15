"""Tool registry: maps tool identifiers to parser factories.

The ``ToolRegistry`` is resolved once at startup. Each ``ToolDescriptor``
describes one supported analysis tool: its identifier (the default origin
of its reports), display name, default report file pattern, whether it can
scan a console log, and a factory creating its parser.

Display names are plain data on the descriptor. Callers may override them
per origin through configuration (``ExecutionConfig.labels``); nothing here
is global mutable state beyond the registry object the caller owns.

The design follows the classic Registry pattern with a functional
``default_registry()`` factory that pre-registers all bundled parsers.
Custom tools can be added via ``register()``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from warnhub.exceptions import ConfigurationError
from warnhub.parsers.base import IssueParser
from warnhub.parsers.brakeman import BrakemanParser
from warnhub.parsers.checkstyle import CheckStyleParser
from warnhub.parsers.clang import ClangParser
from warnhub.parsers.iar_cstat import IarCstatParser
from warnhub.parsers.javac import JavacParser
from warnhub.parsers.pmd import PmdParser
from warnhub.parsers.puppet_lint import PuppetLintParser
from warnhub.parsers.pylint import PyLintParser


@dataclass(frozen=True)
class ToolDescriptor:
    """Static description of a supported analysis tool.

    Attributes:
        id: Tool identifier, also the default origin id of its reports.
        name: Human-readable display name (e.g. "CheckStyle").
        parser_factory: Zero-argument callable creating the parser.
        default_pattern: Ant-style glob used when a tool configuration
            has no pattern. Empty if the tool has none.
        can_scan_console_log: Whether the parser understands console
            log output (line-oriented formats only).
    """

    id: str
    name: str
    parser_factory: Callable[[], IssueParser]
    default_pattern: str = ""
    can_scan_console_log: bool = True

    def create_parser(self) -> IssueParser:
        """Create a fresh parser instance for this tool."""
        return self.parser_factory()


class ToolRegistry:
    """Registry of tool descriptors, keyed by tool id.

    Registration order is preserved for listing.
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDescriptor] = {}

    def register(self, descriptor: ToolDescriptor) -> None:
        """Add a tool descriptor.

        Raises:
            ConfigurationError: If a tool with the same id is registered.
        """
        if descriptor.id in self._tools:
            raise ConfigurationError(f"Tool id '{descriptor.id}' is already registered")
        self._tools[descriptor.id] = descriptor

    def get(self, tool_id: str) -> ToolDescriptor:
        """Look up a tool by id.

        Raises:
            ConfigurationError: If no tool with that id is registered.
        """
        try:
            return self._tools[tool_id]
        except KeyError:
            known = ", ".join(sorted(self._tools))
            raise ConfigurationError(
                f"Unknown tool '{tool_id}'. Available tools: {known}"
            ) from None

    @property
    def ids(self) -> list[str]:
        """Return tool ids in registration order."""
        return list(self._tools)

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(list(self._tools.values()))

    def __len__(self) -> int:
        return len(self._tools)


def default_registry() -> ToolRegistry:
    """Create a ToolRegistry pre-loaded with all bundled parsers.

    Returns:
        A registry with CheckStyle, PMD, Pylint, Java compiler, Clang,
        Brakeman, Puppet-Lint and IAR C-STAT registered.
    """
    registry = ToolRegistry()
    registry.register(ToolDescriptor(
        "checkstyle", "CheckStyle", CheckStyleParser,
        default_pattern="**/checkstyle-result.xml", can_scan_console_log=False,
    ))
    registry.register(ToolDescriptor(
        "pmd", "PMD", PmdParser,
        default_pattern="**/pmd.xml", can_scan_console_log=False,
    ))
    registry.register(ToolDescriptor("pylint", "Pylint", PyLintParser))
    registry.register(ToolDescriptor("java", "Java Compiler", JavacParser))
    registry.register(ToolDescriptor("clang", "Clang", ClangParser))
    registry.register(ToolDescriptor(
        "brakeman", "Brakeman", BrakemanParser, can_scan_console_log=False,
    ))
    registry.register(ToolDescriptor("puppetlint", "Puppet-Lint", PuppetLintParser))
    registry.register(ToolDescriptor("iar-cstat", "IAR C-STAT", IarCstatParser))
    return registry
