"""Execution configuration: which tools to run and how to group results.

Configuration is fixed before an execution starts. It can be built in code,
loaded from a YAML file with ``load_config``, or assembled from CLI options.

.. code-block:: yaml

    aggregate: false
    reference: build/previous-warnings.json
    threshold:
      unstable_total_all: 10
    labels:
      checkstyle: CheckStyle Warnings
    tools:
      - tool: checkstyle
        pattern: "**/checkstyle-result.xml"
      - tool: clang
        id: clang-arm
        name: Clang (ARM)
        threshold:
          failed_total_all: 1

All validation happens in ``ExecutionConfig.validate`` so that invalid
configurations are rejected before any report is parsed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from warnhub.core.aggregation.thresholds import Threshold
from warnhub.exceptions import ConfigurationError
from warnhub.parsers.registry import ToolDescriptor, ToolRegistry

_TOOL_KEYS = frozenset({"tool", "pattern", "id", "name", "threshold"})
_EXECUTION_KEYS = frozenset({"aggregate", "tools", "threshold", "labels", "reference"})


@dataclass(frozen=True)
class ToolConfiguration:
    """One configured tool run.

    Attributes:
        tool: Tool id in the tool registry (e.g. "checkstyle").
        pattern: Ant-style glob of report files, relative to the workspace.
            Empty means the tool's default pattern, or the console log.
        id: Custom origin id. Defaults to ``tool``.
        name: Custom display name. Defaults to the tool's name.
        threshold: Quality gate for this tool's result in separate mode.
    """

    tool: str
    pattern: str = ""
    id: str = ""
    name: str = ""
    threshold: Threshold | None = None

    @property
    def origin(self) -> str:
        """Return the origin id reports of this tool run are registered under."""
        return self.id or self.tool

    def effective_pattern(self, descriptor: ToolDescriptor) -> str:
        """Return the configured pattern or the tool's default pattern."""
        return self.pattern.strip() or descriptor.default_pattern

    def display_name(self, descriptor: ToolDescriptor) -> str:
        """Return the configured name or the tool's display name."""
        return self.name or descriptor.name

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ToolConfiguration:
        """Build a tool configuration from YAML data."""
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Tool entry must be a mapping, got {data!r}")
        unknown = sorted(set(data) - _TOOL_KEYS)
        if unknown:
            raise ConfigurationError(f"Unknown tool option(s): {', '.join(unknown)}")
        if not data.get("tool"):
            raise ConfigurationError(f"Tool entry without 'tool' key: {dict(data)!r}")
        return cls(
            tool=str(data["tool"]),
            pattern=str(data.get("pattern") or ""),
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            threshold=Threshold.from_mapping(data.get("threshold")),
        )


@dataclass
class ExecutionConfig:
    """Configuration of one execution.

    Attributes:
        tools: Tool runs, in execution order.
        aggregate: Merge all tool results into one result.
        threshold: Execution-level quality gate.
        labels: Display name overrides, keyed by result id.
        reference: Results file of a previous execution used as baseline.
    """

    tools: list[ToolConfiguration] = field(default_factory=list)
    aggregate: bool = False
    threshold: Threshold | None = None
    labels: dict[str, str] = field(default_factory=dict)
    reference: Path | None = None

    @property
    def patterns(self) -> dict[str, str]:
        """Return origin id to configured pattern (first configuration wins)."""
        patterns: dict[str, str] = {}
        for tool in self.tools:
            patterns.setdefault(tool.origin, tool.pattern)
        return patterns

    @property
    def per_tool_thresholds(self) -> dict[str, Threshold]:
        """Return origin id to threshold for tools that configure one."""
        thresholds: dict[str, Threshold] = {}
        for tool in self.tools:
            if tool.threshold is not None:
                thresholds.setdefault(tool.origin, tool.threshold)
        return thresholds

    def validate(self, registry: ToolRegistry) -> None:
        """Check the configuration against the available tools.

        Raises:
            ConfigurationError: If no tool is configured, a tool id is
                unknown, or a tool has neither a pattern nor console log
                support.
        """
        if not self.tools:
            raise ConfigurationError("No tools configured")
        for tool in self.tools:
            descriptor = registry.get(tool.tool)
            if not tool.effective_pattern(descriptor) and not descriptor.can_scan_console_log:
                raise ConfigurationError(
                    f"Tool '{tool.origin}' needs a report file pattern: "
                    f"{descriptor.name} cannot scan the console log"
                )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base_dir: Path | None = None) -> ExecutionConfig:
        """Build an execution configuration from YAML data.

        Args:
            data: Parsed configuration mapping.
            base_dir: Directory relative ``reference`` paths are resolved
                against.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("Configuration must be a mapping")
        unknown = sorted(set(data) - _EXECUTION_KEYS)
        if unknown:
            raise ConfigurationError(f"Unknown configuration option(s): {', '.join(unknown)}")

        tools_raw = data.get("tools") or []
        if not isinstance(tools_raw, list):
            raise ConfigurationError("'tools' must be a list")
        labels = data.get("labels") or {}
        if not isinstance(labels, Mapping):
            raise ConfigurationError("'labels' must be a mapping")

        reference = data.get("reference")
        reference_path: Path | None = None
        if reference:
            reference_path = Path(str(reference))
            if base_dir is not None and not reference_path.is_absolute():
                reference_path = base_dir / reference_path

        return cls(
            tools=[ToolConfiguration.from_mapping(item) for item in tools_raw],
            aggregate=bool(data.get("aggregate", False)),
            threshold=Threshold.from_mapping(data.get("threshold")),
            labels={str(k): str(v) for k, v in labels.items()},
            reference=reference_path,
        )


def load_config(path: Path) -> ExecutionConfig:
    """Load an execution configuration from a YAML file.

    Raises:
        ConfigurationError: If the file cannot be read or is not valid YAML.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot load configuration '{path}': {exc}") from exc
    return ExecutionConfig.from_mapping(data or {}, base_dir=path.parent)
