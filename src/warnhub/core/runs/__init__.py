"""Tool run registry (identity and collision handling)."""

from warnhub.core.runs.registry import ToolRun, ToolRunRegistry

__all__ = [
    "ToolRun",
    "ToolRunRegistry",
]
