"""Tool run registry: one report per origin within a single execution.

The registry maps each origin id to the report(s) registered under it and
enforces identity uniqueness:

- **Separate mode** (``aggregate=False``): an origin may be registered
  once. A second registration raises ``DuplicateOriginError`` with the
  description of the action already holding the id. This is fatal for the
  whole execution; runs registered before the collision stay available.
- **Aggregate mode** (``aggregate=True``): repeated origins are accepted
  and accumulate, in registration order, under the same key.

``register`` is safe to call from several threads (e.g. parser completions
running in a pool); a single lock guards the origin map. The registry is
scoped to one execution and never persisted.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from warnhub.core.issues.report import Report
from warnhub.exceptions import DuplicateOriginError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolRun:
    """A report together with the action that produced it.

    Attributes:
        origin: Origin id the report was registered under.
        report: The sealed report.
        name: Display name of the producing tool.
        description: Human-readable description of the producing action,
            used in collision messages.
    """

    origin: str
    report: Report
    name: str = ""
    description: str = ""

    def describe(self) -> str:
        """Describe the action holding this run's origin."""
        return self.description or f"ToolRun for {self.name or self.origin}"


class ToolRunRegistry:
    """Thread-safe mapping from origin id to registered tool runs.

    Attributes:
        aggregate: Whether duplicate origins are merged instead of rejected.
    """

    def __init__(self, aggregate: bool = False) -> None:
        self.aggregate = aggregate
        self._runs: dict[str, list[ToolRun]] = {}
        self._lock = threading.Lock()

    def register(
        self,
        origin: str,
        report: Report,
        name: str = "",
        description: str = "",
    ) -> ToolRun:
        """Register a report under an origin id.

        Args:
            origin: Origin id (tool id or custom id).
            report: The report to register; sealed if it is not yet.
            name: Display name of the producing tool.
            description: Description of the producing action. Defaults to
                ``"ToolRun for <name>"``.

        Returns:
            The registered ``ToolRun``.

        Raises:
            DuplicateOriginError: If the origin is already registered and
                aggregation is disabled.
        """
        run = ToolRun(origin=origin, report=report.seal(), name=name, description=description)
        with self._lock:
            existing = self._runs.get(origin)
            if existing and not self.aggregate:
                raise DuplicateOriginError(origin, existing[0].describe())
            self._runs.setdefault(origin, []).append(run)
        logger.debug("Registered %s with %d issues", origin, report.size())
        return run

    # -- Queries ------------------------------------------------------------

    @property
    def origins(self) -> list[str]:
        """Return origin ids in first-registration order."""
        with self._lock:
            return list(self._runs)

    def runs_of(self, origin: str) -> list[ToolRun]:
        """Return all runs registered under ``origin`` (empty if none)."""
        with self._lock:
            return list(self._runs.get(origin, []))

    def all_runs(self) -> list[ToolRun]:
        """Return all runs, grouped by origin in first-registration order."""
        with self._lock:
            return [run for runs in self._runs.values() for run in runs]

    def size_of(self, origin: str) -> int:
        """Return the combined issue count of all runs under ``origin``."""
        return sum(run.report.size() for run in self.runs_of(origin))

    def __contains__(self, origin: object) -> bool:
        with self._lock:
            return origin in self._runs

    def __len__(self) -> int:
        with self._lock:
            return len(self._runs)

    def clear(self) -> None:
        """Discard all registered runs."""
        with self._lock:
            self._runs.clear()
