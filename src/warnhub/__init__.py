"""warnhub: Aggregation and deduplication of static analysis issues."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Synthetic result id used when several tools are aggregated into one result.
AGGREGATE_ID = "analysis"
