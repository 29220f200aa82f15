"""Aggregation engine and the analysis result model.

Submodules
----------
- ``thresholds``: ``Status``, ``Threshold`` and status evaluation.
- ``baseline``: ``Baseline`` reference fingerprints, ``IssueDelta``.
- ``models``: ``AnalysisResult``.
- ``engine``: ``AggregationEngine`` (separate or aggregate mode).

Public names are re-exported here::

    from warnhub.core.aggregation import AggregationEngine, AnalysisResult, Status
"""

from warnhub.core.aggregation.baseline import Baseline, IssueDelta
from warnhub.core.aggregation.models import AnalysisResult
from warnhub.core.aggregation.thresholds import Status, Threshold, evaluate_status
from warnhub.core.aggregation.engine import AggregationEngine

__all__ = [
    "AggregationEngine",
    "AnalysisResult",
    "Baseline",
    "IssueDelta",
    "Status",
    "Threshold",
    "evaluate_status",
]
