"""Issue and Report model.

Submodules
----------
- ``models``: ``Severity``, ``Issue`` and the fingerprint function.
- ``report``: ``Report`` (deduplicating, sealable issue collection) and the
  ``PostProcessor`` interface applied on sealing.

Public names are re-exported here::

    from warnhub.core.issues import Issue, Report, Severity
"""

from warnhub.core.issues.models import Issue, Severity, compute_fingerprint
from warnhub.core.issues.report import PostProcessor, Report

__all__ = [
    "Issue",
    "PostProcessor",
    "Report",
    "Severity",
    "compute_fingerprint",
]
