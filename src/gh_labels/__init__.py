"""gh-labels.

Keeps the labels of a GitHub repository in sync with a YAML config:
- label colors are resolved through a named palette
- missing labels are created, stale colors are updated
- unknown labels are left alone, or deleted with `-cleanup`
"""

__version__ = "0.1.0"

from gh_labels.config import LabelSyncSettings
from gh_labels.desired import load_desired_labels
from gh_labels.reconcile import ReconcileResult, reconcile, sync_labels

__all__ = [
    "__version__",
    "LabelSyncSettings",
    "ReconcileResult",
    "load_desired_labels",
    "reconcile",
    "sync_labels",
]
