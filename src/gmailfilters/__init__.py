"""gmailfilters - Sync Gmail filters and labels from local YAML files."""

from gmailfilters.core.models import (
    Filter,
    FilterAction,
    FilterCriteria,
    Label,
    SyncReport,
    SyncState,
)
from gmailfilters.pipeline.sync import FilterSync

__all__ = [
    "Filter",
    "FilterAction",
    "FilterCriteria",
    "FilterSync",
    "Label",
    "SyncReport",
    "SyncState",
]
