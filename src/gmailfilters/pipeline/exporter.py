"""Export current Gmail filters and labels into the local file format."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from gmailfilters.core.gmail_client import GmailClient
from gmailfilters.core.labels import LabelDirectory
from gmailfilters.core.models import Filter, Label
from gmailfilters.core.translator import filter_from_api
from gmailfilters.storage.config_files import dump_filters, dump_labels

logger = logging.getLogger(__name__)


def sort_filters(filters: Iterable[Filter]) -> list[Filter]:
    """Stable sort on (to, from, subject, query, negated query)."""
    return sorted(filters, key=lambda f: f.criteria.sort_key())


def sort_labels(labels: Iterable[Label]) -> list[Label]:
    """Stable, case-sensitive sort on name."""
    return sorted(labels, key=lambda label: label.name)


class StateExporter:
    """Reads remote filters and labels back into local records."""

    def __init__(self, client: GmailClient) -> None:
        self._client = client

    def export_filters(self, directory: LabelDirectory) -> list[Filter]:
        """Fetch remote filters and reverse-map them, sorted.

        Raises:
            ConsistencyError: If a filter cannot be expressed locally.
        """
        filters = [filter_from_api(raw, directory) for raw in self._client.list_filters()]
        return sort_filters(filters)

    def export_labels(self, directory: LabelDirectory) -> list[Label]:
        return sort_labels(directory.labels())

    def export_current_state(
        self, directory: LabelDirectory
    ) -> tuple[list[Filter], list[Label]]:
        return self.export_filters(directory), self.export_labels(directory)

    def write_filters(self, directory: LabelDirectory, path: Path) -> int:
        """Export remote filters to ``path``. Returns the number written."""
        filters = self.export_filters(directory)
        dump_filters(path, filters)
        logger.info("Exported %d filters to %s", len(filters), path)
        return len(filters)

    def write_labels(self, directory: LabelDirectory, path: Path) -> int:
        """Export the directory contents to ``path``. Returns the number written."""
        labels = self.export_labels(directory)
        dump_labels(path, labels)
        logger.info("Exported %d labels to %s", len(labels), path)
        return len(labels)
