"""Sync orchestrator: load labels → translate → replace filters → reconcile labels → export."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from gmailfilters.core.gmail_client import GmailClient
from gmailfilters.core.labels import LabelDirectory, LabelReconciler
from gmailfilters.core.models import SyncReport, SyncState
from gmailfilters.core.translator import FilterTranslator
from gmailfilters.pipeline.exporter import StateExporter
from gmailfilters.storage.config_files import load_filters, load_labels

logger = logging.getLogger(__name__)


class FilterSync:
    """Drives one sync or export run against a single account.

    Sync phases run strictly in order:

    LOAD_DIRECTORY → VALIDATE_AND_TRANSLATE → DELETE_REMOTE_FILTERS →
    CREATE_REMOTE_FILTERS → RECONCILE_LABELS → EXPORT_LABELS → DONE

    Every local filter is decoded, validated and translated before any remote
    filter is deleted. Any error moves the run to FAILED and propagates; work
    already done remotely is not rolled back.
    """

    def __init__(
        self,
        client: GmailClient,
        on_progress: Callable[[SyncReport], None] | None = None,
    ) -> None:
        self._client = client
        self._on_progress = on_progress
        self._report = SyncReport()
        self._directory: LabelDirectory | None = None

    @property
    def state(self) -> SyncState:
        return self._report.state

    @property
    def report(self) -> SyncReport:
        return self._report

    @property
    def directory(self) -> LabelDirectory | None:
        return self._directory

    def _enter(self, state: SyncState) -> None:
        self._report.state = state
        logger.debug("Entering %s", state.value)
        if self._on_progress:
            self._on_progress(self._report)

    def _load_directory(self) -> LabelDirectory:
        self._enter(SyncState.LOAD_DIRECTORY)
        directory = LabelDirectory(self._client)
        directory.load_from_remote()
        self._directory = directory
        return directory

    def run(self, filters_path: Path, labels_path: Path) -> SyncReport:
        """Converge Gmail towards the local filters and labels files."""
        self._report = SyncReport()
        try:
            directory = self._load_directory()

            self._enter(SyncState.VALIDATE_AND_TRANSLATE)
            logger.info("Decoding filters from file %s", filters_path)
            filters = load_filters(filters_path)
            local_labels = load_labels(labels_path)
            labels_before = len(directory)
            gmail_filters = FilterTranslator(directory).translate_all(filters)
            self._report.filters_translated = len(gmail_filters)
            self._report.labels_created = len(directory) - labels_before
            logger.info(
                "Converted %d local filters into %d gmail filters",
                len(filters), len(gmail_filters),
            )

            self._enter(SyncState.DELETE_REMOTE_FILTERS)
            for existing in self._client.list_filters():
                self._client.delete_filter(existing["id"])
                self._report.filters_deleted += 1

            self._enter(SyncState.CREATE_REMOTE_FILTERS)
            logger.info("Adding %d gmail filters, this might take a bit...", len(gmail_filters))
            for body in gmail_filters:
                logger.debug(
                    "Adding Gmail filter: criteria=%r action=%r",
                    body["criteria"], body["action"],
                )
                self._client.create_filter(body)
                self._report.filters_created += 1
            logger.info("Successfully updated %d filters", self._report.filters_created)

            self._enter(SyncState.RECONCILE_LABELS)
            self._report.labels_updated = LabelReconciler(self._client).reconcile(
                local_labels, directory
            )

            self._enter(SyncState.EXPORT_LABELS)
            self._report.labels_exported = StateExporter(self._client).write_labels(
                directory, labels_path
            )

            self._enter(SyncState.DONE)
        except Exception:
            self._enter(SyncState.FAILED)
            raise

        return self._report

    def export(self, filters_path: Path, labels_path: Path) -> SyncReport:
        """Write current remote filters and labels to the local files.

        Nothing in Gmail is modified.
        """
        self._report = SyncReport()
        try:
            directory = self._load_directory()
            logger.info("Exporting existing filters and labels...")
            exporter = StateExporter(self._client)
            self._report.filters_exported = exporter.write_filters(directory, filters_path)

            self._enter(SyncState.EXPORT_LABELS)
            self._report.labels_exported = exporter.write_labels(directory, labels_path)

            self._enter(SyncState.DONE)
        except Exception:
            self._enter(SyncState.FAILED)
            raise

        return self._report
