"""Label directory, API conversion, and label reconciliation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import replace
from typing import Any

from gmailfilters.core.gmail_client import GmailClient
from gmailfilters.core.models import Label

logger = logging.getLogger(__name__)

_LABEL_LIST_TO_API = {
    "hide": "labelHide",
    "show": "labelShow",
    "showifunread": "labelShowIfUnread",
}

# Gmail creates labels with both visibilities set to "show".
_DEFAULT_VISIBILITY = "show"


def label_from_api(raw: dict[str, Any]) -> Label:
    """Convert a Gmail API label dict into a Label.

    Label-list visibility comes back as ``labelShowIfUnread`` and friends; the
    ``label`` prefix is dropped and values are lower-cased.
    """
    color = raw.get("color") or {}
    label_list = raw.get("labelListVisibility", "").lower()
    if label_list.startswith("label"):
        label_list = label_list[len("label"):]
    return Label(
        id=raw.get("id", ""),
        name=raw.get("name", ""),
        background_color=color.get("backgroundColor", ""),
        text_color=color.get("textColor", ""),
        label_list_visibility=label_list,
        message_list_visibility=raw.get("messageListVisibility", "").lower(),
        kind=raw.get("type", ""),
    )


def label_to_api(label: Label) -> dict[str, Any]:
    """Build the PATCH body for a label.

    Colors are sent as a pair or explicitly nulled. Empty visibilities are
    left out so Gmail keeps its current value.
    """
    body: dict[str, Any] = {
        "id": label.id,
        "name": label.name,
        "type": label.kind,
    }
    if label.background_color or label.text_color:
        body["color"] = {
            "backgroundColor": label.background_color,
            "textColor": label.text_color,
        }
    else:
        body["color"] = None
    if label.message_list_visibility:
        body["messageListVisibility"] = label.message_list_visibility
    if label.label_list_visibility in _LABEL_LIST_TO_API:
        body["labelListVisibility"] = _LABEL_LIST_TO_API[label.label_list_visibility]
    return body


def labels_equal(local: Label, remote: Label) -> bool:
    """Structural equality, filling defaults on the local side only.

    A local visibility left empty matches a remote "show", since that is what
    Gmail assigns on creation. A remote empty value is compared as-is, so a
    local "show" against it still counts as a change.
    """
    filled = local
    if remote.message_list_visibility == _DEFAULT_VISIBILITY and not local.message_list_visibility:
        filled = replace(filled, message_list_visibility=_DEFAULT_VISIBILITY)
    if remote.label_list_visibility == _DEFAULT_VISIBILITY and not local.label_list_visibility:
        filled = replace(filled, label_list_visibility=_DEFAULT_VISIBILITY)
    return filled == remote


class LabelDirectory:
    """In-memory index of the account's labels by lower-cased name and by id.

    Both indices always hold the same Label values. Labels are immutable, so
    nothing outside the directory can change an entry without going through
    ``add``.
    """

    def __init__(self, client: GmailClient) -> None:
        self._client = client
        self._by_name: dict[str, Label] = {}
        self._by_id: dict[str, Label] = {}

    def load_from_remote(self) -> None:
        """Replace the directory contents with the account's current labels."""
        self._by_name.clear()
        self._by_id.clear()
        for raw in self._client.list_labels():
            self.add(label_from_api(raw))
        logger.debug("Loaded %d labels", len(self._by_id))

    def by_name(self, name: str) -> Label | None:
        return self._by_name.get(name.lower())

    def by_id(self, label_id: str) -> Label | None:
        return self._by_id.get(label_id)

    def add(self, label: Label) -> None:
        """Insert or overwrite ``label`` in both indices."""
        previous = self._by_id.get(label.id)
        if previous is not None and previous.name.lower() != label.name.lower():
            # Renamed: the old name must stop resolving to this id.
            if self._by_name.get(previous.name.lower()) is previous:
                del self._by_name[previous.name.lower()]
        self._by_name[label.name.lower()] = label
        self._by_id[label.id] = label

    def resolve_or_create(self, name: str) -> str:
        """Return the id of label ``name``, creating it remotely if needed."""
        existing = self.by_name(name)
        if existing is not None:
            return existing.id

        created = label_from_api(self._client.create_label(name))
        logger.info("Created label: %s", name)
        self.add(created)
        return created.id

    def labels(self) -> list[Label]:
        """All known labels, one entry per id, in insertion order."""
        return list(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, label_id: object) -> bool:
        return label_id in self._by_id

    def __iter__(self) -> Iterator[Label]:
        return iter(self.labels())


class LabelReconciler:
    """Push local label declarations that differ from the directory to Gmail."""

    def __init__(self, client: GmailClient) -> None:
        self._client = client

    def reconcile(self, local_labels: Iterable[Label], directory: LabelDirectory) -> int:
        """Update every remote label whose local declaration differs.

        Local labels whose id is unknown remotely are skipped with a warning;
        the local file is merely stale.

        Returns:
            Number of labels updated.
        """
        updated = 0
        for local in local_labels:
            remote = directory.by_id(local.id)
            if remote is None:
                logger.warning("Local label %s not found remotely, skipping", local.name)
                continue
            if labels_equal(local, remote):
                continue

            directory.add(local)
            logger.info("Updating label: %s", local.name)
            self._client.update_label(local.id, label_to_api(local))
            updated += 1

        if updated:
            logger.info("Updated %d labels", updated)
        return updated
