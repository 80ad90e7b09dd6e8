"""Mapping between local filter records and Gmail API filter bodies."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import fields
from typing import Any

from gmailfilters.core.exceptions import ConsistencyError
from gmailfilters.core.labels import LabelDirectory
from gmailfilters.core.models import INBOX, TRASH, UNREAD, Filter, FilterAction, FilterCriteria
from gmailfilters.core.validation import filter_valid, validate_filter

logger = logging.getLogger(__name__)


def criteria_to_api(criteria: FilterCriteria) -> dict[str, Any]:
    """Copy criteria fields 1:1 under their Gmail names, leaving out unset ones."""
    body: dict[str, Any] = {}
    for f in fields(criteria):
        value = getattr(criteria, f.name)
        if value:
            body[f.metadata["key"]] = value
    return body


def criteria_from_api(raw: dict[str, Any]) -> FilterCriteria:
    values = {}
    for f in fields(FilterCriteria):
        if f.metadata["key"] in raw:
            value = raw[f.metadata["key"]]
            # The API serializes int64 fields as strings.
            values[f.name] = int(value) if f.name == "size" else value
    return FilterCriteria(**values)


class FilterTranslator:
    """Turn local filters into Gmail filter bodies.

    Label names referenced by actions are resolved through the directory and
    created in Gmail when they do not exist yet.
    """

    def __init__(self, directory: LabelDirectory) -> None:
        self._directory = directory

    def translate(self, f: Filter, index: int | None = None) -> dict[str, Any]:
        """Translate one filter.

        Raises:
            RecordValidationError: If the criteria or the action is invalid.
            RemoteAPIError: If a missing label could not be created.
        """
        validate_filter(f, index)

        add_label_ids: list[str] = []
        remove_label_ids: list[str] = []
        action: dict[str, Any] = {
            "addLabelIds": add_label_ids,
            "removeLabelIds": remove_label_ids,
        }
        if f.action.label:
            add_label_ids.append(self._directory.resolve_or_create(f.action.label))
        if f.action.archive:
            remove_label_ids.append(INBOX)
        if f.action.mark_read:
            remove_label_ids.append(UNREAD)
        if f.action.delete:
            add_label_ids.append(TRASH)
        if f.action.forward:
            action["forward"] = f.action.forward

        return {"criteria": criteria_to_api(f.criteria), "action": action}

    def translate_all(self, filters: Sequence[Filter]) -> list[dict[str, Any]]:
        """Translate a whole batch, or nothing.

        Every filter is validated before the first translation so a bad record
        late in the list cannot leave labels half-created.
        """
        for index, f in enumerate(filters):
            validate_filter(f, index)
        bodies = [self.translate(f, index) for index, f in enumerate(filters)]
        logger.debug("Translated %d filters", len(bodies))
        return bodies


def filter_from_api(raw: dict[str, Any], directory: LabelDirectory) -> Filter:
    """Rebuild a local filter from a Gmail filter body.

    Raises:
        ConsistencyError: If the filter adds more than one label, adds a label
            the directory does not know, or does not form a valid local record.
    """
    raw_action = raw.get("action", {})
    add_label_ids = raw_action.get("addLabelIds", [])
    delete = TRASH in add_label_ids
    user_label_ids = [label_id for label_id in add_label_ids if label_id != TRASH]
    if len(user_label_ids) > 1:
        raise ConsistencyError(
            f"unable to handle multiple addLabelIds on filter {raw.get('id', '?')}: "
            f"{add_label_ids}"
        )

    label = ""
    if user_label_ids:
        found = directory.by_id(user_label_ids[0])
        if found is None:
            raise ConsistencyError(f"unknown label id: {user_label_ids[0]}")
        label = found.name

    remove_label_ids = raw_action.get("removeLabelIds", [])
    action = FilterAction(
        label=label,
        forward=raw_action.get("forward", ""),
        archive=INBOX in remove_label_ids,
        mark_read=UNREAD in remove_label_ids,
        delete=delete,
    )
    f = Filter(criteria=criteria_from_api(raw.get("criteria", {})), action=action)
    if not filter_valid(f):
        raise ConsistencyError(f"imported filter {raw.get('id', '?')} is invalid: {f}")
    return f
