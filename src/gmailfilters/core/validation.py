"""Well-formedness checks for local filter and label records."""

from __future__ import annotations

from gmailfilters.core.exceptions import RecordValidationError
from gmailfilters.core.models import (
    LABEL_KINDS,
    LABEL_LIST_VISIBILITIES,
    MESSAGE_LIST_VISIBILITIES,
    Filter,
    FilterAction,
    FilterCriteria,
    Label,
)


def criteria_valid(criteria: FilterCriteria) -> bool:
    """True if at least one text-match field is set.

    Size, attachment and chat flags alone never anchor a filter.
    """
    return any(
        (
            criteria.query,
            criteria.negated_query,
            criteria.from_,
            criteria.subject,
            criteria.to,
        )
    )


def action_valid(action: FilterAction) -> bool:
    """True if the action does anything at all."""
    return bool(
        action.label or action.forward or action.archive or action.mark_read or action.delete
    )


def filter_valid(f: Filter) -> bool:
    return criteria_valid(f.criteria) and action_valid(f.action)


def label_valid(label: Label) -> bool:
    """True if the label has an identity, known enum values and a complete color pair."""
    if not label.id or not label.name:
        return False
    if label.label_list_visibility not in LABEL_LIST_VISIBILITIES:
        return False
    if label.message_list_visibility not in MESSAGE_LIST_VISIBILITIES:
        return False
    if label.kind not in LABEL_KINDS:
        return False
    return bool(label.background_color) == bool(label.text_color)


def validate_filter(f: Filter, index: int | None = None) -> None:
    """Raise RecordValidationError naming the half of ``f`` that is invalid."""
    where = f"filter #{index}" if index is not None else "filter"
    if not criteria_valid(f.criteria):
        raise RecordValidationError(f"{where} criteria is invalid: {f.criteria}")
    if not action_valid(f.action):
        raise RecordValidationError(f"{where} action is invalid: {f.action}")


def validate_label(label: Label, index: int | None = None) -> None:
    if not label_valid(label):
        where = f"label #{index}" if index is not None else "label"
        raise RecordValidationError(f"{where} {label.name!r} is invalid: {label}")
