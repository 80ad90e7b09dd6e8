"""Frozen dataclasses for the gmailfilters domain model.

Every field records the key it is written under in the local YAML files via
``metadata={"key": ...}``; the file codec is driven entirely by these.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Well-known system label ids used as markers inside filter actions.
INBOX = "INBOX"
UNREAD = "UNREAD"
TRASH = "TRASH"

LABEL_LIST_VISIBILITIES = frozenset({"", "hide", "show", "showifunread"})
MESSAGE_LIST_VISIBILITIES = frozenset({"", "hide", "show"})
LABEL_KINDS = frozenset({"user", "system"})


def _key(name: str) -> dict[str, str]:
    return {"key": name}


@dataclass(frozen=True)
class Label:
    """A Gmail label as declared locally or discovered remotely."""

    id: str = field(default="", metadata=_key("id"))
    name: str = field(default="", metadata=_key("name"))
    background_color: str = field(default="", metadata=_key("backgroundColor"))
    text_color: str = field(default="", metadata=_key("textColor"))
    label_list_visibility: str = field(default="", metadata=_key("labelListVisibility"))
    message_list_visibility: str = field(default="", metadata=_key("messageListVisibility"))
    kind: str = field(default="", metadata=_key("type"))


@dataclass(frozen=True)
class FilterCriteria:
    """Predicate over incoming mail. Field names mirror the Gmail filter criteria."""

    from_: str = field(default="", metadata=_key("from"))
    to: str = field(default="", metadata=_key("to"))
    subject: str = field(default="", metadata=_key("subject"))
    query: str = field(default="", metadata=_key("query"))
    negated_query: str = field(default="", metadata=_key("negatedQuery"))
    exclude_chats: bool = field(default=False, metadata=_key("excludeChats"))
    has_attachment: bool = field(default=False, metadata=_key("hasAttachment"))
    size: int = field(default=0, metadata=_key("size"))
    size_comparison: str = field(default="", metadata=_key("sizeComparison"))

    def sort_key(self) -> tuple[str, str, str, str, str]:
        """Fields compared, in order, when sorting exported filters."""
        return (self.to, self.from_, self.subject, self.query, self.negated_query)


@dataclass(frozen=True)
class FilterAction:
    """What happens to a matching message."""

    label: str = field(default="", metadata=_key("label"))
    forward: str = field(default="", metadata=_key("forward"))
    archive: bool = field(default=False, metadata=_key("archive"))
    mark_read: bool = field(default=False, metadata=_key("markRead"))
    delete: bool = field(default=False, metadata=_key("delete"))


@dataclass(frozen=True)
class Filter:
    """A local filter record: criteria plus action."""

    criteria: FilterCriteria = field(default_factory=FilterCriteria, metadata=_key("criteria"))
    action: FilterAction = field(default_factory=FilterAction, metadata=_key("action"))


class SyncState(Enum):
    """Phases of a sync run, in execution order."""

    LOAD_DIRECTORY = "load_directory"
    VALIDATE_AND_TRANSLATE = "validate_and_translate"
    DELETE_REMOTE_FILTERS = "delete_remote_filters"
    CREATE_REMOTE_FILTERS = "create_remote_filters"
    RECONCILE_LABELS = "reconcile_labels"
    EXPORT_LABELS = "export_labels"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SyncReport:
    """Mutable progress tracker for a sync or export run."""

    state: SyncState = SyncState.LOAD_DIRECTORY
    filters_translated: int = 0
    filters_deleted: int = 0
    filters_created: int = 0
    filters_exported: int = 0
    labels_created: int = 0
    labels_updated: int = 0
    labels_exported: int = 0
