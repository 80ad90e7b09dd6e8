"""Shared fixtures for gmailfilters tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from gmailfilters.core.gmail_client import GmailClient
from gmailfilters.core.labels import LabelDirectory
from gmailfilters.core.models import Label


@pytest.fixture
def remote_labels() -> list[dict[str, Any]]:
    """Raw Gmail API label listing with system and user labels."""
    return [
        {"id": "INBOX", "name": "INBOX", "type": "system"},
        {"id": "UNREAD", "name": "UNREAD", "type": "system"},
        {"id": "TRASH", "name": "TRASH", "type": "system"},
        {
            "id": "Label_1",
            "name": "Work",
            "type": "user",
            "labelListVisibility": "labelShow",
            "messageListVisibility": "show",
        },
        {
            "id": "Label_2",
            "name": "Receipts",
            "type": "user",
            "labelListVisibility": "labelShowIfUnread",
            "messageListVisibility": "hide",
            "color": {"backgroundColor": "#16a766", "textColor": "#ffffff"},
        },
    ]


@pytest.fixture
def mock_client(remote_labels: list[dict[str, Any]]) -> MagicMock:
    """GmailClient double with a canned label listing and no filters."""
    client = MagicMock(spec=GmailClient)
    client.list_labels.return_value = remote_labels
    client.list_filters.return_value = []
    client.create_label.side_effect = lambda name: {
        "id": f"Label_new_{name}",
        "name": name,
        "type": "user",
        "labelListVisibility": "labelShow",
        "messageListVisibility": "show",
    }
    client.create_filter.return_value = "filter_new"
    return client


@pytest.fixture
def directory(mock_client: MagicMock) -> LabelDirectory:
    """LabelDirectory loaded from the canned listing."""
    d = LabelDirectory(mock_client)
    d.load_from_remote()
    return d


@pytest.fixture
def work_label() -> Label:
    """The local declaration matching remote Label_1 exactly."""
    return Label(
        id="Label_1",
        name="Work",
        label_list_visibility="show",
        message_list_visibility="show",
        kind="user",
    )


@pytest.fixture
def filters_path(tmp_path: Path) -> Path:
    return tmp_path / "filters.yaml"


@pytest.fixture
def labels_path(tmp_path: Path) -> Path:
    return tmp_path / "labels.yaml"
