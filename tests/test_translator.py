"""Tests for local filter ↔ Gmail filter body translation."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from gmailfilters.core.exceptions import ConsistencyError, RecordValidationError
from gmailfilters.core.labels import LabelDirectory
from gmailfilters.core.models import Filter, FilterAction, FilterCriteria
from gmailfilters.core.translator import (
    FilterTranslator,
    criteria_from_api,
    criteria_to_api,
    filter_from_api,
)

# ---------- criteria ----------


class TestCriteriaToApi:
    def test_copies_set_fields_under_api_names(self) -> None:
        criteria = FilterCriteria(
            from_="a@example.com",
            negated_query="label:spam",
            has_attachment=True,
            size=1000,
            size_comparison="larger",
        )
        assert criteria_to_api(criteria) == {
            "from": "a@example.com",
            "negatedQuery": "label:spam",
            "hasAttachment": True,
            "size": 1000,
            "sizeComparison": "larger",
        }

    def test_from_api_parses_string_size(self) -> None:
        criteria = criteria_from_api({"to": "me@example.com", "size": "2048"})
        assert criteria == FilterCriteria(to="me@example.com", size=2048)


# ---------- translate ----------


class TestFilterTranslator:
    def test_existing_label_and_markers(
        self, directory: LabelDirectory, mock_client: MagicMock
    ) -> None:
        f = Filter(
            FilterCriteria(subject="invoice"),
            FilterAction(label="work", archive=True, mark_read=True, delete=True),
        )

        body = FilterTranslator(directory).translate(f)

        assert body == {
            "criteria": {"subject": "invoice"},
            "action": {
                "addLabelIds": ["Label_1", "TRASH"],
                "removeLabelIds": ["INBOX", "UNREAD"],
            },
        }
        mock_client.create_label.assert_not_called()

    def test_forward_is_verbatim(self, directory: LabelDirectory) -> None:
        f = Filter(FilterCriteria(to="me@example.com"), FilterAction(forward="x@example.com"))
        body = FilterTranslator(directory).translate(f)
        assert body["action"]["forward"] == "x@example.com"
        assert body["action"]["addLabelIds"] == []
        assert body["action"]["removeLabelIds"] == []

    def test_missing_label_is_created_once(
        self, directory: LabelDirectory, mock_client: MagicMock
    ) -> None:
        f = Filter(FilterCriteria(from_="news@example.com"), FilterAction(label="Newsletters"))

        body = FilterTranslator(directory).translate(f)

        mock_client.create_label.assert_called_once_with("Newsletters")
        assert body["action"]["addLabelIds"] == ["Label_new_Newsletters"]

    def test_invalid_criteria_rejected(self, directory: LabelDirectory) -> None:
        f = Filter(FilterCriteria(has_attachment=True), FilterAction(archive=True))
        with pytest.raises(RecordValidationError, match="criteria is invalid"):
            FilterTranslator(directory).translate(f)

    def test_invalid_action_rejected(self, directory: LabelDirectory) -> None:
        f = Filter(FilterCriteria(to="a"), FilterAction())
        with pytest.raises(RecordValidationError, match="action is invalid"):
            FilterTranslator(directory).translate(f)

    def test_translate_all_keeps_order(self, directory: LabelDirectory) -> None:
        filters = [
            Filter(FilterCriteria(to="z"), FilterAction(archive=True)),
            Filter(FilterCriteria(to="a"), FilterAction(mark_read=True)),
        ]
        bodies = FilterTranslator(directory).translate_all(filters)
        assert [b["criteria"]["to"] for b in bodies] == ["z", "a"]

    def test_translate_all_validates_before_creating_labels(
        self, directory: LabelDirectory, mock_client: MagicMock
    ) -> None:
        filters = [
            Filter(FilterCriteria(to="a"), FilterAction(label="Brand New")),
            Filter(FilterCriteria(), FilterAction(archive=True)),
            Filter(FilterCriteria(to="c"), FilterAction(archive=True)),
        ]
        with pytest.raises(RecordValidationError, match="filter #1"):
            FilterTranslator(directory).translate_all(filters)
        mock_client.create_label.assert_not_called()


# ---------- reverse mapping ----------


class TestFilterFromApi:
    def test_reverse_maps_markers_and_label(self, directory: LabelDirectory) -> None:
        raw = {
            "id": "f1",
            "criteria": {"from": "a@example.com"},
            "action": {"addLabelIds": ["Label_2"], "removeLabelIds": ["INBOX", "UNREAD"]},
        }
        f = filter_from_api(raw, directory)
        assert f == Filter(
            FilterCriteria(from_="a@example.com"),
            FilterAction(label="Receipts", archive=True, mark_read=True),
        )

    def test_trash_becomes_delete(self, directory: LabelDirectory) -> None:
        raw = {"criteria": {"query": "spam"}, "action": {"addLabelIds": ["TRASH"]}}
        f = filter_from_api(raw, directory)
        assert f.action == FilterAction(delete=True)

    def test_forward_only(self, directory: LabelDirectory) -> None:
        raw = {"criteria": {"to": "me"}, "action": {"forward": "x@example.com"}}
        assert filter_from_api(raw, directory).action == FilterAction(forward="x@example.com")

    def test_multiple_add_labels_rejected(self, directory: LabelDirectory) -> None:
        raw = {
            "id": "f2",
            "criteria": {"to": "me"},
            "action": {"addLabelIds": ["Label_1", "Label_2"]},
        }
        with pytest.raises(ConsistencyError, match="multiple addLabelIds"):
            filter_from_api(raw, directory)

    def test_unknown_label_id_rejected(self, directory: LabelDirectory) -> None:
        raw = {"criteria": {"to": "me"}, "action": {"addLabelIds": ["Label_404"]}}
        with pytest.raises(ConsistencyError, match="unknown label id: Label_404"):
            filter_from_api(raw, directory)

    def test_invalid_imported_filter_rejected(self, directory: LabelDirectory) -> None:
        raw = {"criteria": {"hasAttachment": True}, "action": {"removeLabelIds": ["INBOX"]}}
        with pytest.raises(ConsistencyError, match="is invalid"):
            filter_from_api(raw, directory)

    def test_round_trips_translation(self, directory: LabelDirectory) -> None:
        f = Filter(
            FilterCriteria(subject="invoice", size=10, size_comparison="smaller"),
            FilterAction(label="Work", archive=True),
        )
        body = FilterTranslator(directory).translate(f)
        assert filter_from_api(body, directory) == f

    def test_round_trips_label_and_delete(self, directory: LabelDirectory) -> None:
        f = Filter(FilterCriteria(to="a"), FilterAction(label="Work", delete=True))
        body = FilterTranslator(directory).translate(f)
        assert body["action"]["addLabelIds"] == ["Label_1", "TRASH"]
        assert filter_from_api(body, directory) == f

    def test_trash_with_two_labels_still_rejected(self, directory: LabelDirectory) -> None:
        raw = {
            "criteria": {"to": "me"},
            "action": {"addLabelIds": ["Label_1", "TRASH", "Label_2"]},
        }
        with pytest.raises(ConsistencyError, match="multiple addLabelIds"):
            filter_from_api(raw, directory)
