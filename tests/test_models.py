"""Unit tests for gmailfilters.core.models dataclasses."""

from __future__ import annotations

from dataclasses import FrozenInstanceError, fields

import pytest

from gmailfilters.core.models import (
    Filter,
    FilterAction,
    FilterCriteria,
    Label,
    SyncReport,
    SyncState,
)

# ---------------------------------------------------------------------------
# Label
# ---------------------------------------------------------------------------


class TestLabel:
    """Label is a frozen dataclass with empty-string defaults."""

    def test_defaults(self) -> None:
        label = Label()
        assert label.id == ""
        assert label.name == ""
        assert label.kind == ""

    def test_frozen(self) -> None:
        label = Label(id="Label_1", name="Work")
        with pytest.raises(FrozenInstanceError):
            label.name = "Home"  # type: ignore[misc]

    def test_file_keys(self) -> None:
        keys = [f.metadata["key"] for f in fields(Label)]
        assert keys == [
            "id",
            "name",
            "backgroundColor",
            "textColor",
            "labelListVisibility",
            "messageListVisibility",
            "type",
        ]


# ---------------------------------------------------------------------------
# FilterCriteria / FilterAction / Filter
# ---------------------------------------------------------------------------


class TestFilterCriteria:
    def test_from_field_uses_from_key(self) -> None:
        keys = {f.name: f.metadata["key"] for f in fields(FilterCriteria)}
        assert keys["from_"] == "from"
        assert keys["negated_query"] == "negatedQuery"

    def test_sort_key_order(self) -> None:
        criteria = FilterCriteria(
            from_="f", to="t", subject="s", query="q", negated_query="n"
        )
        assert criteria.sort_key() == ("t", "f", "s", "q", "n")


class TestFilter:
    def test_default_halves_are_empty(self) -> None:
        f = Filter()
        assert f.criteria == FilterCriteria()
        assert f.action == FilterAction()

    def test_equality(self) -> None:
        a = Filter(FilterCriteria(to="a"), FilterAction(archive=True))
        b = Filter(FilterCriteria(to="a"), FilterAction(archive=True))
        assert a == b


# ---------------------------------------------------------------------------
# SyncReport
# ---------------------------------------------------------------------------


class TestSyncReport:
    """SyncReport is mutable, unlike the record types."""

    def test_defaults(self) -> None:
        report = SyncReport()
        assert report.state is SyncState.LOAD_DIRECTORY
        assert report.filters_created == 0
        assert report.labels_updated == 0

    def test_mutable(self) -> None:
        report = SyncReport()
        report.filters_deleted += 2
        report.state = SyncState.DONE
        assert report.filters_deleted == 2
        assert report.state is SyncState.DONE
