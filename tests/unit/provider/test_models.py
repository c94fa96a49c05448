"""Unit tests for provider data models."""

import pytest

from teamforge_tracker.provider import CategoryFilter, IssueStatus, TrackerCategory, TrackerIssue


@pytest.mark.unit
class TestIssueStatus:
    """Tests for IssueStatus."""

    def test_equal_by_name(self) -> None:
        """Statuses with the same name are equal whatever their class."""
        assert IssueStatus("Fixed", "Closed") == IssueStatus("Fixed", "Open")
        assert hash(IssueStatus("Fixed", "Closed")) == hash(IssueStatus("Fixed"))

    def test_different_names_not_equal(self) -> None:
        assert IssueStatus("Open", "Open") != IssueStatus("Closed", "Open")

    def test_str_is_name(self) -> None:
        assert str(IssueStatus("Pending", "Open")) == "Pending"


@pytest.mark.unit
class TestTrackerIssue:
    """Tests for TrackerIssue.from_row."""

    def test_from_row_populates_fields(self) -> None:
        """Row fields and requested release are copied."""
        issue = TrackerIssue.from_row(
            {
                "id": "artf1001",
                "status": "Open",
                "statusClass": "Open",
                "title": "Crash on save",
                "description": "Steps to reproduce",
            },
            "1.2",
        )

        assert issue.id == "artf1001"
        assert issue.status == "Open"
        assert issue.title == "Crash on save"
        assert issue.description == "Steps to reproduce"
        assert issue.release == "1.2"
        assert issue.is_closed is False

    def test_closed_when_status_class_closed(self) -> None:
        issue = TrackerIssue.from_row(
            {"id": "artf1", "status": "Fixed", "statusClass": "Closed", "title": "t"}, None
        )

        assert issue.is_closed is True

    def test_status_name_does_not_decide_closed(self) -> None:
        """A status named Closed in another class is not closed."""
        issue = TrackerIssue.from_row(
            {"id": "artf1", "status": "Closed", "statusClass": "Open", "title": "t"}, None
        )

        assert issue.is_closed is False

    def test_missing_description_is_empty(self) -> None:
        issue = TrackerIssue.from_row({"id": "artf1", "description": None}, "1.0")

        assert issue.description == ""
        assert issue.title == ""


@pytest.mark.unit
class TestTrackerCategory:
    """Tests for TrackerCategory."""

    def test_leaf_has_no_subcategories(self) -> None:
        assert TrackerCategory("tracker1", "Bugs").subcategories == []

    def test_subcategories_kept_in_order(self) -> None:
        trackers = [TrackerCategory("tracker1", "Bugs"), TrackerCategory("tracker2", "Tasks")]
        project = TrackerCategory("proj1", "Website", trackers)

        assert [c.id for c in project.subcategories] == ["tracker1", "tracker2"]


@pytest.mark.unit
class TestCategoryFilter:
    """Tests for CategoryFilter."""

    def test_from_ids_project_and_tracker(self) -> None:
        category_filter = CategoryFilter.from_ids(["proj1", "tracker1"])

        assert category_filter.project_id == "proj1"
        assert category_filter.tracker_id == "tracker1"

    def test_from_ids_project_only(self) -> None:
        category_filter = CategoryFilter.from_ids(["proj1"])

        assert category_filter.project_id == "proj1"
        assert category_filter.tracker_id is None

    @pytest.mark.parametrize("ids", [None, [], ["proj1", ""], ["proj1", None]])
    def test_from_ids_without_tracker(self, ids: list[str | None] | None) -> None:
        assert CategoryFilter.from_ids(ids).tracker_id is None

    def test_to_ids_keeps_positions(self) -> None:
        assert CategoryFilter("proj1", "tracker1").to_ids() == ["proj1", "tracker1"]
        assert CategoryFilter(None, "tracker1").to_ids() == ["", "tracker1"]
        assert CategoryFilter("proj1").to_ids() == ["proj1"]
        assert CategoryFilter().to_ids() == []
