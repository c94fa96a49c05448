"""Unit tests for artifact field lookup."""

import pytest

from teamforge_tracker.provider.artifacts import get_field_value


@pytest.fixture
def artifact() -> dict:
    """Artifact data with one flexible field."""
    return {
        "id": "artf1001",
        "title": "Crash on save",
        "resolvedReleaseId": "rel1005",
        "reportedReleaseId": None,
        "priority": 2,
        "flexFields": {
            "names": ["Fixed In", "Severity"],
            "values": ["rel2001", None],
            "types": ["String", "String"],
        },
    }


@pytest.mark.unit
class TestGetFieldValue:
    """Tests for get_field_value."""

    def test_known_field(self, artifact: dict) -> None:
        assert get_field_value(artifact, "resolvedReleaseId") == "rel1005"

    def test_known_field_unset_is_empty(self, artifact: dict) -> None:
        assert get_field_value(artifact, "reportedReleaseId") == ""

    def test_known_field_converted_to_text(self, artifact: dict) -> None:
        assert get_field_value(artifact, "priority") == "2"

    def test_flex_field(self, artifact: dict) -> None:
        assert get_field_value(artifact, "Fixed In") == "rel2001"

    def test_flex_field_unset_is_empty(self, artifact: dict) -> None:
        assert get_field_value(artifact, "Severity") == ""

    def test_unknown_field(self, artifact: dict) -> None:
        assert get_field_value(artifact, "Target Milestone") is None

    def test_known_field_wins_over_flex_field(self, artifact: dict) -> None:
        """A flexible field named like a property is never consulted."""
        artifact["flexFields"]["names"].append("resolvedReleaseId")
        artifact["flexFields"]["values"].append("other")

        assert get_field_value(artifact, "resolvedReleaseId") == "rel1005"

    @pytest.mark.parametrize(
        "flex_fields",
        [None, {}, {"names": None, "values": ["x"]}, {"names": ["Fixed In"], "values": None}],
    )
    def test_missing_flex_fields(self, flex_fields: dict | None) -> None:
        artifact = {"id": "artf1", "flexFields": flex_fields}

        assert get_field_value(artifact, "Fixed In") is None
