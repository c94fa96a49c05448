"""Data models for the TeamForge tracker provider."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

CLOSED_STATUS_CLASS = "Closed"


@dataclass(frozen=True)
class IssueStatus:
    """A status defined on a tracker.

    Statuses compare equal by name; the class is TeamForge's coarse
    grouping (e.g. "Open", "Closed").
    """

    name: str
    status_class: str | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.name


@dataclass
class TrackerCategory:
    """A project or tracker exposed to the host as a category."""

    id: str
    name: str
    subcategories: list[TrackerCategory] = field(default_factory=list)


@dataclass
class TrackerIssue:
    """An artifact from a TeamForge tracker."""

    id: str
    status: str
    title: str
    description: str
    release: str | None = None
    is_closed: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, Any], release: str | None) -> TrackerIssue:
        """Build an issue from an artifact list row.

        Args:
            row: Artifact row with id, status, statusClass, title, description
            release: Release number the issue was listed for

        Returns:
            TrackerIssue for the row
        """
        return cls(
            id=row["id"],
            status=row.get("status") or "",
            title=row.get("title") or "",
            description=row.get("description") or "",
            release=release,
            is_closed=row.get("statusClass") == CLOSED_STATUS_CLASS,
        )


@dataclass(frozen=True)
class CategoryFilter:
    """Project and tracker the provider is scoped to."""

    project_id: str | None = None
    tracker_id: str | None = None

    @classmethod
    def from_ids(cls, ids: Sequence[str | None] | None) -> CategoryFilter:
        """Build a filter from the host's ordered [project_id, tracker_id] list."""
        ids = list(ids or [])
        project_id = ids[0] if len(ids) > 0 else None
        tracker_id = ids[1] if len(ids) > 1 else None
        return cls(project_id=project_id or None, tracker_id=tracker_id or None)

    def to_ids(self) -> list[str]:
        """Return the filter as the host's ordered id list."""
        if self.tracker_id:
            return [self.project_id or "", self.tracker_id]
        if self.project_id:
            return [self.project_id]
        return []
